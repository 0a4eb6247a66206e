"""Tests for platform/files.py."""

from __future__ import annotations

from pathlib import Path

from addon_release.core.result import Err, Ok
from addon_release.platform.files import (
    atomic_write_text,
    copy_directory,
    make_temp_dir,
    sorted_file_names,
)


def test_atomic_write_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "file.txt"
    atomic_write_text(target, "content")
    assert target.read_text(encoding="utf-8") == "content"
    assert [p.name for p in target.parent.iterdir()] == ["file.txt"]


def test_copy_directory_merges(tmp_path: Path) -> None:
    src = tmp_path / "src"
    (src / "nested").mkdir(parents=True)
    (src / "nested" / "x.yaml").write_text("x", encoding="utf-8")
    dest = tmp_path / "dest"
    dest.mkdir()
    (dest / "keep.txt").write_text("keep", encoding="utf-8")

    assert copy_directory(src, dest) == Ok(None)
    assert (dest / "nested" / "x.yaml").read_text(encoding="utf-8") == "x"
    assert (dest / "keep.txt").exists()


def test_copy_directory_missing_source(tmp_path: Path) -> None:
    result = copy_directory(tmp_path / "missing", tmp_path / "dest")
    assert isinstance(result, Err)
    assert "does not exist" in result.error


def test_make_temp_dir_is_unique() -> None:
    a = make_temp_dir("addon-release-test-")
    b = make_temp_dir("addon-release-test-")
    try:
        assert a != b
        assert a.is_dir()
        assert a.name.startswith("addon-release-test-")
    finally:
        a.rmdir()
        b.rmdir()


def test_sorted_file_names_is_plain_string_order(tmp_path: Path) -> None:
    for name in ["addon.v10.yaml", "addon.v2-rc1.yaml", "addon.v1.yaml"]:
        (tmp_path / name).write_text("", encoding="utf-8")
    (tmp_path / "subdir").mkdir()

    assert sorted_file_names(tmp_path) == Ok(
        ["addon.v1.yaml", "addon.v10.yaml", "addon.v2-rc1.yaml"]
    )


def test_sorted_file_names_missing_dir(tmp_path: Path) -> None:
    result = sorted_file_names(tmp_path / "nope")
    assert isinstance(result, Err)
