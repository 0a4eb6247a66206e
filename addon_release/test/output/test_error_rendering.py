"""Tests for output/errors.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from addon_release.core.errors import ErrorCode
from addon_release.output.console import MockConsole
from addon_release.output.errors import print_release_error, release_error_exit_code
from addon_release.release.errors import (
    AddonNotFound,
    CatalogInvalid,
    ChannelNotFound,
    CopyFailed,
    DirtyTree,
    DocumentInvalid,
    ExpectedFileMissing,
    GitFailed,
    ImageSetNotFound,
    InstallModeNotFound,
    InvalidVersion,
    PreReleaseNotAllowed,
    PublishFailed,
    ReleaseError,
    UnsupportedChannel,
    VersionMarkerMissing,
    WrongBranch,
)


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (AddonNotFound(addon="foo"), ErrorCode.USER_ERROR),
        (ChannelNotFound(addon="foo", channel="beta"), ErrorCode.USER_ERROR),
        (CatalogInvalid(path=None, reason="x"), ErrorCode.USER_ERROR),
        (InvalidVersion(value="abc"), ErrorCode.USER_ERROR),
        (PreReleaseNotAllowed(version="1.0.0-rc1", channel="stable"), ErrorCode.POLICY_ERROR),
        (CopyFailed(Path("a"), Path("b"), reason="x"), ErrorCode.TRANSFORM_ERROR),
        (ExpectedFileMissing(path=Path("bundle.Dockerfile")), ErrorCode.TRANSFORM_ERROR),
        (InstallModeNotFound(path=Path("csv"), mode="SingleNamespace"), ErrorCode.TRANSFORM_ERROR),
        (UnsupportedChannel(channel="beta"), ErrorCode.TRANSFORM_ERROR),
        (VersionMarkerMissing(field="metadata.name", value="foo"), ErrorCode.TRANSFORM_ERROR),
        (DocumentInvalid(path=Path("x.yaml"), reason="x"), ErrorCode.TRANSFORM_ERROR),
        (ImageSetNotFound(directory=Path("d"), reason="x"), ErrorCode.TRANSFORM_ERROR),
        (WrongBranch(expected="main", actual="dev"), ErrorCode.GIT_ERROR),
        (DirtyTree(status="?? stray.txt"), ErrorCode.GIT_ERROR),
        (GitFailed(command="commit", message="x"), ErrorCode.GIT_ERROR),
        (PublishFailed(step="push", message="x"), ErrorCode.NETWORK_ERROR),
    ],
)
def test_every_error_renders_and_maps(error: ReleaseError, code: ErrorCode) -> None:
    console = MockConsole()
    print_release_error(error, console)
    assert console.has_error()
    assert release_error_exit_code(error) == int(code)


def test_addon_not_found_lists_available() -> None:
    console = MockConsole()
    print_release_error(AddonNotFound(addon="bar", available=("foo", "baz")), console)
    assert "error: can not find configuration for addon bar" in console.messages
    assert "available: foo, baz" in console.messages


def test_dirty_tree_prints_status_verbatim() -> None:
    console = MockConsole()
    print_release_error(DirtyTree(status=" M README.md\n?? stray.txt"), console)
    assert console.messages[0] == "error: the tree is not clean, uncommitted changes:"
    assert console.messages[1] == " M README.md\n?? stray.txt"


def test_detached_head() -> None:
    console = MockConsole()
    print_release_error(WrongBranch(expected="main", actual=None), console)
    assert console.find("detached HEAD")
