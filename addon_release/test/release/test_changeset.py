"""Tests for release/changeset.py (real git)."""

from __future__ import annotations

from pathlib import Path

from addon_release.core.result import Err, Ok
from addon_release.git.repository import Repository
from addon_release.output.console import MockConsole
from addon_release.release.changeset import commit_changeset, start_branch
from addon_release.release.errors import DirtyTree, WrongBranch


def _repo(git_sandbox) -> Repository:
    return Repository(git_sandbox.init_repo("target", {"README.md": "tenants\n"}))


def test_start_branch_from_main(git_sandbox) -> None:
    repo = _repo(git_sandbox)
    assert start_branch(repo=repo, branch="foo-stage-v1.2.3", console=MockConsole()) == Ok(None)
    assert repo.current_branch() == "foo-stage-v1.2.3"


def test_start_branch_wrong_base_touches_nothing(git_sandbox) -> None:
    repo = _repo(git_sandbox)
    git_sandbox.git(repo.path, "checkout", "-q", "-b", "dev")

    result = start_branch(repo=repo, branch="foo-stage-v1.2.3", console=MockConsole())

    assert result == Err(WrongBranch(expected="main", actual="dev"))
    assert repo.current_branch() == "dev"
    assert "foo-stage-v1.2.3" not in git_sandbox.branches(repo.path)


def test_commit_exactly_the_pathspecs(git_sandbox) -> None:
    repo = _repo(git_sandbox)
    start_branch(repo=repo, branch="release", console=MockConsole())
    git_sandbox.write(repo.path, {"addons/foo/main/1.2.3/manifests/csv.yaml": "a: 1\n"})

    result = commit_changeset(
        repo=repo,
        pathspecs=("addons/foo/main/1.2.3/*",),
        message="update foo stage to 1.2.3",
        console=MockConsole(),
    )

    assert isinstance(result, Ok)
    assert git_sandbox.head_subject(repo.path) == "update foo stage to 1.2.3"
    assert git_sandbox.head_author(repo.path) == (
        "Delorean <cloud-services-delorean@redhat.com>"
    )
    assert git_sandbox.changed_files(repo.path) == ["addons/foo/main/1.2.3/manifests/csv.yaml"]


def test_tracked_modifications_are_included(git_sandbox) -> None:
    repo = _repo(git_sandbox)
    start_branch(repo=repo, branch="release", console=MockConsole())
    git_sandbox.write(
        repo.path,
        {"README.md": "changed\n", "addons/foo/new.yaml": "a: 1\n"},
    )

    result = commit_changeset(
        repo=repo,
        pathspecs=("addons/foo/new.yaml",),
        message="msg",
        console=MockConsole(),
    )

    assert isinstance(result, Ok)
    assert git_sandbox.changed_files(repo.path) == ["README.md", "addons/foo/new.yaml"]


def test_stray_untracked_file_is_dirty(git_sandbox) -> None:
    repo = _repo(git_sandbox)
    start_branch(repo=repo, branch="release", console=MockConsole())
    git_sandbox.write(
        repo.path,
        {"addons/foo/main/1.2.3/csv.yaml": "a: 1\n", "stray.txt": "oops\n"},
    )

    result = commit_changeset(
        repo=repo,
        pathspecs=("addons/foo/main/1.2.3/*",),
        message="msg",
        console=MockConsole(),
    )

    assert result == Err(DirtyTree(status="?? stray.txt"))
    # the commit itself still happened
    assert git_sandbox.changed_files(repo.path) == ["addons/foo/main/1.2.3/csv.yaml"]
