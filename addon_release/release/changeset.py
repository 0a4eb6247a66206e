"""Turn the transformed tree into a single commit on a release branch."""

from __future__ import annotations

from addon_release.core.result import Err, Ok, Result
from addon_release.git.repository import CommitAuthor, Repository
from addon_release.output.console import ConsoleProtocol, Style
from addon_release.release.config import COMMIT_AUTHOR, MAIN_BRANCH
from addon_release.release.errors import AssemblyError, DirtyTree, GitFailed, WrongBranch


def start_branch(
    *,
    repo: Repository,
    branch: str,
    console: ConsoleProtocol,
    expected_base: str = MAIN_BRANCH,
) -> Result[None, AssemblyError]:
    """Check the clone is on `expected_base`, then create and switch to `branch`.

    Nothing is touched when the clone is on another branch.
    """
    current = repo.current_branch()
    if current != expected_base:
        return Err(WrongBranch(expected=expected_base, actual=current))

    console.print(f"git checkout -b {branch}", Style.DIM)
    return repo.checkout(branch, create=True).map_err(GitFailed.from_git)


def commit_changeset(
    *,
    repo: Repository,
    pathspecs: tuple[str, ...],
    message: str,
    console: ConsoleProtocol,
    author: CommitAuthor = COMMIT_AUTHOR,
) -> Result[str, AssemblyError]:
    """Stage exactly `pathspecs`, commit, and require a clean tree afterwards.

    Returns:
        Ok(commit sha)
    """
    console.print(f"git add {' '.join(pathspecs)}", Style.DIM)
    added = repo.add(list(pathspecs)).map_err(GitFailed.from_git)
    if isinstance(added, Err):
        return added

    console.print(f"git commit -m {message!r}", Style.DIM)
    committed = repo.commit(message, author=author, all_tracked=True).map_err(GitFailed.from_git)
    if isinstance(committed, Err):
        return committed

    status = repo.status().map_err(GitFailed.from_git)
    if isinstance(status, Err):
        return status
    if not status.value.is_clean:
        return Err(DirtyTree(status=status.value.describe()))

    return Ok(committed.value)
