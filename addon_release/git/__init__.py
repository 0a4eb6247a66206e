"""Git operations.

Usage:
    from addon_release.git import Repository

    repo = Repository(Path("/tmp/managed-tenants-abc"))
    status = repo.status()
    if status.is_ok():
        print(f"Branch: {status.unwrap().branch}")
"""

from addon_release.git.repository import (
    CommitAuthor,
    GitError,
    GitStatus,
    Repository,
    StatusEntry,
    clone,
)

__all__ = [
    "CommitAuthor",
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
    "clone",
]
