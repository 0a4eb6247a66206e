"""Git repository abstraction.

Repository wraps the git CLI for the handful of operations a release needs:
clone, remotes, branch checkout, staging, commit, status and push. All
operations return Result types.

Usage:
    match clone(url, dest, ref="main"):
        case Ok(repo):
            print(repo.current_branch())
        case Err(e):
            print(f"clone failed: {e.message}")
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from pathlib import Path

from addon_release.core.result import Err, Ok, Result
from addon_release.platform.process import ProcessError
from addon_release.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0
_GIT_CLONE_TIMEOUT_SECONDS = 15 * 60.0

__all__ = [
    "CommitAuthor",
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
    "clone",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class CommitAuthor:
    name: str
    email: str


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single entry in git status.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str

    @property
    def is_untracked(self) -> bool:
        return self.xy == "??"

    def __str__(self) -> str:
        return f"{self.xy} {self.path}"


@dataclass(frozen=True, slots=True)
class GitStatus:
    """Parsed `git status --porcelain=v1 -b` output."""

    branch: str
    upstream: str | None = None
    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        """True if working tree has no changes, untracked files included."""
        return len(self.entries) == 0

    @property
    def untracked(self) -> list[StatusEntry]:
        return [e for e in self.entries if e.is_untracked]

    def describe(self) -> str:
        """Porcelain-style listing of the pending changes."""
        return "\n".join(str(e) for e in self.entries)


def _basic_auth_header(token: str) -> str:
    # GitLab accepts any username together with a personal access token.
    raw = f"oauth2:{token}".encode("utf-8")
    return f"Authorization: Basic {base64.b64encode(raw).decode('ascii')}"


def _git_error(command: str, e: ProcessError, fallback: str) -> GitError:
    return GitError(
        command=command,
        message=e.stderr.strip() or e.stdout.strip() or fallback,
        returncode=e.returncode,
    )


def clone(
    url: str,
    dest: Path,
    *,
    ref: str,
    depth: int | None = None,
) -> Result[Repository, GitError]:
    """Clone url at branch or tag `ref` into dest (which may already exist, empty).

    Args:
        url: Remote URL
        dest: Target directory
        ref: Branch or tag name to check out
        depth: Shallow clone depth (None for full history)

    Returns:
        Ok(Repository) on success
        Err(GitError) on failure
    """
    cmd = ["git", "clone", "--branch", ref]
    if depth is not None:
        cmd += ["--depth", str(depth)]
    cmd += [url, str(dest)]

    dest.parent.mkdir(parents=True, exist_ok=True)
    result = run_process(cmd, cwd=dest.parent, timeout=_GIT_CLONE_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        return Err(_git_error("clone", result.error, f"failed to clone {url}"))
    return Ok(Repository(dest))


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check if this is a valid git repository."""
        return (self.path / ".git").exists()

    def status(self) -> Result[GitStatus, GitError]:
        """Get repository status, untracked files included."""
        result = self._run(["status", "--porcelain=v1", "-b", "--untracked-files=all"])
        match result:
            case Err(e):
                return Err(_git_error("status", e, "git status failed"))
            case Ok(stdout):
                return Ok(self._parse_status(stdout))

    def current_branch(self) -> str | None:
        """Get current branch name.

        Returns None if detached HEAD or error.
        """
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        match result:
            case Ok(stdout):
                branch = stdout.strip()
                return None if branch == "HEAD" else branch
            case Err(_):
                return None

    def checkout(self, branch: str, *, create: bool = False) -> Result[None, GitError]:
        args = ["checkout", "-b", branch] if create else ["checkout", branch]
        result = self._run(args)
        if isinstance(result, Err):
            return Err(_git_error(" ".join(args), result.error, f"failed to checkout {branch}"))
        return Ok(None)

    def add(self, pathspecs: list[str]) -> Result[None, GitError]:
        """Stage the given paths or glob pathspecs (git expands the globs)."""
        result = self._run(["add", "--", *pathspecs])
        if isinstance(result, Err):
            return Err(_git_error("add", result.error, "git add failed"))
        return Ok(None)

    def commit(
        self,
        message: str,
        *,
        author: CommitAuthor,
        all_tracked: bool = True,
    ) -> Result[str, GitError]:
        """Commit staged changes as `author`.

        With all_tracked, modifications to already tracked files are included
        as well (untracked files never are).

        Returns:
            Ok(sha) of the new commit
        """
        args = [
            "-c",
            f"user.name={author.name}",
            "-c",
            f"user.email={author.email}",
            "commit",
            "-m",
            message,
        ]
        if all_tracked:
            args.append("--all")
        result = self._run(args)
        if isinstance(result, Err):
            return Err(_git_error("commit", result.error, "git commit failed"))

        head = self._run(["rev-parse", "HEAD"])
        if isinstance(head, Err):
            return Err(_git_error("rev-parse HEAD", head.error, "cannot resolve HEAD"))
        return Ok(head.value.strip())

    def add_remote(self, name: str, url: str) -> Result[None, GitError]:
        result = self._run(["remote", "add", name, url])
        if isinstance(result, Err):
            return Err(_git_error("remote add", result.error, f"failed to add remote {name}"))
        return Ok(None)

    def push(
        self,
        remote: str,
        refspec: str,
        *,
        token: str | None = None,
    ) -> Result[None, GitError]:
        """Push refspec to remote, authenticating with a token when given.

        The token travels as a one-off http.extraHeader and is never written
        to the repository config.
        """
        args: list[str] = []
        if token:
            args += ["-c", f"http.extraHeader={_basic_auth_header(token)}"]
        args += ["push", remote, refspec]
        result = self._run(args, network=True)
        if isinstance(result, Err):
            return Err(_git_error("push", result.error, f"failed to push to {remote}"))
        return Ok(None)

    def _run(self, args: list[str], *, network: bool = False) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        timeout = _GIT_NETWORK_TIMEOUT_SECONDS if network else _GIT_TIMEOUT_SECONDS
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)

    def _parse_status(self, output: str) -> GitStatus:
        lines = [ln for ln in output.splitlines() if ln.strip()]

        if not lines:
            return GitStatus(branch="")

        branch = ""
        upstream: str | None = None
        if lines[0].startswith("##"):
            branch, upstream = self._parse_branch_line(lines[0])
            lines = lines[1:]

        entries: list[StatusEntry] = []
        for line in lines:
            entry = self._parse_entry(line)
            if entry:
                entries.append(entry)

        return GitStatus(branch=branch, upstream=upstream, entries=tuple(entries))

    def _parse_branch_line(self, line: str) -> tuple[str, str | None]:
        """Parse branch line: ## branch...upstream [info]"""
        s = line.strip()[2:].lstrip()
        s = s.split(" [", 1)[0].strip()

        if "..." in s:
            left, right = s.split("...", 1)
            return (left.strip(), right.strip())

        return (s, None)

    def _parse_entry(self, line: str) -> StatusEntry | None:
        if len(line) < 4:
            return None
        if line.startswith("?? "):
            return StatusEntry(xy="??", path=line[3:])
        return StatusEntry(xy=line[:2], path=line[3:])
