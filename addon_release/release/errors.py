"""Typed failures of a release run.

The variants are grouped by the stage that produces them. Every stage
returns its own union; the orchestration service widens them to
ReleaseError.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from addon_release.git.repository import GitError


# Configuration


@dataclass(frozen=True, slots=True)
class AddonNotFound:
    addon: str
    available: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ChannelNotFound:
    addon: str
    channel: str
    available: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CatalogInvalid:
    path: Path | None
    reason: str


@dataclass(frozen=True, slots=True)
class InvalidVersion:
    value: str


# Policy


@dataclass(frozen=True, slots=True)
class PreReleaseNotAllowed:
    version: str
    channel: str


# Transform


@dataclass(frozen=True, slots=True)
class CopyFailed:
    source: Path
    destination: Path
    reason: str


@dataclass(frozen=True, slots=True)
class ExpectedFileMissing:
    path: Path


@dataclass(frozen=True, slots=True)
class InstallModeNotFound:
    path: Path
    mode: str


@dataclass(frozen=True, slots=True)
class UnsupportedChannel:
    channel: str


@dataclass(frozen=True, slots=True)
class VersionMarkerMissing:
    field: str
    value: str
    marker: str = ".v"


@dataclass(frozen=True, slots=True)
class DocumentInvalid:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class ImageSetNotFound:
    directory: Path
    reason: str


# Assembly


@dataclass(frozen=True, slots=True)
class WrongBranch:
    expected: str
    actual: str | None


@dataclass(frozen=True, slots=True)
class DirtyTree:
    status: str


@dataclass(frozen=True, slots=True)
class GitFailed:
    command: str
    message: str

    @classmethod
    def from_git(cls, e: GitError) -> GitFailed:
        return cls(command=e.command, message=e.message)


# Publish


@dataclass(frozen=True, slots=True)
class PublishFailed:
    step: str
    message: str


ConfigurationError = AddonNotFound | ChannelNotFound | CatalogInvalid | InvalidVersion
PolicyError = PreReleaseNotAllowed
TransformError = (
    CopyFailed
    | ExpectedFileMissing
    | InstallModeNotFound
    | UnsupportedChannel
    | VersionMarkerMissing
    | DocumentInvalid
    | ImageSetNotFound
)
AssemblyError = WrongBranch | DirtyTree | GitFailed
PublishError = PublishFailed

ReleaseError = ConfigurationError | PolicyError | TransformError | AssemblyError | PublishError
