"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from addon_release.core.errors import ErrorCode
from addon_release.output.console import Style
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

if TYPE_CHECKING:
    from addon_release.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print a release error to console with appropriate formatting."""
    match error:
        case AddonNotFound(addon=addon, available=available):
            console.error(f"can not find configuration for addon {addon}")
            if available:
                console.print(f"available: {', '.join(available)}", Style.DIM)
        case ChannelNotFound(addon=addon, channel=channel, available=available):
            console.error(f"can not find channel {channel} for addon {addon}")
            if available:
                console.print(f"available: {', '.join(available)}", Style.DIM)
        case CatalogInvalid(path=path, reason=reason):
            where = f"{path}: " if path is not None else ""
            console.error(f"invalid addons config: {where}{reason}")
        case InvalidVersion(value=value):
            console.error(f"invalid version: {value!r}")
            console.print(
                "hint: expected X.Y.Z or X.Y.Z-<prerelease> (ex 2.0.0, 2.0.0-er4)", Style.DIM
            )
        case PreReleaseNotAllowed(version=version, channel=channel):
            console.error(
                f"the prerelease version {version} can't be pushed to the {channel} channel"
            )
        case CopyFailed(source=source, destination=destination, reason=reason):
            console.error(f"failed to copy {source} to {destination}: {reason}")
        case ExpectedFileMissing(path=path):
            console.error(f"expected file not found: {path}")
        case InstallModeNotFound(path=path, mode=mode):
            console.error(f"install mode {mode} not found in {path}")
        case UnsupportedChannel(channel=channel):
            console.error(f"channel provided is {channel} instead of stage, edge or stable")
        case VersionMarkerMissing(field=field, value=value, marker=marker):
            console.error(f"{field} {value!r} has no {marker!r} version marker")
        case DocumentInvalid(path=path, reason=reason):
            console.error(f"{path}: {reason}")
        case ImageSetNotFound(directory=directory, reason=reason):
            console.error(f"no staged addon image set in {directory}: {reason}")
        case WrongBranch(expected=expected, actual=actual):
            where = actual or "a detached HEAD"
            console.error(f"the repo is pointing to {where} instead of {expected}")
        case DirtyTree(status=status):
            console.error("the tree is not clean, uncommitted changes:")
            console.print(status)
        case GitFailed(command=command, message=message):
            console.error(f"git {command} failed")
            console.print(message, Style.DIM)
        case PublishFailed(step=step, message=message):
            console.error(f"{step} failed: {message}")


def release_error_exit_code(error: ReleaseError) -> int:
    """Get exit code for a release error."""
    match error:
        case AddonNotFound() | ChannelNotFound() | CatalogInvalid() | InvalidVersion():
            return int(ErrorCode.USER_ERROR)
        case PreReleaseNotAllowed():
            return int(ErrorCode.POLICY_ERROR)
        case WrongBranch() | DirtyTree() | GitFailed():
            return int(ErrorCode.GIT_ERROR)
        case PublishFailed():
            return int(ErrorCode.NETWORK_ERROR)
        case _:
            return int(ErrorCode.TRANSFORM_ERROR)
