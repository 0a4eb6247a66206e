from __future__ import annotations

from addon_release.catalog.model import ReleaseChannel
from addon_release.core.result import Err, Ok, Result
from addon_release.release.errors import PreReleaseNotAllowed
from addon_release.release.version import AddonVersion


def check_allowed(
    version: AddonVersion,
    channel: ReleaseChannel,
) -> Result[None, PreReleaseNotAllowed]:
    """Reject pre-release versions for channels that do not accept them."""
    if version.is_prerelease() and not channel.allow_pre_release:
        return Err(PreReleaseNotAllowed(version=str(version), channel=channel.name))
    return Ok(None)
