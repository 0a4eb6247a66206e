"""Dispatch a promotion to the edit it requires in the target tree."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from addon_release.catalog.model import AddonConfig
from addon_release.core.result import Err, Ok, Result
from addon_release.output.console import ConsoleProtocol
from addon_release.release.bundle import promote_bundle
from addon_release.release.channels import (
    EdgePromotion,
    Promotion,
    StablePromotion,
    StagePromotion,
)
from addon_release.release.errors import CopyFailed, TransformError
from addon_release.release.identity import identity_rewrite_for
from addon_release.release.imageset import promote_image_set
from addon_release.release.version import AddonVersion


@dataclass(frozen=True, slots=True)
class StagedChange:
    """Paths (git pathspecs, globs allowed) that make up the change-set."""

    pathspecs: tuple[str, ...]


def transform(
    *,
    promotion: Promotion,
    addon: AddonConfig,
    version: AddonVersion,
    target_root: Path,
    bundle_root: Path | None,
    console: ConsoleProtocol,
) -> Result[StagedChange, TransformError]:
    match promotion:
        case StagePromotion(channel=channel) | EdgePromotion(channel=channel):
            if bundle_root is None:
                return Err(
                    CopyFailed(
                        source=Path(addon.bundle.path),
                        destination=target_root / channel.bundles_directory(),
                        reason="bundle source is not checked out",
                    )
                )
            directory = promote_bundle(
                addon=addon,
                channel=channel,
                version=version,
                bundle_root=bundle_root,
                target_root=target_root,
                identity=identity_rewrite_for(addon.name, channel.name),
                console=console,
            )
            if isinstance(directory, Err):
                return directory
            return Ok(StagedChange(pathspecs=(f"{directory.value.rstrip('/')}/*",)))

        case StablePromotion(channel=channel):
            image_set = promote_image_set(
                channel=channel,
                version=version,
                target_root=target_root,
                console=console,
            )
            if isinstance(image_set, Err):
                return image_set
            return Ok(StagedChange(pathspecs=(image_set.value,)))

        case _:
            raise AssertionError(f"unexpected promotion: {promotion}")
