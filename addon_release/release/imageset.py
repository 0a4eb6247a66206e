"""Image-set promotion for the stable channel.

Stable never receives bundles: the newest image set already promoted to
stage is copied under the channel's environment with a normalized name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from addon_release.catalog.model import ReleaseChannel
from addon_release.core.result import Err, Ok, Result
from addon_release.core.structured import StrDict, get_list, get_raw_str
from addon_release.output.console import ConsoleProtocol, Style
from addon_release.platform.files import sorted_file_names
from addon_release.platform.yaml_io import load_yaml_mapping, write_yaml_mapping
from addon_release.release.errors import DocumentInvalid, ImageSetNotFound, TransformError
from addon_release.release.version import AddonVersion


@dataclass(frozen=True, slots=True)
class AddonImageSet:
    index_image: str
    name: str
    related_images: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: StrDict) -> AddonImageSet:
        related = [str(i) for i in get_list(data, "relatedImages") or [] if i is not None]
        return cls(
            index_image=get_raw_str(data, "indexImage") or "",
            name=get_raw_str(data, "name") or "",
            related_images=tuple(related),
        )

    def to_dict(self) -> StrDict:
        return {
            "indexImage": self.index_image,
            "name": self.name,
            "relatedImages": list(self.related_images),
        }

    def renamed(self, name: str) -> AddonImageSet:
        return AddonImageSet(
            index_image=self.index_image,
            name=name,
            related_images=self.related_images,
        )


def latest_by_name(directory: Path) -> Result[Path, ImageSetNotFound]:
    """Pick the file whose name sorts last as a plain string.

    This is not a semantic-version comparison: `addon.v2-rc1.yaml` sorts
    after `addon.v10.yaml`.
    """
    names = sorted_file_names(directory)
    if isinstance(names, Err):
        return Err(ImageSetNotFound(directory=directory, reason=names.error))
    if not names.value:
        return Err(ImageSetNotFound(directory=directory, reason="no image set files"))
    return Ok(directory / names.value[-1])


def promote_image_set(
    *,
    channel: ReleaseChannel,
    version: AddonVersion,
    target_root: Path,
    console: ConsoleProtocol,
) -> Result[str, TransformError]:
    """Copy the latest staged image set into the channel's environment.

    Returns:
        Ok(relative path) of the written image set
    """
    latest = latest_by_name(target_root / channel.stage_image_set_directory())
    if isinstance(latest, Err):
        return latest

    doc = load_yaml_mapping(latest.value)
    if isinstance(doc, Err):
        return Err(DocumentInvalid(path=latest.value, reason=doc.error.reason))

    # Drop any release-candidate naming used while staging.
    image_set = AddonImageSet.from_dict(doc.value).renamed(channel.image_set_name(str(version)))

    relative = channel.image_set_path(str(version))
    destination = target_root / relative
    console.print(f"copy {latest.value.name} -> {relative}", Style.DIM)

    written = write_yaml_mapping(image_set.to_dict(), destination)
    if isinstance(written, Err):
        return Err(DocumentInvalid(path=destination, reason=written.error.reason))
    return Ok(relative)
