"""Per-addon identity rewrites.

Some (addon, channel) pairs publish the operator under a different package
identity. The rules are looked up by pair; a pair without a rule keeps the
bundle's identity untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from addon_release.core.result import Err, Ok, Result
from addon_release.release.channels import ChannelName
from addon_release.release.errors import VersionMarkerMissing

VERSION_MARKER = ".v"

BUNDLE_PACKAGE_ANNOTATION = "operators.operatorframework.io.bundle.package.v1"
BUNDLE_CHANNELS_ANNOTATION = "operators.operatorframework.io.bundle.channels.v1"
BUNDLE_DEFAULT_CHANNEL_ANNOTATION = "operators.operatorframework.io.bundle.channel.default.v1"


@dataclass(frozen=True, slots=True)
class IdentityRewrite:
    """Rename the CSV to `<package>.v<suffix>` and remap bundle annotations.

    Attributes:
        package: New package name used for the CSV name and `replaces`.
        annotation_keys: Annotations whose values are remapped.
        annotation_values: Exact value -> replacement, applied per key.
    """

    package: str
    annotation_keys: tuple[str, ...] = ()
    annotation_values: dict[str, str] = field(default_factory=dict)

    def rename(self, field_name: str, value: str) -> Result[str, VersionMarkerMissing]:
        suffix = version_suffix(field_name, value)
        if isinstance(suffix, Err):
            return suffix
        return Ok(f"{self.package}{VERSION_MARKER}{suffix.value}")

    def rewrite_annotations(self, annotations: dict[str, str]) -> None:
        for key in self.annotation_keys:
            value = annotations.get(key)
            if value is not None and value in self.annotation_values:
                annotations[key] = self.annotation_values[value]


def version_suffix(field_name: str, value: str) -> Result[str, VersionMarkerMissing]:
    """Return the text following the first `.v` marker of a CSV identity.

    `managed-api-service.v1.2.3` -> `1.2.3`. Only the segment up to a second
    marker is kept, matching how the identities have always been split.
    """
    parts = value.split(VERSION_MARKER)
    if len(parts) < 2:
        return Err(VersionMarkerMissing(field=field_name, value=value))
    return Ok(parts[1])


_MANAGED_API_SERVICE = "managed-api-service"

_IDENTITY_REWRITES: dict[tuple[str, str], IdentityRewrite] = {
    (_MANAGED_API_SERVICE, ChannelName.EDGE): IdentityRewrite(
        package=f"{_MANAGED_API_SERVICE}-internal",
        annotation_keys=(
            BUNDLE_PACKAGE_ANNOTATION,
            BUNDLE_CHANNELS_ANNOTATION,
            BUNDLE_DEFAULT_CHANNEL_ANNOTATION,
        ),
        annotation_values={
            _MANAGED_API_SERVICE: f"{_MANAGED_API_SERVICE}-internal",
            ChannelName.STABLE: ChannelName.EDGE,
        },
    ),
}


def identity_rewrite_for(addon_name: str, channel_name: str) -> IdentityRewrite | None:
    return _IDENTITY_REWRITES.get((addon_name, channel_name))
