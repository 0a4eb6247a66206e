"""Addon catalog model.

The catalog is loaded once per run and never mutated. A channel's
`directory` is the only input to every path derived for it.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "FIELD_REF_ENV_VARS",
    "AddonCatalog",
    "AddonConfig",
    "BundleSource",
    "DeploymentOverride",
    "EnvVarOverride",
    "ReleaseChannel",
]

# Only these variables are sourced from a pod field instead of a literal value.
FIELD_REF_ENV_VARS = frozenset({"WATCH_NAMESPACE", "POD_NAME"})


@dataclass(frozen=True, slots=True)
class ReleaseChannel:
    name: str
    directory: str
    environment: str
    allow_pre_release: bool = False

    def bundles_directory(self) -> str:
        """Path (relative to the target repo) holding one subdirectory per bundle version."""
        return f"addons/{self.directory}/main"

    def stage_image_set_directory(self) -> str:
        return f"addons/{self.directory}/addonimagesets/stage"

    def image_set_name(self, version: str) -> str:
        return f"{self.directory}.v{version}"

    def image_set_path(self, version: str) -> str:
        return (
            f"addons/{self.directory}/addonimagesets/{self.environment}/"
            f"{self.image_set_name(version)}.yaml"
        )


@dataclass(frozen=True, slots=True)
class BundleSource:
    """Where the addon's packaged bundles live: a git repo and a path inside it."""

    repo: str
    path: str


@dataclass(frozen=True, slots=True)
class EnvVarOverride:
    name: str
    value: str = ""
    field_path: str | None = None


@dataclass(frozen=True, slots=True)
class DeploymentOverride:
    """Replacement env for one container of one deployment in the CSV."""

    deployment: str
    container: str
    env_vars: tuple[EnvVarOverride, ...] = ()


@dataclass(frozen=True, slots=True)
class AddonConfig:
    name: str
    bundle: BundleSource
    channels: tuple[ReleaseChannel, ...]
    override: DeploymentOverride | None = None

    def channel_names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.channels)


@dataclass(frozen=True, slots=True)
class AddonCatalog:
    addons: tuple[AddonConfig, ...]

    def addon_names(self) -> tuple[str, ...]:
        return tuple(a.name for a in self.addons)
