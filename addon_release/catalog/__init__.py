"""Addon catalog: model, loader and (addon, channel) resolution."""

from addon_release.catalog.loader import load_catalog, parse_catalog
from addon_release.catalog.model import (
    AddonCatalog,
    AddonConfig,
    BundleSource,
    DeploymentOverride,
    EnvVarOverride,
    ReleaseChannel,
)
from addon_release.catalog.resolve import find_addon, find_channel, resolve

__all__ = [
    "AddonCatalog",
    "AddonConfig",
    "BundleSource",
    "DeploymentOverride",
    "EnvVarOverride",
    "ReleaseChannel",
    "find_addon",
    "find_channel",
    "load_catalog",
    "parse_catalog",
    "resolve",
]
