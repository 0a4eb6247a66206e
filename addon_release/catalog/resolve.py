from __future__ import annotations

from addon_release.catalog.model import AddonCatalog, AddonConfig, ReleaseChannel
from addon_release.core.result import Err, Ok, Result
from addon_release.release.errors import AddonNotFound, ChannelNotFound


def find_addon(catalog: AddonCatalog, addon_name: str) -> AddonConfig | None:
    for addon in catalog.addons:
        if addon.name == addon_name:
            return addon
    return None


def find_channel(addon: AddonConfig, channel_name: str) -> ReleaseChannel | None:
    for channel in addon.channels:
        if channel.name == channel_name:
            return channel
    return None


def resolve(
    catalog: AddonCatalog,
    addon_name: str,
    channel_name: str,
) -> Result[tuple[AddonConfig, ReleaseChannel], AddonNotFound | ChannelNotFound]:
    """Look up an addon and one of its channels by exact name; first match wins."""
    addon = find_addon(catalog, addon_name)
    if addon is None:
        return Err(AddonNotFound(addon=addon_name, available=catalog.addon_names()))

    channel = find_channel(addon, channel_name)
    if channel is None:
        return Err(
            ChannelNotFound(
                addon=addon_name,
                channel=channel_name,
                available=addon.channel_names(),
            )
        )

    return Ok((addon, channel))
