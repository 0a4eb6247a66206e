"""Promotion kinds.

The set of channels is closed: stage and edge receive the full bundle,
stable receives only the addon image set. Anything else is rejected before
the target tree is touched.
"""

from __future__ import annotations

from dataclasses import dataclass

from addon_release.catalog.model import ReleaseChannel
from addon_release.core.result import Err, Ok, Result
from addon_release.release.errors import UnsupportedChannel


class ChannelName:
    STAGE = "stage"
    EDGE = "edge"
    STABLE = "stable"


@dataclass(frozen=True, slots=True)
class StagePromotion:
    channel: ReleaseChannel


@dataclass(frozen=True, slots=True)
class EdgePromotion:
    channel: ReleaseChannel


@dataclass(frozen=True, slots=True)
class StablePromotion:
    channel: ReleaseChannel


Promotion = StagePromotion | EdgePromotion | StablePromotion


def promotion_for(channel: ReleaseChannel) -> Result[Promotion, UnsupportedChannel]:
    match channel.name:
        case ChannelName.STAGE:
            return Ok(StagePromotion(channel))
        case ChannelName.EDGE:
            return Ok(EdgePromotion(channel))
        case ChannelName.STABLE:
            return Ok(StablePromotion(channel))
        case _:
            return Err(UnsupportedChannel(channel=channel.name))
