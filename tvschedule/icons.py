"""
Channel icon lookup.

TV Spielfilm ships all channel logos in one vertical sprite image of
44x44 tiles. ICON_CHANNELS lists the channels in sprite order; a channel's
tile starts at y = index * ICON_SIZE.

The lookup table is built once at import and never modified.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, Optional

from tvschedule.model import IconRef

ICON_SPRITE_URL = (
    "https://a2.tvspielfilm.de/images/tv/sender/mini/sprite_web_optimized_1616508904.webp"
)
ICON_SIZE = 44

ICON_CHANNELS = (
    "Das Erste",
    "ZDF",
    "RTL",
    "SAT.1",
    "ProSieben",
    "kabel eins",
    "RTL II",
    "VOX",
    "TELE 5",
    "3sat",
    "ARTE",
    "ZDFneo",
    "ONE",
    "ServusTV Deutschland",
    "NITRO",
    "DMAX",
    "sixx",
    "SAT.1 Gold",
    "ProSieben MAXX",
    "COMEDY CENTRAL",
    "RTLplus",
    "WDR",
    "NDR",
    "BR",
    "SWR/SR",
    "HR",
    "MDR",
    "RBB",
    "tv.berlin",
)

_WS_RE = re.compile(r"\s+")


def canonical_channel_name(name: Optional[str]) -> str:
    """
    Normalize a channel name for lookups: collapse whitespace, casefold.
    """
    if not name:
        return ""
    return _WS_RE.sub(" ", name.replace("\xa0", " ")).strip().casefold()


def _build_table() -> Mapping[str, IconRef]:
    table = {}
    for index, name in enumerate(ICON_CHANNELS):
        table[canonical_channel_name(name)] = IconRef(
            sprite_url=ICON_SPRITE_URL,
            index=index,
            x=0,
            y=index * ICON_SIZE,
            width=ICON_SIZE,
            height=ICON_SIZE,
        )
    return MappingProxyType(table)


ICON_TABLE: Mapping[str, IconRef] = _build_table()


def resolve_icon(channel_name: Optional[str]) -> Optional[IconRef]:
    """
    Return the sprite tile for a channel, or None to render the name as text.
    """
    return ICON_TABLE.get(canonical_channel_name(channel_name))
