"""Temporium Core - shared record type and on-disk protocol."""
from .header import SnapshotHeader
from .protocol import (
    CURRENT_LAYOUT,
    CURRENT_VERSION,
    LEGACY_LAYOUT,
    LEGACY_VERSION,
    NO_RATING,
    UNSET_ID,
    RecordLayout,
    layout_for_version,
)
from .records import Game

__all__ = [
    "Game",
    "SnapshotHeader",
    "RecordLayout",
    "CURRENT_LAYOUT",
    "LEGACY_LAYOUT",
    "CURRENT_VERSION",
    "LEGACY_VERSION",
    "NO_RATING",
    "UNSET_ID",
    "layout_for_version",
]
