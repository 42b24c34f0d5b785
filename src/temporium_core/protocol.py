"""Temporium snapshot protocol constants.

Single source of truth for the on-disk magic value, header and record layouts.
Keep this file stable. Writer, Verifier and Reader must remain synchronized.
"""
from __future__ import annotations

import struct
from typing import NamedTuple

# "TEMP" as a little-endian uint32; the first four file bytes are b"PMET".
FILE_MAGIC = 0x54454D50

CURRENT_VERSION = 3
LEGACY_VERSION = 1
ACCEPTED_VERSIONS = (CURRENT_VERSION, LEGACY_VERSION)

# Header: [Magic(4) | Ver(2) | Count(4) | Hash(64) | Reserved(26)] = 100 bytes
HASH_SLOT_LEN = 64
RESERVED_LEN = 26
HEADER_FMT = f"<IHI{HASH_SLOT_LEN}s{RESERVED_LEN}s"
HEADER_LEN = 100

# Text field capacities, terminator included
NAME_LEN = 256
GENRE_LEN = 64
URL_LEN = 512
NOTES_LEN = 1024
TAGS_LEN = 256

NO_RATING = -1
UNSET_ID = 0


class RecordLayout(NamedTuple):
    """A named, fixed-width record shape tied to one format version."""

    name: str
    version: int
    fmt: str
    fields: tuple[str, ...]

    @property
    def size(self) -> int:
        return struct.calcsize(self.fmt)


_LEGACY_FIELDS = (
    "id",
    "name",
    "disk_space",
    "ram_usage",
    "vram_required",
    "genre",
    "completed",
    "url",
    "user_id",
)

# Version 1: [id | name | disk | ram | vram | genre | completed | url | user_id] = 865 bytes
LEGACY_LAYOUT = RecordLayout(
    name="legacy",
    version=LEGACY_VERSION,
    fmt=f"<i{NAME_LEN}sddd{GENRE_LEN}sB{URL_LEN}si",
    fields=_LEGACY_FIELDS,
)

# Version 3: legacy prefix + [rating | favorite | installed | notes | tags] = 2151 bytes
CURRENT_LAYOUT = RecordLayout(
    name="current",
    version=CURRENT_VERSION,
    fmt=LEGACY_LAYOUT.fmt + f"iBB{NOTES_LEN}s{TAGS_LEN}s",
    fields=_LEGACY_FIELDS + ("rating", "is_favorite", "is_installed", "notes", "tags"),
)

LAYOUTS = {layout.version: layout for layout in (CURRENT_LAYOUT, LEGACY_LAYOUT)}

LEGACY_REC_LEN = 865
CURRENT_REC_LEN = 2151

# Text capacities keyed by field name
TEXT_FIELDS = {
    "name": NAME_LEN,
    "genre": GENRE_LEN,
    "url": URL_LEN,
    "notes": NOTES_LEN,
    "tags": TAGS_LEN,
}


def layout_for_version(version: int) -> RecordLayout | None:
    """Return the record layout for an accepted version, or None."""
    return LAYOUTS.get(version)
