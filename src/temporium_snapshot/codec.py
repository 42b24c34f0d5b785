"""Fixed-width record codec.

Text fields are UTF-8, zero-padded to their capacity and silently truncated
to capacity - 1 bytes. Numbers are copied verbatim; range checks belong to
whoever hands records to the codec.
"""
from __future__ import annotations

import struct
from typing import Callable, NamedTuple

from temporium_core.protocol import (
    CURRENT_LAYOUT,
    CURRENT_VERSION,
    LEGACY_VERSION,
    TEXT_FIELDS,
    RecordLayout,
)
from temporium_core.records import Game


class EncodedRecord(NamedTuple):
    data: bytes
    truncated_fields: tuple[str, ...]

    @property
    def truncated(self) -> bool:
        return bool(self.truncated_fields)


def encode_text(text: str, capacity: int) -> tuple[bytes, bool]:
    """Encode text into a zero-padded slot of `capacity` bytes.

    Returns the slot bytes and whether the text had to be truncated. The cut
    never splits a UTF-8 sequence.
    """
    raw = text.encode("utf-8")
    limit = capacity - 1
    truncated = len(raw) > limit
    if truncated:
        # The source is valid UTF-8, so only a trailing partial sequence can be dropped here.
        raw = raw[:limit].decode("utf-8", errors="ignore").encode("utf-8")
    return raw.ljust(capacity, b"\x00"), truncated


def decode_text(raw: bytes) -> str:
    return raw.split(b"\x00", 1)[0].decode("utf-8", errors="replace")


def encode_game(game: Game, layout: RecordLayout = CURRENT_LAYOUT) -> EncodedRecord:
    values = {
        "id": game.id,
        "disk_space": game.disk_space,
        "ram_usage": game.ram_usage,
        "vram_required": game.vram_required,
        "completed": 1 if game.completed else 0,
        "user_id": game.user_id,
        "rating": game.rating,
        "is_favorite": 1 if game.is_favorite else 0,
        "is_installed": 1 if game.is_installed else 0,
    }
    truncated: list[str] = []
    for field, capacity in TEXT_FIELDS.items():
        if field not in layout.fields:
            continue
        values[field], cut = encode_text(getattr(game, field), capacity)
        if cut:
            truncated.append(field)

    data = struct.pack(layout.fmt, *(values[f] for f in layout.fields))
    return EncodedRecord(data, tuple(truncated))


def _decode_legacy(values: dict) -> Game:
    # Fields added after version 1 keep their Game defaults.
    return Game(
        id=values["id"],
        name=decode_text(values["name"]),
        disk_space=values["disk_space"],
        ram_usage=values["ram_usage"],
        vram_required=values["vram_required"],
        genre=decode_text(values["genre"]),
        completed=values["completed"] != 0,
        url=decode_text(values["url"]),
        user_id=values["user_id"],
    )


def _decode_current(values: dict) -> Game:
    game = _decode_legacy(values)
    game.rating = values["rating"]
    game.is_favorite = values["is_favorite"] != 0
    game.is_installed = values["is_installed"] != 0
    game.notes = decode_text(values["notes"])
    game.tags = decode_text(values["tags"])
    return game


DECODERS: dict[int, Callable[[dict], Game]] = {
    CURRENT_VERSION: _decode_current,
    LEGACY_VERSION: _decode_legacy,
}


def decode_game(raw: bytes, layout: RecordLayout = CURRENT_LAYOUT) -> Game:
    """Decode one on-disk record. `raw` must be exactly `layout.size` bytes."""
    values = dict(zip(layout.fields, struct.unpack(layout.fmt, raw)))
    return DECODERS[layout.version](values)


def encode_payload(games, layout: RecordLayout = CURRENT_LAYOUT) -> tuple[bytes, list[int]]:
    """Concatenate encoded records. Returns the payload and indexes of truncated records."""
    chunks: list[bytes] = []
    truncated: list[int] = []
    for i, game in enumerate(games):
        rec = encode_game(game, layout)
        chunks.append(rec.data)
        if rec.truncated:
            truncated.append(i)
    return b"".join(chunks), truncated

