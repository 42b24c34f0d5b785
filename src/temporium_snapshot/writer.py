from __future__ import annotations

import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from temporium_core.header import SnapshotHeader
from temporium_core.protocol import CURRENT_LAYOUT, FILE_MAGIC, RecordLayout
from temporium_core.records import Game
from temporium_verify.digest import digest, hash_slot

from .codec import encode_payload
from .store import GameFilter, GameStore


@dataclass(frozen=True)
class WriteResult:
    path: Path
    ok: bool
    record_count: int = 0
    digest: str = ""
    truncated: list[int] = field(default_factory=list)
    error: str | None = None

    def __bool__(self) -> bool:
        return self.ok


def build_snapshot(games: Iterable[Game], layout: RecordLayout = CURRENT_LAYOUT) -> tuple[bytes, str, list[int]]:
    """Assemble a complete snapshot image in memory.

    Returns (file bytes, payload digest, indexes of records with truncated text).
    """
    games = list(games)
    payload, truncated = encode_payload(games, layout)
    payload_digest = digest(payload)

    header = SnapshotHeader(
        magic=FILE_MAGIC,
        version=layout.version,
        record_count=len(games),
        hash_slot=hash_slot(payload_digest),
    )
    return header.pack() + payload, payload_digest, truncated


def write_snapshot(path: Path, games: Iterable[Game]) -> WriteResult:
    """Write games to `path` as a current-version snapshot, replacing any existing file.

    There is no temp-file + rename step: a crash mid-write leaves a truncated
    file that fails verification.
    """
    path = Path(path)
    games = list(games)
    try:
        image, payload_digest, truncated = build_snapshot(games)
    except (struct.error, UnicodeEncodeError) as e:
        return WriteResult(path, False, error=f"Write file error: {e}")

    try:
        f = open(path, "wb")
    except OSError:
        return WriteResult(path, False, error=f"Cannot open file for writing: {path}")

    try:
        with f:
            f.write(image)
    except OSError as e:
        return WriteResult(path, False, error=f"Write file error: {e}")

    return WriteResult(path, True, len(games), payload_digest, truncated)


def export_snapshot(
    path: Path,
    store: GameStore,
    owner: int,
    game_filter: GameFilter | None = None,
) -> WriteResult:
    """Export all of an owner's games, or only those matching `game_filter`."""
    if game_filter is None:
        games = store.list_games(owner)
    else:
        games = store.list_filtered(owner, game_filter)
    return write_snapshot(path, games)
