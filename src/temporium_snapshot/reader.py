"""Snapshot preview and import.

Preview trusts nothing but the magic value and returns whatever it can
decode. Import only proceeds on a fully verified file and re-homes every
record to the importing owner.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO
from warnings import warn

from temporium_core.header import SnapshotHeader
from temporium_core.protocol import CURRENT_LAYOUT, HEADER_LEN, UNSET_ID, RecordLayout, layout_for_version
from temporium_core.records import Game
from temporium_verify.const import VerificationOutcome, describe
from temporium_verify.logic import load_snapshot

from .codec import decode_game
from .store import GameStore


@dataclass
class SnapshotPreview:
    path: Path
    records: list[Game] = field(default_factory=list)
    version: int | None = None
    declared_count: int = 0
    error: str | None = None

    @property
    def complete(self) -> bool:
        return self.error is None and len(self.records) == self.declared_count


@dataclass(frozen=True)
class ImportResult:
    outcome: VerificationOutcome
    added: int = 0
    rejected: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is VerificationOutcome.OK and self.error is None

    def __bool__(self) -> bool:
        return self.ok


def _read_records(f: BinaryIO, layout: RecordLayout, count: int) -> tuple[list[Game], bool]:
    """Decode up to `count` records. Returns (records, torn) where torn means a short read."""
    games: list[Game] = []
    for _ in range(count):
        raw = f.read(layout.size)
        if len(raw) < layout.size:
            return games, True
        games.append(decode_game(raw, layout))
    return games, False


def preview_snapshot(path: Path) -> SnapshotPreview:
    path = Path(path)
    preview = SnapshotPreview(path)
    try:
        f = open(path, "rb")
    except OSError:
        preview.error = f"Cannot open file for reading: {path}"
        return preview

    with f:
        try:
            raw = f.read(HEADER_LEN)
            if len(raw) < HEADER_LEN:
                preview.error = "Invalid file format"
                return preview
            header = SnapshotHeader.unpack(raw)
            if not header.magic_ok:
                preview.error = "Invalid file format"
                return preview

            preview.version = header.version
            preview.declared_count = header.record_count

            layout = layout_for_version(header.version)
            if layout is None:
                warn(f"Unknown snapshot version {header.version} in {path}; decoding with the current layout")
                layout = CURRENT_LAYOUT

            preview.records, torn = _read_records(f, layout, header.record_count)
        except OSError as e:
            preview.error = f"Read snapshot error: {e}"
            return preview

    if torn:
        warn(
            f"Torn snapshot payload in {path}: {len(preview.records)} of "
            f"{header.record_count} records readable"
        )
    return preview


def read_snapshot(path: Path) -> list[Game]:
    """Preview read: every stored field, original ids and owners. Not for persistence."""
    return preview_snapshot(path).records


def import_snapshot(path: Path, owner: int, store: GameStore) -> ImportResult:
    """Import a verified snapshot into `store` on behalf of `owner`.

    Nothing is inserted unless the file verifies as OK. Each record is
    re-homed to `owner` and its id reset so the store assigns a fresh one.
    Rating, flags, notes and tags are restored from the file.
    """
    path = Path(path)
    outcome, header, payload = load_snapshot(path)
    if outcome is not VerificationOutcome.OK:
        return ImportResult(outcome, error=describe(outcome))

    # Decode the exact bytes that were hashed; the file is not reopened.
    layout = layout_for_version(header.version)
    games = [
        decode_game(payload[i:i + layout.size], layout)
        for i in range(0, len(payload), layout.size)
    ]

    added = rejected = 0
    for game in games:
        game.user_id = owner
        game.id = UNSET_ID
        if store.add_game(game):
            added += 1
        else:
            rejected += 1

    return ImportResult(outcome, added, rejected)
