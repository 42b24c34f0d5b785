"""Snapshot file header (de)serialization."""
from __future__ import annotations

import struct
from dataclasses import dataclass

from .protocol import (
    CURRENT_VERSION,
    FILE_MAGIC,
    HASH_SLOT_LEN,
    HEADER_FMT,
    HEADER_LEN,
    RESERVED_LEN,
)


@dataclass(frozen=True)
class SnapshotHeader:
    magic: int = FILE_MAGIC
    version: int = CURRENT_VERSION
    record_count: int = 0
    hash_slot: bytes = bytes(HASH_SLOT_LEN)
    reserved: bytes = bytes(RESERVED_LEN)

    def pack(self) -> bytes:
        return struct.pack(
            HEADER_FMT,
            self.magic,
            self.version,
            self.record_count,
            self.hash_slot,
            self.reserved,
        )

    @classmethod
    def unpack(cls, raw: bytes) -> "SnapshotHeader":
        """Parse exactly HEADER_LEN bytes. Raises struct.error on a short buffer."""
        magic, version, count, hash_slot, reserved = struct.unpack(HEADER_FMT, raw[:HEADER_LEN])
        return cls(magic, version, count, hash_slot, reserved)

    @property
    def magic_ok(self) -> bool:
        return self.magic == FILE_MAGIC

    @property
    def stored_hash(self) -> str:
        """Hash slot as text, zero padding stripped. Display only; compare the full slot."""
        return self.hash_slot.split(b"\x00", 1)[0].decode("ascii", errors="replace")
