import os
from pathlib import Path

from temporium_core.header import SnapshotHeader
from temporium_core.protocol import ACCEPTED_VERSIONS, HEADER_LEN, layout_for_version

from .const import VerificationOutcome, describe
from .digest import digest, slot_matches


def load_snapshot(path: Path) -> tuple[VerificationOutcome, SnapshotHeader | None, bytes]:
    """Read and check a snapshot in one pass.

    Returns (outcome, header, payload). The payload is the exact byte run that
    was hashed, so callers can decode it without reopening the file. Header and
    payload are only meaningful when the outcome is OK.
    """
    path = Path(path)
    try:
        f = open(path, "rb")
    except OSError:
        return VerificationOutcome.FILE_NOT_FOUND, None, b""

    with f:
        try:
            raw = f.read(HEADER_LEN)
            if len(raw) < HEADER_LEN:
                return VerificationOutcome.READ_ERROR, None, b""
            header = SnapshotHeader.unpack(raw)

            # Magic first: a foreign file never reaches the version check.
            if not header.magic_ok:
                return VerificationOutcome.INVALID_MAGIC, header, b""
            if header.version not in ACCEPTED_VERSIONS:
                return VerificationOutcome.INVALID_VERSION, header, b""

            layout = layout_for_version(header.version)
            payload_len = header.record_count * layout.size

            # A count larger than the file can hold is a short read; do not allocate for it.
            available = os.fstat(f.fileno()).st_size - HEADER_LEN
            if available < payload_len:
                return VerificationOutcome.READ_ERROR, header, b""

            payload = f.read(payload_len)
        except OSError:
            return VerificationOutcome.READ_ERROR, None, b""

    if len(payload) != payload_len:
        return VerificationOutcome.READ_ERROR, header, b""

    if not slot_matches(header.hash_slot, digest(payload)):
        return VerificationOutcome.HASH_MISMATCH, header, b""

    return VerificationOutcome.OK, header, payload


def verify_snapshot(path: Path) -> VerificationOutcome:
    """Check a snapshot's structure and content hash. Never raises for a bad file."""
    outcome, _, _ = load_snapshot(path)
    return outcome


def verify_report(path: Path) -> dict:
    outcome = verify_snapshot(path)
    return {
        "status": "PASS" if outcome is VerificationOutcome.OK else "FAIL",
        "outcome": outcome.value,
        "message": describe(outcome),
        "path": str(path),
    }
