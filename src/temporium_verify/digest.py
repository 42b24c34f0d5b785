import hashlib

from temporium_core.protocol import HASH_SLOT_LEN

EMPTY_DIGEST = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def digest(data: bytes) -> str:
    """SHA-256 of the record payload as 64 lowercase hex characters."""
    return hashlib.sha256(data).hexdigest()


def hash_slot(hex_digest: str) -> bytes:
    """Fit a hex digest into the fixed header slot (truncate or zero-pad)."""
    raw = hex_digest.encode("ascii")[:HASH_SLOT_LEN]
    return raw.ljust(HASH_SLOT_LEN, b"\x00")


def slot_matches(slot: bytes, hex_digest: str) -> bool:
    # Full slot width, padding included: "short hash + zeros" never equals a longer digest.
    return len(slot) == HASH_SLOT_LEN and slot == hash_slot(hex_digest)
