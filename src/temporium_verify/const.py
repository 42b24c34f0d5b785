from enum import Enum


class VerificationOutcome(str, Enum):
    OK = "OK"
    FILE_NOT_FOUND = "FileNotFound"
    INVALID_MAGIC = "InvalidMagic"
    INVALID_VERSION = "InvalidVersion"
    HASH_MISMATCH = "HashMismatch"
    READ_ERROR = "ReadError"


ERRORS = {
  VerificationOutcome.OK: "Snapshot is valid",
  VerificationOutcome.FILE_NOT_FOUND: "Snapshot file not found",
  VerificationOutcome.INVALID_MAGIC: "Invalid file format (not a Temporium snapshot)",
  VerificationOutcome.INVALID_VERSION: "Unsupported snapshot format version",
  VerificationOutcome.HASH_MISMATCH: "Snapshot is corrupted or modified (checksum mismatch)",
  VerificationOutcome.READ_ERROR: "Snapshot read error",
}


def describe(outcome: VerificationOutcome) -> str:
    return ERRORS.get(outcome, "Unknown error")
