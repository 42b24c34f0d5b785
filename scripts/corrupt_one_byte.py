import sys
from pathlib import Path

from temporium_core.protocol import HEADER_LEN

def main():
    if len(sys.argv) not in (2, 3):
        print("Usage: corrupt_one_byte.py <snapshot> [payload_offset]")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    offset = int(sys.argv[2]) if len(sys.argv) == 3 else 0
    b = bytearray(p.read_bytes())
    if len(b) <= HEADER_LEN + offset:
        print("Snapshot has no payload byte at that offset.")
        raise SystemExit(2)

    # Header is 100 bytes and is not covered by the hash.
    # Flipping any payload byte must turn verification into HashMismatch.
    idx = HEADER_LEN + offset
    b[idx] ^= 0x01
    p.write_bytes(bytes(b))
    print(f"Corrupted 1 byte at offset {idx} in {p}")

if __name__ == "__main__":
    main()
