import warnings

from temporium_core.header import SnapshotHeader
from temporium_core.protocol import (
    CURRENT_REC_LEN,
    CURRENT_VERSION,
    FILE_MAGIC,
    HEADER_LEN,
    LEGACY_LAYOUT,
    LEGACY_VERSION,
    NAME_LEN,
)
from temporium_core.records import Game
from temporium_snapshot.reader import preview_snapshot, read_snapshot
from temporium_snapshot.writer import build_snapshot, write_snapshot
from temporium_verify.digest import EMPTY_DIGEST, digest, hash_slot


def test_write_then_read_round_trip(tmp_path, games):
    path = tmp_path / "catalog.tmps"
    result = write_snapshot(path, games)

    assert result
    assert result.record_count == 3
    assert result.truncated == []
    assert read_snapshot(path) == games


def test_file_layout(tmp_path, games):
    path = tmp_path / "catalog.tmps"
    write_snapshot(path, games)
    data = path.read_bytes()

    assert data[:4] == b"PMET"
    assert len(data) == HEADER_LEN + 3 * CURRENT_REC_LEN

    header = SnapshotHeader.unpack(data[:HEADER_LEN])
    assert header.magic == FILE_MAGIC
    assert header.version == CURRENT_VERSION
    assert header.record_count == 3
    assert header.reserved == bytes(26)
    assert header.hash_slot == hash_slot(digest(data[HEADER_LEN:]))
    assert header.stored_hash == digest(data[HEADER_LEN:])


def test_write_replaces_existing_file(tmp_path, games):
    path = tmp_path / "catalog.tmps"
    path.write_bytes(b"x" * 100_000)
    write_snapshot(path, games[:1])
    assert path.stat().st_size == HEADER_LEN + CURRENT_REC_LEN


def test_empty_snapshot(tmp_path):
    path = tmp_path / "empty.tmps"
    result = write_snapshot(path, [])

    assert result
    assert result.digest == EMPTY_DIGEST
    data = path.read_bytes()
    assert len(data) == HEADER_LEN
    header = SnapshotHeader.unpack(data)
    assert header.record_count == 0
    assert header.stored_hash == EMPTY_DIGEST
    assert read_snapshot(path) == []


def test_write_reports_truncated_records(tmp_path, games):
    games[1].name = "S" * (NAME_LEN * 2)
    path = tmp_path / "catalog.tmps"
    result = write_snapshot(path, games)

    assert result
    assert result.truncated == [1]
    assert read_snapshot(path)[1].name == "S" * (NAME_LEN - 1)


def test_write_to_missing_directory_fails(tmp_path, games):
    path = tmp_path / "nope" / "catalog.tmps"
    result = write_snapshot(path, games)

    assert not result
    assert result.error == f"Cannot open file for writing: {path}"
    assert not path.exists()


def test_write_rejects_unpackable_values(tmp_path):
    result = write_snapshot(tmp_path / "big.tmps", [Game(id=2**40, name="Overflow")])
    assert not result
    assert result.error.startswith("Write file error:")


def test_write_rejects_unencodable_text(tmp_path):
    path = tmp_path / "surrogate.tmps"
    result = write_snapshot(path, [Game(name="bad\udcff")])
    assert not result
    assert result.error.startswith("Write file error:")
    assert not path.exists()


def test_preview_missing_file(tmp_path):
    preview = preview_snapshot(tmp_path / "missing.tmps")
    assert preview.records == []
    assert preview.error.startswith("Cannot open file for reading")


def test_preview_rejects_bad_magic(tmp_path, games):
    path = tmp_path / "catalog.tmps"
    write_snapshot(path, games)
    data = bytearray(path.read_bytes())
    data[0:4] = b"NOPE"
    path.write_bytes(bytes(data))

    preview = preview_snapshot(path)
    assert preview.records == []
    assert preview.error == "Invalid file format"


def test_preview_ignores_hash_mismatch(tmp_path, games):
    path = tmp_path / "catalog.tmps"
    write_snapshot(path, games)
    data = bytearray(path.read_bytes())
    data[HEADER_LEN + 4] = ord("h")  # first byte of the first name
    path.write_bytes(bytes(data))

    records = read_snapshot(path)
    assert len(records) == 3
    assert records[0].name == "half-Life 2"


def test_preview_returns_complete_records_of_torn_file(tmp_path, games):
    path = tmp_path / "catalog.tmps"
    write_snapshot(path, games)
    data = path.read_bytes()
    path.write_bytes(data[: HEADER_LEN + 2 * CURRENT_REC_LEN + 10])

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        preview = preview_snapshot(path)

    assert preview.records == games[:2]
    assert preview.declared_count == 3
    assert not preview.complete
    assert any("Torn snapshot payload" in str(w.message) for w in caught)


def test_preview_decodes_unknown_version_with_current_layout(tmp_path, games):
    path = tmp_path / "catalog.tmps"
    write_snapshot(path, games)
    data = bytearray(path.read_bytes())
    data[4:6] = (7).to_bytes(2, "little")
    path.write_bytes(bytes(data))

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        preview = preview_snapshot(path)

    assert preview.version == 7
    assert preview.records == games
    assert any("Unknown snapshot version 7" in str(w.message) for w in caught)


def test_preview_legacy_snapshot(tmp_path, games):
    image, _, _ = build_snapshot(games, LEGACY_LAYOUT)
    path = tmp_path / "old.tmps"
    path.write_bytes(image)

    preview = preview_snapshot(path)
    assert preview.version == LEGACY_VERSION
    assert preview.complete
    assert [g.name for g in preview.records] == [g.name for g in games]
    assert [g.id for g in preview.records] == [7, 12, 31]
    assert all(g.rating == -1 and g.tags == "" for g in preview.records)
