import pytest

import temporium_snapshot.reader as reader

from temporium_core.protocol import HEADER_LEN, LEGACY_LAYOUT, NO_RATING, UNSET_ID
from temporium_snapshot.reader import import_snapshot
from temporium_snapshot.store import DuckDBGameStore
from temporium_snapshot.writer import build_snapshot, write_snapshot
from temporium_verify.const import VerificationOutcome, describe


class RecordingStore:
    """Accepts every game and keeps the objects it was handed."""

    def __init__(self, reject_names=()):
        self.added = []
        self.reject_names = set(reject_names)

    def add_game(self, game):
        if game.name in self.reject_names:
            return False
        self.added.append(game)
        return True

    def list_games(self, owner):
        return [g for g in self.added if g.user_id == owner]

    def list_filtered(self, owner, game_filter):
        return self.list_games(owner)


@pytest.fixture
def snapshot(tmp_path, games):
    path = tmp_path / "catalog.tmps"
    write_snapshot(path, games)
    return path


def test_import_rehomes_and_clears_ids(snapshot, games):
    store = RecordingStore()
    result = import_snapshot(snapshot, 42, store)

    assert result
    assert result.outcome is VerificationOutcome.OK
    assert (result.added, result.rejected) == (3, 0)
    assert [g.user_id for g in store.added] == [42, 42, 42]
    assert [g.id for g in store.added] == [UNSET_ID] * 3
    assert [g.name for g in store.added] == [g.name for g in games]


def test_import_restores_extended_fields(snapshot, games):
    store = RecordingStore()
    import_snapshot(snapshot, 42, store)

    for imported, original in zip(store.added, games):
        assert imported.rating == original.rating
        assert imported.is_favorite == original.is_favorite
        assert imported.is_installed == original.is_installed
        assert imported.notes == original.notes
        assert imported.tags == original.tags


def test_import_aborts_on_hash_mismatch(snapshot):
    data = bytearray(snapshot.read_bytes())
    data[HEADER_LEN + 20] ^= 0xFF
    snapshot.write_bytes(bytes(data))

    store = RecordingStore()
    result = import_snapshot(snapshot, 42, store)

    assert not result
    assert result.outcome is VerificationOutcome.HASH_MISMATCH
    assert result.error == describe(VerificationOutcome.HASH_MISMATCH)
    assert store.added == []


def test_import_missing_file(tmp_path):
    result = import_snapshot(tmp_path / "missing.tmps", 1, RecordingStore())
    assert result.outcome is VerificationOutcome.FILE_NOT_FOUND
    assert not result


def test_rejected_inserts_do_not_fail_import(snapshot):
    store = RecordingStore(reject_names={"Stardew Valley"})
    result = import_snapshot(snapshot, 5, store)

    assert result
    assert (result.added, result.rejected) == (2, 1)


def test_import_legacy_snapshot(tmp_path, games):
    image, _, _ = build_snapshot(games, LEGACY_LAYOUT)
    path = tmp_path / "old.tmps"
    path.write_bytes(image)

    store = RecordingStore()
    result = import_snapshot(path, 8, store)

    assert result
    assert [g.url for g in store.added] == [g.url for g in games]
    assert all(g.rating == NO_RATING and g.user_id == 8 for g in store.added)


def test_import_into_duckdb_store(snapshot, games):
    with DuckDBGameStore() as store:
        first = import_snapshot(snapshot, 2, store)
        # Same names for the same owner violate UNIQUE(name, user_id).
        with pytest.warns(UserWarning, match="rejected"):
            second = import_snapshot(snapshot, 2, store)
        other_owner = import_snapshot(snapshot, 4, store)

        assert (first.added, first.rejected) == (3, 0)
        assert (second.added, second.rejected) == (0, 3)
        assert other_owner.added == 3

        stored = store.list_games(2)
        assert sorted(g.name for g in stored) == sorted(g.name for g in games)
        assert all(g.user_id == 2 for g in stored)
        # Ids come from the store, not from the file.
        assert {g.id for g in stored} == {1, 2, 3}


def test_import_decodes_the_verified_bytes(snapshot, games, monkeypatch):
    real_load = reader.load_snapshot

    def load_then_rewrite(path):
        loaded = real_load(path)
        # Same-size rewrite after the hash check: the first name becomes "Xalf-Life 2".
        data = bytearray(snapshot.read_bytes())
        data[HEADER_LEN + 4] = ord("X")
        snapshot.write_bytes(bytes(data))
        return loaded

    monkeypatch.setattr(reader, "load_snapshot", load_then_rewrite)
    store = RecordingStore()
    result = import_snapshot(snapshot, 42, store)

    assert result
    assert [g.name for g in store.added] == [g.name for g in games]
