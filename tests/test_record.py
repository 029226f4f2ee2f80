"""Tests for saving and loading game records."""

import json

import pytest

from gobang.errors import PersistenceFailure
from gobang.game.board import BoardState
from gobang.game.record import GameRecordStore
from gobang.game.snapshot import Snapshot
from gobang.game.types import Difficulty, GameMode, GameStatus, Player, Point


@pytest.fixture
def store(tmp_path):
    return GameRecordStore(tmp_path / "saves")


@pytest.fixture
def sample_snapshot():
    """A short PvE game with three moves."""
    state = BoardState()
    state.apply_move(Point(7, 7))   # Black
    state.apply_move(Point(7, 8))   # White
    state.apply_move(Point(6, 6))   # Black
    return Snapshot(
        board=state.board.rows(),
        current_player=state.current_player,
        status=GameStatus.PLAYING,
        moves=list(state.moves),
        mode=GameMode.PVE,
        difficulty=Difficulty.EASY,
    )


class TestSave:
    def test_save_creates_file(self, store, sample_snapshot):
        game_id = store.save("opening", sample_snapshot)
        path = store.directory / f"{game_id}.json"
        assert path.exists()
        assert not list(store.directory.glob("*.tmp"))

    def test_save_content(self, store, sample_snapshot):
        game_id = store.save("opening", sample_snapshot)
        data = json.loads((store.directory / f"{game_id}.json").read_text())
        assert data["name"] == "opening"
        assert data["mode"] == "pve"
        assert data["difficulty"] == "easy"
        assert data["total_moves"] == 3
        assert data["moves"][0] == {"move_number": 1, "player": "black", "x": 7, "y": 7}
        assert data["moves"][1]["player"] == "white"
        assert data["board"][7][8] == "white"

    def test_ids_are_unique(self, store, sample_snapshot):
        assert store.save("a", sample_snapshot) != store.save("a", sample_snapshot)


class TestLoad:
    def test_roundtrip(self, store, sample_snapshot):
        game_id = store.save("opening", sample_snapshot)
        loaded = store.load(game_id)
        assert loaded == sample_snapshot

    def test_missing_id(self, store):
        with pytest.raises(PersistenceFailure):
            store.load("nope")

    def test_corrupt_file(self, store, sample_snapshot):
        game_id = store.save("opening", sample_snapshot)
        (store.directory / f"{game_id}.json").write_text("{not json")
        with pytest.raises(PersistenceFailure):
            store.load(game_id)

    def test_wrong_shape(self, store):
        store.directory.mkdir(parents=True)
        (store.directory / "odd.json").write_text(json.dumps({"moves": 5}))
        with pytest.raises(PersistenceFailure):
            store.load("odd")


class TestList:
    def test_empty_when_directory_missing(self, store):
        assert store.list() == []

    def test_summaries(self, store, sample_snapshot):
        game_id = store.save("opening", sample_snapshot)
        (summary,) = store.list()
        assert summary.id == game_id
        assert summary.name == "opening"
        assert summary.mode == "pve"
        assert summary.difficulty == "easy"
        assert summary.status == "playing"
        assert summary.total_moves == 3

    def test_newest_first(self, store, sample_snapshot):
        ids = [store.save(name, sample_snapshot) for name in ("old", "mid", "new")]
        for game_id, stamp in zip(ids, ("2024-01-01T00:00:00", "2024-06-01T00:00:00", "2025-01-01T00:00:00")):
            path = store.directory / f"{game_id}.json"
            data = json.loads(path.read_text())
            data["updated_at"] = stamp
            path.write_text(json.dumps(data))
        assert [s.name for s in store.list()] == ["new", "mid", "old"]

    def test_skips_unreadable_files(self, store, sample_snapshot):
        store.save("good", sample_snapshot)
        (store.directory / "broken.json").write_text("garbage")
        assert [s.name for s in store.list()] == ["good"]


class TestDelete:
    def test_delete(self, store, sample_snapshot):
        game_id = store.save("opening", sample_snapshot)
        store.delete(game_id)
        assert store.list() == []

    def test_delete_missing(self, store):
        with pytest.raises(PersistenceFailure):
            store.delete("nope")


def test_loaded_moves_keep_players():
    snap = Snapshot(
        board=BoardState().board.rows(),
        current_player=Player.BLACK,
        status=GameStatus.IDLE,
    )
    assert Snapshot.from_dict(snap.to_dict()) == snap
