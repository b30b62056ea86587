"""Tests for saving and restoring the game state."""

import json
import logging

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from survivescale.database.base import init_db
from survivescale.database.repository import SaveSlotRepository
from survivescale.database.store import MemoryStore, SqlStateStore
from survivescale.engine.game_engine import DEFAULT_STORAGE_KEY, GameEngine
from survivescale.errors import PersistenceError, SnapshotError
from survivescale.models.game_state import GameState, YearSummary

from conftest import RIGHT, WRONG


class FailingStore:
    """Store whose every operation fails."""

    def get(self, key: str) -> str | None:
        raise PersistenceError("storage disabled")

    def set(self, key: str, value: str) -> None:
        raise PersistenceError("quota exceeded")


class DiskFullStore:
    """File-backed store whose disk has run out of space."""

    def get(self, key: str) -> str | None:
        raise OSError("permission denied")

    def set(self, key: str, value: str) -> None:
        raise OSError("disk full")


def _saved(store: MemoryStore, key: str = DEFAULT_STORAGE_KEY) -> dict:
    return json.loads(store.data[key])


def test_answer_saves_snapshot(questions, store):
    engine = GameEngine(questions, store=store)

    engine.answer(WRONG)

    saved = _saved(store)
    assert saved["global_question_index"] == 1
    assert saved["question_index_in_year"] == 1
    assert saved["health"] == 50
    assert saved["last_year_summary"] is None


def test_construction_does_not_save(questions, store):
    GameEngine(questions, store=store)
    assert store.data == {}


def test_reset_saves_initial_state(questions, store):
    engine = GameEngine(questions, store=store)
    engine.answer(RIGHT)
    engine.answer(RIGHT)

    engine.reset()

    assert _saved(store) == GameState().to_dict()


def test_load_restores_saved_game(questions, store):
    engine = GameEngine(questions, store=store)
    engine.answer(RIGHT)
    engine.answer(WRONG)
    engine.answer(RIGHT)

    seen = []
    resumed = GameEngine(questions, on_state_change=seen.append, store=store)
    assert resumed.load()

    assert resumed.state == engine.state
    assert resumed.state.last_year_summary == YearSummary(
        year=1,
        money_gained=0,
        health=50,
        bankrupt=False,
        correct_this_year=1,
        total_money=0,
    )
    assert resumed.current_question().id == 4
    assert len(seen) == 2, "Load should notify after the construction notification"


def test_load_twice_is_idempotent(questions, store):
    engine = GameEngine(questions, store=store)
    engine.answer(RIGHT)

    resumed = GameEngine(questions, store=store)
    resumed.load()
    first = resumed.state.to_dict()
    resumed.load()

    assert resumed.state.to_dict() == first


def test_load_without_saved_game(questions, store):
    seen = []
    engine = GameEngine(questions, on_state_change=seen.append, store=store)

    assert not engine.load()
    assert engine.state == GameState()
    assert len(seen) == 1


def test_load_without_store(questions):
    engine = GameEngine(questions)
    assert not engine.load()


def test_load_ignores_unknown_and_keeps_missing_keys(questions):
    store = MemoryStore({DEFAULT_STORAGE_KEY: json.dumps({"year": 4, "money": 5, "theme": "dark"})})
    engine = GameEngine(questions, store=store)

    assert engine.load()

    assert engine.state.year == 4
    assert engine.state.money == 5
    assert engine.state.health == 100
    assert not hasattr(engine.state, "theme")


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        json.dumps([1, 2, 3]),
        json.dumps({"health": 150}),
        json.dumps({"money": -1}),
        json.dumps({"year": "3"}),
        json.dumps({"health": True}),
        json.dumps({"is_over": 1}),
        json.dumps({"question_index_in_year": 2}),
        json.dumps({"year": 26, "is_over": False}),
        json.dumps({"last_year_summary": {"year": 1}}),
    ],
)
def test_load_rejects_bad_snapshot(questions, raw, caplog):
    engine = GameEngine(questions, store=MemoryStore({DEFAULT_STORAGE_KEY: raw}))

    with caplog.at_level(logging.WARNING):
        assert not engine.load()

    assert engine.state == GameState()
    assert "Load failed" in caplog.text


def test_save_failure_does_not_block_play(questions, caplog):
    engine = GameEngine(questions, store=FailingStore())

    with caplog.at_level(logging.WARNING):
        result = engine.answer(RIGHT)
        engine.reset()

    assert result["success"]
    assert engine.state == GameState()
    assert "Save failed" in caplog.text


def test_load_failure_keeps_fresh_state(questions, caplog):
    engine = GameEngine(questions, store=FailingStore())

    with caplog.at_level(logging.WARNING):
        assert not engine.load()

    assert engine.state == GameState()


def test_merged_with_validates():
    state = GameState()

    with pytest.raises(SnapshotError):
        state.merged_with({"answered_this_year_correct_count": 3})

    merged = state.merged_with({"health": 40, "last_year_summary": None})
    assert merged.health == 40
    assert state.health == 100, "Merging should not touch the original state"


def test_sql_store_round_trip(tmp_path):
    store = SqlStateStore.from_path(tmp_path / "saves.db")

    assert store.get("slot") is None
    store.set("slot", "first")
    assert store.get("slot") == "first"
    store.set("slot", "second")
    assert store.get("slot") == "second"
    assert store.get("other") is None


def test_sql_store_resumes_game(tmp_path, questions):
    db_path = tmp_path / "saves.db"
    engine = GameEngine(questions, store=SqlStateStore.from_path(db_path), storage_key="chat:1")
    engine.answer(RIGHT)
    engine.answer(RIGHT)

    resumed = GameEngine(questions, store=SqlStateStore.from_path(db_path), storage_key="chat:1")
    other = GameEngine(questions, store=SqlStateStore.from_path(db_path), storage_key="chat:2")

    assert resumed.load()
    assert resumed.state == engine.state
    assert resumed.state.year == 2
    assert not other.load()


def test_sql_store_wraps_database_errors():
    def broken_session():
        raise SQLAlchemyError("database is locked")

    store = SqlStateStore(broken_session)

    with pytest.raises(PersistenceError):
        store.get("slot")
    with pytest.raises(PersistenceError):
        store.set("slot", "value")


def test_database_path_from_env(tmp_path, monkeypatch):
    db_path = tmp_path / "env" / "saves.db"
    monkeypatch.setenv("DATABASE_PATH", str(db_path))

    store = SqlStateStore.from_path()
    store.set("slot", "value")

    assert db_path.exists()


def test_os_errors_do_not_escape_answer(questions, caplog):
    """A file-backed store failing with OSError still lets the answer through."""
    seen = []
    engine = GameEngine(questions, on_state_change=seen.append, store=DiskFullStore())

    with caplog.at_level(logging.WARNING):
        result = engine.answer(WRONG)
        loaded = engine.load()

    assert result["success"]
    assert not result["correct"]
    assert engine.state.health == 50
    assert seen[-1].health == 50, "Listener should still hear about the answer"
    assert not loaded
    assert "Save failed" in caplog.text
    assert "Load failed" in caplog.text


def test_restored_active_game_cannot_pass_last_year(questions):
    """A snapshot past year 25 is only valid once the game is over."""
    with pytest.raises(SnapshotError):
        GameState().merged_with({"year": 26, "is_over": False})

    finished = GameState().merged_with({"year": 26, "is_over": True})
    assert finished.year == 26

    store = MemoryStore({DEFAULT_STORAGE_KEY: json.dumps({"year": 26, "is_over": False})})
    engine = GameEngine(questions, store=store)
    assert not engine.load()
    assert engine.state.year == 1


def test_repository_delete_slot(tmp_path):
    engine = init_db(tmp_path / "saves.db")

    with Session(engine) as session:
        repository = SaveSlotRepository(session)
        repository.save_slot("chat:1", "{}")
        repository.save_slot("chat:2", "{}")

        assert repository.delete_slot("chat:1")
        assert repository.get_slot("chat:1") is None
        assert repository.get_slot("chat:2").value == "{}"
        assert not repository.delete_slot("chat:1"), "Deleting twice should report nothing found"
