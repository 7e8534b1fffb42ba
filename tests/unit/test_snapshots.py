"""Tests for snapshot documents and the SQLAlchemy-backed snapshot store."""

import pytest
from sqlalchemy import create_engine, inspect

from volley_tracker.persistence.base import GameSnapshot, RemoteSnapshot
from volley_tracker.persistence.snapshots import SqliteSnapshotStore


@pytest.fixture
def sql_store(tmp_path):
    return SqliteSnapshotStore(db_uri=f"sqlite:///{tmp_path / 'snapshots.db'}")


def snapshot_of(store, game_name=""):
    return GameSnapshot(home_roster=store.players("home"), away_roster=store.players("away"), game_name=game_name)


class TestGameSnapshot:
    """Document shape."""

    def test_document_keys(self, scenario_store):
        document = snapshot_of(scenario_store, "Finals").to_document()

        assert set(document) == {"homePlayers", "awayPlayers", "gameName", "lastUpdated"}
        player = document["homePlayers"][0]
        assert set(player) == {"id", "number", "name", "shots"}
        shot = player["shots"][0]
        assert set(shot) == {"id", "type", "result", "position", "set", "timestamp"}
        assert (shot["type"], shot["result"], shot["set"]) == ("spike", "kill", 1)

    def test_document_loads_back(self, scenario_store):
        original = snapshot_of(scenario_store, "Finals")
        loaded = GameSnapshot.from_document(original.to_document())
        assert loaded.home_roster == original.home_roster
        assert loaded.game_name == "Finals"

    def test_missing_keys_default(self):
        snapshot = GameSnapshot.from_document({})
        assert snapshot.home_roster == [] and snapshot.away_roster == [] and snapshot.game_name == ""

    def test_unrecognized_outcome_survives_round_trip(self):
        document = {"homePlayers": [{"id": "p1", "number": 3, "name": "Kim", "shots": [
            {"id": "s1", "type": "spike", "result": "spike-tip", "position": {"x": 5, "y": 6}, "set": 2},
        ]}]}

        snapshot = GameSnapshot.from_document(document)

        assert snapshot.home_roster[0].shots[0].outcome == "spike-tip"
        assert snapshot.to_document()["homePlayers"][0]["shots"][0]["result"] == "spike-tip"

    def test_unrecognized_outcome_in_sqlite_store(self, tmp_path):
        sql_store = SqliteSnapshotStore(db_uri=f"sqlite:///{tmp_path / 'legacy.db'}")
        snapshot = GameSnapshot.from_document({"homePlayers": [{"number": 3, "name": "Kim", "shots": [
            {"type": "dig", "result": "dig-pancake", "position": {"x": 5, "y": 6}, "set": 1},
        ]}]})

        sql_store.save("123456", snapshot)

        assert sql_store.load("123456").home_roster[0].shots[0].outcome == "dig-pancake"

    def test_null_shots_become_empty(self):
        snapshot = GameSnapshot.from_document({"homePlayers": [{"id": "p1", "number": 3, "name": "Kim", "shots": None}]})
        assert snapshot.home_roster[0].shots == []

    def test_remote_snapshot_needs_both_rosters(self):
        assert not RemoteSnapshot.model_validate({"homePlayers": []}).has_rosters
        assert RemoteSnapshot.model_validate({"homePlayers": [], "awayPlayers": []}).has_rosters


class TestSqliteSnapshotStore:
    """Round trip and upsert behaviour."""

    def test_load_missing(self, sql_store):
        assert sql_store.load("000000") is None

    def test_save_and_load(self, sql_store, scenario_store):
        sql_store.save("123456", snapshot_of(scenario_store, "Finals"))

        loaded = sql_store.load("123456")

        assert loaded.game_name == "Finals"
        assert loaded.last_updated is not None
        assert [p.number for p in loaded.home_roster] == [4]
        assert loaded.home_roster[0].shots == scenario_store.players("home")[0].shots

    def test_save_replaces_previous(self, sql_store, scenario_store):
        sql_store.save("123456", snapshot_of(scenario_store, "First"))
        scenario_store.add_player("away", 10, "Riley")
        sql_store.save("123456", snapshot_of(scenario_store, "Second"))

        loaded = sql_store.load("123456")

        assert loaded.game_name == "Second"
        assert [p.name for p in loaded.away_roster] == ["Riley"]
        assert [session_id for session_id, _ in sql_store.list_sessions()] == ["123456"]

    def test_list_and_delete(self, sql_store, store):
        sql_store.save("111111", snapshot_of(store))
        sql_store.save("222222", snapshot_of(store))

        assert {session_id for session_id, _ in sql_store.list_sessions()} == {"111111", "222222"}
        assert sql_store.delete("111111") is True
        assert sql_store.delete("111111") is False
        assert sql_store.load("111111") is None
        assert [session_id for session_id, _ in sql_store.list_sessions()] == ["222222"]

    def test_ensure_tables_is_idempotent(self, tmp_path, store):
        engine = create_engine(f"sqlite:///{tmp_path / 'shared.db'}")
        first = SqliteSnapshotStore(engine=engine)
        first.save("123456", snapshot_of(store, "Kept"))

        second = SqliteSnapshotStore(engine=engine)
        second.ensure_tables()

        assert "game_snapshots" in inspect(engine).get_table_names()
        assert second.load("123456").game_name == "Kept"

    def test_default_uri_from_settings(self, store):
        # DB_URI is an in-memory database under test
        sql_store = SqliteSnapshotStore()
        sql_store.save("123456", snapshot_of(store, "Memory"))
        assert sql_store.load("123456").game_name == "Memory"
