"""Tests for the shot record store."""

import pytest
from pydantic import ValidationError

from volley_tracker.errors import (
    DuplicateNumber,
    InvalidInput,
    InvalidOutcome,
    InvalidShotType,
    NotFound,
    UnknownPlayer,
)
from volley_tracker.models.enums import Outcome, Roster, ShotType
from volley_tracker.models.shots import CourtPosition, Shot
from volley_tracker.store import ShotRecordStore, parse_roster


class TestAddPlayer:
    """Roster growth and validation."""

    def test_add_player(self, store):
        player = store.add_player(Roster.HOME, 7, "Jordan")

        assert player.number == 7
        assert player.name == "Jordan"
        assert player.shots == []
        assert store.players(Roster.HOME) == [player]
        assert store.players(Roster.AWAY) == []

    def test_name_is_trimmed(self, store):
        assert store.add_player("home", 3, "  Sam  ").name == "Sam"

    def test_duplicate_number_rejected(self, store):
        store.add_player("home", 7, "A")

        with pytest.raises(DuplicateNumber):
            store.add_player("home", 7, "B")

        assert len(store.players("home")) == 1

    def test_same_number_allowed_on_other_roster(self, store):
        store.add_player("home", 7, "A")
        store.add_player("away", 7, "B")

        assert len(store.players("away")) == 1

    @pytest.mark.parametrize("number,name", [
        (-1, "A"),
        (100, "A"),
        (True, "A"),
        ("7", "A"),
        (5, ""),
        (5, "   "),
    ])
    def test_invalid_input(self, store, number, name):
        with pytest.raises(InvalidInput):
            store.add_player("home", number, name)
        assert store.players("home") == []

    def test_boundary_numbers(self, store):
        store.add_player("home", 0, "Zero")
        store.add_player("home", 99, "Ninety-nine")
        assert [p.number for p in store.players("home")] == [0, 99]


class TestRosterNames:
    """Roster arguments accept the two roster names only."""

    def test_parse_roster(self):
        assert parse_roster(" Away ") is Roster.AWAY
        assert parse_roster(Roster.HOME) is Roster.HOME

    @pytest.mark.parametrize("roster", ["bogus", "visitors", ""])
    def test_unknown_roster_is_invalid_input(self, store, roster):
        with pytest.raises(InvalidInput):
            store.add_player(roster, 1, "A")
        with pytest.raises(InvalidInput):
            store.players(roster)
        with pytest.raises(InvalidInput):
            store.clear_shots_for_set(roster, 1)
        with pytest.raises(InvalidInput):
            store.shot_count(roster)

    def test_session_select_roster(self, session):
        with pytest.raises(InvalidInput):
            session.select_roster("visitors")
        assert session.current_roster is Roster.HOME


class TestRecordShot:
    """Shot creation."""

    def setup_method(self):
        self.store = ShotRecordStore()
        self.player = self.store.add_player(Roster.HOME, 4, "Alex")

    def test_record_shot(self):
        shot = self.store.record_shot(self.player.id, "spike", "kill", (50.5, 120), 2)

        assert shot.shot_type == ShotType.SPIKE
        assert shot.outcome == Outcome.KILL
        assert shot.position == CourtPosition(x=50.5, y=120)
        assert shot.set_number == 2
        assert shot.id
        assert shot.created_at is not None
        assert self.player.shots == [shot]

    def test_ids_are_unique(self):
        first = self.store.record_shot(self.player.id, "serve", "ace", (1, 1), 1)
        second = self.store.record_shot(self.player.id, "serve", "ace", (1, 1), 1)
        assert first.id != second.id

    def test_insertion_order_kept(self):
        outcomes = ["ace", "service-error", "service-point"]
        for outcome in outcomes:
            self.store.record_shot(self.player.id, "serve", outcome, (10, 10), 1)
        assert [s.outcome.value for s in self.player.shots] == outcomes

    def test_unknown_player(self):
        with pytest.raises(UnknownPlayer):
            self.store.record_shot("missing", "spike", "kill", (1, 1), 1)

    def test_unknown_shot_type(self):
        with pytest.raises(InvalidShotType):
            self.store.record_shot(self.player.id, "bump", "kill", (1, 1), 1)

    def test_outcome_from_other_type(self):
        with pytest.raises(InvalidOutcome):
            self.store.record_shot(self.player.id, "serve", "kill", (1, 1), 1)
        assert self.player.shots == []

    def test_unknown_outcome(self):
        with pytest.raises(InvalidOutcome):
            self.store.record_shot(self.player.id, "serve", "lucky", (1, 1), 1)

    @pytest.mark.parametrize("position", [(-1, 10), (10, 301), (201, 0), (1,), "nowhere"])
    def test_position_out_of_court(self, position):
        with pytest.raises(InvalidInput):
            self.store.record_shot(self.player.id, "serve", "ace", position, 1)
        assert self.player.shots == []

    def test_position_mapping(self):
        shot = self.store.record_shot(self.player.id, "dig", "dig-out", {"x": 200, "y": 300}, 1)
        assert shot.position.x == 200 and shot.position.y == 300

    @pytest.mark.parametrize("set_number", [0, -2, True, "1"])
    def test_invalid_set(self, set_number):
        with pytest.raises(InvalidInput):
            self.store.record_shot(self.player.id, "serve", "ace", (1, 1), set_number)

    def test_shot_is_immutable(self):
        shot = self.store.record_shot(self.player.id, "serve", "ace", (1, 1), 1)
        with pytest.raises(ValidationError):
            shot.set_number = 3

    def test_stored_unknown_outcome_is_kept(self):
        shot = Shot(type="spike", result="spike-tip", position={"x": 1, "y": 1}, set=1)
        assert shot.outcome == "spike-tip"
        assert not isinstance(shot.outcome, Outcome)

    def test_stored_known_outcome_is_parsed(self):
        shot = Shot(type="spike", result="SPIKE_ERROR", position={"x": 1, "y": 1}, set=1)
        assert shot.outcome is Outcome.SPIKE_ERROR

    def test_record_shot_still_rejects_unknown_outcome(self):
        with pytest.raises(InvalidOutcome):
            self.store.record_shot(self.player.id, "spike", "spike-tip", (1, 1), 1)

    def test_shot_model_rejects_mismatched_outcome(self):
        with pytest.raises(ValidationError):
            Shot(type="dig", result="ace", position={"x": 1, "y": 1}, set=1)


class TestDeleteShot:
    """Deletion by identity across both rosters."""

    def setup_method(self):
        self.store = ShotRecordStore()
        self.home = self.store.add_player("home", 1, "Home")
        self.away = self.store.add_player("away", 2, "Away")
        self.home_shot = self.store.record_shot(self.home.id, "serve", "ace", (1, 1), 1)
        self.away_shot = self.store.record_shot(self.away.id, "dig", "dig-success", (5, 5), 1)

    def test_delete_home_shot(self):
        assert self.store.delete_shot(self.home_shot.id) is True
        assert self.home.shots == []
        assert self.away.shots == [self.away_shot]

    def test_delete_searches_away_roster(self):
        assert self.store.delete_shot(self.away_shot.id) is True
        assert self.away.shots == []
        assert self.home.shots == [self.home_shot]

    def test_delete_missing_is_noop(self):
        before = self.store.shot_count()

        assert self.store.delete_shot("nope") is False
        assert self.store.delete_shot("nope") is False

        assert self.store.shot_count() == before

    def test_delete_twice(self):
        self.store.delete_shot(self.home_shot.id)
        assert self.store.delete_shot(self.home_shot.id) is False
        assert self.store.shot_count() == 1

    def test_delete_missing_strict(self):
        with pytest.raises(NotFound):
            self.store.delete_shot("nope", missing_ok=False)


class TestClearShotsForSet:
    """Clearing one set on one roster."""

    def test_clear_only_matching_set_and_roster(self):
        store = ShotRecordStore()
        a = store.add_player("home", 1, "A")
        b = store.add_player("home", 2, "B")
        c = store.add_player("away", 3, "C")
        store.record_shot(a.id, "serve", "ace", (1, 1), 1)
        keep = store.record_shot(a.id, "serve", "ace", (1, 1), 2)
        store.record_shot(b.id, "spike", "kill", (1, 1), 1)
        away_shot = store.record_shot(c.id, "spike", "kill", (1, 1), 1)

        removed = store.clear_shots_for_set("home", 1)

        assert removed == 2
        assert a.shots == [keep]
        assert b.shots == []
        assert c.shots == [away_shot]

    def test_clear_empty_set(self, scenario_store):
        assert scenario_store.clear_shots_for_set("home", 5) == 0
        assert scenario_store.shot_count() == 4


class TestReplace:
    """Wholesale roster replacement."""

    def test_replace(self, scenario_store):
        fresh = ShotRecordStore()
        newcomer = fresh.add_player("home", 12, "New")

        scenario_store.replace([newcomer], [])

        assert scenario_store.players("home") == [newcomer]
        assert scenario_store.shot_count() == 0
