"""Tests for data models."""
import pytest

from oncall.models.constraints import Calendar, HolidayWindow, SchedulerConfig, TimeOff
from oncall.models.person import Person
from oncall.models.role import ROLES, Role
from oncall.models.schedule import FairnessTargets, OnCallSchedule, RoleAssignment


class TestPerson:
    """Tests for Person model."""

    def test_person_defaults(self):
        p = Person(name="Alice")
        assert p.location == ""
        assert p.out_of_office is False

    def test_person_strips_fields(self):
        p = Person(name="  Alice ", location=" Paris  ")
        assert p.name == "Alice"
        assert p.location == "Paris"

    def test_person_is_hashable(self):
        assert len({Person("A", "X"), Person("A", "X")}) == 1

    def test_person_to_dict(self):
        p = Person(name="Alice", location="X", out_of_office=True)
        assert p.to_dict() == {"name": "Alice", "location": "X", "out_of_office": True}

    def test_person_from_dict(self):
        p = Person.from_dict({"name": "Bob", "location": "Y"})
        assert p.name == "Bob"
        assert p.location == "Y"
        assert p.out_of_office is False


class TestRole:
    """Tests for Role enum."""

    def test_roles_order(self):
        assert ROLES == [Role.PRIMARY, Role.SECONDARY]

    def test_role_label(self):
        assert Role.PRIMARY.label == "Primary"
        assert Role.SECONDARY.label == "Secondary"

    @pytest.mark.parametrize("text,expected", [
        ("primary", Role.PRIMARY),
        ("P", Role.PRIMARY),
        (" Secondary ", Role.SECONDARY),
        ("s", Role.SECONDARY),
    ])
    def test_role_from_string(self, text, expected):
        assert Role.from_string(text) == expected

    def test_role_from_string_unknown(self):
        with pytest.raises(ValueError):
            Role.from_string("tertiary")


class TestCalendar:
    """Tests for time off and holiday lookups."""

    def test_time_off_half_open(self):
        t = TimeOff("A", 1, 3)
        assert not t.covers(0)
        assert t.covers(1)
        assert t.covers(2)
        assert not t.covers(3)

    def test_calendar_is_off(self):
        cal = Calendar(time_off=[TimeOff("A", 0, 2)])
        assert cal.is_off("A", 1)
        assert not cal.is_off("A", 2)
        assert not cal.is_off("B", 0)

    def test_calendar_is_holiday(self):
        cal = Calendar(holidays=[HolidayWindow("Y", 2, 4)])
        assert cal.is_holiday("Y", 3)
        assert not cal.is_holiday("X", 3)
        assert not cal.is_holiday("Y", 1)

    def test_empty_calendar(self):
        cal = Calendar()
        assert not cal.is_off("A", 0)
        assert not cal.is_holiday("X", 0)


class TestSchedulerConfig:
    """Tests for SchedulerConfig."""

    def test_defaults(self):
        cfg = SchedulerConfig()
        assert cfg.horizon == 4
        assert cfg.lookback == 1
        assert cfg.holiday_weight == 10
        assert cfg.base_weight == 1
        assert cfg.upper_slack_multiplier == 2
        assert cfg.total_periods == 5

    def test_dict_roundtrip(self):
        cfg = SchedulerConfig(horizon=8, lookback=2, seed=3)
        restored = SchedulerConfig.from_dict(cfg.to_dict())
        assert restored == cfg

    def test_from_dict_ignores_unknown(self):
        cfg = SchedulerConfig.from_dict({"horizon": 6, "colour": "blue"})
        assert cfg.horizon == 6
        assert not hasattr(cfg, "colour")


class TestFairnessTargets:
    """Tests for the per-role fairness band."""

    def test_even_split(self):
        t = FairnessTargets.for_window(8, 4)
        assert (t.min_target, t.max_target) == (2, 2)

    def test_uneven_split(self):
        t = FairnessTargets.for_window(5, 4)
        assert (t.min_target, t.max_target) == (1, 2)

    def test_more_people_than_periods(self):
        t = FairnessTargets.for_window(3, 10)
        assert (t.min_target, t.max_target) == (0, 1)

    def test_deviation(self):
        t = FairnessTargets(min_target=1, max_target=2)
        assert t.deviation(0) == 1
        assert t.deviation(1) == 0
        assert t.deviation(2) == 0
        assert t.deviation(5) == 3
        assert t.contains(2)
        assert not t.contains(3)


class TestOnCallSchedule:
    """Tests for OnCallSchedule."""

    @pytest.fixture
    def schedule(self):
        return OnCallSchedule(
            assignments=[
                RoleAssignment(1, Role.PRIMARY, "B"),
                RoleAssignment(1, Role.SECONDARY, "C"),
                RoleAssignment(2, Role.PRIMARY, "C"),
                RoleAssignment(2, Role.SECONDARY, "B"),
            ],
            horizon=2,
            lookback=1,
            people=["B", "C"],
            status="optimal",
            targets=FairnessTargets(1, 2),
        )

    def test_role_assignment_parses_string(self):
        a = RoleAssignment(3, "secondary", "A")
        assert a.role is Role.SECONDARY
        assert repr(a) == "#3 Secondary: A"

    def test_future_periods(self, schedule):
        assert list(schedule.future_periods) == [1, 2]

    def test_get_assignee(self, schedule):
        assert schedule.get_assignee(2, Role.PRIMARY) == "C"
        assert schedule.get_assignee(5, Role.PRIMARY) is None

    def test_count_roles(self, schedule):
        assert schedule.count_roles("B", Role.PRIMARY) == 1
        assert schedule.count_roles("B", Role.SECONDARY) == 1
        assert len(schedule.get_person_assignments("C")) == 2

    def test_to_dataframe(self, schedule):
        df = schedule.to_dataframe()
        assert list(df.columns) == ["period", "role", "name"]
        assert len(df) == 4

    def test_to_dataframe_empty(self):
        df = OnCallSchedule().to_dataframe()
        assert df.empty
        assert list(df.columns) == ["period", "role", "name"]

    def test_to_matrix(self, schedule):
        m = schedule.to_matrix()
        assert list(m.columns) == ["primary", "secondary"]
        assert m.loc[1, "primary"] == "B"
        assert m.loc[2, "secondary"] == "B"

    def test_summary(self, schedule):
        s = schedule.summary()
        assert s["status"] == "optimal"
        assert s["people"] == 2
        assert s["min_target"] == 1
        assert s["max_target"] == 2
