"""Tests for the hard constraint builders."""
from ortools.sat.python import cp_model

from oncall.models.constraints import Calendar, TimeOff
from oncall.models.person import Person
from oncall.models.role import ROLES, Role
from oncall.solver.constraints import (
    add_anti_consecutive,
    add_full_coverage,
    add_role_exclusivity,
    add_time_off_constraints,
)
from oncall.solver.history import StaticHistory
from oncall.solver.lattice import ShiftLattice


def _status(model):
    return cp_model.CpSolver().Solve(model)


def _lattice(people, lookback=0, horizon=2, history=None):
    model = cp_model.CpModel()
    lattice = ShiftLattice.build(model, people, lookback, horizon, history or StaticHistory())
    return model, lattice


class TestRoleExclusivity:

    def test_forbids_both_roles(self, sample_people):
        model, lattice = _lattice(sample_people)
        add_role_exclusivity(model, lattice)
        model.Add(lattice.var(0, 0, Role.PRIMARY) == 1)
        model.Add(lattice.var(0, 0, Role.SECONDARY) == 1)
        assert _status(model) == cp_model.INFEASIBLE

    def test_allows_one_role(self, sample_people):
        model, lattice = _lattice(sample_people)
        add_role_exclusivity(model, lattice)
        model.Add(lattice.var(0, 0, Role.PRIMARY) == 1)
        assert _status(model) in (cp_model.OPTIMAL, cp_model.FEASIBLE)


class TestAntiConsecutive:

    def test_forbids_same_role_twice(self, sample_people):
        model, lattice = _lattice(sample_people)
        add_anti_consecutive(model, lattice)
        model.Add(lattice.var(0, 2, Role.SECONDARY) == 1)
        model.Add(lattice.var(1, 2, Role.SECONDARY) == 1)
        assert _status(model) == cp_model.INFEASIBLE

    def test_allows_role_switch(self, sample_people):
        model, lattice = _lattice(sample_people)
        add_anti_consecutive(model, lattice)
        model.Add(lattice.var(0, 2, Role.PRIMARY) == 1)
        model.Add(lattice.var(1, 2, Role.SECONDARY) == 1)
        assert _status(model) in (cp_model.OPTIMAL, cp_model.FEASIBLE)

    def test_history_boundary(self, sample_people, sample_history):
        model, lattice = _lattice(sample_people, lookback=1, history=sample_history)
        add_anti_consecutive(model, lattice)
        # A was Primary in the committed period
        model.Add(lattice.var(1, 0, Role.PRIMARY) == 1)
        assert _status(model) == cp_model.INFEASIBLE


class TestFullCoverage:

    def test_every_period_filled_once(self, sample_people):
        model, lattice = _lattice(sample_people, horizon=3)
        add_full_coverage(model, lattice)
        solver = cp_model.CpSolver()
        assert solver.Solve(model) in (cp_model.OPTIMAL, cp_model.FEASIBLE)

        for s in lattice.future_periods:
            for role in ROLES:
                assert sum(solver.Value(v) for v in lattice.period_vars(s, role)) == 1

    def test_two_primaries_rejected(self, sample_people):
        model, lattice = _lattice(sample_people)
        add_full_coverage(model, lattice)
        model.Add(lattice.var(0, 0, Role.PRIMARY) == 1)
        model.Add(lattice.var(0, 1, Role.PRIMARY) == 1)
        assert _status(model) == cp_model.INFEASIBLE


class TestTimeOff:

    def test_blocks_both_roles(self, sample_people):
        model, lattice = _lattice(sample_people, lookback=1, horizon=3)
        add_time_off_constraints(model, lattice, Calendar(time_off=[TimeOff("B", 1, 2)]))
        model.Add(lattice.var(2, 1, Role.SECONDARY) == 1)
        assert _status(model) == cp_model.INFEASIBLE

    def test_end_is_exclusive(self, sample_people):
        model, lattice = _lattice(sample_people, lookback=1, horizon=3)
        add_time_off_constraints(model, lattice, Calendar(time_off=[TimeOff("B", 1, 2)]))
        model.Add(lattice.var(3, 1, Role.PRIMARY) == 1)
        assert _status(model) in (cp_model.OPTIMAL, cp_model.FEASIBLE)

    def test_unknown_person_skipped(self, sample_people):
        model, lattice = _lattice(sample_people)
        skipped = add_time_off_constraints(model, lattice, Calendar(time_off=[TimeOff("Zed", 0, 2)]))
        assert skipped == ["Zed"]

    def test_out_of_horizon_clipped(self, sample_people):
        model, lattice = _lattice(sample_people, horizon=2)
        skipped = add_time_off_constraints(model, lattice, Calendar(time_off=[TimeOff("A", 1, 10)]))
        assert skipped == []
        model.Add(lattice.var(0, 0, Role.PRIMARY) == 1)
        assert _status(model) in (cp_model.OPTIMAL, cp_model.FEASIBLE)

    def test_no_time_off(self):
        people = [Person("A"), Person("B")]
        model, lattice = _lattice(people)
        assert add_time_off_constraints(model, lattice, Calendar()) == []
