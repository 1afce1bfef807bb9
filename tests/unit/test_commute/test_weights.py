"""Unit tests for the accumulator, habit weighting and argmax."""

import pytest

from commutesim.modes import TransportMode
from commutesim.weights import (
    accumulate,
    argmax,
    habit_weights,
    scale,
    weight_function,
)

CAR = TransportMode.CAR
CYCLE = TransportMode.CYCLE
WALK = TransportMode.WALK
PT = TransportMode.PUBLIC_TRANSPORT


class TestAccumulate:
    def test_sums_shared_keys(self):
        result = accumulate({CAR: 1.0, WALK: 0.5}, {CAR: 0.25})
        assert result == {CAR: 1.25, WALK: 0.5}

    def test_absent_key_counts_as_zero(self):
        result = accumulate({CAR: 1.0}, {}, {CYCLE: 2.0})
        assert result == {CAR: 1.0, CYCLE: 2.0}

    def test_no_inputs(self):
        assert accumulate() == {}

    def test_negative_values_kept(self):
        result = accumulate({WALK: 0.4}, {WALK: -0.5})
        assert result[WALK] == pytest.approx(-0.1)

    def test_inputs_not_modified(self):
        a = {CAR: 1.0}
        b = {CAR: 2.0}
        accumulate(a, b)
        assert a == {CAR: 1.0}
        assert b == {CAR: 2.0}


class TestScale:
    def test_scales_every_value(self):
        assert scale({CAR: 2.0, PT: 0.5}, 0.5) == {CAR: 1.0, PT: 0.25}

    def test_zero_factor_keeps_keys(self):
        assert scale({CAR: 3.0}, 0.0) == {CAR: 0.0}


class TestHabitWeights:
    def test_weight_function(self):
        assert weight_function(1) == 1.0
        assert weight_function(3) == 0.5

    def test_single_entry_contributes_one(self):
        assert habit_weights([CAR]) == {CAR: 1.0}

    def test_two_entries(self):
        # n=2: f=2/3, newest gets 2/3, oldest flat 1.0
        result = habit_weights([CAR, WALK])
        assert result[WALK] == pytest.approx(2 / 3)
        assert result[CAR] == pytest.approx(1.0)

    def test_decay_schedule(self):
        # n=3: f=0.5, r=0.5 -> log[2]=0.5, log[1]=0.25, log[0]=1.0
        result = habit_weights([CAR, CYCLE, WALK])
        assert result == {WALK: 0.5, CYCLE: 0.25, CAR: 1.0}

    def test_same_mode_accumulates(self):
        result = habit_weights([CAR, CAR, CAR])
        assert result == {CAR: pytest.approx(1.75)}

    def test_oldest_entry_always_one(self):
        for n in (1, 2, 5, 50, 500):
            log = [PT] + [CAR] * (n - 1)
            assert habit_weights(log)[PT] == 1.0

    def test_weighted_sum_not_normalised(self):
        result = habit_weights([CAR] * 10)
        assert sum(result.values()) > 1.0

    def test_long_log_is_not_recursive(self):
        log = [CAR, WALK] * 10_000
        result = habit_weights(log)
        assert set(result) == {CAR, WALK}

    def test_empty_log_rejected(self):
        with pytest.raises(ValueError):
            habit_weights([])


class TestArgmax:
    def test_picks_highest(self):
        assert argmax({CAR: 0.1, WALK: 0.9, PT: 0.5}) == WALK

    def test_tie_goes_to_first_in_order(self):
        assert argmax({PT: 1.0, WALK: 1.0, CYCLE: 1.0}) == CYCLE
        assert argmax({PT: 1.0, CAR: 1.0}) == CAR

    def test_tie_independent_of_insertion_order(self):
        forward = {CAR: 0.5, CYCLE: 0.7, WALK: 0.7, PT: 0.2}
        backward = dict(reversed(list(forward.items())))
        assert argmax(forward) == argmax(backward) == CYCLE

    def test_negative_values(self):
        assert argmax({CAR: -1.0, PT: -0.5}) == PT

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            argmax({})
