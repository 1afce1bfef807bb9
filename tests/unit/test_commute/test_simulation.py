"""Unit tests for the day-by-day simulation driver."""

import pytest

from commutesim.errors import MissingEffortDataError
from commutesim.modes import JourneyType, TransportMode, Weather
from commutesim.population import Population
from commutesim.simulation import CommuteSimulation
from commutesim.weather import FixedWeather

CAR = TransportMode.CAR
WALK = TransportMode.WALK
PT = TransportMode.PUBLIC_TRANSPORT


class TestStep:
    def test_each_commuter_logs_one_entry_per_day(self, make_commuter):
        pop = Population([make_commuter() for _ in range(5)])
        sim = CommuteSimulation(pop, FixedWeather(["good", "bad"]), seed=1)
        sim.run(6)
        assert sim.day == 6
        for commuter in pop:
            assert len(commuter.log) == 7
            assert commuter.stats.days_simulated == 6

    def test_change_in_weather_computed(self, make_commuter):
        pop = Population([make_commuter()])
        sim = CommuteSimulation(pop, FixedWeather(["good", "good", "bad", "bad"]))
        changes = [sim.step().change_in_weather for _ in range(4)]
        assert changes == [False, False, True, False]

    def test_norm_interval(self, make_commuter):
        c = make_commuter()
        sim = CommuteSimulation(Population([c]), FixedWeather(["good"]), norm_interval=3)
        records = sim.run(7).records
        assert [r.norm_updated for r in records] == [
            False, False, True, False, False, True, False,
        ]
        assert c.stats.norm_updates == 2

    def test_norm_updates_disabled(self, make_commuter):
        c = make_commuter()
        sim = CommuteSimulation(Population([c]), FixedWeather(["good"]), norm_interval=0)
        sim.run(10)
        assert c.stats.norm_updates == 0

    def test_two_phase_norm_reads_previous_day_habits(self, make_commuter):
        # a's norm is pulled by b's habit. On day 1 b's habit must still be
        # its pre-day value (WALK), not the CAR it switches away from.
        a = make_commuter(
            name="a", current_mode=CAR, norm=CAR, autonomy=0.0,
            suggestibility=2.0, social_connectivity=1.0,
        )
        b = make_commuter(name="b", current_mode=PT, habit=WALK, norm=CAR, autonomy=1.0,
                          consistency=0.0)
        pop = Population([b, a])
        a.social_network = {"b"}
        sim = CommuteSimulation(pop, FixedWeather(["good"]), norm_interval=1)
        sim.step()
        assert a.norm == WALK
        assert b.habit == PT

    def test_missing_effort_leaves_day_uncommitted(self, make_commuter):
        good = make_commuter(name="good")
        broken = make_commuter(name="broken")
        pop = Population([good, broken])
        broken.commute_length = JourneyType.LONG
        sim = CommuteSimulation(pop, FixedWeather(["good"]))
        with pytest.raises(MissingEffortDataError):
            sim.step()
        assert good.log == (CAR,)
        assert sim.day == 0
        assert sim.result.days == 0

    def test_failed_day_retried_with_same_weather(self, make_commuter):
        broken = make_commuter(name="broken")
        pop = Population([broken])
        broken.commute_length = JourneyType.LONG
        sim = CommuteSimulation(pop, FixedWeather(["good", "bad"]))
        with pytest.raises(MissingEffortDataError):
            sim.step()

        broken.commute_length = JourneyType.SHORT
        first = sim.step()
        second = sim.step()
        assert (first.day, first.weather) == (1, Weather.GOOD)
        assert (second.day, second.weather) == (2, Weather.BAD)
        assert second.change_in_weather is True

    def test_record_counts(self, make_commuter):
        pop = Population([make_commuter() for _ in range(4)])
        record = CommuteSimulation(pop, FixedWeather([Weather.BAD])).step()
        assert record.day == 1
        assert record.weather == Weather.BAD
        assert record.total == 4
        assert record.mode_counts == pop.mode_counts()

    def test_invalid_arguments(self, make_commuter):
        pop = Population([make_commuter()])
        with pytest.raises(ValueError):
            CommuteSimulation(pop, norm_interval=-1)
        with pytest.raises(ValueError):
            CommuteSimulation(pop).run(-1)

    def test_run_accumulates(self, make_commuter):
        sim = CommuteSimulation(Population([make_commuter()]), seed=4)
        sim.run(3)
        result = sim.run(2)
        assert result.days == 5
        assert [r.day for r in result.records] == [1, 2, 3, 4, 5]
