"""
Integration tests: a day's appointment schedule built and edited as a chain.

Exercises period, group, chain, settings and logging together the way an
embedding application would.
"""

import random
from datetime import datetime, timedelta

import pytest
from structlog.testing import capture_logs

from periodchain import (
    ChainIndexError,
    EmptyChainError,
    InsertMode,
    Period,
    PeriodGroup,
    TimePeriodChain,
    get_settings,
)

pytestmark = pytest.mark.integration

DAY_START = datetime(2026, 1, 9, 9, 0)


def consult(minutes: int) -> Period:
    """A consultation template; only its length matters to the chain."""
    return Period.from_start(datetime(2000, 1, 1), timedelta(minutes=minutes))


class TestAppointmentDay:

    def test_build_and_reshuffle(self):
        """Test building a day of appointments and reshuffling it."""
        day = TimePeriodChain.from_durations(DAY_START, [consult(20), consult(20), consult(40)])
        assert day.end == datetime(2026, 1, 9, 10, 20)

        # Late booking squeezed in after the first consult
        day.insert(Period(datetime(2026, 1, 9, 9, 20), datetime(2026, 1, 9, 9, 30)), 1)
        assert day.end == datetime(2026, 1, 9, 10, 30)

        # Second patient cancels: everyone after moves up 20 minutes
        day.remove(2)
        assert day.end == datetime(2026, 1, 9, 10, 10)
        assert day.is_adjacent()

        # Afternoon block from another clinic's template group
        afternoon = PeriodGroup([consult(30), consult(15)])
        day.append_contents_of(afternoon)
        assert day.count == 5
        assert day.end == datetime(2026, 1, 9, 10, 55)
        assert day.is_adjacent()

        assert day.reduce(lambda total, p: total + p.duration, timedelta(0)) == day.duration

    def test_anchored_mode_from_environment(self, monkeypatch):
        """Test that ANCHORED mode can be chosen through the environment."""
        monkeypatch.setenv("PERIODCHAIN_INSERT_MODE", "anchored")
        get_settings(_force_reload=True)

        day = TimePeriodChain.from_durations(DAY_START, [consult(30), consult(30)])
        assert day.insert_mode is InsertMode.ANCHORED
        day.insert(consult(10), 1)
        assert day[1] == Period(datetime(2026, 1, 9, 9, 30), datetime(2026, 1, 9, 9, 40))
        assert day.is_adjacent()

    def test_operations_are_logged_in_order(self):
        """Test that mutations are logged in the order they happen."""
        day = TimePeriodChain.from_durations(DAY_START, [consult(30)])
        with capture_logs() as logs:
            day.append(consult(15))
            day.insert(Period(DAY_START, DAY_START + timedelta(minutes=5)), 0)
            day.remove(0)
            day.pop()
            day.remove_all()
        assert [entry["event"] for entry in logs] == [
            "period_appended",
            "period_inserted",
            "period_removed",
            "period_popped",
            "chain_cleared",
        ]


class TestAdjacencyUnderRandomEdits:
    """Any sequence of append / remove / pop / remove_all keeps the chain adjacent."""

    @pytest.mark.parametrize("seed", range(5))
    def test_random_edit_sequence(self, seed):
        """Test that random edits never break adjacency."""
        rng = random.Random(seed)
        chain = TimePeriodChain.from_durations(DAY_START, [timedelta(minutes=15)])
        original_start = chain.start

        for _ in range(200):
            op = rng.choice(["append", "append", "remove", "pop", "remove_all", "insert"])
            count_before = chain.count
            try:
                if op == "append":
                    duration = timedelta(minutes=rng.randint(0, 90))
                    end_before = chain.end
                    appended = chain.append(duration)
                    assert chain.count == count_before + 1
                    assert appended.start == end_before
                    assert appended.duration == duration
                elif op == "insert":
                    index = rng.randint(0, chain.count)
                    anchor = chain[index - 1].end if index > 0 else (chain.start or DAY_START)
                    chain.insert(Period.from_start(anchor, timedelta(minutes=rng.randint(1, 30))), index)
                elif op == "remove":
                    chain.remove(rng.randint(0, max(chain.count - 1, 0)))
                    assert chain.count == count_before - 1
                elif op == "pop":
                    chain.pop()
                else:
                    chain.remove_all()
            except (EmptyChainError, ChainIndexError):
                assert chain.count == count_before == 0
                chain.periods.append(Period.from_start(DAY_START, timedelta(minutes=15)))

            assert chain.is_adjacent()
            if chain.count and op != "remove_all":
                assert chain.start in (original_start, DAY_START)
