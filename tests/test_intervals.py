import pytest

from core.calculations.intervals import accumulate_intervals
from core.shift.models import BreakInterval

from conftest import at

BREAKS = [BreakInterval("09:00", "09:15"), BreakInterval("12:00", "12:30")]


def test_partial_break_credit():
    totals = accumulate_intervals(BREAKS, at(12, 10))
    assert totals.elapsed_hours == pytest.approx(25 / 60)
    assert totals.total_hours == pytest.approx(0.75)


@pytest.mark.parametrize("hour, minute", [(7, 0), (12, 10), (18, 0)])
def test_total_is_independent_of_reference(hour, minute):
    assert accumulate_intervals(BREAKS, at(hour, minute)).total_hours == pytest.approx(0.75)


def test_breaks_after_reference_contribute_nothing():
    totals = accumulate_intervals(BREAKS, at(8, 30))
    assert totals.elapsed_hours == 0


def test_reference_at_break_end_counts_full_break():
    totals = accumulate_intervals(BREAKS, at(9, 15))
    assert totals.elapsed_hours == pytest.approx(0.25)


def test_incomplete_intervals_are_skipped():
    breaks = BREAKS + [BreakInterval("13:00", ""), BreakInterval("", "14:00")]
    totals = accumulate_intervals(breaks, at(18, 0))
    assert totals.total_hours == pytest.approx(0.75)
    assert totals.elapsed_hours == pytest.approx(0.75)


def test_no_intervals():
    totals = accumulate_intervals([], at(12, 0))
    assert totals.total_hours == 0
    assert totals.elapsed_hours == 0


def test_unparseable_intervals_are_skipped():
    breaks = BREAKS + [BreakInterval("12:00", "1230"), BreakInterval("lunch", "13:00")]
    totals = accumulate_intervals(breaks, at(18, 0))
    assert totals.total_hours == pytest.approx(0.75)
    assert totals.elapsed_hours == pytest.approx(0.75)
