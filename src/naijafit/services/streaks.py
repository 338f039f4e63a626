"""Logging streak analysis over a set of calendar days."""

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from naijafit.domain.stats import StreakSummary

_ONE_DAY = timedelta(days=1)


def analyze_streaks(days: Iterable[date], today: date) -> StreakSummary:
    """Return the current and longest streak for the given logged days.

    The current streak counts consecutive days ending at ``today`` and is
    zero when nothing was logged today. Days after ``today`` only affect the
    longest streak.
    """
    distinct = {_as_date(day) for day in days}
    today = _as_date(today)
    return StreakSummary(
        current_streak=_current_streak(distinct, today),
        longest_streak=_longest_streak(sorted(distinct)),
    )


def _current_streak(distinct: set[date], today: date) -> int:
    streak = 0
    day = today
    while day in distinct:
        streak += 1
        day -= _ONE_DAY
    return streak


def _longest_streak(ordered: list[date]) -> int:
    if not ordered:
        return 0
    longest = 1
    run = 1
    for previous, current in zip(ordered, ordered[1:], strict=False):
        if current - previous == _ONE_DAY:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
    return longest


def _as_date(value: date) -> date:
    # datetime is a date subclass; compare at day granularity.
    if isinstance(value, datetime):
        return value.date()
    return value
