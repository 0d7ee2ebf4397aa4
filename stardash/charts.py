from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, timedelta
from typing import NamedTuple

from stardash.models import DAYS_PER_WEEK, WEEKS_SHOWN, WeekActivity


class WeekPoint(NamedTuple):
    label: str
    commits: int
    week_index: int


class DayPoint(NamedTuple):
    label: str
    commits: int
    day_index: int


class LanguagePoint(NamedTuple):
    label: str
    value: str


def weekly_series(weeks: Sequence[WeekActivity] | None) -> list[WeekPoint]:
    """One bar per week, oldest first, labelled ``Week 1`` .. ``Week 4``."""
    if weeks is None:
        return []
    return [
        WeekPoint(label=f"Week {i + 1}", commits=week.total, week_index=i)
        for i, week in enumerate(weeks)
    ]


def sunday_weekday(day: date) -> int:
    """Day of week with Sunday as 0 and Saturday as 6."""
    return day.isoweekday() % 7


def day_index_date(index: int, today: date) -> date:
    """Calendar date of position ``index`` in the flattened four-week window.

    Positions 21..27 are the current week, 21 being its Sunday.
    """
    offset = index - (WEEKS_SHOWN - 1) * DAYS_PER_WEEK - sunday_weekday(today)
    return today + timedelta(days=offset)


def daily_series(
    weeks: Sequence[WeekActivity] | None,
    selected_week: int | None = None,
    today: date | None = None,
) -> list[DayPoint]:
    """Per-day commits over the window, optionally narrowed to one week.

    Points are labelled ``day/month``. ``today`` anchors the dates and
    defaults to the local calendar date; resolve it once per render so all
    charts agree.
    """
    if weeks is None:
        return []
    if today is None:
        today = date.today()

    days = [commits for week in weeks for commits in week.days]
    points = []
    for i, commits in enumerate(days):
        day = day_index_date(i, today)
        points.append(DayPoint(label=f"{day.day}/{day.month}", commits=commits, day_index=i))

    if selected_week is not None:
        return [p for p in points if p.day_index // DAYS_PER_WEEK == selected_week]
    return points


def language_series(percentages: Mapping[str, float] | None) -> list[LanguagePoint]:
    if percentages is None:
        return []
    return [
        LanguagePoint(label=lang, value=f"{share:.3f}")
        for lang, share in percentages.items()
    ]
