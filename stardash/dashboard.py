from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from stardash.charts import (
    DayPoint,
    LanguagePoint,
    WeekPoint,
    daily_series,
    language_series,
    weekly_series,
)
from stardash.fetcher import FetchResult, FetchSuccess, fetch_snapshot
from stardash.github import GitHubClient
from stardash.models import WEEKS_SHOWN, RepositorySnapshot

WEEKLY_TITLE = "Total commits in the last 4 weeks"
LANGUAGES_TITLE = "Share of each language found in the repository"


@dataclass
class Dashboard:
    """Current snapshot plus the week highlighted in the weekly chart.

    ``snapshot`` is ``None`` until a fetch succeeds, and stays ``None`` after
    a failed one.
    """

    snapshot: RepositorySnapshot | None = None
    selected_week: int | None = None

    @property
    def loaded(self) -> bool:
        return self.snapshot is not None

    def load(self, client: GitHubClient) -> FetchResult:
        result = fetch_snapshot(client)
        if isinstance(result, FetchSuccess):
            self.snapshot = result.snapshot
        return result

    # -- week selection -----------------------------------------------------

    def select_week(self, index: int) -> None:
        if not 0 <= index < WEEKS_SHOWN:
            raise ValueError(f"week index must be in [0, {WEEKS_SHOWN - 1}], got {index}")
        self.selected_week = index

    def clear_selection(self) -> None:
        self.selected_week = None

    # -- presentation -------------------------------------------------------

    @property
    def title(self) -> str:
        name = self.snapshot.name if self.snapshot else ""
        return f"Dashboard for {name}".rstrip()

    @property
    def daily_title(self) -> str:
        if self.selected_week is None:
            return "Commits per day in the last 4 weeks"
        return f"Commits per day in week {self.selected_week + 1}"

    def cards(self) -> list[tuple[str, int | None]]:
        snap = self.snapshot
        return [
            ("Stars", snap.stargazers_count if snap else None),
            ("Forks", snap.forks_count if snap else None),
            ("Watchers", snap.watchers_count if snap else None),
        ]

    def weekly(self) -> list[WeekPoint]:
        return weekly_series(self.snapshot.last_4_weeks_commits if self.snapshot else None)

    def daily(self, today: date | None = None) -> list[DayPoint]:
        weeks = self.snapshot.last_4_weeks_commits if self.snapshot else None
        return daily_series(weeks, self.selected_week, today)

    def languages(self) -> list[LanguagePoint]:
        return language_series(self.snapshot.language_percentages if self.snapshot else None)
