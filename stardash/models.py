from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

WEEKS_SHOWN = 4
DAYS_PER_WEEK = 7

LanguageShares = Mapping[str, float]


def language_percentages(byte_counts: Mapping[str, int]) -> dict[str, float]:
    """Convert ``{language: bytes}`` into ``{language: percent}``.

    Keeps the input order. A repository without languages (or with a zero
    byte total) yields an empty mapping.
    """
    if not isinstance(byte_counts, Mapping):
        raise TypeError(f"expected a mapping of byte counts, got {type(byte_counts).__name__}")
    for lang, count in byte_counts.items():
        if not isinstance(count, int) or count < 0:
            raise ValueError(f"invalid byte count for {lang!r}: {count!r}")

    total = sum(byte_counts.values())
    if total == 0:
        return {}
    return {lang: count / total * 100 for lang, count in byte_counts.items()}


def _require_text(attr: str, value: object) -> None:
    if not isinstance(value, str) or not value:
        raise ValueError(f"invalid {attr}: {value!r}")


@dataclass(frozen=True)
class Owner:
    login: str

    def __post_init__(self) -> None:
        _require_text("owner.login", self.login)


@dataclass(frozen=True)
class WeekActivity:
    """Commits for one Sunday-first week of the commit activity stats."""

    total: int
    days: tuple[int, ...]
    week: int = 0

    def __post_init__(self) -> None:
        if len(self.days) != DAYS_PER_WEEK:
            raise ValueError(
                f"week must have {DAYS_PER_WEEK} days, got {len(self.days)}"
            )
        if any(not isinstance(d, int) or d < 0 for d in self.days):
            raise ValueError(f"invalid daily commit counts: {self.days!r}")
        if not isinstance(self.total, int) or self.total < 0:
            raise ValueError(f"invalid weekly total: {self.total!r}")

    @classmethod
    def from_github(cls, raw: dict) -> WeekActivity:
        return cls(
            total=raw["total"],
            days=tuple(raw["days"]),
            week=raw.get("week", 0),
        )


@dataclass(frozen=True)
class RepositorySnapshot:
    """Everything the dashboard shows about one repository, fetched at once."""

    name: str
    html_url: str
    owner: Owner
    stargazers_count: int
    forks_count: int
    watchers_count: int
    last_4_weeks_commits: tuple[WeekActivity, ...]
    language_percentages: LanguageShares = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        _require_text("name", self.name)
        _require_text("html_url", self.html_url)
        if len(self.last_4_weeks_commits) != WEEKS_SHOWN:
            raise ValueError(
                f"expected {WEEKS_SHOWN} weeks of commits, "
                f"got {len(self.last_4_weeks_commits)}"
            )
        for attr in ("stargazers_count", "forks_count", "watchers_count"):
            value = getattr(self, attr)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"invalid {attr}: {value!r}")
        if not isinstance(self.language_percentages, MappingProxyType):
            object.__setattr__(
                self,
                "language_percentages",
                MappingProxyType(dict(self.language_percentages)),
            )

    @classmethod
    def from_github(
        cls,
        repo: dict,
        commit_activity: list[dict],
        languages: Mapping[str, int],
    ) -> RepositorySnapshot:
        """Build from the repository, commit activity and languages payloads.

        Only the last four weeks of the 52-week activity are kept, oldest first.
        """
        weeks = tuple(
            WeekActivity.from_github(raw) for raw in commit_activity[-WEEKS_SHOWN:]
        )
        return cls(
            name=repo["name"],
            html_url=repo["html_url"],
            owner=Owner(login=repo["owner"]["login"]),
            stargazers_count=repo["stargazers_count"],
            forks_count=repo["forks_count"],
            watchers_count=repo["subscribers_count"],
            last_4_weeks_commits=weeks,
            language_percentages=language_percentages(languages),
        )
