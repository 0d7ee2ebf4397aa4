from __future__ import annotations

from datetime import date

from stardash.dashboard import LANGUAGES_TITLE, WEEKLY_TITLE, Dashboard
from stardash.models import RepositorySnapshot

_BAR = "█"
_RULE = "=" * 60


def format_count(value: int | None) -> str:
    """Thousands-separated count; blank while nothing is loaded."""
    return "" if value is None else f"{value:,}"


def bar_chart(
    title: str, rows: list[tuple[str, float]], width: int = 40, suffix: str = ""
) -> list[str]:
    """Horizontal bar chart, bars scaled to the largest value."""
    lines = [title]
    if not rows:
        lines.append("  (no data)")
        return lines

    label_width = max(len(label) for label, _ in rows)
    peak = max(value for _, value in rows)
    for label, value in rows:
        length = round(value / peak * width) if peak > 0 else 0
        shown = f"{value:.3f}" if isinstance(value, float) else str(value)
        lines.append(f"  {label:<{label_width}}  {_BAR * length} {shown}{suffix}".rstrip())
    return lines


def render_dashboard(dashboard: Dashboard, today: date | None = None, width: int = 40) -> str:
    if today is None:
        today = date.today()

    lines = [_RULE, f" {dashboard.title}"]
    if dashboard.snapshot is not None:
        lines.append(f" {dashboard.snapshot.html_url}")
    lines.append(_RULE)

    cards = dashboard.cards()
    title_width = max(len(title) for title, _ in cards)
    for title, value in cards:
        lines.append(f"  {title:<{title_width}} : {format_count(value)}".rstrip())
    lines.append("")

    lines += bar_chart(
        WEEKLY_TITLE,
        [(p.label, p.commits) for p in dashboard.weekly()],
        width,
    )
    lines.append("")
    lines += bar_chart(
        dashboard.daily_title,
        [(p.label, p.commits) for p in dashboard.daily(today)],
        width,
    )
    lines.append("")
    lines += bar_chart(
        LANGUAGES_TITLE,
        [(p.label, float(p.value)) for p in dashboard.languages()],
        width,
        suffix="%",
    )
    return "\n".join(lines)


def snapshot_to_dict(snapshot: RepositorySnapshot) -> dict:
    return {
        "name": snapshot.name,
        "html_url": snapshot.html_url,
        "owner": {"login": snapshot.owner.login},
        "stargazers_count": snapshot.stargazers_count,
        "forks_count": snapshot.forks_count,
        "watchers_count": snapshot.watchers_count,
        "last_4_weeks_commits": [
            {"total": w.total, "days": list(w.days), "week": w.week}
            for w in snapshot.last_4_weeks_commits
        ],
        "language_percentages": dict(snapshot.language_percentages),
    }


def dashboard_to_dict(dashboard: Dashboard, today: date | None = None) -> dict:
    """JSON-serialisable view of the snapshot and the three chart series."""
    if today is None:
        today = date.today()

    snapshot = None
    if dashboard.snapshot is not None:
        snapshot = snapshot_to_dict(dashboard.snapshot)

    return {
        "snapshot": snapshot,
        "selected_week": dashboard.selected_week,
        "weekly": [p._asdict() for p in dashboard.weekly()],
        "daily": [p._asdict() for p in dashboard.daily(today)],
        "languages": [p._asdict() for p in dashboard.languages()],
    }
