from __future__ import annotations

import json
from datetime import date

from stardash.dashboard import Dashboard
from stardash.models import Owner, RepositorySnapshot, WeekActivity
from stardash.render import bar_chart, dashboard_to_dict, format_count, render_dashboard

TODAY = date(2024, 3, 13)


def _dashboard() -> Dashboard:
    weeks = (
        WeekActivity(total=5, days=(0, 1, 0, 2, 1, 0, 1)),
        WeekActivity(total=3, days=(1, 0, 1, 0, 1, 0, 0)),
        WeekActivity(total=10, days=(2, 2, 2, 2, 2, 0, 0)),
        WeekActivity(total=7, days=(0, 0, 3, 4, 0, 0, 0)),
    )
    snapshot = RepositorySnapshot(
        name="react",
        html_url="https://github.com/facebook/react",
        owner=Owner("facebook"),
        stargazers_count=1234567,
        forks_count=45000,
        watchers_count=6700,
        last_4_weeks_commits=weeks,
        language_percentages={"JavaScript": 75.0, "TypeScript": 25.0},
    )
    return Dashboard(snapshot=snapshot)


def test_format_count():
    assert format_count(1234567) == "1,234,567"
    assert format_count(0) == "0"
    assert format_count(None) == ""


def test_bar_chart_scales_to_peak():
    lines = bar_chart("Title", [("a", 10), ("bb", 5), ("c", 0)], width=10)
    assert lines[0] == "Title"
    assert lines[1] == "  a   ██████████ 10"
    assert lines[2] == "  bb  █████ 5"
    assert lines[3] == "  c    0"


def test_bar_chart_empty():
    assert bar_chart("Title", []) == ["Title", "  (no data)"]


def test_bar_chart_all_zero():
    lines = bar_chart("Title", [("a", 0), ("b", 0)], width=10)
    assert "█" not in "".join(lines)


def test_render_loaded_dashboard():
    text = render_dashboard(_dashboard(), TODAY, width=20)

    assert "Dashboard for react" in text
    assert "https://github.com/facebook/react" in text
    assert "Stars    : 1,234,567" in text
    assert "Forks    : 45,000" in text
    assert "Watchers : 6,700" in text
    assert "Total commits in the last 4 weeks" in text
    assert "Week 3  " + "█" * 20 + " 10" in text
    assert "Commits per day in the last 4 weeks" in text
    assert "18/2" in text and "16/3" in text
    assert "JavaScript  " + "█" * 20 + " 75.000%" in text


def test_render_selected_week():
    dashboard = _dashboard()
    dashboard.select_week(3)
    text = render_dashboard(dashboard, TODAY)

    assert "Commits per day in week 4" in text
    assert "10/3" in text
    assert "18/2" not in text


def test_render_before_load():
    text = render_dashboard(Dashboard(), TODAY)

    assert "Dashboard for\n" in text
    assert "Stars    :\n" in text
    assert text.count("(no data)") == 3


def test_dashboard_to_dict_is_json_serialisable():
    data = dashboard_to_dict(_dashboard(), TODAY)
    decoded = json.loads(json.dumps(data))

    assert decoded["snapshot"]["owner"] == {"login": "facebook"}
    assert decoded["snapshot"]["language_percentages"] == {"JavaScript": 75.0, "TypeScript": 25.0}
    assert decoded["snapshot"]["last_4_weeks_commits"][0]["days"] == [0, 1, 0, 2, 1, 0, 1]
    assert decoded["weekly"][0] == {"label": "Week 1", "commits": 5, "week_index": 0}
    assert decoded["daily"][0] == {"label": "18/2", "commits": 0, "day_index": 0}
    assert decoded["languages"][1] == {"label": "TypeScript", "value": "25.000"}
    assert decoded["selected_week"] is None


def test_dashboard_to_dict_before_load():
    data = dashboard_to_dict(Dashboard(), TODAY)
    assert data == {
        "snapshot": None,
        "selected_week": None,
        "weekly": [],
        "daily": [],
        "languages": [],
    }
