from __future__ import annotations

import httpx
import pytest

from stardash.github import GitHubClient

OWNER = "freeCodeCamp"
REPO = "freeCodeCamp"


def make_week(total: int, days: list[int] | None = None, week: int = 0) -> dict:
    if days is None:
        days = [0] * 7
        days[0] = total
    return {"total": total, "days": days, "week": week}


def make_commit_activity(weeks: int = 52) -> list[dict]:
    """52 weeks where week ``i`` has ``i`` commits, all on the Wednesday."""
    activity = []
    for i in range(weeks):
        days = [0, 0, 0, i, 0, 0, 0]
        activity.append(make_week(i, days, week=1_700_000_000 + i * 604_800))
    return activity


def make_payloads() -> dict[str, object]:
    return {
        "/search/repositories": {
            "total_count": 2,
            "items": [
                {"name": REPO, "owner": {"login": OWNER}},
                {"name": "free-programming-books", "owner": {"login": "EbookFoundation"}},
            ],
        },
        f"/repos/{OWNER}/{REPO}": {
            "name": REPO,
            "html_url": f"https://github.com/{OWNER}/{REPO}",
            "stargazers_count": 412345,
            "forks_count": 38123,
            "watchers_count": 412345,
            "subscribers_count": 8567,
            "owner": {"login": OWNER},
        },
        f"/repos/{OWNER}/{REPO}/stats/commit_activity": make_commit_activity(),
        f"/repos/{OWNER}/{REPO}/languages": {"TypeScript": 300, "JavaScript": 100},
    }


class FakeGitHub:
    """Routes requests by path to canned JSON payloads.

    A payload may be an ``httpx.Response`` (returned as is), a list of
    responses (served in order, last one repeated) or an exception instance
    (raised).
    """

    def __init__(self, payloads: dict[str, object]) -> None:
        self.payloads = payloads
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        payload = self.payloads.get(request.url.path)
        if payload is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(payload, Exception):
            raise payload
        if isinstance(payload, list) and payload and isinstance(payload[0], httpx.Response):
            return payload.pop(0) if len(payload) > 1 else payload[0]
        if isinstance(payload, httpx.Response):
            return payload
        return httpx.Response(200, json=payload)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def client(self, token: str = "test-token", **kwargs) -> GitHubClient:
        kwargs.setdefault("poll_delay", 0)
        return GitHubClient(token, transport=httpx.MockTransport(self), **kwargs)


@pytest.fixture
def payloads() -> dict[str, object]:
    return make_payloads()


@pytest.fixture
def fake_github(payloads) -> FakeGitHub:
    return FakeGitHub(payloads)
