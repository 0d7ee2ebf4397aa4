from __future__ import annotations

import time
from types import TracebackType

import httpx
from loguru import logger

_MAX_POLLS = 5
_POLL_DELAY = 2.0


class StatsPendingError(Exception):
    """GitHub is still computing a statistics endpoint (HTTP 202)."""


class GitHubClient:
    def __init__(
        self,
        token: str = "",
        *,
        base_url: str = "https://api.github.com",
        timeout: float = 30,
        max_polls: int = _MAX_POLLS,
        poll_delay: float = _POLL_DELAY,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
        self._max_polls = max_polls
        self._poll_delay = poll_delay

    # -- context manager ---------------------------------------------------

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    # -- public API ---------------------------------------------------------

    def search_repositories(
        self, query: str, sort: str = "stars", order: str = "desc"
    ) -> list[dict]:
        """Return the first page of a repository search, in GitHub's ranking."""
        resp = self._client.get(
            "/search/repositories",
            params={"q": query, "sort": sort, "order": order},
        )
        resp.raise_for_status()
        return resp.json()["items"]

    def get_repository(self, owner: str, repo: str) -> dict:
        resp = self._client.get(f"/repos/{owner}/{repo}")
        resp.raise_for_status()
        return resp.json()

    def get_commit_activity(self, owner: str, repo: str) -> list[dict]:
        """Fetch the weekly commit activity for the last 52 weeks, oldest first.

        GitHub answers ``202 Accepted`` with an empty body while the statistics
        are being computed. The request is repeated up to ``max_polls`` times;
        if the data is still not ready, ``StatsPendingError`` is raised.
        """
        url = f"/repos/{owner}/{repo}/stats/commit_activity"
        for attempt in range(1, self._max_polls + 1):
            resp = self._client.get(url)
            if resp.status_code == 202:
                logger.debug(
                    "Commit activity for {}/{} not ready (poll {}/{})",
                    owner, repo, attempt, self._max_polls,
                )
                if attempt < self._max_polls:
                    time.sleep(self._poll_delay)
                continue
            resp.raise_for_status()
            return resp.json()

        raise StatsPendingError(
            f"commit activity for {owner}/{repo} still pending after "
            f"{self._max_polls} polls"
        )

    def get_languages(self, owner: str, repo: str) -> dict[str, int]:
        """Return ``{language: bytes}`` as reported by GitHub."""
        resp = self._client.get(f"/repos/{owner}/{repo}/languages")
        resp.raise_for_status()
        return resp.json()

    def close(self) -> None:
        self._client.close()
