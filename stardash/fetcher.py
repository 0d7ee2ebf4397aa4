from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

import httpx
from loguru import logger

from stardash.github import GitHubClient, StatsPendingError
from stardash.models import RepositorySnapshot

TOP_REPOSITORY_QUERY = "stars:>=1"


class FailureReason(str, Enum):
    EMPTY_RESULT = "empty_result"
    TRANSPORT = "transport"
    PENDING = "pending"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class FetchSuccess:
    snapshot: RepositorySnapshot
    ok = True


@dataclass(frozen=True)
class FetchFailure:
    reason: FailureReason
    message: str
    ok = False


FetchResult = Union[FetchSuccess, FetchFailure]


class EmptySearchResult(Exception):
    pass


def _fetch(client: GitHubClient) -> RepositorySnapshot:
    items = client.search_repositories(TOP_REPOSITORY_QUERY, sort="stars", order="desc")
    if not items:
        raise EmptySearchResult(f"no repository matches {TOP_REPOSITORY_QUERY!r}")

    top = items[0]
    owner, name = top["owner"]["login"], top["name"]
    logger.info("Most-starred repository: {}/{}", owner, name)

    repo = client.get_repository(owner, name)
    commit_activity = client.get_commit_activity(owner, name)
    languages = client.get_languages(owner, name)
    logger.debug(
        "Fetched {} weeks of commit activity and {} languages for {}/{}",
        len(commit_activity), len(languages), owner, name,
    )

    return RepositorySnapshot.from_github(repo, commit_activity, languages)


def fetch_snapshot(client: GitHubClient) -> FetchResult:
    """Fetch the most-starred repository and assemble its snapshot.

    Never raises for data-source problems: every failure is logged and
    returned as a ``FetchFailure``, so callers either get a complete
    snapshot or nothing.
    """
    try:
        snapshot = _fetch(client)
    except EmptySearchResult as e:
        failure = FetchFailure(FailureReason.EMPTY_RESULT, str(e))
    except StatsPendingError as e:
        failure = FetchFailure(FailureReason.PENDING, str(e))
    except httpx.HTTPError as e:
        failure = FetchFailure(FailureReason.TRANSPORT, f"{type(e).__name__}: {e}")
    except (KeyError, IndexError, TypeError, ValueError) as e:
        # ValueError also covers JSON decoding errors from httpx
        failure = FetchFailure(FailureReason.MALFORMED, f"{type(e).__name__}: {e}")
    else:
        logger.info(
            "Snapshot ready for {}/{} ({} stars)",
            snapshot.owner.login, snapshot.name, snapshot.stargazers_count,
        )
        return FetchSuccess(snapshot)

    logger.error("Fetching repository data failed ({}): {}", failure.reason.value, failure.message)
    return failure
