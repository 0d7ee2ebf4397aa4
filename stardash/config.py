from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass
class Config:
    github_token: str = ""
    github_api_url: str = "https://api.github.com"
    request_timeout: float = 30.0
    stats_max_polls: int = 5
    stats_poll_delay: float = 2.0

    @classmethod
    def from_env(cls) -> Config:
        load_dotenv()

        return cls(
            github_token=os.environ.get("GITHUB_TOKEN", ""),
            github_api_url=os.environ.get("GITHUB_API_URL", "https://api.github.com"),
            request_timeout=float(os.environ.get("REQUEST_TIMEOUT", "30")),
            stats_max_polls=int(os.environ.get("STATS_MAX_POLLS", "5")),
            stats_poll_delay=float(os.environ.get("STATS_POLL_DELAY", "2.0")),
        )
