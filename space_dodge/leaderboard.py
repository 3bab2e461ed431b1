"""Client for the remote ranking service.

Scores are POSTed as ``{"score": n}`` to ``{endpoint}/submit``; the service
answers ``{"rank": r, "total": t}``. Any failure is reported as ``None`` so
the caller can fall back to a fixed message.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from .config import LEADERBOARD_TIMEOUT, LEADERBOARD_URL, RANK_UNAVAILABLE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankResult:
    rank: int
    total: int


def format_rank(result: Optional[RankResult]) -> str:
    if result is None:
        return RANK_UNAVAILABLE
    return f"Your Rank: {result.rank} / {result.total}"


class LeaderboardClient:
    """Submits final scores to the ranking service."""

    def __init__(self, endpoint: str = LEADERBOARD_URL, timeout: float = LEADERBOARD_TIMEOUT) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout

    def submit(self, score: int) -> Optional[RankResult]:
        """Submit a score and return the rank, or None if unavailable."""
        try:
            response = requests.post(
                f"{self.endpoint}/submit",
                json={"score": int(score)},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
            result = RankResult(rank=int(data["rank"]), total=int(data["total"]))
        except requests.exceptions.RequestException as e:
            logger.warning("Failed to submit score %d: %s", score, e)
            return None
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Malformed ranking response for score %d: %s", score, e)
            return None
        logger.info("Score %d ranked %d of %d", score, result.rank, result.total)
        return result

    def submit_async(
        self, score: int, callback: Callable[[Optional[RankResult]], None]
    ) -> threading.Thread:
        """Submit in a background thread; callback receives the result."""

        def _submit() -> None:
            callback(self.submit(score))

        thread = threading.Thread(target=_submit, name="leaderboard-submit", daemon=True)
        thread.start()
        return thread
