"""Final score and rank."""
from __future__ import annotations

import math
from collections.abc import Mapping

from data_colony.types import QUALITY, THROUGHPUT, ScoreBreakdown

SERVICE_POINTS = 100
QUALITY_POINTS = 10

# (lower bound, letter, title), highest first
RANKS: tuple[tuple[int, str, str], ...] = (
    (1000, "S", "Data Master"),
    (750, "A", "Senior Engineer"),
    (400, "B", "Data Engineer"),
    (250, "C", "Junior Developer"),
    (100, "D", "Intern"),
)
FAILING_RANK = ("F", "Needs Training")


def calculate_score(services_produced: int, final_stocks: Mapping[str, float]) -> ScoreBreakdown:
    """services x 100 + floor(quality) x 10 + floor(throughput)."""
    quality = math.floor(final_stocks.get(QUALITY, 0))
    throughput = math.floor(final_stocks.get(THROUGHPUT, 0))
    total = services_produced * SERVICE_POINTS + quality * QUALITY_POINTS + throughput
    return ScoreBreakdown(
        services=services_produced,
        quality=quality,
        throughput=throughput,
        total=total,
    )


def _band(total: float) -> tuple[str, str]:
    for lower, letter, title in RANKS:
        if total >= lower:
            return letter, title
    return FAILING_RANK


def score_rank(total: float) -> str:
    return _band(total)[0]


def rank_title(total: float) -> str:
    letter, title = _band(total)
    return f"{letter} - {title}"


def format_score(total: int) -> str:
    return f"{total:,}"
