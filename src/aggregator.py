from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable, Sequence

from src.models import LeaderboardRow, Review

FEATURED_COUNT = 3


def leaderboard(reviews: Iterable[Review]) -> list[LeaderboardRow]:
    """Average overall score per brand, best first.

    Brands with equal averages keep the order in which they first appear.
    """
    grouped: dict[str, list[float]] = {}
    for review in reviews:
        grouped.setdefault(review.brand, []).append(review.overall)

    rows = [
        LeaderboardRow(brand=brand, average=_round_one_place(sum(scores) / len(scores)), count=len(scores))
        for brand, scores in grouped.items()
    ]
    return sorted(rows, key=lambda row: row.average, reverse=True)


def top_n(reviews: Sequence[Review], n: int = FEATURED_COUNT) -> list[Review]:
    if n <= 0:
        return []
    return sorted(reviews, key=lambda review: review.overall, reverse=True)[:n]


def find_target(reviews: Iterable[Review]) -> Review | None:
    # Only the first locked review wins when the dataset marks several.
    return next((review for review in reviews if review.target_locked), None)


def _round_one_place(value: float) -> float:
    exact = Decimal(value)
    with localcontext() as context:
        # quantize fails when the integer part has more digits than the precision.
        context.prec = max(context.prec, exact.adjusted() + 3)
        return float(exact.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
