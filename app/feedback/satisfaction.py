"""Satisfaction levels and provider metrics"""
from collections import Counter
from enum import Enum
from typing import Dict, Iterable

from app.feedback.validators import MAX_RATING, MIN_RATING


class SatisfactionLevel(str, Enum):
    """Satisfaction levels based on star ratings"""
    VERY_DISSATISFIED = "VERY_DISSATISFIED"
    DISSATISFIED = "DISSATISFIED"
    NEUTRAL = "NEUTRAL"
    SATISFIED = "SATISFIED"
    VERY_SATISFIED = "VERY_SATISFIED"


RATING_TO_SATISFACTION = {
    1: SatisfactionLevel.VERY_DISSATISFIED,
    2: SatisfactionLevel.DISSATISFIED,
    3: SatisfactionLevel.NEUTRAL,
    4: SatisfactionLevel.SATISFIED,
    5: SatisfactionLevel.VERY_SATISFIED,
}

STAR_KEYS = [f"{stars}_star" for stars in range(MAX_RATING, MIN_RATING - 1, -1)]


def get_satisfaction_level(rating: int) -> SatisfactionLevel:
    """Map a 1-5 star rating to a satisfaction level (NEUTRAL if unknown)."""
    return RATING_TO_SATISFACTION.get(rating, SatisfactionLevel.NEUTRAL)


def compute_metrics(feedbacks: Iterable) -> Dict:
    """
    Compute satisfaction metrics for a set of feedback.

    Returns a dict with:
    - average_rating: mean rating, 2 decimals
    - satisfaction_index: average as a percentage of the top rating
    - total_feedbacks: count
    - distribution: percentage of each star rating ("5_star" ... "1_star")
    - satisfaction_levels: count per SatisfactionLevel name
    """
    ratings = [feedback.rating for feedback in feedbacks]
    total = len(ratings)
    counts = Counter(ratings)

    levels = {level.value: 0 for level in reversed(SatisfactionLevel)}
    if not total:
        return {
            "average_rating": 0.0,
            "satisfaction_index": 0.0,
            "total_feedbacks": 0,
            "distribution": {key: 0.0 for key in STAR_KEYS},
            "satisfaction_levels": levels,
        }

    avg_rating = sum(ratings) / total
    for rating, count in counts.items():
        levels[get_satisfaction_level(rating).value] += count

    return {
        "average_rating": round(avg_rating, 2),
        "satisfaction_index": round((avg_rating / MAX_RATING) * 100, 2),
        "total_feedbacks": total,
        "distribution": {
            f"{stars}_star": round((counts[stars] / total) * 100, 2)
            for stars in range(MAX_RATING, MIN_RATING - 1, -1)
        },
        "satisfaction_levels": levels,
    }
