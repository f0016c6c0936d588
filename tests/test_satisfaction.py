"""
Tests for satisfaction level calculations
"""
import pytest
from unittest.mock import Mock
from app.feedback.satisfaction import (
    SatisfactionLevel,
    get_satisfaction_level,
    compute_metrics,
)


def test_satisfaction_level_mapping():
    """Test that ratings map to correct satisfaction levels."""
    assert get_satisfaction_level(1) == SatisfactionLevel.VERY_DISSATISFIED
    assert get_satisfaction_level(2) == SatisfactionLevel.DISSATISFIED
    assert get_satisfaction_level(3) == SatisfactionLevel.NEUTRAL
    assert get_satisfaction_level(4) == SatisfactionLevel.SATISFIED
    assert get_satisfaction_level(5) == SatisfactionLevel.VERY_SATISFIED


@pytest.mark.parametrize("rating", [0, 6, None])
def test_satisfaction_level_invalid(rating):
    assert get_satisfaction_level(rating) == SatisfactionLevel.NEUTRAL


def test_compute_metrics_all_five_stars():
    feedbacks = [Mock(rating=5) for _ in range(4)]
    metrics = compute_metrics(feedbacks)

    assert metrics["average_rating"] == 5.0
    assert metrics["satisfaction_index"] == 100.0
    assert metrics["total_feedbacks"] == 4
    assert metrics["distribution"]["5_star"] == 100.0
    assert metrics["distribution"]["1_star"] == 0.0
    assert metrics["satisfaction_levels"]["VERY_SATISFIED"] == 4


def test_compute_metrics_mixed():
    feedbacks = [Mock(rating=1), Mock(rating=2), Mock(rating=4), Mock(rating=5)]
    metrics = compute_metrics(feedbacks)

    assert metrics["average_rating"] == 3.0
    assert metrics["satisfaction_index"] == 60.0  # (3/5) * 100
    assert metrics["distribution"] == {
        "5_star": 25.0, "4_star": 25.0, "3_star": 0.0, "2_star": 25.0, "1_star": 25.0,
    }
    assert metrics["satisfaction_levels"] == {
        "VERY_SATISFIED": 1, "SATISFIED": 1, "NEUTRAL": 0, "DISSATISFIED": 1, "VERY_DISSATISFIED": 1,
    }


def test_compute_metrics_empty():
    metrics = compute_metrics([])

    assert metrics["average_rating"] == 0.0
    assert metrics["satisfaction_index"] == 0.0
    assert metrics["total_feedbacks"] == 0
    assert set(metrics["distribution"]) == {"5_star", "4_star", "3_star", "2_star", "1_star"}
    assert all(value == 0.0 for value in metrics["distribution"].values())
    assert all(count == 0 for count in metrics["satisfaction_levels"].values())
