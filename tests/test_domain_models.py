"""Tests for domain models."""
import pytest
from happygit.domain.models import CommitPage, DateAdjustment, HappinessResult


def test_happiness_result_from_scores():
    """Test averaging a list of scores."""
    result = HappinessResult.from_scores([5, 7, 9], since="2024-01-01")

    assert result.average == 7.0
    assert result.count == 3
    assert result.since == "2024-01-01"


def test_happiness_result_without_scores():
    """Test that an empty window has no average instead of failing."""
    result = HappinessResult.from_scores([], since="2024-01-01")

    assert result.average is None
    assert result.count == 0


def test_happiness_result_is_immutable():
    """Test that results cannot be changed after creation."""
    result = HappinessResult(average=1.0, count=1, since="2024-01-01")

    with pytest.raises(AttributeError):
        result.count = 2


def test_happiness_result_as_dict():
    """Test the printable form of a result."""
    result = HappinessResult(average=4.5, count=2, since="2024-06-01")

    assert result.as_dict() == {"average": 4.5, "count": 2, "since": "2024-06-01"}


def test_commit_page_last_page():
    """Test detecting the final page."""
    assert CommitPage(records=[{"sha": "a"}]).is_last
    assert not CommitPage(records=[], next_url="https://x/2").is_last


def test_date_adjustment_values():
    """Test that adjustments round-trip through their string names."""
    assert DateAdjustment("first-day-of-year") is DateAdjustment.FIRST_DAY_OF_YEAR
    assert DateAdjustment("first-day-of-month") is DateAdjustment.FIRST_DAY_OF_MONTH
