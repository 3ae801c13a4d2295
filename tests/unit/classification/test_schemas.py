"""
Unit tests for classification result schemas.
"""

import pytest
from pydantic import ValidationError

from email_sorter.classification.categories import Category, categories
from email_sorter.classification.schemas import CategoryScore, ClassificationResult


def make_result(fixed_timestamp, category=Category.FINANCE, reasons=None, **scores):
    breakdown = [
        CategoryScore(category=c, score=scores.get(c.value, 0.0)) for c in categories()
    ]
    return ClassificationResult(
        id="rec-1",
        sender="billing@vendor.com",
        subject="Invoice",
        preview="Payment due",
        received_at=fixed_timestamp,
        category=category,
        score_breakdown=breakdown,
        reasons=reasons or ["matched"],
        ruleset_version="test",
    )


class TestCategoryScore:
    """Test CategoryScore model."""

    def test_negative_score_rejected(self):
        """Test scores are never negative."""
        with pytest.raises(ValidationError):
            CategoryScore(category=Category.SPAM, score=-1.0)

    @pytest.mark.parametrize("score", [float("inf"), float("nan")])
    def test_non_finite_score_rejected(self, score):
        """Test scores must be finite."""
        with pytest.raises(ValidationError):
            CategoryScore(category=Category.SPAM, score=score)

    def test_category_from_string(self):
        """Test string values are coerced to Category."""
        assert CategoryScore(category="travel", score=1).category is Category.TRAVEL


class TestClassificationResult:
    """Test ClassificationResult model."""

    def test_score_for(self, fixed_timestamp):
        """Test score lookup by category or value."""
        result = make_result(fixed_timestamp, finance=8.0, spam=1.0)

        assert result.score_for(Category.FINANCE) == 8.0
        assert result.score_for("spam") == 1.0
        assert result.score_for(Category.TRAVEL) == 0.0

    def test_reasons_required(self, fixed_timestamp):
        """Test a result always carries at least one reason."""
        with pytest.raises(ValidationError):
            ClassificationResult(
                id="rec-1",
                sender="",
                subject="",
                preview="",
                received_at=fixed_timestamp,
                category=Category.GENERAL,
                score_breakdown=[CategoryScore(category=c, score=0) for c in categories()],
                reasons=[],
                ruleset_version="test",
            )

    def test_incomplete_breakdown_rejected(self, fixed_timestamp):
        """Test breakdown must cover every category."""
        with pytest.raises(ValidationError, match="every category"):
            ClassificationResult(
                id="rec-1",
                sender="",
                subject="",
                preview="",
                received_at=fixed_timestamp,
                category=Category.FINANCE,
                score_breakdown=[CategoryScore(category=Category.FINANCE, score=3)],
                reasons=["x"],
                ruleset_version="test",
            )

    def test_reordered_breakdown_rejected(self, fixed_timestamp):
        """Test breakdown must follow registry order."""
        reordered = [CategoryScore(category=c, score=0) for c in reversed(categories())]

        with pytest.raises(ValidationError):
            ClassificationResult(
                id="rec-1",
                sender="",
                subject="",
                preview="",
                received_at=fixed_timestamp,
                category=Category.GENERAL,
                score_breakdown=reordered,
                reasons=["x"],
                ruleset_version="test",
            )

    def test_none_fields_become_empty(self, fixed_timestamp):
        """Test absent text fields are stored as empty strings."""
        result = ClassificationResult(
            id="rec-1",
            sender=None,
            subject=None,
            preview=None,
            received_at=fixed_timestamp,
            category=Category.GENERAL,
            score_breakdown=[CategoryScore(category=c, score=0) for c in categories()],
            reasons=["fallback"],
            ruleset_version="test",
        )

        assert (result.sender, result.subject, result.preview) == ("", "", "")

    def test_confidence(self, fixed_timestamp):
        """Test confidence is the winner's share of the total score."""
        result = make_result(fixed_timestamp, finance=6.0, spam=2.0)

        assert result.total_score == 8.0
        assert result.confidence == pytest.approx(0.75)

    def test_confidence_zero_when_nothing_matched(self, fixed_timestamp):
        """Test all-zero breakdown has zero confidence."""
        result = make_result(fixed_timestamp, category=Category.GENERAL)

        assert result.confidence == 0.0
        assert set(result.confidence_distribution().values()) == {0.0}

    def test_confidence_distribution(self, fixed_timestamp):
        """Test distribution sums to one and keeps registry order."""
        result = make_result(fixed_timestamp, finance=3.0, updates=1.0)

        distribution = result.confidence_distribution()

        assert list(distribution) == categories()
        assert sum(distribution.values()) == pytest.approx(1.0)
        assert distribution[Category.FINANCE] == pytest.approx(0.75)

    def test_frozen(self, fixed_timestamp):
        """Test results cannot be mutated."""
        result = make_result(fixed_timestamp, finance=1.0)

        with pytest.raises(ValidationError):
            result.category = Category.SPAM

    def test_json_dump(self, fixed_timestamp):
        """Test JSON dump uses plain category values."""
        data = make_result(fixed_timestamp, finance=1.0).model_dump(mode="json")

        assert data["category"] == "finance"
        assert data["score_breakdown"][0] == {"category": "important", "score": 0.0}
        assert data["received_at"].startswith("2026-02-12T10:30:00")
