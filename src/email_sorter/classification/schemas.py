"""
Classification schemas.

Defines Pydantic models for:
- Per-category scores (the score breakdown)
- Classification results

Results are frozen: re-classifying a record produces a new result.
"""

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from email_sorter.classification.categories import Category, categories


# ============================================================================
# SCORE BREAKDOWN
# ============================================================================

class CategoryScore(BaseModel):
    """Accumulated score of one category."""
    model_config = ConfigDict(frozen=True)

    category: Category = Field(..., description="Category")
    score: float = Field(
        ...,
        ge=0.0,
        allow_inf_nan=False,
        description="Sum of the weights of the matched rules"
    )


# ============================================================================
# CLASSIFICATION RESULT
# ============================================================================

class ClassificationResult(BaseModel):
    """
    Complete classification result for one record.

    Carries the record fields, the chosen category, the full score breakdown
    (one entry per category, registry order) and the reasons behind the choice.
    """
    model_config = ConfigDict(frozen=True)

    # Record fields
    id: str = Field(..., description="Record ID")
    sender: str = Field(..., description="Sender as submitted")
    subject: str = Field(..., description="Subject as submitted")
    preview: str = Field(..., description="Body preview as submitted")
    received_at: datetime = Field(..., description="Reception timestamp")

    # Decision
    category: Category = Field(..., description="Winning category")
    score_breakdown: List[CategoryScore] = Field(
        ...,
        description="Score of every category, in registry order"
    )
    reasons: List[str] = Field(
        ...,
        min_length=1,
        description="Why the winning category was chosen, in rule firing order"
    )

    # Audit trail
    ruleset_version: str = Field(..., description="Rule set version used")

    @field_validator("sender", "subject", "preview", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        """Absent record fields are reported as empty strings."""
        return "" if v is None else v

    @model_validator(mode="after")
    def validate_breakdown(self):
        """The breakdown holds exactly one entry per category, in registry order."""
        listed = [entry.category for entry in self.score_breakdown]
        if listed != categories():
            raise ValueError("Score breakdown must list every category once, in registry order")
        return self

    def score_for(self, category: Category) -> float:
        """Return the score of a category."""
        category = Category(category)
        for entry in self.score_breakdown:
            if entry.category is category:
                return entry.score
        raise KeyError(category)

    @property
    def total_score(self) -> float:
        return sum(entry.score for entry in self.score_breakdown)

    @property
    def confidence(self) -> float:
        """Share of the total score held by the winning category (0.0 when nothing matched)."""
        total = self.total_score
        if total <= 0:
            return 0.0
        return self.score_for(self.category) / total

    def confidence_distribution(self) -> Dict[Category, float]:
        """
        Normalize the breakdown into per-category shares.

        Returns:
            Dict of category -> share in [0, 1], registry order; all zeros when
            nothing matched
        """
        total = self.total_score
        return {
            entry.category: (entry.score / total if total > 0 else 0.0)
            for entry in self.score_breakdown
        }
