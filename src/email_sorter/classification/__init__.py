"""
Classification package.

Rule-based, explainable single-label classification of email records.

Main components:
- categories: ordered category registry and display metadata
- patterns: safe keyword regex generation
- rules: declarative rule model, validation and rule set loading
- starter_rules: built-in rule configuration
- scorer: per-category score accumulation
- schemas: Pydantic models for scores and results
- classifier: category selection and result assembly
"""

from email_sorter.classification.categories import (
    CATEGORY_METADATA,
    DEFAULT_CATEGORY,
    Category,
    CategoryInfo,
    categories,
    category_info,
    display_order,
)
from email_sorter.classification.classifier import (
    FALLBACK_REASON,
    EmailSorter,
    classify_batch,
    classify_email,
    select_category,
)
from email_sorter.classification.rules import (
    RecordField,
    Rule,
    RuleConfigError,
    RuleMatch,
    RuleSet,
    default_rule_set,
    load_rule_set,
)
from email_sorter.classification.schemas import CategoryScore, ClassificationResult
from email_sorter.classification.scorer import RuleScorer, score_record

__all__ = [
    # Registry
    "Category",
    "CategoryInfo",
    "CATEGORY_METADATA",
    "DEFAULT_CATEGORY",
    "categories",
    "category_info",
    "display_order",

    # Rules
    "RecordField",
    "Rule",
    "RuleMatch",
    "RuleSet",
    "RuleConfigError",
    "default_rule_set",
    "load_rule_set",

    # Scoring & classification
    "RuleScorer",
    "score_record",
    "CategoryScore",
    "ClassificationResult",
    "EmailSorter",
    "FALLBACK_REASON",
    "classify_email",
    "classify_batch",
    "select_category",
]
