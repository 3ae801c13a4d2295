"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- Sample email records
- Small custom rule sets
- Classifier instances
"""

import os
from datetime import datetime, timezone
from typing import Dict, List

import pytest
import structlog

from email_sorter.classification.classifier import EmailSorter
from email_sorter.classification.rules import RuleSet, default_rule_set
from email_sorter.models.record import EmailRecord
from tests.fixtures.emails import SAMPLE_RECORDS


@pytest.fixture
def sample_records() -> Dict[str, EmailRecord]:
    """
    Get all sample records, keyed by sample name.

    Returns:
        Dict of name -> EmailRecord
    """
    return {name: EmailRecord.model_validate(data) for name, data in SAMPLE_RECORDS.items()}


@pytest.fixture
def sample_record_list(sample_records) -> List[EmailRecord]:
    """Sample records as a list, in fixture declaration order."""
    return list(sample_records.values())


@pytest.fixture
def finance_record(sample_records) -> EmailRecord:
    """Invoice reminder from a billing address."""
    return sample_records["finance_invoice"]


@pytest.fixture
def empty_record(sample_records) -> EmailRecord:
    """Record with a sender only; matches no rule."""
    return sample_records["empty"]


@pytest.fixture
def starter_rules() -> RuleSet:
    """The built-in starter rule set."""
    return default_rule_set()


@pytest.fixture
def sorter(starter_rules) -> EmailSorter:
    """Sequential sorter on the starter rules."""
    return EmailSorter(rule_set=starter_rules, workers=1)


@pytest.fixture
def tie_rule_set() -> RuleSet:
    """
    Rule set where "invoice" scores 2.0 for both finance and spam, and "hello"
    scores 1.0 for both important and general.
    """
    return RuleSet.from_dicts(
        [
            {
                "category": "spam",
                "fields": ["subject"],
                "keywords": ["invoice"],
                "weight": 2,
                "explanation": "spam: {match}",
            },
            {
                "category": "finance",
                "fields": ["subject"],
                "keywords": ["invoice"],
                "weight": 2,
                "explanation": "finance: {match}",
            },
            {
                "category": "general",
                "fields": ["preview"],
                "keywords": ["hello"],
                "weight": 1,
                "explanation": "general: {match}",
            },
            {
                "category": "important",
                "fields": ["preview"],
                "keywords": ["hello"],
                "weight": 1,
                "explanation": "important: {match}",
            },
        ],
        version="tie-test",
    )


@pytest.fixture
def fixed_timestamp() -> datetime:
    """
    Provide fixed timestamp for deterministic testing.

    Returns:
        Fixed timezone-aware datetime
    """
    return datetime(2026, 2, 12, 10, 30, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore the default structlog configuration after tests that configure logging."""
    yield
    structlog.reset_defaults()
