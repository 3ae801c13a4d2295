"""
Main email classifier.

Coordinates:
1. Input coercion (EmailRecord or plain mapping)
2. Rule scoring (scorer.py)
3. Category selection with deterministic tie-break
4. Result assembly with the winning category's reasons

This is the main entry point for classification. The whole pipeline is a pure
function of the record and the read-only rule set.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Mapping, Optional, Sequence, Union

import structlog

from email_sorter.classification.categories import DEFAULT_CATEGORY, Category, display_order
from email_sorter.classification.rules import RuleSet
from email_sorter.classification.schemas import CategoryScore, ClassificationResult
from email_sorter.classification.scorer import RuleScorer
from email_sorter.config import settings
from email_sorter.models.record import EmailRecord


logger = structlog.get_logger(__name__)


FALLBACK_REASON = f"No strong signals matched; defaulted to {DEFAULT_CATEGORY.value}"

RecordInput = Union[EmailRecord, Mapping[str, Any]]


# ============================================================================
# SELECTION
# ============================================================================

def select_category(breakdown: Sequence[CategoryScore]) -> Category:
    """
    Pick the winning category from a score breakdown.

    The strictly highest score wins. Ties go to the category that comes first
    in registry order. When nothing scored, the default category wins.

    Args:
        breakdown: Per-category scores

    Returns:
        Winning category
    """
    best: Optional[CategoryScore] = None
    for entry in breakdown:
        if entry.score <= 0:
            continue
        if (
            best is None
            or entry.score > best.score
            or (entry.score == best.score
                and display_order(entry.category) < display_order(best.category))
        ):
            best = entry

    if best is None:
        return DEFAULT_CATEGORY
    return best.category


def _to_record(record: RecordInput) -> EmailRecord:
    if isinstance(record, EmailRecord):
        return record
    return EmailRecord.model_validate(record)


# ============================================================================
# EMAIL SORTER
# ============================================================================

class EmailSorter:
    """
    Rule-based classifier producing one category per record.

    Holds no mutable state after construction; safe to share across threads.
    """

    def __init__(self, rule_set: Optional[RuleSet] = None, workers: Optional[int] = None):
        """
        Initialize classifier.

        Args:
            rule_set: Optional rule set (default: process-wide rule set)
            workers: Threads used by classify_batch (default: settings.batch_workers)
        """
        self.scorer = RuleScorer(rule_set)
        self.rule_set = self.scorer.rule_set
        self.workers = max(1, workers if workers is not None else settings.batch_workers)

        self.logger = logger.bind(
            classifier="EmailSorter",
            ruleset=self.rule_set.version
        )

    def classify(self, record: RecordInput) -> ClassificationResult:
        """
        Classify a single record.

        Args:
            record: EmailRecord or mapping with record fields

        Returns:
            ClassificationResult with category, score breakdown and reasons

        Raises:
            pydantic.ValidationError: If a mapping cannot be read as a record
        """
        record = _to_record(record)
        breakdown, reasons_by_category = self.scorer.score(record)

        category = select_category(breakdown)
        reasons = list(reasons_by_category[category])
        if not reasons:
            reasons = [FALLBACK_REASON]

        result = ClassificationResult(
            id=record.id,
            sender=record.sender,
            subject=record.subject,
            preview=record.preview,
            received_at=record.received_at,
            category=category,
            score_breakdown=breakdown,
            reasons=reasons,
            ruleset_version=self.rule_set.version,
        )

        self.logger.debug(
            "record_classified",
            record_id=record.id,
            category=category.value,
            score=result.score_for(category),
            reasons_count=len(reasons)
        )

        return result

    def classify_batch(self, records: Sequence[RecordInput]) -> List[ClassificationResult]:
        """
        Classify many records, preserving input order.

        Records are independent; with more than one worker they are fanned out
        on a thread pool and collected in input order.

        Args:
            records: Records to classify

        Returns:
            One ClassificationResult per input record, same order
        """
        records = [_to_record(record) for record in records]

        if self.workers > 1 and len(records) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                results = list(executor.map(self.classify, records))
        else:
            results = [self.classify(record) for record in records]

        self.logger.info(
            "batch_classification_completed",
            total_count=len(results),
            workers=self.workers,
            categories=_count_by_category(results)
        )

        return results


def _count_by_category(results: Sequence[ClassificationResult]) -> dict:
    counts: dict = {}
    for result in results:
        counts[result.category.value] = counts.get(result.category.value, 0) + 1
    return counts


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

_default_sorter: Optional[EmailSorter] = None


def get_default_sorter() -> EmailSorter:
    """Return the shared sorter built on the process-wide rule set."""
    global _default_sorter
    if _default_sorter is None:
        _default_sorter = EmailSorter()
    return _default_sorter


def classify_email(record: RecordInput, sorter: Optional[EmailSorter] = None) -> ClassificationResult:
    """
    Classify a record using the default or provided sorter.

    Args:
        record: EmailRecord or mapping with record fields
        sorter: Optional custom sorter

    Returns:
        ClassificationResult

    Example:
        >>> result = classify_email({
        ...     "sender": "billing@vendor.com",
        ...     "subject": "Invoice #4821 due",
        ...     "preview": "Your payment is due on Friday.",
        ... })
        >>> result.category
        <Category.FINANCE: 'finance'>
    """
    return (sorter or get_default_sorter()).classify(record)


def classify_batch(
    records: Sequence[RecordInput],
    sorter: Optional[EmailSorter] = None
) -> List[ClassificationResult]:
    """
    Classify records in batch, preserving order.

    Args:
        records: Records to classify
        sorter: Optional custom sorter

    Returns:
        List of ClassificationResults
    """
    return (sorter or get_default_sorter()).classify_batch(records)
