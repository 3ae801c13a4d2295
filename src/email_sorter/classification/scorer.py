"""
Rule-based category scoring.

Evaluates every rule of the rule set against a record and accumulates one score
per category. Scores are not capped and several categories can score at once;
the full vector is handed to the classifier rather than discarded.
"""

from typing import Dict, List, Optional, Tuple

import structlog

from email_sorter.classification.categories import Category, categories
from email_sorter.classification.rules import RuleSet, default_rule_set
from email_sorter.classification.schemas import CategoryScore
from email_sorter.models.record import EmailRecord


logger = structlog.get_logger(__name__)


ScoreOutcome = Tuple[List[CategoryScore], Dict[Category, List[str]]]


class RuleScorer:
    """
    Scores records against a fixed rule set.

    Stateless between calls, so one instance can be shared across threads.
    """

    def __init__(self, rule_set: Optional[RuleSet] = None):
        self.rule_set = rule_set or default_rule_set()
        self.logger = logger.bind(component="rule_scorer", ruleset=self.rule_set.version)

    def score(self, record: EmailRecord) -> ScoreOutcome:
        """
        Compute the score breakdown of a record.

        For every category in registry order, every rule of that category is
        evaluated in definition order; a match adds the rule weight to the
        category total and appends its explanation to the category's reasons.

        Args:
            record: Record to score

        Returns:
            (breakdown, reasons) tuple
            - breakdown: one CategoryScore per category, registry order
            - reasons: category -> matched explanations, firing order
        """
        breakdown: List[CategoryScore] = []
        reasons: Dict[Category, List[str]] = {}

        for category in categories():
            total = 0.0
            matched: List[str] = []

            for rule in self.rule_set.rules_for(category):
                match = rule.evaluate(record)
                if match is None:
                    continue
                total += match.weight
                matched.append(match.reason)

            breakdown.append(CategoryScore(category=category, score=total))
            reasons[category] = matched

        self.logger.debug(
            "record_scored",
            record_id=record.id,
            scores={entry.category.value: entry.score for entry in breakdown if entry.score}
        )

        return breakdown, reasons


def score_record(record: EmailRecord, rule_set: Optional[RuleSet] = None) -> ScoreOutcome:
    """
    Score a record using the default or provided rule set.

    Args:
        record: Record to score
        rule_set: Optional custom rule set (default: process-wide rule set)

    Returns:
        (breakdown, reasons) tuple, see RuleScorer.score
    """
    return RuleScorer(rule_set).score(record)
