"""
Signal rule set.

A rule is declarative data: the category it votes for, the record fields it
reads, a matcher (keyword list and/or regex), a positive weight and an
explanation template. The scorer only iterates rules, so adding or tuning a
signal never touches scoring code.

Rule sets are validated once when they are built. Any malformed rule rejects
the whole set with RuleConfigError; a rule set is never partially loaded.
"""

import json
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Pattern, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, field_validator, model_validator

from email_sorter.classification.categories import Category, categories
from email_sorter.classification.patterns import build_keyword_pattern, compile_pattern
from email_sorter.classification.starter_rules import STARTER_RULES
from email_sorter.config import settings
from email_sorter.models.record import EmailRecord
from email_sorter.version import STARTER_RULESET_VERSION


logger = structlog.get_logger(__name__)


# ============================================================================
# ERRORS
# ============================================================================

class RuleConfigError(ValueError):
    """Raised when a rule set cannot be built from its configuration."""

    def __init__(
        self,
        message: str,
        *,
        errors: Optional[List[str]] = None,
        source: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []
        self.source = source


# ============================================================================
# RECORD FIELDS
# ============================================================================

class RecordField(str, Enum):
    """Record fields a rule can read."""
    SENDER = "sender"
    SENDER_DOMAIN = "sender_domain"
    SUBJECT = "subject"
    PREVIEW = "preview"


def field_text(record: EmailRecord, field: RecordField) -> str:
    """
    Read a field from a record as text.

    Absent or non-text values read as an empty string, which no rule matches.

    Args:
        record: Record to read
        field: Field to extract

    Returns:
        Field text, possibly empty
    """
    value = getattr(record, field.value, None)
    if not isinstance(value, str):
        return ""
    return value


# ============================================================================
# RULE
# ============================================================================

@dataclass(frozen=True)
class RuleMatch:
    """A rule that fired on a record."""
    rule: "Rule"
    field: RecordField
    text: str
    reason: str

    @property
    def weight(self) -> float:
        return self.rule.weight

    @property
    def category(self) -> Category:
        return self.rule.category


class Rule(BaseModel):
    """
    Weighted, explainable text-matching predicate scoped to one category.

    The explanation may reference ``{match}`` (the matched text) and
    ``{field}`` (the field it was found in).
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    category: Category = Field(..., description="Category this rule votes for")
    fields: List[RecordField] = Field(
        ...,
        min_length=1,
        description="Fields to search, in order; the first matching field wins"
    )
    keywords: Optional[List[str]] = Field(
        default=None,
        description="Literal terms matched on word edges, case-insensitive"
    )
    pattern: Optional[str] = Field(
        default=None,
        description="Regular expression, matched case-insensitively"
    )
    weight: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Contribution to the category score"
    )
    explanation: str = Field(..., min_length=1, description="Reason template")
    name: Optional[str] = Field(default=None, description="Optional identifier for audits")

    _regex: Pattern[str] = PrivateAttr()

    @field_validator("keywords")
    @classmethod
    def validate_keywords(cls, v):
        """Keyword lists must produce a pattern."""
        if v is not None:
            build_keyword_pattern(v)
        return v

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v):
        """Patterns must compile and must not match the empty string."""
        if v is not None:
            compiled = compile_pattern(v)
            if compiled.fullmatch(""):
                raise ValueError(f"Pattern matches the empty string: {v}")
        return v

    @field_validator("explanation")
    @classmethod
    def validate_explanation(cls, v):
        """Templates may only use the {match} and {field} placeholders."""
        try:
            v.format(match="", field="")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(f"Invalid explanation template {v!r}: {e}") from e
        return v

    @model_validator(mode="before")
    @classmethod
    def validate_matcher(cls, data):
        """A rule needs at least one matcher."""
        if isinstance(data, dict) and not data.get("keywords") and not data.get("pattern"):
            raise ValueError("Rule needs keywords or a pattern")
        return data

    def model_post_init(self, __context: Any) -> None:
        parts = []
        if self.keywords:
            parts.append(build_keyword_pattern(self.keywords))
        if self.pattern:
            parts.append(f"(?:{self.pattern})")
        self._regex = compile_pattern("|".join(parts))

    def evaluate(self, record: EmailRecord) -> Optional[RuleMatch]:
        """
        Evaluate the rule against a record.

        Args:
            record: Record to test

        Returns:
            RuleMatch when the rule fires, None otherwise
        """
        for field in self.fields:
            text = field_text(record, field)
            if not text:
                continue

            found = self._regex.search(text)
            if found is None:
                continue

            matched = " ".join(found.group(0).split())
            return RuleMatch(
                rule=self,
                field=field,
                text=matched,
                reason=self.explanation.format(match=matched, field=field.value),
            )

        return None


# ============================================================================
# RULE SET
# ============================================================================

class RuleSet:
    """
    Immutable rule collection grouped by category.

    Iteration order is registry order, then definition order within a category.
    """

    def __init__(self, rules: Iterable[Rule], version: str = "custom"):
        grouped: Dict[Category, List[Rule]] = {category: [] for category in categories()}
        for rule in rules:
            if not isinstance(rule, Rule):
                raise RuleConfigError(f"Not a Rule: {rule!r}")
            grouped[rule.category].append(rule)

        self._by_category: Dict[Category, tuple] = {
            category: tuple(items) for category, items in grouped.items()
        }
        self.version = version

        if len(self) == 0:
            raise RuleConfigError("Rule set is empty")

    def rules_for(self, category: Category) -> List[Rule]:
        """Return the rules of a category in definition order."""
        return list(self._by_category[Category(category)])

    def __iter__(self) -> Iterator[Rule]:
        for category in categories():
            yield from self._by_category[category]

    def __len__(self) -> int:
        return sum(len(items) for items in self._by_category.values())

    def __repr__(self) -> str:
        return f"RuleSet(version={self.version!r}, rules={len(self)})"

    @classmethod
    def from_dicts(
        cls,
        items: Iterable[Dict[str, Any]],
        version: str = "custom",
        source: Optional[str] = None,
    ) -> "RuleSet":
        """
        Build a rule set from plain configuration dicts.

        Every item is validated before anything is built; all problems are
        reported together.

        Args:
            items: Rule configuration dicts
            version: Rule set version for audit output
            source: Where the configuration came from (for error messages)

        Returns:
            Validated RuleSet

        Raises:
            RuleConfigError: If any rule is malformed
        """
        rules: List[Rule] = []
        errors: List[str] = []

        for index, item in enumerate(items):
            if not isinstance(item, dict):
                errors.append(f"rule {index}: expected an object, got {type(item).__name__}")
                continue
            try:
                rules.append(Rule.model_validate(item))
            except ValidationError as e:
                for err in e.errors():
                    location = ".".join(str(part) for part in err["loc"]) or "rule"
                    errors.append(f"rule {index} ({location}): {err['msg']}")

        if errors:
            logger.error(
                "rule_set_invalid",
                source=source,
                errors_count=len(errors),
                errors=errors
            )
            raise RuleConfigError(
                f"Invalid rule configuration ({len(errors)} error(s)): " + "; ".join(errors),
                errors=errors,
                source=source,
            )

        rule_set = cls(rules, version=version)

        logger.info(
            "rule_set_loaded",
            source=source or "inline",
            version=version,
            rules_count=len(rule_set)
        )

        return rule_set


def load_rule_set(path: Union[str, Path]) -> RuleSet:
    """
    Load a rule set from a JSON file.

    Accepted layouts: ``{"version": "...", "rules": [...]}`` or a bare list of
    rule objects.

    Args:
        path: Path to the JSON rule file

    Returns:
        Validated RuleSet

    Raises:
        RuleConfigError: If the file is unreadable, not JSON, or holds a malformed rule
    """
    path = Path(path)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise RuleConfigError(f"Cannot read rule file {path}: {e}", source=str(path)) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RuleConfigError(f"Rule file {path} is not valid JSON: {e}", source=str(path)) from e

    version = f"file:{path.name}"
    if isinstance(data, dict):
        version = str(data.get("version", version))
        data = data.get("rules")

    if not isinstance(data, list):
        raise RuleConfigError(
            f"Rule file {path} must contain a list of rules",
            source=str(path)
        )

    return RuleSet.from_dicts(data, version=version, source=str(path))


@lru_cache(maxsize=1)
def default_rule_set() -> RuleSet:
    """
    Return the process-wide rule set, built once.

    Uses ``settings.rules_file`` when configured, the starter rules otherwise.

    Raises:
        RuleConfigError: If the configured rules are malformed
    """
    if settings.rules_file:
        return load_rule_set(settings.rules_file)

    return RuleSet.from_dicts(STARTER_RULES, version=STARTER_RULESET_VERSION, source="starter")
