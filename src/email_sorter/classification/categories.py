"""
Category registry.

The taxonomy is closed and ordered. Declaration order is the tie-break priority
used by the classifier and the default display order: "important" first,
"spam" and "general" last.
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# TAXONOMY
# ============================================================================

class Category(str, Enum):
    """Mail categories, in priority order."""
    IMPORTANT = "important"
    FINANCE = "finance"
    UPDATES = "updates"
    PROMOTIONS = "promotions"
    SOCIAL = "social"
    TRAVEL = "travel"
    SPAM = "spam"
    GENERAL = "general"


# Fallback when no rule matched anything
DEFAULT_CATEGORY = Category.GENERAL

_ORDER: Dict[Category, int] = {category: index for index, category in enumerate(Category)}


def categories() -> List[Category]:
    """
    Return every category in registry order.

    Returns:
        List of all Category members, highest priority first
    """
    return list(Category)


def display_order(category: Category) -> int:
    """
    Return the fixed rank of a category (0 = highest priority).

    Args:
        category: Category to rank

    Returns:
        Enumeration index of the category
    """
    return _ORDER[Category(category)]


# ============================================================================
# DISPLAY METADATA
# ============================================================================

class CategoryInfo(BaseModel):
    """Display identity of a category. Not used by scoring."""
    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Human-readable label")
    description: str = Field(..., description="What lands in this category")
    color: str = Field(..., description="Colour token for renderers")


CATEGORY_METADATA: Dict[Category, CategoryInfo] = {
    Category.IMPORTANT: CategoryInfo(
        label="Important",
        description="Time-sensitive mail that needs a reply or a decision",
        color="red",
    ),
    Category.FINANCE: CategoryInfo(
        label="Finance",
        description="Invoices, receipts, payments and banking",
        color="emerald",
    ),
    Category.UPDATES: CategoryInfo(
        label="Updates",
        description="Notifications, account alerts and product changes",
        color="sky",
    ),
    Category.PROMOTIONS: CategoryInfo(
        label="Promotions",
        description="Deals, newsletters and marketing campaigns",
        color="amber",
    ),
    Category.SOCIAL: CategoryInfo(
        label="Social",
        description="Social networks, invitations and community activity",
        color="violet",
    ),
    Category.TRAVEL: CategoryInfo(
        label="Travel",
        description="Flights, hotels, itineraries and bookings",
        color="teal",
    ),
    Category.SPAM: CategoryInfo(
        label="Spam",
        description="Scams, phishing and unsolicited bulk mail",
        color="zinc",
    ),
    Category.GENERAL: CategoryInfo(
        label="General",
        description="Everything without a strong signal",
        color="slate",
    ),
}


def category_info(category: Category) -> CategoryInfo:
    """Return the display metadata for a category."""
    return CATEGORY_METADATA[Category(category)]
