"""
Unit tests for the category registry.

Tests ordering, ranks and display metadata.
"""

import pytest

from email_sorter.classification.categories import (
    CATEGORY_METADATA,
    DEFAULT_CATEGORY,
    Category,
    CategoryInfo,
    categories,
    category_info,
    display_order,
)


class TestRegistry:
    """Test the ordered category set."""

    def test_categories_in_priority_order(self):
        """Test registry order: important first, spam and general last."""
        assert [c.value for c in categories()] == [
            "important",
            "finance",
            "updates",
            "promotions",
            "social",
            "travel",
            "spam",
            "general",
        ]

    def test_categories_is_stable_copy(self):
        """Test callers cannot mutate the registry through the returned list."""
        listed = categories()
        listed.reverse()

        assert categories()[0] is Category.IMPORTANT

    def test_display_order_is_enumeration_index(self):
        """Test ranks follow the registry."""
        for index, category in enumerate(categories()):
            assert display_order(category) == index

    def test_display_order_accepts_values(self):
        """Test ranks can be looked up by string value."""
        assert display_order("important") == 0
        assert display_order("general") == len(categories()) - 1

    def test_default_category_is_general(self):
        """Test zero-signal fallback category."""
        assert DEFAULT_CATEGORY is Category.GENERAL

    def test_unknown_category_rejected(self):
        """Test free-form names are not categories."""
        with pytest.raises(ValueError):
            Category("work")


class TestMetadata:
    """Test display metadata table."""

    def test_every_category_has_metadata(self):
        """Test metadata is exhaustive."""
        assert set(CATEGORY_METADATA) == set(categories())

    def test_category_info(self):
        """Test label lookup."""
        info = category_info(Category.FINANCE)

        assert isinstance(info, CategoryInfo)
        assert info.label == "Finance"
        assert info.color

    def test_category_info_by_value(self):
        """Test lookup by string value."""
        assert category_info("spam").label == "Spam"
