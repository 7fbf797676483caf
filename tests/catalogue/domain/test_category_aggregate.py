"""Tests for the Category aggregate."""

import pytest
from protean.exceptions import ValidationError
from storefront.category.category import Category
from storefront.category.events import CategoryCreated, CategoryDetailsUpdated


class TestCategory:
    def test_create(self):
        category = Category.create(name="  Fashion ", description="Clothing")
        assert category.name == "Fashion"
        assert category.is_active is True
        assert any(isinstance(e, CategoryCreated) for e in category._events)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Category.create(name="   ")
        assert exc.value.messages["name"] == ["Category name is required"]

    def test_deactivate(self):
        category = Category.create(name="Fashion")
        category._events.clear()
        category.update_details(is_active=False)

        assert category.is_active is False
        event = next(e for e in category._events if isinstance(e, CategoryDetailsUpdated))
        assert event.is_active is False

    def test_empty_values_keep_current(self):
        category = Category.create(name="Fashion", description="Clothing")
        category.update_details(name="", description=None)
        assert category.name == "Fashion"
        assert category.description == "Clothing"
