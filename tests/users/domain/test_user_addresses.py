"""Tests for the default-address rule on the User address book."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.user.events import AddressAdded, AddressRemoved
from storefront.user.user import Address, User


def _make_user():
    return User.register(name="Jane Smith", email="jane@example.com", password_hash="hashed")


def _add(user, street="1 Main St", is_default=False):
    return user.add_address(
        street=street,
        city="Springfield",
        postal_code="12345",
        country="USA",
        is_default=is_default,
    )


def _defaults(user):
    return [a for a in user.addresses if a.is_default]


class TestAddAddress:
    def test_first_address_becomes_default(self):
        user = _make_user()
        _add(user, is_default=False)
        assert user.addresses[0].is_default is True

    def test_second_address_not_default_unless_asked(self):
        user = _make_user()
        first = _add(user, street="1 Main St")
        _add(user, street="2 Main St")

        assert _defaults(user) == [first]

    def test_new_default_unsets_previous(self):
        user = _make_user()
        _add(user, street="1 Main St")
        second = _add(user, street="2 Main St", is_default=True)

        assert len(_defaults(user)) == 1
        assert user.default_address.id == second.id

    def test_raises_address_added(self):
        user = _make_user()
        user._events.clear()
        address = _add(user)

        event = next(e for e in user._events if isinstance(e, AddressAdded))
        assert event.address_id == address.id
        assert event.is_default is True


class TestUpdateAddress:
    def test_updates_fields(self):
        user = _make_user()
        address = _add(user)
        user.update_address(address.id, city="Shelbyville", postal_code="54321")

        assert user.addresses[0].city == "Shelbyville"
        assert user.addresses[0].postal_code == "54321"
        assert user.addresses[0].street == "1 Main St"

    def test_mark_other_address_default(self):
        user = _make_user()
        _add(user, street="1 Main St")
        second = _add(user, street="2 Main St")

        user.update_address(second.id, is_default=True)

        assert len(_defaults(user)) == 1
        assert user.default_address.id == second.id

    def test_clearing_default_moves_it_to_another_address(self):
        user = _make_user()
        first = _add(user, street="1 Main St")
        second = _add(user, street="2 Main St")

        user.update_address(first.id, is_default=False)

        assert len(_defaults(user)) == 1
        assert user.default_address.id == second.id

    def test_clearing_default_on_only_address_is_ignored(self):
        user = _make_user()
        only = _add(user)

        user.update_address(only.id, is_default=False)

        assert user.default_address.id == only.id

    def test_unknown_address(self):
        user = _make_user()
        _add(user)
        with pytest.raises(ObjectNotFoundError):
            user.update_address("missing", city="Nowhere")


class TestRemoveAddress:
    def test_removing_default_promotes_first_remaining(self):
        user = _make_user()
        first = _add(user, street="1 Main St")
        second = _add(user, street="2 Main St")
        _add(user, street="3 Main St")

        user.remove_address(first.id)

        assert len(user.addresses) == 2
        assert user.default_address.id == second.id

    def test_removing_non_default_keeps_default(self):
        user = _make_user()
        first = _add(user, street="1 Main St")
        second = _add(user, street="2 Main St")

        user.remove_address(second.id)

        assert user.default_address.id == first.id

    def test_removing_last_address_leaves_none(self):
        user = _make_user()
        only = _add(user)
        user._events.clear()

        user.remove_address(only.id)

        assert user.addresses == []
        assert any(isinstance(e, AddressRemoved) for e in user._events)


class TestDefaultAddressInvariant:
    def test_two_defaults_rejected(self):
        user = _make_user()
        _add(user)
        with pytest.raises(ValidationError):
            user.add_addresses(
                Address(street="9 Side St", city="Springfield", postal_code="1", country="USA", is_default=True)
            )
