"""User aggregate root with Address and WishlistItem entities."""

from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, String

from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.shared.email import EmailAddress

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class Role(Enum):
    """Flat two-value role; admin is a capability, not a superset type."""

    CUSTOMER = "customer"
    ADMIN = "admin"


@storefront.entity(part_of="User")
class Address:
    """A shipping address in a user's address book."""

    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    postal_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)
    is_default: Boolean(default=False)


@storefront.entity(part_of="User")
class WishlistItem:
    product_id: Identifier(required=True)
    added_at: DateTime(default=datetime.now)


@storefront.aggregate
class User:
    """A registered shopper or administrator.

    Addresses and wishlist live inside the aggregate so that the
    "exactly one default address" and "no duplicate wishlist entries"
    rules are checked on every change.
    """

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    role: String(choices=Role, default=Role.CUSTOMER.value)
    phone: String(max_length=30)
    addresses: HasMany(Address)
    wishlist: HasMany(WishlistItem)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def exactly_one_default_address_when_addresses_exist(self):
        if not self.addresses:
            return
        defaults = [a for a in self.addresses if a.is_default]
        if len(defaults) != 1:
            raise ValidationError({"addresses": ["Exactly one address must be marked as default"]})

    @invariant.post
    def wishlist_has_no_duplicates(self):
        product_ids = [str(item.product_id) for item in self.wishlist]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"wishlist": ["Product already in wishlist"]})

    @property
    def is_admin(self):
        return self.role == Role.ADMIN.value

    @property
    def default_address(self):
        return next((a for a in self.addresses if a.is_default), None)

    @classmethod
    def register(cls, name, email, password_hash, phone=None, role=Role.CUSTOMER.value):
        from storefront.user.events import UserRegistered

        now = datetime.now()
        user = cls(
            name=name,
            email=EmailAddress.build(email).address,
            password_hash=password_hash,
            role=role,
            phone=phone,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                name=name,
                email=user.email,
                role=role,
                registered_at=now,
            )
        )
        return user

    def update_profile(self, name=_UNSET, email=_UNSET, phone=_UNSET, password_hash=_UNSET):
        from storefront.user.events import ProfileUpdated

        if name is not _UNSET and name:
            self.name = name
        if email is not _UNSET and email:
            self.email = EmailAddress.build(email).address
        if phone is not _UNSET and phone:
            self.phone = phone
        if password_hash is not _UNSET and password_hash:
            self.password_hash = password_hash

        self.updated_at = datetime.now()
        self.raise_(
            ProfileUpdated(
                user_id=self.id,
                name=self.name,
                email=self.email,
                phone=self.phone,
            )
        )

    def change_role(self, role):
        from storefront.user.events import RoleChanged

        try:
            new_role = Role(role)
        except ValueError:
            raise ValidationError({"role": [f"Invalid role: {role}"]}) from None

        if new_role.value == self.role:
            return

        previous_role = self.role
        self.role = new_role.value
        self.updated_at = datetime.now()
        self.raise_(
            RoleChanged(
                user_id=self.id,
                previous_role=previous_role,
                new_role=new_role.value,
            )
        )

    # -------------------------------------------------------------------
    # Address book
    # -------------------------------------------------------------------
    def _find_address(self, address_id):
        address = next((a for a in self.addresses if str(a.id) == str(address_id)), None)
        if address is None:
            raise NotFound({"addresses": ["Address not found"]})
        return address

    def add_address(self, street, city, postal_code, country, state=None, is_default=False):
        from storefront.user.events import AddressAdded

        # First address is always default
        if not self.addresses:
            is_default = True

        with atomic_change(self):
            if is_default:
                for addr in self.addresses:
                    if addr.is_default:
                        addr.is_default = False

            address = Address(
                street=street,
                city=city,
                state=state,
                postal_code=postal_code,
                country=country,
                is_default=is_default,
            )
            self.add_addresses(address)

        self.updated_at = datetime.now()
        self.raise_(
            AddressAdded(
                user_id=self.id,
                address_id=address.id,
                is_default=is_default,
            )
        )
        return address

    def update_address(self, address_id, is_default=None, **fields):
        """Change address fields; falsy values keep the current ones.

        Clearing the default flag hands it to the first other address, and
        is ignored when this is the only address.
        """
        from storefront.user.events import AddressUpdated

        address = self._find_address(address_id)

        with atomic_change(self):
            for field in ("street", "city", "state", "postal_code", "country"):
                value = fields.get(field)
                if value:
                    setattr(address, field, value)

            if is_default is True and not address.is_default:
                for addr in self.addresses:
                    if addr.is_default:
                        addr.is_default = False
                address.is_default = True
            elif is_default is False and address.is_default:
                successor = next((a for a in self.addresses if a.id != address.id), None)
                if successor is not None:
                    address.is_default = False
                    successor.is_default = True

        self.updated_at = datetime.now()
        self.raise_(
            AddressUpdated(
                user_id=self.id,
                address_id=address.id,
                is_default=address.is_default,
            )
        )
        return address

    def remove_address(self, address_id):
        from storefront.user.events import AddressRemoved

        address = self._find_address(address_id)
        was_default = address.is_default

        with atomic_change(self):
            self.remove_addresses(address)

            # If removed address was default, promote the first remaining one
            if was_default and self.addresses:
                self.addresses[0].is_default = True

        self.updated_at = datetime.now()
        self.raise_(
            AddressRemoved(
                user_id=self.id,
                address_id=address_id,
            )
        )

    # -------------------------------------------------------------------
    # Wishlist
    # -------------------------------------------------------------------
    def has_in_wishlist(self, product_id):
        return any(str(item.product_id) == str(product_id) for item in self.wishlist)

    def add_to_wishlist(self, product_id):
        if self.has_in_wishlist(product_id):
            raise ValidationError({"wishlist": ["Product already in wishlist"]})

        self.add_wishlist(WishlistItem(product_id=product_id, added_at=datetime.now()))
        self.updated_at = datetime.now()

    def remove_from_wishlist(self, product_id):
        item = next((i for i in self.wishlist if str(i.product_id) == str(product_id)), None)
        if item is None:
            raise NotFound({"wishlist": ["Product not found in wishlist"]})

        self.remove_wishlist(item)
        self.updated_at = datetime.now()
