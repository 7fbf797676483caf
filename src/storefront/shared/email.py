"""EmailAddress value object."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

_LOCAL_PART = re.compile(r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~.-]+$")
_DOMAIN_LABEL = re.compile(r"^[A-Za-z0-9-]+$")


@storefront.value_object
class EmailAddress:
    """A structurally valid email address, stored lower-cased.

    Used as the login identifier for users, so two addresses that differ
    only in case must compare equal.
    """

    address: String(required=True, max_length=254)

    @classmethod
    def build(cls, address):
        return cls(address=address.strip().lower())

    @invariant.post
    def verify_email_address(self):
        email = self.address

        if email.count("@") != 1:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        local_part, domain_part = email.split("@", 1)

        if not local_part or not _LOCAL_PART.match(local_part):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if local_part.startswith(".") or local_part.endswith(".") or ".." in local_part:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        labels = domain_part.split(".")
        if len(labels) < 2:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        for label in labels:
            if not label or not _DOMAIN_LABEL.match(label) or label.startswith("-") or label.endswith("-"):
                raise ValidationError({"email": [f"Invalid email address: {email!r}"]})
