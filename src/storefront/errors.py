"""Domain errors raised by the storefront.

Rule violations are Protean `ValidationError`s and missing records are
`NotFound`s, an `ObjectNotFoundError` carrying a `{field: [messages]}`
payload like `ValidationError`. Both travel through the same HTTP mapping.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain


class ItemsEmpty(ValidationError):
    """An order was submitted without any line items."""

    def __init__(self):
        super().__init__({"order_items": ["No order items"]})


class NotFound(ObjectNotFoundError):
    """A record is missing. `messages` mirrors `ValidationError.messages`."""

    def __init__(self, messages):
        self.messages = messages
        super().__init__(messages)


class ProductNotFound(NotFound):
    """A line item references a product that does not exist."""

    def __init__(self, product_id):
        self.product_id = str(product_id)
        super().__init__({"product": [f"Product not found: {product_id}"]})


class InsufficientStock(ValidationError):
    """Requested quantity exceeds the product's current stock."""

    def __init__(self, product_id, product_name, requested, available):
        self.product_id = str(product_id)
        self.requested = requested
        self.available = available
        super().__init__({"stock": [f"Product {product_name} is out of stock"]})


def first_message(messages) -> str:
    """Flatten Protean's `{field: [messages]}` payload into one plain string."""
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, list | tuple) and value:
                return str(value[0])
            if value:
                return str(value)
        return ""
    return str(messages)


def get_or_raise(aggregate_cls, identifier):
    """Load an aggregate by id, raising `NotFound` with a readable message."""
    try:
        return current_domain.repository_for(aggregate_cls).get(identifier)
    except ObjectNotFoundError:
        raise NotFound({"_entity": [f"{aggregate_cls.__name__} not found"]}) from None
