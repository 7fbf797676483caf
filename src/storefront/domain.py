"""Domain initialization and configuration.

A single bounded context holds Users, Categories, Products and Orders.
Order placement reads and updates Products in the same unit of work,
so they cannot live in separate domains.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
