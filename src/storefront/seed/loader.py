"""Sample data import and teardown.

Records are created through the same commands the API uses, so passwords
are hashed and every invariant is checked on the way in.
"""

import json

from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.category.management import CreateCategory
from storefront.order.order import Order, OrderItem
from storefront.product.management import CreateProduct
from storefront.product.product import Product, Review
from storefront.projections.daily_order_stats import DailyOrderStats
from storefront.projections.orders_by_status import OrderStatusCount
from storefront.seed.data import CATEGORIES, PRODUCTS, USERS
from storefront.user.addresses import AddAddress
from storefront.user.administration import UpdateUser
from storefront.user.registration import RegisterUser
from storefront.user.user import Address, User, WishlistItem
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# Child entities before their aggregates, orders before what they reference
_DESTROY_ORDER = (
    OrderItem,
    Order,
    Review,
    Product,
    Address,
    WishlistItem,
    User,
    Category,
    DailyOrderStats,
    OrderStatusCount,
)


def destroy_data():
    """Delete every storefront record, including read models."""
    for element in _DESTROY_ORDER:
        current_domain.repository_for(element)._dao.delete_all()
        logger.info("seed_cleared", element=element.__name__)


def import_data():
    """Replace all data with the sample users, categories and products."""
    destroy_data()

    for data in USERS:
        user_id = current_domain.process(
            RegisterUser(
                name=data["name"],
                email=data["email"],
                password=data["password"],
                phone=data["phone"],
            ),
            asynchronous=False,
        )
        if data["role"] != "customer":
            current_domain.process(UpdateUser(user_id=user_id, role=data["role"]), asynchronous=False)
        current_domain.process(AddAddress(user_id=user_id, is_default=True, **data["address"]), asynchronous=False)

    category_ids = [
        current_domain.process(CreateCategory(**data), asynchronous=False)
        for data in CATEGORIES
    ]

    for index, data in enumerate(PRODUCTS):
        current_domain.process(
            CreateProduct(
                category_id=category_ids[index % len(category_ids)],
                features=json.dumps(data["features"]),
                specifications=json.dumps(data["specifications"]),
                **{k: v for k, v in data.items() if k not in ("features", "specifications")},
            ),
            asynchronous=False,
        )

    logger.info(
        "seed_imported",
        users=len(USERS),
        categories=len(category_ids),
        products=len(PRODUCTS),
    )
