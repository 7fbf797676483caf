"""Product aggregate root with the Review entity."""

import json
from datetime import datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from storefront.domain import storefront
from storefront.errors import InsufficientStock

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


def _dump_features(features):
    if features is None:
        return None
    if not isinstance(features, list | tuple) or not all(isinstance(f, str) for f in features):
        raise ValidationError({"features": ["Features must be a list of strings"]})
    return json.dumps(list(features))


def _dump_specifications(specifications):
    if specifications is None:
        return None
    if not isinstance(specifications, dict):
        raise ValidationError({"specifications": ["Specifications must be an object"]})
    return json.dumps({str(k): str(v) for k, v in specifications.items()})


@storefront.entity(part_of="Product")
class Review:
    """A customer review embedded in its product. One per user per product."""

    user_id: Identifier(required=True)
    name: String(required=True, max_length=100)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: Text(required=True)
    created_at: DateTime(default=datetime.now)


@storefront.aggregate
class Product:
    """A sellable catalogue item.

    `stock` is owned by the stock ledger: catalogue edits never touch it,
    only `decrement_stock` (order placement) and `restock` do. `rating`
    and `num_reviews` are derived from the embedded reviews.
    """

    name: String(required=True, max_length=255)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    image: String(required=True, max_length=500)
    brand: String(max_length=100)
    category_id: Identifier(required=True)
    stock: Integer(default=0, min_value=0)
    reviews: HasMany(Review)
    rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    num_reviews: Integer(default=0, min_value=0)
    features: Text()  # JSON: list of strings
    specifications: Text()  # JSON: string -> string map
    is_featured: Boolean(default=False)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def one_review_per_user(self):
        user_ids = [str(r.user_id) for r in self.reviews]
        if len(user_ids) != len(set(user_ids)):
            raise ValidationError({"reviews": ["Product already reviewed"]})

    @invariant.post
    def review_summary_matches_reviews(self):
        if self.num_reviews != len(self.reviews):
            raise ValidationError({"num_reviews": ["Review count is out of sync with reviews"]})

    @property
    def feature_list(self):
        return json.loads(self.features) if self.features else []

    @property
    def specification_map(self):
        return json.loads(self.specifications) if self.specifications else {}

    @classmethod
    def create(
        cls,
        name,
        description,
        price,
        image,
        category_id,
        brand=None,
        stock=0,
        features=None,
        specifications=None,
        is_featured=False,
    ):
        from storefront.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            name=name.strip() if name else name,
            description=description,
            price=price,
            image=image,
            brand=brand,
            category_id=category_id,
            stock=stock or 0,
            features=_dump_features(features),
            specifications=_dump_specifications(specifications),
            is_featured=bool(is_featured),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                category_id=category_id,
                price=price,
                stock=product.stock,
                created_at=now,
            )
        )
        return product

    def update_details(
        self,
        name=_UNSET,
        description=_UNSET,
        price=_UNSET,
        image=_UNSET,
        brand=_UNSET,
        category_id=_UNSET,
        features=_UNSET,
        specifications=_UNSET,
        is_featured=_UNSET,
    ):
        """Apply a partial catalogue edit. Empty strings keep the current value."""
        from storefront.product.events import ProductDetailsUpdated, ProductPriceChanged

        previous_price = self.price

        if name is not _UNSET and name:
            self.name = name.strip()
        if description is not _UNSET and description:
            self.description = description
        if price is not _UNSET and price is not None:
            self.price = price
        if image is not _UNSET and image:
            self.image = image
        if brand is not _UNSET and brand:
            self.brand = brand
        if category_id is not _UNSET and category_id:
            self.category_id = category_id
        if features is not _UNSET and features is not None:
            self.features = _dump_features(features)
        if specifications is not _UNSET and specifications is not None:
            self.specifications = _dump_specifications(specifications)
        if is_featured is not _UNSET and is_featured is not None:
            self.is_featured = bool(is_featured)

        self.updated_at = datetime.now()

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                category_id=self.category_id,
            )
        )
        if self.price != previous_price:
            self.raise_(
                ProductPriceChanged(
                    product_id=self.id,
                    previous_price=previous_price,
                    new_price=self.price,
                )
            )

    # -------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------
    def has_review_from(self, user_id):
        return any(str(r.user_id) == str(user_id) for r in self.reviews)

    def add_review(self, user_id, name, rating, comment):
        from storefront.product.events import ReviewAdded

        if self.has_review_from(user_id):
            raise ValidationError({"reviews": ["Product already reviewed"]})

        review = Review(
            user_id=user_id,
            name=name,
            rating=rating,
            comment=comment,
            created_at=datetime.now(),
        )
        with atomic_change(self):
            self.add_reviews(review)
            self.num_reviews = len(self.reviews)
            self.rating = sum(r.rating for r in self.reviews) / len(self.reviews)
        self.updated_at = datetime.now()

        self.raise_(
            ReviewAdded(
                product_id=self.id,
                review_id=review.id,
                user_id=user_id,
                rating=rating,
                new_average=self.rating,
                num_reviews=self.num_reviews,
            )
        )
        return review

    # -------------------------------------------------------------------
    # Stock ledger operations
    # -------------------------------------------------------------------
    def decrement_stock(self, quantity, order_id=None):
        """Take `quantity` units out of stock, or fail leaving stock untouched."""
        from storefront.product.events import StockDecremented

        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if self.stock < quantity:
            raise InsufficientStock(self.id, self.name, requested=quantity, available=self.stock)

        previous_stock = self.stock
        self.stock = previous_stock - quantity
        self.updated_at = datetime.now()

        self.raise_(
            StockDecremented(
                product_id=self.id,
                order_id=order_id,
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
            )
        )

    def restock(self, quantity):
        from storefront.product.events import StockReplenished

        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Restock quantity must be at least 1"]})

        previous_stock = self.stock
        self.stock = previous_stock + quantity
        self.updated_at = datetime.now()

        self.raise_(
            StockReplenished(
                product_id=self.id,
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
            )
        )
