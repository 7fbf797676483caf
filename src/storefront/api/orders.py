"""FastAPI endpoints for orders."""

import json

from fastapi import APIRouter, Depends, HTTPException, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.dependencies import get_current_user, require_admin
from storefront.api.schemas import (
    DailySales,
    OrderListResponse,
    OrderResponse,
    OrderStatsResponse,
    OrderStatusRequest,
    PaymentResultRequest,
    PlaceOrderRequest,
    StatusCount,
)
from storefront.api.serializers import order_response
from storefront.errors import get_or_raise
from storefront.order.order import Order
from storefront.order.payment import MarkOrderPaid
from storefront.order.placement import PlaceOrder
from storefront.order.status import UpdateOrderStatus
from storefront.projections.daily_order_stats import all_time_sales, recent_daily_sales
from storefront.projections.orders_by_status import status_counts
from storefront.user.user import User
from storefront.utils.pagination import paginate

router = APIRouter(prefix="/orders", tags=["orders"])


def _owner(order) -> User | None:
    try:
        return current_domain.repository_for(User).get(order.user_id)
    except ObjectNotFoundError:
        return None


def _detail(order_id) -> OrderResponse:
    order = get_or_raise(Order, order_id)
    return order_response(order, _owner(order))


@router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, current_user: User = Depends(get_current_user)) -> OrderResponse:
    items = [
        {"product_id": item.product, "quantity": item.quantity, "price": item.price, "name": item.name}
        for item in body.order_items
    ]
    command = PlaceOrder(
        user_id=str(current_user.id),
        items=json.dumps(items),
        shipping_address=body.shipping_address.model_dump_json(),
        payment_method=body.payment_method,
        items_price=body.items_price,
        tax_price=body.tax_price,
        shipping_price=body.shipping_price,
        total_price=body.total_price,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return _detail(order_id)


@router.get("/myorders", response_model=OrderListResponse)
async def my_orders(
    page: int | None = Query(None),
    page_size: int | None = Query(None, alias="pageSize"),
    current_user: User = Depends(get_current_user),
) -> OrderListResponse:
    result = paginate(current_domain.repository_for(Order).for_user(current_user.id), page, page_size)
    return OrderListResponse(
        orders=[order_response(o, current_user) for o in result.items],
        page=result.page,
        pages=result.pages,
        total_orders=result.total,
    )


@router.get("/stats", response_model=OrderStatsResponse)
async def order_stats(admin: User = Depends(require_admin)) -> OrderStatsResponse:
    total_orders = current_domain.repository_for(Order)._dao.query.all().total
    return OrderStatsResponse(
        total_orders=total_orders,
        total_sales=all_time_sales(),
        daily_sales=[
            DailySales(date=r.date, sales=r.sales or 0.0, orders=r.orders or 0) for r in recent_daily_sales()
        ],
        status_counts=[StatusCount(status=r.status, count=r.orders) for r in status_counts()],
    )


@router.get("", response_model=OrderListResponse)
async def list_orders(
    keyword: str | None = Query(None),
    page: int | None = Query(None),
    page_size: int | None = Query(None, alias="pageSize"),
    admin: User = Depends(require_admin),
) -> OrderListResponse:
    result = paginate(current_domain.repository_for(Order).listing(keyword), page, page_size)
    return OrderListResponse(
        orders=[order_response(o, _owner(o)) for o in result.items],
        page=result.page,
        pages=result.pages,
        total_orders=result.total,
    )


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, current_user: User = Depends(get_current_user)) -> OrderResponse:
    order = get_or_raise(Order, order_id)
    if str(order.user_id) != str(current_user.id) and not current_user.is_admin:
        raise HTTPException(status_code=403, detail="Not authorized to view this order")
    return order_response(order, _owner(order))


@router.put("/{order_id}/pay", response_model=OrderResponse)
async def pay_order(
    order_id: str, body: PaymentResultRequest, current_user: User = Depends(get_current_user)
) -> OrderResponse:
    current_domain.process(
        MarkOrderPaid(
            order_id=order_id,
            transaction_id=body.id,
            status=body.status,
            update_time=body.update_time,
            email_address=body.payer.email_address,
        ),
        asynchronous=False,
    )
    return _detail(order_id)


@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str, body: OrderStatusRequest, admin: User = Depends(require_admin)
) -> OrderResponse:
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return _detail(order_id)
