import datetime

import pytest_asyncio

from shop_admin.features.orders.models import Order, OrderItem
from shop_admin.features.products.models import Product

# Reference instant for every analytics test; a Saturday in a non-leap March.
NOW = datetime.datetime(2025, 3, 15, 12, 0, tzinfo=datetime.timezone.utc)


def at(day: datetime.date, hour: int = 10) -> datetime.datetime:
    return datetime.datetime.combine(day, datetime.time(hour), tzinfo=datetime.timezone.utc)


@pytest_asyncio.fixture
async def product_factory():
    """Creates catalog products dated before the test window unless told otherwise."""

    async def _factory(
        name: str,
        price: float = 10.0,
        stock: int = 5,
        category: str = "Electronics",
        status: str = "Active",
        created_at: datetime.datetime = at(datetime.date(2025, 1, 1)),
    ) -> Product:
        return await Product.create(
            name=name, price=price, stock=stock, category=category, status=status, created_at=created_at
        )

    return _factory


@pytest_asyncio.fixture
async def order_factory():
    """
    Creates an order with line items.

    ``lines`` is a list of ``(product, quantity, unit_price)`` tuples; the
    product may be None for lines whose product was deleted.
    """

    async def _factory(
        total_amount: float,
        created_at: datetime.datetime,
        status: str = "pending",
        lines=(),
    ) -> Order:
        order = await Order.create(total_amount=total_amount, status=status, created_at=created_at)
        for product, quantity, price in lines:
            await OrderItem.create(
                order=order,
                product=product,
                name=product.name if product is not None else "Deleted product",
                quantity=quantity,
                price=price,
            )
        return order

    return _factory
