import pytest_asyncio

from shop_admin.features.products.models import Product


@pytest_asyncio.fixture
async def product_factory(admin_user):
    """A factory to create catalog products owned by the seeded admin."""

    async def _factory(
        name: str,
        price: float = 100.0,
        stock: int = 10,
        category: str = "Electronics",
        status: str = "Active",
    ) -> Product:
        return await Product.create(
            name=name, price=price, stock=stock, category=category, status=status, created_by=admin_user
        )

    return _factory


@pytest_asyncio.fixture
async def sample_products(product_factory):
    """Three products, created oldest first."""
    return [
        await product_factory(name="Sample Phone"),
        await product_factory(name="Sample Novel", price=12.5, category="Books"),
        await product_factory(name="Sample Kettle", category="Home & Kitchen", status="Inactive"),
    ]
