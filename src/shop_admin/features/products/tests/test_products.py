import pytest
from fastapi import status

from shop_admin.features.products.models import Product

API = "/api/v1/products"


@pytest.mark.asyncio
async def test_create_product_as_admin(admin_client, admin_user):
    response = await admin_client.post(
        f"{API}/",
        json={"name": "Headphones", "price": 80.0, "discount": 25, "stock": 12, "category": "Electronics"},
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()["data"]
    assert data["name"] == "Headphones"
    assert data["discountedPrice"] == pytest.approx(60.0)
    assert data["status"] == "Active"
    assert data["image"] == "no-photo.jpg"

    product = await Product.get(public_id=data["publicId"]).prefetch_related("created_by")
    assert product.created_by.id == admin_user.id


@pytest.mark.asyncio
async def test_create_product_requires_admin(user_client):
    response = await user_client.post(
        f"{API}/", json={"name": "Headphones", "price": 80.0, "stock": 12, "category": "Electronics"}
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_create_product_rejects_unknown_category(admin_client):
    response = await admin_client.post(
        f"{API}/", json={"name": "Headphones", "price": 80.0, "stock": 12, "category": "Gadgets"}
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert list(response.json()["errors"][0]) == ["category"]


@pytest.mark.asyncio
async def test_list_products_newest_first(client, sample_products):
    response = await client.get(f"{API}/")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["total"] == 3
    assert body["count"] == 3
    assert [p["name"] for p in body["data"]] == ["Sample Kettle", "Sample Novel", "Sample Phone"]


@pytest.mark.asyncio
async def test_list_products_pagination(client, sample_products):
    response = await client.get(f"{API}/", params={"page": 2, "limit": 2})

    body = response.json()
    assert body["page"] == 2
    assert body["total"] == 3
    assert [p["name"] for p in body["data"]] == ["Sample Phone"]


@pytest.mark.asyncio
async def test_list_products_filters(client, sample_products):
    by_category = await client.get(f"{API}/", params={"category": "Books"})
    by_status = await client.get(f"{API}/", params={"status": "Inactive"})

    assert [p["name"] for p in by_category.json()["data"]] == ["Sample Novel"]
    assert [p["name"] for p in by_status.json()["data"]] == ["Sample Kettle"]


@pytest.mark.asyncio
async def test_get_product(client, sample_products):
    novel = sample_products[1]

    response = await client.get(f"{API}/{novel.public_id}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["price"] == pytest.approx(12.5)


@pytest.mark.asyncio
async def test_get_missing_product(client):
    response = await client.get(f"{API}/does-not-exist")
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_update_product(admin_client, sample_products):
    phone = sample_products[0]

    response = await admin_client.put(f"{API}/{phone.public_id}", json={"stock": 0, "status": "Inactive"})

    assert response.status_code == status.HTTP_200_OK
    await phone.refresh_from_db()
    assert phone.stock == 0
    assert phone.status == "Inactive"
    assert phone.name == "Sample Phone"


@pytest.mark.asyncio
async def test_update_product_without_fields(admin_client, sample_products):
    response = await admin_client.put(f"{API}/{sample_products[0].public_id}", json={})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_delete_product(admin_client, sample_products):
    phone = sample_products[0]

    response = await admin_client.delete(f"{API}/{phone.public_id}")

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert not await Product.filter(public_id=phone.public_id).exists()
