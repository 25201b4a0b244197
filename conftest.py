"""
Root conftest for the pytest test suite.

This file contains the main fixtures that are used across the entire test suite.

Each test runs against a fresh in-memory SQLite database whose schema is
created by the autouse `initialize_test_db` fixture, seeded with one admin
and one regular user. HTTP tests talk to the app through an httpx
AsyncClient over ASGITransport, in the same event loop as the database.

Key Fixtures:
- `anyio_backend`: Specifies the asyncio backend.
- `initialize_test_db`: (autouse) Creates a fresh DB schema and seed users for each test.
- `app_for_testing`: The FastAPI application, with dependency overrides cleared afterwards.
- `client`: A non-authenticated AsyncClient.
- `admin_client`: An AsyncClient authenticated as the seeded admin.
- `user_client`: An AsyncClient authenticated as the seeded regular user.
- `admin_user` / `regular_user`: The seeded User rows.
"""

from typing import Any, AsyncGenerator, Generator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from tortoise import Tortoise

from shop_admin.features.auth.models import User
from shop_admin.features.auth.security import get_password_hash
from shop_admin.main import MODEL_MODULES, app as actual_app

ADMIN_MOBILE = "9000000001"
ADMIN_PASSWORD = "adminpassword123"
USER_MOBILE = "9000000002"
USER_PASSWORD = "userpassword123"


async def add_admin_user() -> User:
    return await User.create(
        full_name="Admin Fixture",
        mobile_number=ADMIN_MOBILE,
        hashed_password=get_password_hash(ADMIN_PASSWORD),
        role="admin",
    )


async def add_regular_user() -> User:
    return await User.create(
        full_name="User Fixture",
        mobile_number=USER_MOBILE,
        hashed_password=get_password_hash(USER_PASSWORD),
        role="user",
    )


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest_asyncio.fixture(scope="function", autouse=True)
async def initialize_test_db() -> AsyncGenerator[None, None]:
    """
    Initializes the database for each test function.

    This async, autouse fixture creates a fresh in-memory database and schema
    for each test and tears it down afterwards.
    """
    test_db_config = {
        "connections": {"default": "sqlite://:memory:"},
        "apps": {
            "models": {
                "models": MODEL_MODULES,
                "default_connection": "default",
            }
        },
        "use_tz": True,
        "timezone": "UTC",
    }
    await Tortoise.init(config=test_db_config)
    await Tortoise.generate_schemas()
    await add_admin_user()
    await add_regular_user()

    yield

    await Tortoise.close_connections()


@pytest.fixture(scope="function")
def app_for_testing() -> Generator[FastAPI, Any, None]:
    """
    Provides the FastAPI application. ASGITransport does not run the
    lifespan, so the production database is never touched; overrides a
    test installs (clock, range policy) are removed afterwards.
    """
    yield actual_app
    actual_app.dependency_overrides.clear()


def _async_client(app: FastAPI) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


async def _login(client: httpx.AsyncClient, mobile_number: str, password: str) -> str:
    response = await client.post(
        "/api/v1/auth/token",
        data={"username": mobile_number, "password": password},
    )
    if response.status_code != 200:
        raise Exception(f"Authentication failed for {mobile_number}: {response.text}")
    return response.json()["access_token"]


@pytest_asyncio.fixture(scope="function")
async def client(app_for_testing: FastAPI) -> AsyncGenerator[httpx.AsyncClient, Any]:
    async with _async_client(app_for_testing) as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def admin_client(app_for_testing: FastAPI) -> AsyncGenerator[httpx.AsyncClient, Any]:
    async with _async_client(app_for_testing) as ac:
        token = await _login(ac, ADMIN_MOBILE, ADMIN_PASSWORD)
        ac.headers["Authorization"] = f"Bearer {token}"
        yield ac


@pytest_asyncio.fixture(scope="function")
async def user_client(app_for_testing: FastAPI) -> AsyncGenerator[httpx.AsyncClient, Any]:
    async with _async_client(app_for_testing) as ac:
        token = await _login(ac, USER_MOBILE, USER_PASSWORD)
        ac.headers["Authorization"] = f"Bearer {token}"
        yield ac


@pytest_asyncio.fixture(scope="function")
async def admin_user() -> User:
    return await User.get(mobile_number=ADMIN_MOBILE)


@pytest_asyncio.fixture(scope="function")
async def regular_user() -> User:
    return await User.get(mobile_number=USER_MOBILE)
