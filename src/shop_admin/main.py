import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from tortoise import Tortoise

from .core.config import DATABASE_URL
from .core.errors import register_exception_handlers
from .core.logging_config import configure_logging
from .features.analytics.router import router as analytics_router
from .features.auth.router import router as auth_router
from .features.products.router import router as products_router

configure_logging()
logger = logging.getLogger(__name__)

MODEL_MODULES = [
    "shop_admin.features.auth.models",
    "shop_admin.features.products.models",
    "shop_admin.features.orders.models",
    "aerich.models",  # For Aerich migrations
]

TORTOISE_ORM_CONFIG = {
    "connections": {"default": DATABASE_URL},
    "apps": {
        "models": {
            "models": MODEL_MODULES,
            "default_connection": "default",
        }
    },
    # Reports bucket by UTC calendar day
    "use_tz": True,
    "timezone": "UTC",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles startup and shutdown events, such as connecting to the database.
    """
    logger.info("Starting application...")
    await Tortoise.init(config=TORTOISE_ORM_CONFIG)
    logger.info("Tortoise-ORM has been initialized.")

    yield

    await Tortoise.close_connections()
    logger.info("Tortoise-ORM connections have been closed.")


app = FastAPI(
    title="Shop Admin API",
    description="Authentication, product catalog and admin analytics for the storefront.",
    version="1.0.0",
    lifespan=lifespan,
)
register_exception_handlers(app)


@app.get("/")
async def read_root(request: Request):
    """
    Root endpoint for the API.
    """
    client_host = request.client.host if request.client else "unknown client"
    logger.info(f"Root endpoint '/' accessed by {client_host}")
    return {"success": True, "message": "Welcome to the Shop Admin API", "version": app.version}


app.include_router(auth_router, prefix="/api/v1")
app.include_router(products_router, prefix="/api/v1")
app.include_router(analytics_router, prefix="/api/v1")
