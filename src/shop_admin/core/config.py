import os

# Loaded once at import; override through the environment.
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./shop_admin.sqlite3")

SECRET_KEY: str = os.getenv(
    "SECRET_KEY", "your-secret-key-for-jwt-!ChangeMe!"
)
ALGORITHM: str = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

# How /analytics/dashboard treats the `range` keyword:
#   "strict"     - unknown keywords are rejected with a 422
#   "permissive" - unknown keywords silently fall back to "today"
ANALYTICS_RANGE_POLICY: str = os.getenv("ANALYTICS_RANGE_POLICY", "strict").lower()

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
# Comma separated logger namespaces to let through, e.g. "shop_admin.features.analytics".
# Empty means everything under "shop_admin" is logged.
LOG_NAMESPACES: list[str] = [
    ns.strip() for ns in os.getenv("LOG_NAMESPACES", "").split(",") if ns.strip()
]
