# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven.
Single source of truth for every tunable parameter.
"""

import os


def _parse_pairs(raw: str, cast) -> dict:
    """Parse ``"name:value,name:value"`` into a dict, skipping malformed pairs."""
    result: dict = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" in pair:
            key, value = pair.split(":", 1)
            result[key.strip()] = cast(value.strip())
    return result


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "membership-service")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8005"))

    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./membership.db")
    POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
    MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "5"))
    POOL_RECYCLE: int = int(os.getenv("DB_POOL_RECYCLE", "300"))

    # Package policy
    PACKAGE_DURATIONS: dict[str, int] = _parse_pairs(
        os.getenv("PACKAGE_DURATIONS", "trial:7,basic:30,premium:90,elite:365"), int
    )
    PACKAGE_PRICES: dict[str, float] = _parse_pairs(
        os.getenv("PACKAGE_PRICES", "trial:500,basic:2000,premium:5000,elite:15000"), float
    )
    DEFAULT_PACKAGE_DAYS: int = int(os.getenv("DEFAULT_PACKAGE_DAYS", "30"))
    EXPIRING_SOON_DAYS: int = int(os.getenv("EXPIRING_SOON_DAYS", "7"))

    # Demo accounts and members for a fresh database
    SEED_DEMO_DATA: bool = (
        os.getenv("SEED_DEMO_DATA", "false").lower() == "true"
    )

    # Pagination
    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
    MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "100"))

    # Identity headers forwarded by the gateway
    ACTOR_ID_HEADER: str = os.getenv("ACTOR_ID_HEADER", "X-User-Id")
    ACTOR_ROLE_HEADER: str = os.getenv("ACTOR_ROLE_HEADER", "X-User-Role")

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
