"""
Reorder service configuration — all environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
"""

from __future__ import annotations

import os

from reorder_engine.kernel.types import POLICIES, SHIFT, SWAP


class Settings:
    """Application settings from environment variables."""

    # Storage: "postgres", or "memory" for the seeded in-process mock backend
    STORE_BACKEND: str = os.environ.get("STORE_BACKEND", "postgres")

    # Database
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "")
    DB_POOL_MIN_SIZE: int = int(os.environ.get("DB_POOL_MIN_SIZE", "2"))
    DB_POOL_MAX_SIZE: int = int(os.environ.get("DB_POOL_MAX_SIZE", "20"))

    # Reconciliation policy per screen. The question order screen swaps,
    # the section order screen shifts.
    QUESTION_ORDER_POLICY: str = os.environ.get("QUESTION_ORDER_POLICY", SWAP)
    SECTION_ORDER_POLICY: str = os.environ.get("SECTION_ORDER_POLICY", SHIFT)

    # HTTP client (HttpOrderStore)
    HTTP_TIMEOUT_SECONDS: float = float(os.environ.get("HTTP_TIMEOUT_SECONDS", "30"))

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    @property
    def SCREEN_POLICIES(self) -> dict[str, str]:
        return {
            "question_order": self.QUESTION_ORDER_POLICY,
            "section_order": self.SECTION_ORDER_POLICY,
        }

    def policy_for(self, screen: str | None) -> str:
        """Reconciliation policy for a screen. Unknown screens use the question order policy."""
        return self.SCREEN_POLICIES.get(screen or "", self.QUESTION_ORDER_POLICY)

    @property
    def MIGRATION_DATABASE_URL(self) -> str:
        """DATABASE_URL in the form sync SQLAlchemy (alembic) connects with."""
        return sync_database_url(self.DATABASE_URL)


def sync_database_url(url: str) -> str:
    """Rewrite a postgres URL for the psycopg driver. Other URLs pass through unchanged."""
    for prefix in ("postgres://", "postgresql://", "postgresql+asyncpg://"):
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix) :]
    return url


# Singleton instance
settings = Settings()

# Validate required settings (skip in test mode)
_testing = os.environ.get("TESTING", "").lower() == "true"

for _name in ("QUESTION_ORDER_POLICY", "SECTION_ORDER_POLICY"):
    if getattr(settings, _name) not in POLICIES:
        raise RuntimeError(f"{_name} must be one of {sorted(POLICIES)}")

if settings.STORE_BACKEND not in ("postgres", "memory"):
    raise RuntimeError("STORE_BACKEND must be 'postgres' or 'memory'")

if not _testing:
    if settings.STORE_BACKEND == "postgres" and not settings.DATABASE_URL:
        raise RuntimeError("DATABASE_URL environment variable is required")
