"""
Application configuration from environment variables.
Settings class using pydantic-settings with optional validation.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from backend root so it loads when running from backend/ or project root
_BACKEND_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _BACKEND_ROOT / ".env"


class Settings(BaseSettings):
    """
    Application settings loaded from environment and .env.
    Supabase URL and keys are required; everything else has a local-dev default.
    """

    # Supabase
    SUPABASE_URL: str
    SUPABASE_ANON_KEY: str
    SUPABASE_SERVICE_KEY: str = ""
    # When set, bearer tokens are verified locally instead of via auth.get_user
    SUPABASE_JWT_SECRET: str = ""

    # Shared secret for the privileged accounts insert endpoint
    ADMIN_API_SECRET: str = ""

    # Application
    ENVIRONMENT: str = "development"
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated origins or JSON array",
        validation_alias="CORS_ORIGINS",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def normalize_cors_origins(cls, v: object) -> str:
        """Ensure we always have a string (avoid empty env causing json.loads in pydantic-settings)."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return "http://localhost:3000"
        if isinstance(v, list):
            return ",".join(str(x).strip() for x in v if str(x).strip())
        return str(v).strip()

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Storage buckets
    accounts_bucket: str = Field(
        default="accounts-images",
        description="Bucket holding account listing images",
        validation_alias="ACCOUNTS_BUCKET",
    )
    ads_bucket: str = Field(
        default="ads-images",
        description="Bucket holding ad banner images",
        validation_alias="ADS_BUCKET",
    )
    max_image_bytes: int = Field(
        default=5 * 1024 * 1024,
        description="Upper bound for a single uploaded image",
        validation_alias="MAX_IMAGE_BYTES",
    )

    # Listing lifecycle
    deletion_grace_hours: int = Field(
        default=24,
        description="Hours a listing marked for deletion can still be restored",
        validation_alias="DELETION_GRACE_HOURS",
    )

    # Pagination defaults (public catalogue / admin tables)
    catalog_page_size: int = Field(default=12, validation_alias="CATALOG_PAGE_SIZE")
    admin_page_size: int = Field(default=10, validation_alias="ADMIN_PAGE_SIZE")

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS_ORIGINS from comma-separated or JSON array string."""
        raw = (self.cors_origins or "").strip()
        if not raw:
            return ["http://localhost:3000"]
        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
                if isinstance(parsed, list):
                    return [x.strip() for x in parsed if isinstance(x, str) and x.strip()]
            except ValueError:
                pass
        return [x.strip() for x in raw.split(",") if x.strip()] or ["http://localhost:3000"]

    @property
    def has_service_role(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_SERVICE_KEY)

    def validate_for_production(self) -> None:
        """
        Call to validate that required env vars are set (e.g. on startup in production).
        Raises ValueError with missing keys.
        """
        missing: List[str] = []
        if not self.SUPABASE_URL:
            missing.append("SUPABASE_URL")
        if not self.SUPABASE_ANON_KEY:
            missing.append("SUPABASE_ANON_KEY")
        if not self.SUPABASE_SERVICE_KEY:
            missing.append("SUPABASE_SERVICE_KEY")
        if not self.ADMIN_API_SECRET:
            missing.append("ADMIN_API_SECRET")
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
