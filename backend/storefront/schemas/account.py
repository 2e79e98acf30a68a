"""
Account listing schemas (API contract). Kept in sync with frontend account card / admin table.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from storefront.core.constants import COLLECTOR_LEVELS
from storefront.models.account import AccountBase, AccountInDB, Category
from storefront.services.account_lifecycle import ListingState, TimeRemaining


class AccountCreate(AccountBase):
    """Request body for creating a listing from the admin form."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "title": "Mythic account, 320 skins",
                    "description": "All heroes, 12 collector skins",
                    "price": 10000,
                    "skins": 320,
                    "collector_level": "Mega Collector",
                    "category": "mobile_legend",
                    "images": [],
                }
            ]
        }
    )

    title: str
    price: float = Field(..., ge=0)
    skins: int = Field(0, ge=0)
    category: Category = "mobile_legend"

    @field_validator("collector_level")
    @classmethod
    def known_collector_level(cls, v: str | None) -> str | None:
        if v is not None and v not in COLLECTOR_LEVELS:
            raise ValueError(f"Unknown collector level: {v}")
        return v


class AccountUpdate(BaseModel):
    """Request body for partial update. Refused while the listing is pending deletion."""
    title: str | None = None
    description: str | None = None
    price: float | None = Field(None, ge=0)
    discount: float | None = None
    skins: int | None = Field(None, ge=0)
    collector_level: str | None = None
    category: Category | None = None
    images: list[str] | None = None

    @field_validator("collector_level")
    @classmethod
    def known_collector_level(cls, v: str | None) -> str | None:
        if v and v not in COLLECTOR_LEVELS:
            raise ValueError(f"Unknown collector level: {v}")
        return v

    def to_row(self) -> dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        if data.get("collector_level") == "":
            data["collector_level"] = None
        return data


class AccountResponse(AccountInDB):
    """Public listing; sold and pending-deletion rows both show as sold out."""

    @computed_field
    @property
    def final_price(self) -> float:
        if self.discount:
            return self.price - (self.price * self.discount) / 100
        return self.price


class AdminAccountResponse(AccountResponse):
    """Admin table row with deletion countdown."""
    state: ListingState
    time_remaining: TimeRemaining | None = None


class ImageUploadResponse(BaseModel):
    urls: list[str]


class LegacyAccountInsertRequest(BaseModel):
    """Body of POST /api/admin/accounts."""
    account: dict[str, Any] | list[dict[str, Any]] | None = None


class LegacyAccountInsertResponse(BaseModel):
    ok: bool = True
    data: Any = None
