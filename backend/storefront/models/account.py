"""
Pydantic models for public.accounts (Supabase).

Rows are read as stored: the table is edited outside this API too, so nulls and
collector levels the admin form no longer offers must not break a listing page.
Write-side rules live on the request schemas.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

Category = Literal["mobile_legend", "pubg"]


class AccountBase(BaseModel):
    title: str = ""
    description: str = ""
    price: float = 0
    discount: float | None = None
    skins: int = 0
    collector_level: str | None = None
    category: str = "mobile_legend"
    images: list[str] = []

    @field_validator("title", "description", mode="before")
    @classmethod
    def text_or_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("price", "skins", mode="before")
    @classmethod
    def number_or_zero(cls, v: Any) -> Any:
        return 0 if v is None or v == "" else v

    @field_validator("collector_level", mode="before")
    @classmethod
    def blank_level(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, v: Any) -> Any:
        return v or "mobile_legend"

    @field_validator("images", mode="before")
    @classmethod
    def images_list(cls, v: Any) -> list[str]:
        return v or []


class AccountInDB(AccountBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    is_sold: bool = False
    sold_at: datetime | None = None
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, v: Any) -> str:
        return str(v)

    @field_validator("is_sold", mode="before")
    @classmethod
    def sold_flag(cls, v: Any) -> bool:
        return bool(v)


class Account(AccountInDB):
    pass
