"""
Pydantic models for public.ads (Supabase).
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class AdBase(BaseModel):
    title: str | None = None
    image_url: str
    link: str | None = None
    order_index: int
    is_active: bool = True


class AdInDB(AdBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, v: Any) -> str:
        return str(v)


class Ad(AdInDB):
    pass
