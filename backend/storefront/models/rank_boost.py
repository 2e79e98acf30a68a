"""
Pydantic models for public.rank_boost (Supabase).
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class RankBoostBase(BaseModel):
    title: str
    price: int = 0


class RankBoostInDB(RankBoostBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, v: Any) -> str:
        return str(v)


class RankBoost(RankBoostInDB):
    pass
