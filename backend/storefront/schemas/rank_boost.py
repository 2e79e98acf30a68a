"""
Rank boost schemas (API contract).
"""

import re
from typing import Any

from pydantic import BaseModel, Field, field_validator

from storefront.models.rank_boost import RankBoostInDB

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def coerce_price(v: Any) -> int:
    """Leading integer of the submitted value; anything unparseable becomes 0."""
    if v is None or isinstance(v, bool):
        return 0
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return int(v)
    match = _LEADING_INT.match(str(v))
    return int(match.group(1)) if match else 0


class RankBoostCreate(BaseModel):
    """Request body for creating or replacing a rank boost."""
    title: str = Field(..., min_length=1)
    price: int = 0

    @field_validator("price", mode="before")
    @classmethod
    def parse_price(cls, v: Any) -> int:
        return coerce_price(v)


class RankBoostResponse(RankBoostInDB):
    pass


class RankBoostListResponse(BaseModel):
    rank_boosts: list[RankBoostResponse]
