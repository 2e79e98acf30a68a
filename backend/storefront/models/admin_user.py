"""
Pydantic models for public.admin_users (Supabase). Only read by the legacy login endpoint.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class AdminUserBase(BaseModel):
    email: str


class AdminUserInDB(AdminUserBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    password_hash: str
    created_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, v: Any) -> str:
        return str(v)


class AdminUser(AdminUserInDB):
    pass
