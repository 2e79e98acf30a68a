"""Storefront page payloads (home, constants)."""

from pydantic import BaseModel

from storefront.schemas.account import AccountResponse
from storefront.schemas.ad import AdResponse


class HomeResponse(BaseModel):
    ads: list[AdResponse]
    accounts: list[AccountResponse]


class CatalogConstantsResponse(BaseModel):
    collector_levels: list[str]
    categories: dict[str, str]
    contact_links: dict[str, str]
