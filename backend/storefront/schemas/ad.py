"""Ad banner schemas (API contract)."""

from pydantic import BaseModel

from storefront.models.ad import AdInDB


class AdResponse(AdInDB):
    pass


class AdListResponse(BaseModel):
    ads: list[AdResponse]
