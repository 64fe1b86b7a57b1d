from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class QuoteStatus(str, Enum):
    PENDING = "pending"
    REVISED = "revised"
    READY = "ready"
    PLACED = "placed"
    DECLINED = "declined"
    EXPIRED = "expired"


class Quote(BaseModel):
    id: str
    seller: Optional[str] = None
    organization: Optional[str] = None
    cost_center: Optional[str] = None
    reference_name: Optional[str] = None
    creator_email: Optional[str] = None
    status: Optional[str] = None
    creation_date: Optional[str] = None

    # Business fields this service does not interpret are kept as-is
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "allow"


class EnrichedQuote(Quote):
    organization_name: Optional[str] = None
    cost_center_name: Optional[str] = None


class Pagination(BaseModel):
    page: int = 1
    page_size: int = 25
    total: int = 0

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class QuoteListResponse(BaseModel):
    data: List[EnrichedQuote] = Field(default_factory=list)
    pagination: Pagination
