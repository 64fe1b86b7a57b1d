from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

QUOTE_CREATED_TEMPLATE = "quote-created"
QUOTE_UPDATED_TEMPLATE = "quote-updated"


class QuoteUpdate(BaseModel):
    email: str
    status: str
    note: Optional[str] = ""


class QuoteCreatedEvent(BaseModel):
    name: str
    id: str
    organization: str
    cost_center: str = Field(..., alias="costCenter")
    last_update: QuoteUpdate = Field(..., alias="lastUpdate")

    class Config:
        populate_by_name = True


class QuoteUpdatedEvent(BaseModel):
    users: List[str]
    name: str
    id: str
    organization: str
    cost_center: str = Field(..., alias="costCenter")
    last_update: QuoteUpdate = Field(..., alias="lastUpdate")
    template_name: str = Field(QUOTE_UPDATED_TEMPLATE, alias="templateName")
    order_id: Optional[str] = Field(None, alias="orderId")

    class Config:
        populate_by_name = True


class NotificationPayload(BaseModel):
    """Resolved quote view handed to the mail template."""
    id: str
    name: str
    organization: str
    cost_center: str = Field(..., serialization_alias="costCenter")
    link: str
    last_update: QuoteUpdate = Field(..., serialization_alias="lastUpdate")
    order_id: Optional[str] = Field(None, serialization_alias="orderId")


class NotificationStatus(str, Enum):
    SENT = "sent"
    ABANDONED = "abandoned"
    FAILED = "failed"


class NotificationOutcome(BaseModel):
    status: NotificationStatus
    count: int = 0
    reason: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != NotificationStatus.FAILED

    @classmethod
    def sent(cls, count: int) -> "NotificationOutcome":
        return cls(status=NotificationStatus.SENT, count=count)

    @classmethod
    def abandoned(cls, reason: str) -> "NotificationOutcome":
        return cls(status=NotificationStatus.ABANDONED, reason=reason)

    @classmethod
    def failed(cls, error: Exception) -> "NotificationOutcome":
        return cls(status=NotificationStatus.FAILED, error=str(error))
