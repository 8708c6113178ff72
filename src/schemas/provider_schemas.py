"""Provider records as stored and returned by the directory."""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ACTIVE_STATUS = "active"


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Tier(str, Enum):
    """Priority tier a provider is retrieved in."""

    ACTIVE = "active"
    OTHER = "other"


class NoMonetization(CamelModel):
    """Provider holds neither a subscription nor a one-time order."""

    kind: Literal["none"] = "none"

    @property
    def is_active(self) -> bool:
        return False


class Subscription(CamelModel):
    """Recurring paid subscription."""

    kind: Literal["subscription"] = "subscription"
    subscription_id: str
    subscription_type: str | None = None
    status: str

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE_STATUS


class OneTimeOrder(CamelModel):
    """One-time purchase order."""

    kind: Literal["order"] = "order"
    order_id: str
    status: str

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE_STATUS


MonetizationState = Annotated[
    Union[NoMonetization, Subscription, OneTimeOrder],
    Field(discriminator="kind"),
]


class Review(CamelModel):
    """A single review left on a provider."""

    reviewer_name: str
    rating: float = Field(ge=0, le=5)
    comment: str
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Provider(CamelModel):
    """A listed service/business."""

    unique_id: str
    service_name: str | None = None
    owner_name: str | None = None
    phone: str | None = None
    personal_email: str | None = None
    about: str | None = None
    address: str | None = None
    service_url: str | None = None
    business_name: str | None = None
    business_emails: list[str] = []
    business_phone_numbers: list[str] = []
    business_location: str | None = None

    service_types: list[str] = []
    service_area_pincodes: list[str] = []
    visible_status: bool = False
    monetization: MonetizationState = Field(default_factory=NoMonetization)

    rating: float = Field(default=0, ge=0, le=5)
    reviews_count: int = Field(default=0, ge=0)
    reviews: list[Review] = []

    # Incremented by the repository on every write
    version: int = 0

    @property
    def is_active(self) -> bool:
        """Whether the provider currently holds an active subscription or order."""
        return self.monetization.is_active

    @property
    def tier(self) -> Tier:
        return Tier.ACTIVE if self.is_active else Tier.OTHER
