"""Data models for menus, event pricing and service orders."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_serializer
from pydantic.alias_generators import to_camel

from src.config import DISCOUNT_RATE
from src.config import SERVICE_FEE_RATE


class _FrozenModel(BaseModel):
    """Immutable model persisted with camelCase keys."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class MenuItem(_FrozenModel):
    """A single dish or beverage. Beverages carry no description."""

    name: str = Field(..., min_length=1)
    description: str | None = None


class MenuSection(_FrozenModel):
    """A named group of menu items, in document order."""

    title: str
    items: tuple[MenuItem, ...] = ()


class Menu(_FrozenModel):
    """Structured menu extracted from an uploaded document."""

    title: str
    sections: tuple[MenuSection, ...] = Field(..., min_length=1)
    price_with_alcohol: Decimal = Field(..., gt=0)
    price_without_alcohol: Decimal = Field(..., gt=0)

    @field_serializer("price_with_alcohol", "price_without_alcohol", when_used="json")
    def _serialize_price(self, value: Decimal) -> float:
        return float(value)


class PricingConfig(_FrozenModel):
    """Rates applied by the pricing calculator."""

    service_fee_rate: Decimal = Field(default=SERVICE_FEE_RATE, ge=0, le=1)
    discount_rate: Decimal = Field(default=DISCOUNT_RATE, ge=0, le=1)


class PricingOutputs(_FrozenModel):
    """Monetary fields derived from a unit price and a participant count."""

    price_with_service_fee: Decimal
    total: Decimal
    total_with_service_fee: Decimal
    total_with_service_fee_and_discount: Decimal

    @field_serializer(
        "price_with_service_fee",
        "total",
        "total_with_service_fee",
        "total_with_service_fee_and_discount",
        when_used="json",
    )
    def _serialize_amount(self, value: Decimal) -> float:
        return float(value)


class Location(_FrozenModel):
    """A restaurant, or a room inside one when it has a parent."""

    id: str
    name: str
    parent: "Location | None" = None


class Person(_FrozenModel):
    id: str
    name: str | None = None


class EventStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class Event(_FrozenModel):
    """A private dining booking with its menu and derived pricing."""

    id: str
    title: str | None = None
    description: str | None = None
    date: datetime
    status: EventStatus = EventStatus.DRAFT
    price: Decimal = Field(..., ge=0)
    participants_quantity: int = Field(..., ge=0)
    service_fee: Decimal | None = None
    discount: Decimal | None = None
    price_with_service_fee: Decimal | None = None
    total: Decimal | None = None
    total_with_service_fee: Decimal | None = None
    total_with_service_fee_and_discount: Decimal | None = None
    location: Location
    responsible_person: Person | None = None
    user: Person | None = None
    menu: Menu
