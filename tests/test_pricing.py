"""Tests for event pricing."""

from datetime import datetime
from decimal import Decimal

import pytest

from src.datamodels import Event
from src.datamodels import EventStatus
from src.datamodels import Location
from src.datamodels import Menu
from src.datamodels import MenuItem
from src.datamodels import MenuSection
from src.datamodels import PricingConfig
from src.pricing import InvalidPricingInputError
from src.pricing import compute_pricing
from src.pricing import price_event
from src.pricing import round2

DEFAULT_CONFIG = PricingConfig(service_fee_rate=Decimal("0.135"), discount_rate=Decimal("0.2"))


def make_event(price, participants_quantity: int) -> Event:
    """Create a draft event without derived pricing."""
    return Event(
        id="clx9a8b7c6d5e4f3",
        title="Aniversário",
        date=datetime(2026, 10, 19, 20, 0),
        price=price,
        participants_quantity=participants_quantity,
        location=Location(id="loc-1", name="Gazebo", parent=Location(id="loc-0", name="Rudä")),
        menu=Menu(
            title="Menu",
            sections=[MenuSection(title="Bebidas", items=[MenuItem(name="Água")])],
            price_with_alcohol=Decimal("150"),
            price_without_alcohol=Decimal("100"),
        ),
    )


def test_compute_pricing_reference_values():
    """Test the reference price of 50 for 10 participants."""
    outputs = compute_pricing(50, 10, DEFAULT_CONFIG)

    assert outputs.price_with_service_fee == Decimal("56.75")
    assert outputs.total == Decimal("500.00")
    assert outputs.total_with_service_fee == Decimal("567.50")
    assert outputs.total_with_service_fee_and_discount == Decimal("454.00")


def test_compute_pricing_uses_configured_rates_by_default():
    """Test the configured 13.5% fee and 20% discount apply when no config is given."""
    assert compute_pricing(50, 10) == compute_pricing(50, 10, DEFAULT_CONFIG)


def test_compute_pricing_zero_participants():
    """Test totals are zero while the per-person price still carries the fee."""
    outputs = compute_pricing(50, 0, DEFAULT_CONFIG)

    assert outputs.price_with_service_fee == Decimal("56.75")
    assert outputs.total == Decimal("0.00")
    assert outputs.total_with_service_fee == Decimal("0.00")
    assert outputs.total_with_service_fee_and_discount == Decimal("0.00")


def test_compute_pricing_rounds_each_total_from_raw_inputs():
    """Test totals are not compounded from previously rounded totals."""
    outputs = compute_pricing(Decimal("0.125"), 1, DEFAULT_CONFIG)

    assert outputs.total == Decimal("0.13")
    assert outputs.total_with_service_fee == Decimal("0.14")
    assert round2(outputs.total * Decimal("1.135")) == Decimal("0.15")


@pytest.mark.parametrize(
    "value,expected",
    [
        (Decimal("0.005"), Decimal("0.01")),
        (Decimal("0.004"), Decimal("0.00")),
        (Decimal("2.675"), Decimal("2.68")),
        (Decimal("-2.675"), Decimal("-2.68")),
    ],
)
def test_round2_rounds_half_away_from_zero(value: Decimal, expected: Decimal):
    """Test cents rounding uses round half away from zero."""
    assert round2(value) == expected


def test_compute_pricing_float_input_is_exact():
    """Test float prices are priced by their decimal value."""
    outputs = compute_pricing(1.005, 1, PricingConfig(service_fee_rate=Decimal("0"), discount_rate=Decimal("0")))

    assert outputs.total == Decimal("1.01")


def test_compute_pricing_alternate_rates():
    """Test rates can be injected through the config."""
    config = PricingConfig(service_fee_rate=Decimal("0.1"), discount_rate=Decimal("0.5"))

    outputs = compute_pricing("200", 3, config)

    assert outputs.price_with_service_fee == Decimal("220.00")
    assert outputs.total == Decimal("600.00")
    assert outputs.total_with_service_fee == Decimal("660.00")
    assert outputs.total_with_service_fee_and_discount == Decimal("330.00")


@pytest.mark.parametrize(
    "unit_price,participants_quantity",
    [
        (-1, 10),
        (Decimal("-0.01"), 10),
        (50, -1),
        (50, 2.5),
        (50, True),
        (True, 10),
        (float("nan"), 10),
        (float("inf"), 10),
        ("abc", 10),
        (None, 10),
    ],
)
def test_compute_pricing_rejects_invalid_input(unit_price, participants_quantity):
    """Test malformed or negative inputs are rejected before computing."""
    with pytest.raises(InvalidPricingInputError):
        compute_pricing(unit_price, participants_quantity, DEFAULT_CONFIG)


def test_compute_pricing_serializes_with_camel_case_keys():
    """Test outputs serialize to the persisted field names."""
    outputs = compute_pricing(50, 10, DEFAULT_CONFIG)

    assert outputs.model_dump(mode="json", by_alias=True) == {
        "priceWithServiceFee": 56.75,
        "total": 500.0,
        "totalWithServiceFee": 567.5,
        "totalWithServiceFeeAndDiscount": 454.0,
    }


def test_price_event_recomputes_all_fields():
    """Test pricing an event fills the rates and all four derived amounts."""
    event = make_event(Decimal("50.004"), 10)

    priced = price_event(event, DEFAULT_CONFIG)

    assert priced.price == Decimal("50.00")
    assert priced.service_fee == Decimal("0.135")
    assert priced.discount == Decimal("0.2")
    assert priced.price_with_service_fee == Decimal("56.75")
    assert priced.total == Decimal("500.04")
    assert priced.total_with_service_fee == Decimal("567.55")
    assert priced.total_with_service_fee_and_discount == Decimal("454.04")
    assert priced.status is EventStatus.DRAFT
    assert event.total is None


def test_price_event_after_participants_change():
    """Test an update to the participant count refreshes every total."""
    priced = price_event(make_event(Decimal("50"), 10), DEFAULT_CONFIG)
    updated = priced.model_copy(update={"participants_quantity": 20})

    repriced = price_event(updated, DEFAULT_CONFIG)

    assert repriced.total == Decimal("1000.00")
    assert repriced.total_with_service_fee == Decimal("1135.00")
    assert repriced.total_with_service_fee_and_discount == Decimal("908.00")
