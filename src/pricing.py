"""Event pricing: service fee, totals and the discounted minimum payment."""

from decimal import ROUND_HALF_UP
from decimal import Decimal
from decimal import InvalidOperation

from src.datamodels import Event
from src.datamodels import PricingConfig
from src.datamodels import PricingOutputs

CENTS = Decimal("0.01")


class InvalidPricingInputError(ValueError):
    """Raised when a unit price or participant count cannot be priced."""


def round2(value: Decimal) -> Decimal:
    """Round to cents, halves away from zero."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _to_decimal(unit_price) -> Decimal:
    if isinstance(unit_price, bool):
        raise InvalidPricingInputError(f"Unit price must be a number, got {unit_price!r}")
    if isinstance(unit_price, Decimal):
        value = unit_price
    elif isinstance(unit_price, (int, float, str)):
        try:
            # str() keeps floats at their shortest repr (50.1, not 50.0999...)
            value = Decimal(str(unit_price))
        except InvalidOperation as e:
            raise InvalidPricingInputError(f"Unit price must be a number, got {unit_price!r}") from e
    else:
        raise InvalidPricingInputError(f"Unit price must be a number, got {unit_price!r}")

    if not value.is_finite():
        raise InvalidPricingInputError(f"Unit price must be finite, got {unit_price!r}")
    if value < 0:
        raise InvalidPricingInputError(f"Unit price cannot be negative, got {unit_price!r}")
    return value


def _validate_participants(participants_quantity) -> int:
    if isinstance(participants_quantity, bool) or not isinstance(participants_quantity, int):
        raise InvalidPricingInputError(
            f"Participants quantity must be an integer, got {participants_quantity!r}"
        )
    if participants_quantity < 0:
        raise InvalidPricingInputError(
            f"Participants quantity cannot be negative, got {participants_quantity}"
        )
    return participants_quantity


def compute_pricing(
    unit_price: Decimal | float | int | str,
    participants_quantity: int,
    config: PricingConfig | None = None,
) -> PricingOutputs:
    """Compute the derived monetary fields of an event.

    Every output is rounded once, from the raw inputs. ``total_with_service_fee``
    is therefore not always ``round2(total * (1 + fee))``.

    Args:
        unit_price: Price per participant, non-negative.
        participants_quantity: Number of participants, non-negative integer.
        config: Service fee and discount rates. Defaults to the configured rates.

    Returns:
        PricingOutputs with all four fields rounded to cents.

    Raises:
        InvalidPricingInputError: If either input is negative or malformed.
    """
    price = _to_decimal(unit_price)
    quantity = _validate_participants(participants_quantity)
    if config is None:
        config = PricingConfig()

    fee_multiplier = 1 + config.service_fee_rate
    discount_multiplier = 1 - config.discount_rate
    gross = price * quantity

    return PricingOutputs(
        price_with_service_fee=round2(price * fee_multiplier),
        total=round2(gross),
        total_with_service_fee=round2(gross * fee_multiplier),
        total_with_service_fee_and_discount=round2(gross * fee_multiplier * discount_multiplier),
    )


def price_event(event: Event, config: PricingConfig | None = None) -> Event:
    """Return a copy of the event with every monetary field recomputed.

    Used on create, on update and when a draft is published, so the stored
    price and its four derived amounts always come from the same inputs.
    """
    if config is None:
        config = PricingConfig()
    outputs = compute_pricing(event.price, event.participants_quantity, config)
    return event.model_copy(
        update={
            "price": round2(event.price),
            "service_fee": config.service_fee_rate,
            "discount": config.discount_rate,
            "price_with_service_fee": outputs.price_with_service_fee,
            "total": outputs.total,
            "total_with_service_fee": outputs.total_with_service_fee,
            "total_with_service_fee_and_discount": outputs.total_with_service_fee_and_discount,
        }
    )
