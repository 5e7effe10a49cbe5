"""Field mapping for the printable service order of an event.

The service order template is filled by an external templating step; this
module only shapes event data into the flat string fields it expects.
"""

from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from src.config import SERVICE_ORDER_TIMEZONE
from src.datamodels import Event
from src.datamodels import Menu

PT_BR_MONTHS = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)

EMPTY_FIELD = "-"


def _local_datetime(value: datetime) -> datetime:
    # Naive datetimes are taken as already local
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(SERVICE_ORDER_TIMEZONE))


def format_long_date(value: datetime) -> str:
    """Format a date as ``19 de outubro de 2026``."""
    return f"{value.day} de {PT_BR_MONTHS[value.month - 1]} de {value.year}"


def format_money(value: Decimal | None) -> str:
    """Format an amount in pt-BR notation (``1.234,56``)."""
    if value is None:
        return EMPTY_FIELD
    return f"{value:,.2f}".translate(str.maketrans(",.", ".,"))


def format_rate(value: Decimal | None) -> str:
    """Format a rate as a percentage (``0.2`` -> ``20%``); empty when unset."""
    if not value:
        return ""
    percent = (value * 100).normalize()
    return f"{percent:f}%"


def flatten_menu_sections(menu: Menu) -> str:
    """Flatten menu sections into the text block used by the service order."""
    blocks = []
    for section in menu.sections:
        item_lines = []
        for item in section.items:
            if item.description:
                item_lines.append(f"{item.name} - {item.description}")
            else:
                item_lines.append(item.name)
        blocks.append(f"{section.title}:\n" + "\n".join(item_lines))
    return "\n\n".join(blocks)


def service_order_filename(event: Event) -> str:
    return f"ordem-servico-{event.id[-6:].lower()}.docx"


def map_event_to_service_order_fields(event: Event) -> dict[str, str]:
    """Project an event onto the fields of the service order template.

    Args:
        event: Event with its location, menu and derived pricing.

    Returns:
        Mapping of template placeholder to rendered text.
    """
    local_date = _local_datetime(event.date)
    location = event.location
    venue = location.parent.name if location.parent else location.name
    participants = str(event.participants_quantity)
    price_with_service_fee = format_money(event.price_with_service_fee)
    total_with_service_fee = format_money(event.total_with_service_fee)

    payment = f"{format_money(event.price)}+serviço= {price_with_service_fee}. Por pessoa."
    total = (
        f"{price_with_service_fee} x {participants} = {total_with_service_fee}\n"
        f"Pagamento mínimo: {total_with_service_fee} - {format_rate(event.discount)} = "
        f"{format_money(event.total_with_service_fee_and_discount)}."
    )

    return {
        "OS": local_date.strftime("%d-%m-%y"),
        "EVENTO": event.title or EMPTY_FIELD,
        "PAX": participants,
        "CONTRATANTE": venue,
        "DATA": format_long_date(local_date),
        "HORARIO": local_date.strftime("%H:%M"),
        "OPERACAO": f"Restaurante {venue}, {location.name}",
        "SOLICITACAO": event.description or EMPTY_FIELD,
        "PAGAMENTO": payment,
        "TOTAL": total,
        "SERVICO": EMPTY_FIELD,
        "COMIDAS": flatten_menu_sections(event.menu),
        "RESPONSAVEL": (event.user.name if event.user else None) or EMPTY_FIELD,
    }
