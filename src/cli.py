"""Command line tools for menus and event pricing."""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import NoReturn

import typer
from pydantic import ValidationError

from src.config import DISCOUNT_RATE
from src.config import SERVICE_FEE_RATE
from src.datamodels import Menu
from src.datamodels import PricingConfig
from src.document_extraction import DocumentValidationError
from src.document_extraction import parse_menu_document
from src.menu_parser import MenuParseError
from src.menu_parser import menu_to_text
from src.pricing import InvalidPricingInputError
from src.pricing import compute_pricing

logger = logging.getLogger(__name__)

app = typer.Typer(help="Menu parsing and event pricing.", no_args_is_help=True)


def _fail(message: str) -> NoReturn:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


@app.command("parse-menu")
def parse_menu_command(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Menu .docx or .txt file"),
) -> None:
    """Parse a menu document and print it as JSON."""
    try:
        menu = parse_menu_document(path.read_bytes(), path.name)
    except (DocumentValidationError, MenuParseError) as e:
        logger.error(f"Could not parse {path}: {e}")
        _fail(str(e))

    typer.echo(json.dumps(menu.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))


@app.command("menu-text")
def menu_text_command(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Menu JSON file"),
) -> None:
    """Render a stored menu JSON back to document text."""
    try:
        menu = Menu.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        _fail(f"Invalid menu JSON: {e}")

    typer.echo(menu_to_text(menu))


@app.command("pricing")
def pricing_command(
    unit_price: str = typer.Argument(..., help="Price per participant, e.g. 150.00"),
    participants: int = typer.Argument(..., help="Number of participants"),
    service_fee_rate: str = typer.Option(str(SERVICE_FEE_RATE), help="Service fee rate"),
    discount_rate: str = typer.Option(str(DISCOUNT_RATE), help="Discount rate"),
) -> None:
    """Compute the service fee, totals and discounted total of an event."""
    try:
        config = PricingConfig(
            service_fee_rate=Decimal(service_fee_rate),
            discount_rate=Decimal(discount_rate),
        )
        outputs = compute_pricing(unit_price, participants, config)
    except (ArithmeticError, ValidationError, InvalidPricingInputError) as e:
        _fail(str(e))

    typer.echo(json.dumps(outputs.model_dump(mode="json", by_alias=True), indent=2))


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    app()


if __name__ == "__main__":
    main()
