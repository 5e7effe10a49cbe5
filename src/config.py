import tomllib
from decimal import Decimal
from pathlib import Path

import typer

_config_file = Path(__file__).parent.parent / "pyproject.toml"
with _config_file.open("rb") as f:
    _config = tomllib.load(f)

_project_config = _config["project"]
_tool_config = _config["tool"]["config"]

PROJECT_NAME = _project_config["name"]
PROJECT_VERSION = _project_config["version"]

# Rates are stored as strings so they load as exact decimals
SERVICE_FEE_RATE = Decimal(_tool_config["service_fee_rate"])
DISCOUNT_RATE = Decimal(_tool_config["discount_rate"])
MAX_UPLOAD_SIZE_MB = _tool_config["max_upload_size_mb"]
SERVICE_ORDER_TIMEZONE = _tool_config["service_order_timezone"]


def config_cli(
    all: bool = typer.Option(False, "--all", help="Show all configuration values"),
    project_name: bool = typer.Option(False, "--project-name", help=PROJECT_NAME),
    project_version: bool = typer.Option(False, "--project-version", help=PROJECT_VERSION),
    service_fee_rate: bool = typer.Option(False, "--service-fee-rate", help=str(SERVICE_FEE_RATE)),
    discount_rate: bool = typer.Option(False, "--discount-rate", help=str(DISCOUNT_RATE)),
    max_upload_size_mb: bool = typer.Option(False, "--max-upload-size-mb", help=str(MAX_UPLOAD_SIZE_MB)),
    service_order_timezone: bool = typer.Option(
        False, "--service-order-timezone", help=SERVICE_ORDER_TIMEZONE
    ),
) -> None:
    """Get configuration values from pyproject.toml."""
    if all:
        typer.echo(f"project_name={PROJECT_NAME}")
        typer.echo(f"project_version={PROJECT_VERSION}")
        typer.echo(f"service_fee_rate={SERVICE_FEE_RATE}")
        typer.echo(f"discount_rate={DISCOUNT_RATE}")
        typer.echo(f"max_upload_size_mb={MAX_UPLOAD_SIZE_MB}")
        typer.echo(f"service_order_timezone={SERVICE_ORDER_TIMEZONE}")
        return

    param_map = [
        (project_name, PROJECT_NAME),
        (project_version, PROJECT_VERSION),
        (service_fee_rate, SERVICE_FEE_RATE),
        (discount_rate, DISCOUNT_RATE),
        (max_upload_size_mb, MAX_UPLOAD_SIZE_MB),
        (service_order_timezone, SERVICE_ORDER_TIMEZONE),
    ]

    for is_set, value in param_map:
        if is_set:
            typer.echo(value)
            return

    typer.secho(
        "Error: No config key specified. Use --help to see available options.",
        fg=typer.colors.RED,
        err=True,
    )
    raise typer.Exit(1)


def main():
    typer.run(config_cli)


if __name__ == "__main__":
    main()
