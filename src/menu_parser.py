"""Parser turning the raw text of a menu document into a structured Menu.

The expected document looks like this::

    Menu Teste
    ENTRADAS:
    BRUSCHETTA
    Pão italiano com tomate
    Bebidas:
    Vinho tinto
    Preço por pessoa
    R$ 100,00
    R$ 150,00

The first line is the title. Lines ending with ``:`` open a section. In a
beverage section every line is an item. In any other section an item is a
line that is unchanged by uppercasing, followed by its description line.
The two lines after ``Preço por pessoa`` are the price without alcohol and
the price with alcohol.
"""

import re
from decimal import Decimal
from enum import Enum
from typing import NamedTuple

from src.datamodels import Menu
from src.datamodels import MenuItem
from src.datamodels import MenuSection

PRICE_MARKER = "Preço por pessoa"
BEVERAGE_KEYWORD = "bebida"
LINE_PREFIX = "// "
PRICE_PATTERN = re.compile(r"R\$\s*(\d+,\d+)")


class MenuParseError(Exception):
    """Base class for menu parsing failures."""

    code = "menu_parse_error"


class EmptyContentError(MenuParseError):
    code = "empty_content"

    def __init__(self):
        super().__init__("O conteúdo do cardápio está vazio")


class MissingSectionsError(MenuParseError):
    code = "missing_sections"

    def __init__(self):
        super().__init__(
            "O cardápio deve ter pelo menos uma seção (título terminando com dois pontos)"
        )


class MissingPriceBlockError(MenuParseError):
    code = "missing_price_block"

    def __init__(self):
        super().__init__(f"O cardápio deve ter informações de preço ({PRICE_MARKER})")


class MissingItemsError(MenuParseError):
    code = "missing_items"

    def __init__(self):
        super().__init__("O cardápio deve ter pelo menos um item")


class MissingItemDescriptionError(MenuParseError):
    code = "missing_item_description"

    def __init__(self, item_name: str):
        self.item_name = item_name
        super().__init__(f"Item sem descrição: {item_name}")


class InvalidPriceFormatError(MenuParseError):
    code = "invalid_price_format"

    def __init__(self, line: str | None = None):
        self.line = line
        if line is None:
            message = "Informe os preços com e sem bebidas alcoólicas abaixo de 'Preço por pessoa'"
        else:
            message = f"Formato de preço inválido: '{line}'. Formato esperado: R$ XXX,XX"
        super().__init__(message)


class NoSectionsError(MenuParseError):
    code = "no_sections"

    def __init__(self):
        super().__init__("O cardápio deve ter pelo menos uma seção")


class InvalidPricesError(MenuParseError):
    code = "invalid_prices"

    def __init__(self):
        super().__init__("Os preços com e sem bebidas alcoólicas devem ser maiores que zero")


class LineKind(Enum):
    SECTION_HEADER = "section_header"
    PRICE_MARKER = "price_marker"
    TEXT = "text"


class Line(NamedTuple):
    kind: LineKind
    text: str


def _clean_line(raw_line: str) -> str:
    line = raw_line.strip()
    if line.startswith(LINE_PREFIX):
        line = line[len(LINE_PREFIX) :].strip()
    return line


def _classify(line: str) -> LineKind:
    # The marker wins over a trailing colon ("Preço por pessoa:")
    if PRICE_MARKER in line:
        return LineKind.PRICE_MARKER
    if line.endswith(":"):
        return LineKind.SECTION_HEADER
    return LineKind.TEXT


def tokenize(raw_text: str) -> list[Line]:
    """Split raw text into classified, non-blank lines.

    Args:
        raw_text: Plain text extracted from a menu document.

    Returns:
        Lines in document order with the ``// `` prefix removed.
    """
    lines = []
    for raw_line in raw_text.split("\n"):
        line = _clean_line(raw_line)
        if line:
            lines.append(Line(_classify(line), line))
    return lines


def _is_caps_invariant(text: str) -> bool:
    return text == text.upper()


def _is_beverage_title(title: str) -> bool:
    return BEVERAGE_KEYWORD in title.lower()


def _validate_structure(lines: list[Line]) -> None:
    """Reject documents missing one of the required building blocks."""
    if not lines:
        raise EmptyContentError()
    if not any(line.text.endswith(":") for line in lines):
        raise MissingSectionsError()
    if not any(line.kind is LineKind.PRICE_MARKER for line in lines):
        raise MissingPriceBlockError()
    has_food_item = any(_is_caps_invariant(line.text) for line in lines)
    has_beverages = any(BEVERAGE_KEYWORD in line.text.lower() for line in lines)
    if not has_food_item and not has_beverages:
        raise MissingItemsError()


def _parse_price(line: str) -> Decimal:
    match = PRICE_PATTERN.search(line)
    if not match:
        raise InvalidPriceFormatError(line)
    return Decimal(match.group(1).replace(",", "."))


def _extract_prices(price_lines: list[Line]) -> tuple[Decimal, Decimal]:
    """Return (price without alcohol, price with alcohol)."""
    if len(price_lines) < 2:
        raise InvalidPriceFormatError()
    return _parse_price(price_lines[0].text), _parse_price(price_lines[1].text)


def parse_menu(raw_text: str) -> Menu:
    """Parse the raw text of a menu document.

    Args:
        raw_text: Plain text extracted from a ``.docx`` menu.

    Returns:
        The structured menu.

    Raises:
        MenuParseError: A subclass naming the structural rule that was violated.
    """
    lines = tokenize(raw_text)
    _validate_structure(lines)

    title = lines[0].text
    sections: list[MenuSection] = []
    section_title: str | None = None
    items: list[MenuItem] = []
    prices: tuple[Decimal, Decimal] | None = None

    position = 1
    while position < len(lines):
        line = lines[position]
        position += 1

        if line.kind is LineKind.PRICE_MARKER:
            prices = _extract_prices(lines[position:])
            break

        if line.kind is LineKind.SECTION_HEADER:
            if section_title is not None:
                sections.append(MenuSection(title=section_title, items=items))
            section_title = line.text[:-1].rstrip()
            items = []
            continue

        if section_title is None:
            continue

        if _is_beverage_title(section_title):
            items.append(MenuItem(name=line.text))
        elif _is_caps_invariant(line.text):
            if position >= len(lines) or lines[position].kind is not LineKind.TEXT:
                raise MissingItemDescriptionError(line.text)
            items.append(MenuItem(name=line.text, description=lines[position].text))
            position += 1

    if section_title is not None:
        sections.append(MenuSection(title=section_title, items=items))

    if not sections:
        raise NoSectionsError()
    if prices is None or any(price == 0 for price in prices):
        raise InvalidPricesError()

    price_without_alcohol, price_with_alcohol = prices
    return Menu(
        title=title,
        sections=sections,
        price_with_alcohol=price_with_alcohol,
        price_without_alcohol=price_without_alcohol,
    )


def format_price(value: Decimal) -> str:
    """Format a price the way menu documents write it (``R$ 1234,50``)."""
    return f"R$ {value:.2f}".replace(".", ",")


def menu_to_text(menu: Menu) -> str:
    """Render a menu back to document text accepted by parse_menu."""
    lines = [menu.title]
    for section in menu.sections:
        lines.append(f"{section.title}:")
        for item in section.items:
            lines.append(item.name)
            if item.description:
                lines.append(item.description)
    lines.append(PRICE_MARKER)
    lines.append(f"{format_price(menu.price_without_alcohol)} (sem bebidas alcoólicas)")
    lines.append(f"{format_price(menu.price_with_alcohol)} (com bebidas alcoólicas)")
    return "\n".join(lines)
