"""Validation and text extraction for uploaded menu documents."""

import logging
from io import BytesIO
from pathlib import Path

import mammoth

from src.config import MAX_UPLOAD_SIZE_MB
from src.datamodels import Menu
from src.menu_parser import parse_menu

logger = logging.getLogger(__name__)

SUPPORTED_DOCUMENT_FORMATS = {"docx", "txt"}


class DocumentValidationError(Exception):
    """Raised when an uploaded menu document cannot be read."""


def validate_menu_document(file_content: bytes, filename: str) -> None:
    """Validate an uploaded menu document.

    Args:
        file_content: Raw file content as bytes.
        filename: Original filename.

    Raises:
        DocumentValidationError: If validation fails.
    """
    if not filename:
        raise DocumentValidationError("Filename cannot be empty")

    if not file_content:
        raise DocumentValidationError("File is empty")

    max_size_bytes = MAX_UPLOAD_SIZE_MB * 1024 * 1024
    if len(file_content) > max_size_bytes:
        raise DocumentValidationError(
            f"File size ({len(file_content) / (1024 * 1024):.2f}MB) exceeds maximum of {MAX_UPLOAD_SIZE_MB}MB"
        )

    extension = Path(filename).suffix.lower().lstrip(".")
    if extension not in SUPPORTED_DOCUMENT_FORMATS:
        raise DocumentValidationError(
            f"Unsupported file format: {extension}. "
            f"Supported formats: {', '.join(sorted(SUPPORTED_DOCUMENT_FORMATS))}"
        )


def extract_menu_text(file_content: bytes, filename: str) -> str:
    """Extract plain text from a validated menu document.

    Raises:
        DocumentValidationError: If the document cannot be decoded.
    """
    extension = Path(filename).suffix.lower().lstrip(".")
    if extension == "txt":
        try:
            return file_content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DocumentValidationError(f"Invalid text file '{filename}': {e}") from e

    try:
        result = mammoth.extract_raw_text(BytesIO(file_content))
    except Exception as e:
        # mammoth surfaces zip, XML and key errors for damaged files
        raise DocumentValidationError(f"Invalid docx file '{filename}': {e}") from e

    for message in result.messages:
        logger.warning(f"Extraction warning for '{filename}': {message.message}")
    logger.info(f"Extracted {len(result.value)} characters from {filename}")
    return result.value


def parse_menu_document(file_content: bytes, filename: str) -> Menu:
    """Validate an uploaded document, extract its text and parse the menu.

    Raises:
        DocumentValidationError: If the file cannot be read.
        MenuParseError: If the text is not a valid menu.
    """
    validate_menu_document(file_content, filename)
    text = extract_menu_text(file_content, filename)
    return parse_menu(text)
