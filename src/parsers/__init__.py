"""FIX order message parsing modules."""

from src.parsers.exceptions import FIXParseError, InvalidFormatError
from src.parsers.fix_parser import (
    SOH,
    calculate_checksum,
    encode_fix_message,
    parse_fix_message,
)
from src.parsers.models import OrderMessage, Side, Tag

__all__ = [
    "FIXParseError",
    "InvalidFormatError",
    "OrderMessage",
    "SOH",
    "Side",
    "Tag",
    "calculate_checksum",
    "encode_fix_message",
    "parse_fix_message",
]
