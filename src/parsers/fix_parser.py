"""FIX order message parser and checksum utilities.

This module turns raw tag=value wire strings into OrderMessage objects,
computes the modulo-256 checksum used to detect transmission corruption,
and encodes field mappings back into wire strings with a checksum trailer.

Example:
    >>> from src.parsers.fix_parser import calculate_checksum, parse_fix_message
    >>> raw = "49=SENDER001\\x0154=1\\x0155=AAPL\\x01"
    >>> parse_fix_message(raw).symbol
    'AAPL'
    >>> calculate_checksum(raw)
    '155'
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from src.parsers.exceptions import InvalidFormatError
from src.parsers.models import OrderMessage, Tag, tag_key

logger = logging.getLogger(__name__)

# SOH delimiter (ASCII 01) and the tag/value separator
SOH = "\x01"
SEPARATOR = "="

# Value returned for empty input
EMPTY_CHECKSUM = "000"


def parse_fix_message(
    raw_message: str | None,
    delimiter: str = SOH,
    separator: str = SEPARATOR,
) -> OrderMessage:
    """Parse a raw FIX order message into an OrderMessage.

    Segments are split on the delimiter and empty segments are skipped, so a
    trailing delimiter adds no field. Each segment is split at its first
    separator; the value may be empty or contain further separators. A
    repeated tag keeps its last value. No trimming is applied.

    Args:
        raw_message: Raw FIX message string.
        delimiter: Field delimiter (SOH by default).
        separator: Tag/value separator.

    Returns:
        OrderMessage holding every parsed field.

    Raises:
        InvalidFormatError: If the message is empty or None, or if a
            non-empty segment has no separator.

    Example:
        >>> msg = parse_fix_message("49=SENDER001|54=1|", delimiter="|")
        >>> msg.sender_id, msg.side
        ('SENDER001', '1')
    """
    if not raw_message:
        logger.debug("Rejected empty FIX message")
        raise InvalidFormatError("Message cannot be empty", raw_message=raw_message)

    fields: dict[str, str] = {}
    for segment in raw_message.split(delimiter):
        if not segment:
            continue

        tag, found, value = segment.partition(separator)
        if not found:
            logger.debug(f"Rejected FIX message with malformed segment {segment!r}")
            raise InvalidFormatError(
                f"Invalid field format: {segment}",
                segment=segment,
                raw_message=raw_message,
            )

        fields[tag] = value

    logger.debug(f"Parsed FIX message with {len(fields)} fields")
    return OrderMessage(field_map=fields)


def calculate_checksum(
    raw_message: str | None,
    checksum_tag: Tag | str = Tag.CHECKSUM,
    separator: str = SEPARATOR,
) -> str:
    """Calculate the checksum of a raw FIX message.

    Sums the character codes of everything before the last checksum marker
    ("10=" by default), or of the whole string when no marker is present,
    and reduces the sum modulo 256. Never raises.

    Args:
        raw_message: Raw FIX message string.
        checksum_tag: Tag of the checksum field.
        separator: Tag/value separator.

    Returns:
        Three-digit zero-padded decimal string; "000" for empty input.

    Example:
        >>> calculate_checksum("")
        '000'
        >>> calculate_checksum("A")
        '065'
    """
    if not raw_message:
        return EMPTY_CHECKSUM

    marker = f"{tag_key(checksum_tag)}{separator}"
    end = raw_message.rfind(marker)
    if end == -1:
        end = len(raw_message)

    return _sum_codes(raw_message[:end])


def encode_fix_message(
    fields: Mapping[Tag | str | int, str] | OrderMessage,
    delimiter: str = SOH,
    separator: str = SEPARATOR,
    checksum_tag: Tag | str = Tag.CHECKSUM,
) -> str:
    """Encode fields into a wire string with a checksum trailer.

    Every field except the checksum is written in insertion order, then the
    checksum of that body is appended as the final field. Values are not
    escaped.

    Args:
        fields: Tag-value mapping or an OrderMessage.
        delimiter: Field delimiter (SOH by default).
        separator: Tag/value separator.
        checksum_tag: Tag of the checksum field.

    Returns:
        Raw FIX message ending with the checksum field and a delimiter.

    Example:
        >>> encode_fix_message({"55": "A"}, delimiter="|")
        '55=A|10=100|'
    """
    if isinstance(fields, OrderMessage):
        fields = fields.field_map

    checksum_key = tag_key(checksum_tag)
    body = "".join(
        f"{tag_key(tag)}{separator}{value}{delimiter}"
        for tag, value in fields.items()
        if tag_key(tag) != checksum_key
    )
    # The body may contain the checksum marker itself, so it is summed whole
    checksum = _sum_codes(body)
    return f"{body}{checksum_key}{separator}{checksum}{delimiter}"


def _sum_codes(text: str) -> str:
    """Modulo-256 sum of character codes as a three-digit string."""
    total = sum(ord(char) for char in text)
    return f"{total % 256:03d}"
