"""Business-field validation for parsed FIX order messages.

Validation is advisory: it never raises, and every failure collapses to a
falsy result. check_message() additionally reports which check failed,
while validate_message() keeps the plain boolean contract.

The checksum comparison is textual against a caller-supplied value. This
module never recomputes a checksum; callers compute it from the raw message
with calculate_checksum() and pass the result in.

Example:
    >>> from src.parsers import OrderMessage
    >>> from src.validation.validator import validate_message
    >>> msg = OrderMessage(field_map={"49": "SENDER001", "54": "1", "55": "AAPL",
    ...     "207": "NASDAQ", "38": "100", "44": "150.25", "10": "123"})
    >>> validate_message(msg, "123")
    True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from src.parsers.models import OrderMessage, Side, Tag, tag_key

logger = logging.getLogger(__name__)

VALID_SIDES = frozenset(side.value for side in Side)


class FailureKind(str, Enum):
    """Reason a message was rejected, in check order."""

    INVALID_MESSAGE = "invalid_message"
    MISSING_SENDER = "missing_sender"
    INVALID_SIDE = "invalid_side"
    MISSING_SYMBOL = "missing_symbol"
    MISSING_MARKET = "missing_market"
    MISSING_QUANTITY = "missing_quantity"
    MISSING_PRICE = "missing_price"
    CHECKSUM_MISMATCH = "checksum_mismatch"
    INVALID_QUANTITY = "invalid_quantity"
    INVALID_PRICE = "invalid_price"
    INVALID_CHECKSUM = "invalid_checksum"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one message.

    Truthy exactly when the message is valid, so it can be used wherever
    a boolean accept/reject decision is expected.

    Attributes:
        valid: Whether every check passed.
        failure: The first check that failed, if any.
        tag: Tag of the offending field, if the failure concerns one.
        detail: Human-readable description of the failure.
    """

    valid: bool
    failure: FailureKind | None = None
    tag: str | None = None
    detail: str = ""

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def accepted(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def rejected(
        cls,
        failure: FailureKind,
        detail: str,
        tag: Tag | str | None = None,
    ) -> ValidationResult:
        return cls(
            valid=False,
            failure=failure,
            tag=tag_key(tag) if tag is not None else None,
            detail=detail,
        )


def _is_float(value: object) -> bool:
    # Digit separators are a Python-only literal form
    if not isinstance(value, str) or "_" in value:
        return False
    try:
        float(value)
    except (TypeError, ValueError):
        return False
    return True


def _is_int(value: object) -> bool:
    if not isinstance(value, str) or "_" in value or value != value.strip():
        return False
    try:
        int(value)
    except (TypeError, ValueError):
        return False
    return True


def _check(
    message: object,
    expected_checksum: str | None,
    checksum_tag: Tag | str,
) -> ValidationResult:
    if not isinstance(message, OrderMessage):
        return ValidationResult.rejected(
            FailureKind.INVALID_MESSAGE,
            f"Expected OrderMessage, got {type(message).__name__}",
        )

    if not message.sender_id:
        return ValidationResult.rejected(
            FailureKind.MISSING_SENDER, "Sender ID is missing or empty", Tag.SENDER_COMP_ID
        )

    if not isinstance(message.side, str) or message.side not in VALID_SIDES:
        return ValidationResult.rejected(
            FailureKind.INVALID_SIDE,
            f"Invalid side value: {message.side!r} (expected '1' or '2')",
            Tag.SIDE,
        )

    if not message.symbol:
        return ValidationResult.rejected(
            FailureKind.MISSING_SYMBOL, "Symbol is missing or empty", Tag.SYMBOL
        )

    if not message.market:
        return ValidationResult.rejected(
            FailureKind.MISSING_MARKET, "Market is missing or empty", Tag.SECURITY_EXCHANGE
        )

    # Presence only; the numeric form is checked after the checksum
    if message.quantity is None:
        return ValidationResult.rejected(
            FailureKind.MISSING_QUANTITY, "Quantity is missing", Tag.ORDER_QTY
        )

    if message.price is None:
        return ValidationResult.rejected(FailureKind.MISSING_PRICE, "Price is missing", Tag.PRICE)

    checksum = message.get_field(checksum_tag)
    if checksum is None or checksum != expected_checksum:
        return ValidationResult.rejected(
            FailureKind.CHECKSUM_MISMATCH,
            f"Checksum {checksum!r} does not match expected {expected_checksum!r}",
            checksum_tag,
        )

    if not _is_float(message.quantity):
        return ValidationResult.rejected(
            FailureKind.INVALID_QUANTITY,
            f"Invalid quantity value: {message.quantity!r}",
            Tag.ORDER_QTY,
        )

    if not _is_float(message.price):
        return ValidationResult.rejected(
            FailureKind.INVALID_PRICE, f"Invalid price value: {message.price!r}", Tag.PRICE
        )

    if not _is_int(checksum):
        return ValidationResult.rejected(
            FailureKind.INVALID_CHECKSUM,
            f"Invalid checksum value: {checksum!r}",
            checksum_tag,
        )

    return ValidationResult.accepted()


def check_message(
    message: OrderMessage,
    expected_checksum: str | None,
    checksum_tag: Tag | str = Tag.CHECKSUM,
) -> ValidationResult:
    """Validate a message and report the first failing check.

    Checks run in a fixed order: sender, side, symbol, market, quantity
    presence, price presence, checksum equality, then quantity, price and
    checksum number formats.

    Args:
        message: Parsed order message.
        expected_checksum: Checksum the message's checksum field must equal.
        checksum_tag: Tag of the checksum field.

    Returns:
        ValidationResult describing the outcome. Never raises.
    """
    result = _check(message, expected_checksum, checksum_tag)
    if not result:
        logger.debug(f"Message rejected ({result.failure.value}): {result.detail}")
    return result


def validate_message(
    message: OrderMessage,
    expected_checksum: str | None,
    checksum_tag: Tag | str = Tag.CHECKSUM,
) -> bool:
    """Validate a message, returning only the accept/reject decision.

    Args:
        message: Parsed order message.
        expected_checksum: Checksum the message's checksum field must equal.
        checksum_tag: Tag of the checksum field.

    Returns:
        True if the message passes every check, False otherwise.
    """
    return bool(check_message(message, expected_checksum, checksum_tag))
