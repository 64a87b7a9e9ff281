"""End-to-end verification pipeline for FIX order messages.

This module wires the independent steps together the way a router would:
compute the checksum of the raw message, parse it, then validate the parsed
fields against that checksum.

Example:
    >>> from src.pipeline import verify_fix_message
    >>> result = verify_fix_message("49=SENDER001\\x0154=1\\x01...")
    >>> print(result.accepted)

CLI Usage:
    python -m src.pipeline --message "49=SENDER001|54=1|...|10=053|" --pipe
    python -m src.pipeline --file orders.txt
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from src.config import AppConfig, ConfigurationError, get_config
from src.parsers.exceptions import FIXParseError
from src.parsers.fix_parser import calculate_checksum, encode_fix_message, parse_fix_message
from src.parsers.models import OrderMessage, Tag
from src.validation.validator import ValidationResult, check_message

logger = logging.getLogger(__name__)

# Fields of the sample order used by --sample
SAMPLE_FIELDS = {
    Tag.SENDER_COMP_ID: "SENDER001",
    Tag.SIDE: "1",
    Tag.SYMBOL: "AAPL",
    Tag.SECURITY_EXCHANGE: "NASDAQ",
    Tag.ORDER_QTY: "100",
    Tag.PRICE: "150.25",
}

PIPE = "|"


@dataclass
class VerificationResult:
    """Result of verifying one raw message.

    Attributes:
        raw_message: The message as received.
        message: The parsed message.
        computed_checksum: Checksum calculated from the raw message.
        validation: Outcome of validating the parsed fields.
        checksum_tag: Tag the checksum was read from.
    """

    raw_message: str
    message: OrderMessage
    computed_checksum: str
    validation: ValidationResult
    checksum_tag: str = Tag.CHECKSUM.value

    @property
    def accepted(self) -> bool:
        return self.validation.valid

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        failure = self.validation.failure
        return {
            "accepted": self.accepted,
            "computed_checksum": self.computed_checksum,
            "failure": failure.value if failure else None,
            "tag": self.validation.tag,
            "detail": self.validation.detail,
            "fields": dict(self.message.field_map),
        }


def verify_fix_message(raw_message: str, config: AppConfig | None = None) -> VerificationResult:
    """Compute the checksum of a raw message, parse it and validate it.

    Args:
        raw_message: Raw FIX order message.
        config: Optional application configuration.

    Returns:
        VerificationResult for the message.

    Raises:
        InvalidFormatError: If the message cannot be parsed.
    """
    parser_config = (config or get_config()).parser

    computed = calculate_checksum(
        raw_message,
        checksum_tag=parser_config.checksum_tag,
        separator=parser_config.separator,
    )
    message = parse_fix_message(
        raw_message,
        delimiter=parser_config.delimiter,
        separator=parser_config.separator,
    )
    validation = check_message(message, computed, checksum_tag=parser_config.checksum_tag)

    return VerificationResult(
        raw_message=raw_message,
        message=message,
        computed_checksum=computed,
        validation=validation,
        checksum_tag=parser_config.checksum_tag,
    )


def verify_fix_messages(
    raw_messages: list[str],
    config: AppConfig | None = None,
    continue_on_error: bool = True,
) -> list[VerificationResult | FIXParseError]:
    """Verify several raw messages.

    Args:
        raw_messages: Raw FIX order messages.
        config: Optional application configuration.
        continue_on_error: If True, parse errors are returned in place of a
            result instead of being raised.

    Returns:
        List of results in the same order as the input. Each item is either
        a VerificationResult or the FIXParseError raised for that message.

    Raises:
        FIXParseError: On the first unparseable message, if
            continue_on_error is False.
    """
    config = config or get_config()
    logger.info(f"Verifying {len(raw_messages)} FIX messages...")

    results: list[VerificationResult | FIXParseError] = []
    for i, raw in enumerate(raw_messages):
        try:
            results.append(verify_fix_message(raw, config))
        except FIXParseError as e:
            logger.warning(f"Failed to parse message {i}: {e}")
            if not continue_on_error:
                raise
            results.append(e)

    accepted = sum(1 for r in results if isinstance(r, VerificationResult) and r.accepted)
    logger.info(f"Accepted {accepted} of {len(results)} messages")
    return results


def build_sample_message(config: AppConfig | None = None) -> str:
    """Return a well-formed sample order with a correct checksum trailer."""
    parser_config = (config or get_config()).parser
    return encode_fix_message(
        SAMPLE_FIELDS,
        delimiter=parser_config.delimiter,
        separator=parser_config.separator,
        checksum_tag=parser_config.checksum_tag,
    )


def format_result_for_display(result: VerificationResult, delimiter: str = "\x01") -> str:
    """Format a verification result for console display.

    Args:
        result: The verification result to format.
        delimiter: Field delimiter, shown as a pipe.

    Returns:
        Formatted string for display.
    """
    status = "ACCEPTED" if result.accepted else "REJECTED"
    lines = [
        "=" * 60,
        f"Message: {result.raw_message.replace(delimiter, PIPE)}",
        "=" * 60,
        f"  Status:            {status}",
        f"  Computed checksum: {result.computed_checksum}",
        f"  Message checksum:  {result.message.get_field(result.checksum_tag)}",
    ]
    if not result.accepted:
        lines.append(f"  Reason:            {result.validation.detail}")

    lines.append("  Fields:")
    for tag, value in result.message.field_map.items():
        lines.append(f"    {tag:>4} = {value}")

    return "\n".join(lines)


def _read_messages(path: Path) -> list[str]:
    with path.open() as f:
        return [line.rstrip("\r\n") for line in f if line.strip()]


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for the verification pipeline.

    Returns:
        Exit code (0 if every message is accepted, 1 if any is rejected,
        2 for usage or configuration errors).
    """
    parser = argparse.ArgumentParser(
        description="Verify FIX order messages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Verify a single message written with pipes for readability
  python -m src.pipeline --pipe --message "49=SENDER001|54=1|55=AAPL|207=NASDAQ|38=100|44=150.25|10=053|"

  # Verify the built-in sample order
  python -m src.pipeline --sample

  # Read messages from file (one per line)
  python -m src.pipeline --file orders.txt --format json

  # Only print checksums
  python -m src.pipeline --file orders.txt --checksum-only
""",
    )

    parser.add_argument("--message", "-m", type=str, help="FIX message to verify")
    parser.add_argument(
        "--file",
        "-f",
        type=Path,
        help="File containing FIX messages (one per line)",
    )
    parser.add_argument(
        "--sample",
        "-s",
        action="store_true",
        help="Verify a sample order message",
    )
    parser.add_argument(
        "--pipe",
        action="store_true",
        help="Treat '|' in the input as the field delimiter",
    )
    parser.add_argument(
        "--checksum-only",
        action="store_true",
        help="Print the computed checksum of each message and exit",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)
    config = get_config()

    # Configure logging
    if args.verbose or config.debug:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config.validate()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    delimiter = config.parser.delimiter

    # Determine input
    if args.sample:
        messages = [build_sample_message(config)]
    elif args.message is not None:
        messages = [args.message]
    elif args.file:
        try:
            messages = _read_messages(args.file)
        except FileNotFoundError:
            print(f"Error: File not found: {args.file}", file=sys.stderr)
            return 2
    else:
        parser.print_help()
        return 2

    if args.pipe:
        messages = [m.replace(PIPE, delimiter) for m in messages]

    if args.checksum_only:
        for raw in messages:
            print(
                calculate_checksum(
                    raw,
                    checksum_tag=config.parser.checksum_tag,
                    separator=config.parser.separator,
                )
            )
        return 0

    results = verify_fix_messages(messages, config=config)

    all_accepted = True
    for i, result in enumerate(results):
        if isinstance(result, VerificationResult):
            all_accepted = all_accepted and result.accepted
            if args.format == "json":
                print(json.dumps(result.to_dict(), indent=2))
            else:
                print(format_result_for_display(result, delimiter))
        else:
            all_accepted = False
            print(f"Error parsing message {i}: {result}", file=sys.stderr)

    return 0 if all_accepted else 1


if __name__ == "__main__":
    sys.exit(main())
