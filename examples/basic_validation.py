#!/usr/bin/env python3
"""Basic order message validation example.

This example demonstrates how to:
1. Encode an order with a checksum trailer
2. Parse the raw message and compute its checksum
3. Validate the parsed fields against that checksum

Usage:
    python examples/basic_validation.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the parent directory is in the path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.parsers import Tag, calculate_checksum, encode_fix_message, parse_fix_message
from src.validation import check_message


def main() -> int:
    """Run basic validation example."""
    raw = encode_fix_message(
        {
            Tag.SENDER_COMP_ID: "SENDER001",
            Tag.SIDE: "2",
            Tag.SYMBOL: "MSFT",
            Tag.SECURITY_EXCHANGE: "NYSE",
            Tag.ORDER_QTY: "50",
            Tag.PRICE: "300.75",
        }
    )

    print("=" * 70)
    print(" BASIC ORDER VALIDATION EXAMPLE ".center(70))
    print("=" * 70)

    print("\n[1] Encoded message:")
    print(f"    {raw.replace(chr(1), '|')}")

    print("\n[2] Parsing and computing checksum...")
    message = parse_fix_message(raw)
    checksum = calculate_checksum(raw)
    print(f"    Symbol:   {message.symbol}")
    print(f"    Side:     {'BUY' if message.is_buy_order() else 'SELL'}")
    print(f"    Checksum: {checksum}")

    print("\n[3] Validating...")
    result = check_message(message, checksum)
    print(f"    Accepted: {result.valid}")

    print("\n[4] Corrupting the quantity in transit...")
    corrupted = raw.replace("38=50", "38=5000")
    result = check_message(parse_fix_message(corrupted), calculate_checksum(corrupted))
    print(f"    Accepted: {result.valid}")
    print(f"    Reason:   {result.detail}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
