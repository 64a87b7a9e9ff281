"""Comprehensive tests for FIX order message parser and checksum."""

import re

import pytest

from src.parsers import (
    FIXParseError,
    InvalidFormatError,
    OrderMessage,
    Tag,
    calculate_checksum,
    encode_fix_message,
    parse_fix_message,
)

SOH = "\x01"

# Seven-field buy order without its checksum trailer; sums to 053
ORDER_BODY = (
    f"49=SENDER001{SOH}54=1{SOH}55=AAPL{SOH}207=NASDAQ{SOH}38=100{SOH}44=150.25{SOH}"
)


class TestParseFixMessage:
    """Tests for the parse_fix_message function."""

    def test_parse_valid_message(self) -> None:
        """Test parsing a complete order message."""
        result = parse_fix_message(f"{ORDER_BODY}10=063{SOH}")

        assert isinstance(result, OrderMessage)
        assert result.sender_id == "SENDER001"
        assert result.side == "1"
        assert result.symbol == "AAPL"
        assert result.market == "NASDAQ"
        assert result.quantity == "100"
        assert result.price == "150.25"
        assert result.checksum == "063"
        assert result.is_buy_order()
        assert not result.is_sell_order()

    def test_parse_sell_order(self) -> None:
        """Test parsing a sell order."""
        msg = f"49=SELLER123{SOH}54=2{SOH}55=MSFT{SOH}207=NYSE{SOH}38=50{SOH}44=300.75{SOH}10=123{SOH}"
        result = parse_fix_message(msg)

        assert result.side == "2"
        assert result.is_sell_order()
        assert not result.is_buy_order()

    def test_parse_recovers_exact_pairs(self) -> None:
        """Test that exactly the fields present are recovered."""
        result = parse_fix_message(f"1=a{SOH}2=b{SOH}")
        assert result.field_map == {"1": "a", "2": "b"}

    def test_parse_without_trailing_delimiter(self) -> None:
        """Test that the trailing delimiter is optional."""
        result = parse_fix_message(f"49=SENDER001{SOH}55=AAPL")
        assert result.field_map == {"49": "SENDER001", "55": "AAPL"}

    def test_parse_skips_empty_segments(self) -> None:
        """Test that consecutive delimiters produce no spurious field."""
        result = parse_fix_message(f"{SOH}49=SENDER001{SOH}{SOH}55=AAPL{SOH}{SOH}")
        assert result.field_map == {"49": "SENDER001", "55": "AAPL"}

    def test_parse_last_value_wins_for_duplicates(self) -> None:
        """Test that duplicate tags use the last value."""
        result = parse_fix_message(f"55=AAPL{SOH}54=1{SOH}55=MSFT{SOH}")
        assert result.symbol == "MSFT"
        assert len(result.field_map) == 2

    def test_parse_empty_value(self) -> None:
        """Test that an empty value is kept as an empty string."""
        result = parse_fix_message(f"49={SOH}54=1{SOH}55=AAPL{SOH}10=123{SOH}")

        assert result.sender_id == ""
        assert result.side == "1"
        assert result.symbol == "AAPL"

    def test_parse_value_with_separator(self) -> None:
        """Test that only the first separator splits tag from value."""
        result = parse_fix_message(f"58=Reason=test{SOH}")
        assert result.get_field(58) == "Reason=test"

    def test_parse_empty_tag(self) -> None:
        """Test that a segment starting with the separator has an empty tag."""
        result = parse_fix_message(f"=value{SOH}")
        assert result.get_field("") == "value"

    def test_parse_no_trimming(self) -> None:
        """Test that whitespace is preserved in tags and values."""
        result = parse_fix_message(f" 55 = AAPL {SOH}")
        assert result.get_field(" 55 ") == " AAPL "
        assert result.symbol is None

    def test_parse_unknown_tags_kept(self) -> None:
        """Test that tags outside the known set are stored."""
        result = parse_fix_message(f"49=SENDER001{SOH}9999=extra{SOH}")
        assert result.get_field("9999") == "extra"

    @pytest.mark.parametrize("raw", ["", None])
    def test_parse_empty_raises(self, raw: str | None) -> None:
        """Test that empty and None input raise InvalidFormatError."""
        with pytest.raises(InvalidFormatError):
            parse_fix_message(raw)

    def test_parse_missing_separator_raises(self) -> None:
        """Test that a segment without '=' raises InvalidFormatError."""
        raw = f"49SENDER001{SOH}54=1{SOH}"
        with pytest.raises(InvalidFormatError) as exc_info:
            parse_fix_message(raw)

        assert exc_info.value.segment == "49SENDER001"
        assert exc_info.value.raw_message == raw
        assert "49SENDER001" in str(exc_info.value)

    def test_parse_missing_separator_late_segment(self) -> None:
        """Test that a malformed segment anywhere fails the whole parse."""
        with pytest.raises(InvalidFormatError):
            parse_fix_message(f"49=SENDER001{SOH}54=1{SOH}garbage{SOH}")

    def test_parse_only_delimiters(self) -> None:
        """Test that a message of only delimiters yields no fields."""
        result = parse_fix_message(f"{SOH}{SOH}")
        assert result.field_map == {}

    def test_invalid_format_is_parse_error(self) -> None:
        """Test the exception hierarchy."""
        assert issubclass(InvalidFormatError, FIXParseError)
        assert issubclass(FIXParseError, Exception)

    def test_parse_custom_delimiter(self) -> None:
        """Test parsing with a pipe delimiter."""
        result = parse_fix_message("49=SENDER001|54=2|", delimiter="|")
        assert result.sender_id == "SENDER001"
        assert result.is_sell_order()

    def test_parse_returns_fresh_message(self) -> None:
        """Test that each parse builds an independent message."""
        first = parse_fix_message(f"55=AAPL{SOH}")
        second = parse_fix_message(f"55=AAPL{SOH}")
        first.set_field(Tag.SYMBOL, "MSFT")
        assert second.symbol == "AAPL"


class TestCalculateChecksum:
    """Tests for the calculate_checksum function."""

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty_input(self, raw: str | None) -> None:
        """Test that empty and None input yield 000."""
        assert calculate_checksum(raw) == "000"

    def test_body_without_checksum_field(self) -> None:
        """Test summing a message with no checksum marker."""
        assert calculate_checksum(ORDER_BODY) == "053"

    def test_stops_at_checksum_field(self) -> None:
        """Test that the checksum field itself is excluded from the sum."""
        assert calculate_checksum(f"{ORDER_BODY}10=063{SOH}") == "053"
        assert calculate_checksum(f"{ORDER_BODY}10=") == "053"

    def test_partial_message(self) -> None:
        """Test a three-field message."""
        assert calculate_checksum(f"49=SENDER001{SOH}54=1{SOH}55=AAPL{SOH}") == "155"

    def test_zero_padding(self) -> None:
        """Test that small sums are zero padded."""
        assert calculate_checksum("A") == "065"

    def test_modulo_256(self) -> None:
        """Test that the sum wraps at 256."""
        assert calculate_checksum("~~~") == "122"

    def test_uses_last_marker(self) -> None:
        """Test that the last occurrence of the marker ends the sum."""
        assert calculate_checksum(f"10={SOH}A10=1") == "224"

    def test_uses_code_points(self) -> None:
        """Test that non-ASCII characters contribute their code point."""
        assert calculate_checksum("é") == "233"
        assert calculate_checksum("éé") == "210"

    def test_order_sensitive_position(self) -> None:
        """Test that characters after the marker do not count."""
        assert calculate_checksum("A10=ZZZ") == calculate_checksum("A10=000")

    @pytest.mark.parametrize(
        "raw",
        [
            "x",
            ORDER_BODY,
            f"{ORDER_BODY}10=999{SOH}",
            "ÿ" * 1000,
            "10=",
        ],
    )
    def test_always_three_digits(self, raw: str) -> None:
        """Test that the output is always three decimal digits."""
        assert re.fullmatch(r"\d{3}", calculate_checksum(raw))

    def test_custom_separator(self) -> None:
        """Test that the marker follows the separator."""
        assert calculate_checksum("A10:xyz", separator=":") == "065"


class TestEncodeFixMessage:
    """Tests for the encode_fix_message function."""

    def test_encode_appends_checksum(self) -> None:
        """Test that the trailer holds the checksum of the body."""
        fields = {
            Tag.SENDER_COMP_ID: "SENDER001",
            Tag.SIDE: "1",
            Tag.SYMBOL: "AAPL",
            Tag.SECURITY_EXCHANGE: "NASDAQ",
            Tag.ORDER_QTY: "100",
            Tag.PRICE: "150.25",
        }
        assert encode_fix_message(fields) == f"{ORDER_BODY}10=053{SOH}"

    def test_encode_replaces_existing_checksum(self) -> None:
        """Test that a stale checksum field is recomputed."""
        raw = encode_fix_message({"55": "A", "10": "999"}, delimiter="|")
        assert raw == "55=A|10=100|"

    def test_encode_order_message(self) -> None:
        """Test encoding an OrderMessage round-trips through the parser."""
        original = parse_fix_message(f"{ORDER_BODY}10=000{SOH}")
        raw = encode_fix_message(original)
        reparsed = parse_fix_message(raw)

        assert reparsed.checksum == "053"
        assert reparsed.symbol == original.symbol
        assert calculate_checksum(raw) == reparsed.checksum

    def test_encode_empty_fields(self) -> None:
        """Test encoding with no fields produces only the trailer."""
        assert encode_fix_message({}) == f"10=000{SOH}"


class TestEncodeCustomChecksumTag:
    """Tests for encoding with a non-default checksum tag."""

    def test_trailer_uses_checksum_tag(self) -> None:
        """Test that the trailer is written under the given tag."""
        raw = encode_fix_message({"55": "A", "99": "999"}, delimiter="|", checksum_tag="99")
        assert raw == "55=A|99=100|"

    def test_default_tag_kept_as_field(self) -> None:
        """Test that tag 10 is an ordinary field when another tag holds the checksum."""
        raw = encode_fix_message({"10": "x"}, delimiter="|", checksum_tag="99")
        assert raw.startswith("10=x|99=")
        assert calculate_checksum(raw, checksum_tag="99") == raw[-4:-1]
