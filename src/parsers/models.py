"""Pydantic data models for FIX order messages.

This module defines the closed set of tags the validator understands and
the OrderMessage container produced by the parser. Tags outside the known
set are kept in the same mapping and are reachable through raw lookup.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class Tag(str, Enum):
    """Known FIX tags for order messages."""

    SENDER_COMP_ID = "49"
    SIDE = "54"
    SYMBOL = "55"
    SECURITY_EXCHANGE = "207"
    ORDER_QTY = "38"
    PRICE = "44"
    CHECKSUM = "10"


class Side(str, Enum):
    """Order side codes."""

    BUY = "1"
    SELL = "2"


def tag_key(tag: Tag | str | int) -> str:
    """Normalize a tag to the string form used as a mapping key.

    Example:
        >>> tag_key(Tag.SYMBOL), tag_key(55), tag_key("55")
        ('55', '55', '55')
    """
    if isinstance(tag, Tag):
        return tag.value
    return str(tag)


class OrderMessage(BaseModel):
    """Tag to value mapping for a single order message.

    The model itself is frozen; fields change only through set_field().
    A tag that appeared with an empty value maps to "", while a tag that
    never appeared is absent and looks up as None. Messages are unhashable
    since their fields can change, and model_copy() copies the field map.

    Attributes:
        field_map: Parsed tag-value pairs keyed by string tag.
    """

    model_config = {"frozen": True}

    __hash__ = None  # type: ignore[assignment]

    field_map: dict[str, str] = Field(
        default_factory=dict,
        description="Tag-value pairs in parse order",
    )

    @field_validator("field_map", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> Any:
        """Accept Tag members and integer tags as keys."""
        if isinstance(v, dict):
            return {tag_key(tag): value for tag, value in v.items()}
        return v

    def get_field(self, tag: Tag | str | int) -> str | None:
        """Return the value for a tag, or None if the tag is absent."""
        return self.field_map.get(tag_key(tag))

    def set_field(self, tag: Tag | str | int, value: str) -> None:
        """Add or overwrite a field."""
        self.field_map[tag_key(tag)] = value

    def model_copy(
        self,
        *,
        update: dict[str, Any] | None = None,
        deep: bool = True,
    ) -> OrderMessage:
        """Copy the message without sharing its field map."""
        return super().model_copy(update=update, deep=deep)

    def __contains__(self, tag: object) -> bool:
        if not isinstance(tag, (Tag, str, int)):
            return False
        return tag_key(tag) in self.field_map

    @property
    def sender_id(self) -> str | None:
        return self.get_field(Tag.SENDER_COMP_ID)

    @property
    def side(self) -> str | None:
        return self.get_field(Tag.SIDE)

    @property
    def symbol(self) -> str | None:
        return self.get_field(Tag.SYMBOL)

    @property
    def market(self) -> str | None:
        return self.get_field(Tag.SECURITY_EXCHANGE)

    @property
    def quantity(self) -> str | None:
        return self.get_field(Tag.ORDER_QTY)

    @property
    def price(self) -> str | None:
        return self.get_field(Tag.PRICE)

    @property
    def checksum(self) -> str | None:
        return self.get_field(Tag.CHECKSUM)

    def is_buy_order(self) -> bool:
        """True when the side field is the buy code."""
        return self.side == Side.BUY.value

    def is_sell_order(self) -> bool:
        """True when the side field is the sell code."""
        return self.side == Side.SELL.value
