"""Custom exceptions for FIX order message parsing."""


class FIXParseError(Exception):
    """Base exception for FIX parsing errors.

    Raised when a FIX message cannot be parsed due to format issues.
    """

    def __init__(self, message: str, raw_message: str | None = None) -> None:
        """Initialize FIXParseError.

        Args:
            message: Human-readable error description.
            raw_message: The raw FIX message that failed to parse (optional).
        """
        super().__init__(message)
        self.raw_message = raw_message


class InvalidFormatError(FIXParseError):
    """Raised when a raw message is empty or contains a malformed segment.

    A segment is malformed when it has no separator between tag and value.
    """

    def __init__(
        self,
        message: str,
        segment: str | None = None,
        raw_message: str | None = None,
    ) -> None:
        """Initialize InvalidFormatError.

        Args:
            message: Human-readable error description.
            segment: The offending segment, if the error is segment-specific.
            raw_message: The raw FIX message that failed to parse (optional).
        """
        super().__init__(message, raw_message)
        self.segment = segment
