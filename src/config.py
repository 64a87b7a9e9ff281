"""Centralized configuration management.

This module provides configuration classes for the application,
loading values from environment variables with sensible defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

# Spellings accepted for the SOH delimiter in FIX_DELIMITER
SOH_ALIASES = {"SOH", "\\x01", "\\u0001", "^A"}


class ConfigurationError(Exception):
    """Raised when configuration values are invalid."""

    def __init__(self, message: str, invalid_vars: list[str] | None = None) -> None:
        super().__init__(message)
        self.invalid_vars = invalid_vars or []


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for the FIX wire format.

    Attributes:
        delimiter: Character separating fields (SOH by default).
        separator: Character separating a tag from its value.
        checksum_tag: Tag of the checksum field.
    """

    delimiter: str = "\x01"
    separator: str = "="
    checksum_tag: str = "10"

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ConfigurationError: If a value cannot describe the wire format.
        """
        invalid = []
        if len(self.delimiter) != 1:
            invalid.append("FIX_DELIMITER")
        if len(self.separator) != 1:
            invalid.append("FIX_SEPARATOR")
        if not invalid and self.delimiter == self.separator:
            invalid.extend(["FIX_DELIMITER", "FIX_SEPARATOR"])
        if not self.checksum_tag:
            invalid.append("FIX_CHECKSUM_TAG")

        if invalid:
            raise ConfigurationError(
                f"Invalid wire format configuration: {', '.join(invalid)}. "
                "Delimiter and separator must be distinct single characters.",
                invalid_vars=invalid,
            )


@dataclass
class AppConfig:
    """Main application configuration.

    Attributes:
        parser: Wire format configuration.
        log_level: Logging level.
        debug: Debug mode flag.
    """

    parser: ParserConfig = field(default_factory=ParserConfig)
    log_level: str = "INFO"
    debug: bool = False

    @classmethod
    def from_env(cls) -> AppConfig:
        """Create configuration from environment variables.

        Returns:
            AppConfig instance populated from environment.
        """
        delimiter = os.getenv("FIX_DELIMITER", "\x01")
        if delimiter in SOH_ALIASES:
            delimiter = "\x01"

        parser_config = ParserConfig(
            delimiter=delimiter,
            separator=os.getenv("FIX_SEPARATOR", "="),
            checksum_tag=os.getenv("FIX_CHECKSUM_TAG", "10"),
        )

        return cls(
            parser=parser_config,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )

    def validate(self) -> None:
        """Validate all configuration sections.

        Raises:
            ConfigurationError: If any configuration value is invalid.
        """
        self.parser.validate()


# Global configuration instance (lazy loaded)
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get the global application configuration.

    Returns:
        AppConfig instance loaded from environment.
    """
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
