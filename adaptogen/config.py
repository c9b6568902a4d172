"""
Configuration management for adaptogen.

Settings are plain dataclass fields with environment-based overrides and
validation. There is no configuration file.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')
_TRUTHY = ('1', 'true', 'yes')


@dataclass
class AdaptogenConfig:
    """Configuration settings for parsing and logging."""

    # Parsing
    strict_blocks: bool = False  # Raise on unrecognized content instead of skipping it

    # Debug and logging
    debug_enabled: bool = field(default=False)
    log_level: str = "INFO"

    def __post_init__(self):
        """Post-initialization validation and environment variable loading."""
        self._load_from_environment()
        self._validate_config()

    def _load_from_environment(self) -> None:
        """Load configuration from environment variables."""
        debug_env = os.getenv('ADAPTOGEN_DEBUG', '').lower()
        if debug_env in _TRUTHY:
            self.debug_enabled = True

        strict_env = os.getenv('ADAPTOGEN_STRICT', '').lower()
        if strict_env in _TRUTHY:
            self.strict_blocks = True

        log_level = os.getenv('ADAPTOGEN_LOG_LEVEL', '').upper()
        if log_level in VALID_LOG_LEVELS:
            self.log_level = log_level

    def _validate_config(self) -> None:
        """Validate configuration values."""
        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}")

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug switch."""
        return "DEBUG" if self.debug_enabled else self.log_level

    @classmethod
    def create_default(cls) -> AdaptogenConfig:
        """Create a default configuration instance."""
        return cls()

    def update(self, **kwargs) -> AdaptogenConfig:
        """
        Create a new config instance with updated values.

        Args:
            **kwargs: Configuration values to update

        Returns:
            New AdaptogenConfig instance with updated values
        """
        current_values = self.to_dict()
        current_values.update(kwargs)
        return AdaptogenConfig(**current_values)

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            'strict_blocks': self.strict_blocks,
            'debug_enabled': self.debug_enabled,
            'log_level': self.log_level,
        }
