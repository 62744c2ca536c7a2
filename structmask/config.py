"""Configuration for masking defaults and logging."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .core.exceptions import ConfigurationError

CONFIG_SECTION = "structmask"


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(default="text", description="Log format (json or text)")
    enable_tracing: bool = Field(
        default=False, description="Log start/end of every masking call"
    )
    output: str = Field(default="stdout", description="Log output (stdout or file)")
    file_path: str | None = Field(default=None, description="Log file path")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level '{v}'")
        return level

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in {"json", "text"}:
            raise ValueError("format must be 'json' or 'text'")
        return v

    @field_validator("output")
    @classmethod
    def validate_output(cls, v: str) -> str:
        if v not in {"stdout", "file"}:
            raise ValueError("output must be 'stdout' or 'file'")
        return v


class MaskingConfig(BaseModel):
    """Top-level configuration for StructMask."""

    default_mask_char: str = Field(
        default="*", description="Mask character for fields without a mask_tag"
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("default_mask_char")
    @classmethod
    def validate_mask_char(cls, v: str) -> str:
        if not v:
            raise ValueError("default_mask_char cannot be empty")
        return v

    @classmethod
    def from_file(cls, config_path: Path | str) -> MaskingConfig:
        """Load configuration from the ``structmask`` section of a YAML file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path) as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}",
                config_file=str(config_path),
            ) from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                config_file=str(config_path),
            )

        section = config_data.get(CONFIG_SECTION) or {}
        try:
            return cls(**section)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}",
                config_file=str(config_path),
                config_section=CONFIG_SECTION,
            ) from e

    @classmethod
    def from_env(cls) -> MaskingConfig:
        """Load configuration from environment variables.

        Environment Variables:
            STRUCTMASK_MASK_CHAR: Default mask character
            STRUCTMASK_LOG_LEVEL: Log level
            STRUCTMASK_LOG_FORMAT: Log format (json|text)
            STRUCTMASK_LOG_TRACING: Trace every masking call (true|false)
        """
        config = cls()

        if mask_char := os.getenv("STRUCTMASK_MASK_CHAR"):
            config.default_mask_char = mask_char

        logging_config = config.logging
        try:
            config.logging = LoggingConfig(
                level=os.getenv("STRUCTMASK_LOG_LEVEL", logging_config.level),
                format=os.getenv("STRUCTMASK_LOG_FORMAT", logging_config.format),
                enable_tracing=(
                    os.getenv("STRUCTMASK_LOG_TRACING", "false").strip().lower()
                    == "true"
                ),
            )
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid logging configuration in environment: {e}"
            ) from e

        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()


_config: MaskingConfig | None = None


def get_config() -> MaskingConfig:
    """Get the process default configuration, loading it from the environment."""
    global _config
    if _config is None:
        _config = MaskingConfig.from_env()
    return _config


def set_config(config: MaskingConfig) -> None:
    """Replace the process default configuration."""
    global _config
    _config = config


def reset_config() -> None:
    """Drop the process default so the next access reloads it."""
    global _config
    _config = None
