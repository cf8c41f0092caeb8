"""
Pydantic models for configuration validation.

This module provides type-safe configuration models with validation
for the Simple Test Framework configuration file.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .utils.constants import (
    CONFIG_ENV_VAR, DEFAULT_FLOAT_PRECISION, DEFAULT_TIMEOUT, MAX_TIMEOUT,
    DuplicatePolicy, ExceptionMatch
)

logger = logging.getLogger(__name__)


class HarnessConfig(BaseModel):
    """Complete harness configuration model."""
    default_timeout: int = Field(DEFAULT_TIMEOUT, ge=1, le=MAX_TIMEOUT)
    float_precision: int = Field(DEFAULT_FLOAT_PRECISION, ge=1, le=40)
    exception_match: ExceptionMatch = ExceptionMatch.ANCESTOR
    duplicate_names: DuplicatePolicy = DuplicatePolicy.WARN
    hex_adapters: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v

    @classmethod
    def load_from_file(cls, config_path: str) -> "HarnessConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to configuration YAML file

        Returns:
            Validated HarnessConfig instance

        Raises:
            ConfigurationError: If the file is missing, empty or invalid
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                config_path=config_path
            )

        with open(config_file, 'r') as f:
            try:
                raw_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Invalid YAML in configuration file: {e}",
                    config_path=config_path
                ) from e

        if raw_config is None:
            raw_config = {}
        if not isinstance(raw_config, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                config_path=config_path
            )

        try:
            config = cls.model_validate(raw_config)
        except ValidationError as e:
            errors = e.errors()
            field = ".".join(str(part) for part in errors[0]["loc"]) if errors else None
            raise ConfigurationError(
                f"Invalid configuration: {e}",
                config_path=config_path,
                field=field
            ) from e

        logger.debug(f"Loaded configuration from {config_path}")
        return config

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "HarnessConfig":
        """
        Load configuration from config_path, $STF_CONFIG, or defaults.

        Returns:
            Validated HarnessConfig instance
        """
        path = config_path or os.environ.get(CONFIG_ENV_VAR)
        if path:
            return cls.load_from_file(path)
        return cls()
