"""
Pydantic-based configuration models for the creation rules engine.

Rules themselves (age bands, tables, formulas, caps) live in the catalog, not
here. Configuration only covers how the engine runs: logging, the default dice
seed, and how strictly occupation formula choices are enforced.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from mythos_creation.structured_logging.logging_config import (
    VALID_ENVIRONMENTS,
    VALID_FORMATS,
    detect_environment,
    get_logger,
)

logger = get_logger(__name__)


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    environment: str = Field(default_factory=detect_environment, description="Logging environment")
    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="colored", description="Log format")
    disable_logging: bool = Field(default=False, description="Disable all logging")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate logging environment."""
        if v not in VALID_ENVIRONMENTS:
            logger.error("Invalid logging environment", environment=v, valid_environments=VALID_ENVIRONMENTS)
            raise ValueError(f"Environment must be one of {list(VALID_ENVIRONMENTS)}, got '{v}'")
        return v

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}, got '{v}'")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        if v not in VALID_FORMATS:
            raise ValueError(f"Log format must be one of {list(VALID_FORMATS)}, got '{v}'")
        return v

    model_config = {"env_prefix": "LOGGING_", "case_sensitive": False, "extra": "ignore"}


class EngineConfig(BaseSettings):
    """Rules engine runtime configuration."""

    dice_seed: int | None = Field(default=None, description="Seed for the default dice source (None = system entropy)")
    default_mode: Literal["random", "manual"] = Field(default="random", description="Creation mode for new drafts")
    strict_formula_choices: bool = Field(
        default=False,
        description="Require an explicit choice for every occupation formula group instead of maximizing missing ones",
    )

    @field_validator("dice_seed")
    @classmethod
    def validate_dice_seed(cls, v: int | None) -> int | None:
        """Validate the dice seed is non-negative."""
        if v is not None and v < 0:
            raise ValueError("dice_seed must be non-negative")
        return v

    model_config = {"env_prefix": "CREATION_", "case_sensitive": False, "extra": "ignore"}


class AppConfig(BaseSettings):
    """
    Composite application configuration.

    Access via get_config() singleton function.
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "case_sensitive": False, "extra": "ignore"}
