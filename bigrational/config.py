"""
Library configuration.

Defaults for root extraction and float conversion, overridable through
environment variables prefixed with ``BIGRATIONAL_``.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings"""

    model_config = SettingsConfigDict(
        env_prefix="BIGRATIONAL_",
        case_sensitive=True,
        extra="ignore",
    )

    # Root extraction
    ROOT_PRECISION: int = Field(default=30, ge=0)  # decimal digits of the deviation bound
    ROOT_MAX_ITERATIONS: int = Field(default=20_000, ge=1)

    # Float conversion
    FLOAT_CONVERSION: Literal["heuristic", "continued_fraction"] = "heuristic"
    CONTINUED_FRACTION_MAX_DENOMINATOR: int = Field(default=10**8, ge=1)

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: Literal["text", "json"] = "text"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
