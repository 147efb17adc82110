"""Pydantic settings for the conversion engine."""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Polygon-like chains produce ~41142 blocks per day
DEFAULT_PERIODS_PER_YEAR = 41142 * 365


class EngineSettings(BaseSettings):
    """Engine-wide constants loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CONVERSION_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Health factors
    min_health_factor: Decimal = Field(
        default=Decimal("1.05"), gt=Decimal("1"), description="Minimum allowed health factor"
    )
    target_health_factor: Decimal = Field(
        default=Decimal("2.0"), gt=Decimal("1"), description="Default health factor target"
    )
    too_healthy_health_factor: Decimal = Field(
        default=Decimal("4.0"), gt=Decimal("1"), description="Above this a position is too healthy"
    )
    max_allowed_health_factor_reduction: Decimal = Field(
        default=Decimal("0.005"),
        ge=Decimal("0"),
        lt=Decimal("1"),
        description="Relative health factor drop tolerated on a healthy position",
    )

    # APR
    periods_per_year: int = Field(
        default=DEFAULT_PERIODS_PER_YEAR, gt=0, description="Rate periods (blocks or seconds) per year"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator(
        "min_health_factor",
        "target_health_factor",
        "too_healthy_health_factor",
        "max_allowed_health_factor_reduction",
        mode="before",
    )
    @classmethod
    def parse_decimal(cls, v):
        """Accept floats and strings without binary rounding noise."""
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Upper-case the logging level name."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @model_validator(mode="after")
    def check_health_factor_order(self) -> "EngineSettings":
        """Ensure min <= target <= too-healthy."""
        if self.target_health_factor < self.min_health_factor:
            raise ValueError(
                f"target_health_factor {self.target_health_factor} is below "
                f"min_health_factor {self.min_health_factor}"
            )
        if self.too_healthy_health_factor < self.target_health_factor:
            raise ValueError(
                f"too_healthy_health_factor {self.too_healthy_health_factor} is below "
                f"target_health_factor {self.target_health_factor}"
            )
        return self

    @property
    def min_health_factor18(self) -> int:
        """Minimum health factor as an 18-decimal integer."""
        return _to_wad(self.min_health_factor)

    @property
    def target_health_factor18(self) -> int:
        """Default target health factor as an 18-decimal integer."""
        return _to_wad(self.target_health_factor)

    @property
    def too_healthy_health_factor18(self) -> int:
        """Too-healthy threshold as an 18-decimal integer."""
        return _to_wad(self.too_healthy_health_factor)

    @property
    def max_allowed_health_factor_reduction18(self) -> int:
        """Tolerated relative reduction as an 18-decimal integer."""
        return _to_wad(self.max_allowed_health_factor_reduction)


def _to_wad(value: Decimal) -> int:
    return int(value * Decimal(10**18))


@lru_cache()
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return EngineSettings()
