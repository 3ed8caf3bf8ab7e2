"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Package root: pera_analytics/
PACKAGE_ROOT = Path(__file__).parent
# Content directory: pera_analytics/content/
CONTENT_DIR = PACKAGE_ROOT / "content"


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    log_level: str = Field(default="INFO", description="Logging level")

    # === Scoring ===
    default_k_value: float = Field(
        default=1.1,
        gt=0,
        description="Exponent used for new event standards"
    )
    penalty_margin: int = Field(
        default=20,
        ge=0,
        description="Points below the reference score for missed mandatory races"
    )

    # === Data ===
    data_file: Optional[Path] = Field(
        default=None,
        description="JSON snapshot with athletes, standards, sessions and routes"
    )
    standards_file: Path = Field(
        default=CONTENT_DIR / "standards.yaml",
        description="Default event standards used when a snapshot has none"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept 'debug', 'Info', ... from the environment."""
        return v.upper()

    model_config = SettingsConfigDict(
        env_prefix="PERA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
