"""Application settings.

Values come from environment variables prefixed with ``FOP_TAX_`` or from a
``.env`` file in the working directory.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fop_tax.infrastructure.declarations.common import SOFTWARE_NAME
from fop_tax.infrastructure.rates.nbu import NBU_API_URL


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FOP_TAX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Storage ---
    data_dir: Path = Field(default=Path.home() / ".fop-tax")

    # --- NBU rates ---
    nbu_api_url: str = NBU_API_URL
    request_timeout: float = Field(default=10.0, gt=0)

    # --- Output ---
    log_level: str = "WARNING"
    software_name: str = SOFTWARE_NAME
    pdf_font_path: Optional[Path] = None

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Settings loaded once per process."""
    return Settings()
