import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # PokeAPI Configuration
    pokeapi_base_url: str = Field(
        "https://pokeapi.co/api/v2", description="Root URL of the PokeAPI catalog."
    )
    pokemon_list_limit: int = Field(
        151,
        ge=1,
        description="Number of Pokemon requested from the catalog in a single call.",
    )
    request_timeout: float = Field(
        30.0, gt=0, description="HTTP timeout in seconds for catalog requests."
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings(**overrides) -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings(**overrides)
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")

    log_level_upper = settings.log_level.upper()
    # Validate log_level even if loaded from .env
    if log_level_upper not in VALID_LOG_LEVELS:
        logging.warning(
            f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
        )
        settings.log_level = "INFO"
    else:
        settings.log_level = log_level_upper
    return settings


settings: AppSettings = load_settings()
