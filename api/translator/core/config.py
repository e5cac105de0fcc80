import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_ENVIRONMENT_ALIASES = {"prod": "production", "dev": "development", "test": "testing"}


class Settings(BaseSettings):
    """Runtime configuration, read from the environment and an optional .env file."""

    # Service identity
    PROJECT_NAME: str = "Frequency Translator"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False

    # Deployment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma-separated origins or a list; "*" allows any origin outside production
    CORS_ORIGINS: str | list[str] = "*"

    # Holds translator.db (language profiles and translation lookups)
    DATA_DIR: str = "api/data"

    # In-memory LRU entries in front of the translations table
    TRANSLATION_CACHE_L1_SIZE: int = 1000

    # Store the en/pt/es/fr reference profiles at startup when missing
    SEED_REFERENCE_PROFILES: bool = True

    # Target for non-English input, and the target used when the input is English
    DEFAULT_TARGET_LANGUAGE: str = "en"
    ENGLISH_TARGET_LANGUAGE: str = "pt"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="allow",
    )

    @property
    def DATABASE_PATH(self) -> str:
        """SQLite file holding both the profile and the translation tables."""
        return os.path.join(self.DATA_DIR, "translator.db")

    @field_validator("ENVIRONMENT")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        env = v.strip().lower()
        return _ENVIRONMENT_ALIASES.get(env, env)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Upper-case the level and check the logging module knows it.

        Raises:
            ValueError: If the level name is unknown
        """
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {v!r}")
        return level

    @field_validator("TRANSLATION_CACHE_L1_SIZE")
    @classmethod
    def validate_cache_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"TRANSLATION_CACHE_L1_SIZE must be positive, got {v}")
        return v

    @field_validator("DEFAULT_TARGET_LANGUAGE", "ENGLISH_TARGET_LANGUAGE")
    @classmethod
    def normalize_language_code(cls, v: str) -> str:
        code = v.strip().lower()
        if not code:
            raise ValueError("Target language codes must be non-empty")
        return code

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def split_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Turn a comma-separated string or a list into a clean list of origins.

        Blank entries are dropped. Anything that is neither a string nor a
        list yields no origins at all.
        """
        if isinstance(v, str):
            if v.strip() == "*":
                return ["*"]
            v = v.split(",")
        if not isinstance(v, list):
            return []
        return [origin.strip() for origin in v if isinstance(origin, str) and origin.strip()]

    @field_validator("CORS_ORIGINS")
    @classmethod
    def forbid_wildcard_in_production(cls, v: list[str], info: ValidationInfo) -> list[str]:
        """
        Raises:
            ValueError: If ENVIRONMENT is production and origins are ["*"]
        """
        if info.data.get("ENVIRONMENT") == "production" and v == ["*"]:
            raise ValueError("CORS wildcard '*' not allowed in production")
        return v

    def ensure_data_dirs(self) -> None:
        """Create DATA_DIR. Called from the application lifespan, never at import."""
        Path(self.DATA_DIR).mkdir(parents=True, exist_ok=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, built on first use."""
    return Settings()


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
