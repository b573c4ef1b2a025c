import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator


load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MESSAGES_API_BASE = "https://november7-730026606190.europe-west1.run.app"
DEFAULT_PAGE_SIZE = 200
DEFAULT_MAX_SKIP = 4000


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid %s=%r, using %s", name, value, default)
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid %s=%r, using %s", name, value, default)
        return default


class Settings(BaseModel):
    model_config = ConfigDict(validate_default=True)

    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: _env_int("PORT", 4000))
    messages_api_base: str = Field(default_factory=lambda: os.getenv("MESSAGES_API_BASE", DEFAULT_MESSAGES_API_BASE))
    messages_page_size: int = Field(default_factory=lambda: _env_int("MESSAGES_PAGE_SIZE", DEFAULT_PAGE_SIZE))
    messages_max_skip: int = Field(default_factory=lambda: _env_int("MESSAGES_MAX_SKIP", DEFAULT_MAX_SKIP))
    request_timeout: float = Field(default_factory=lambda: _env_float("REQUEST_TIMEOUT", 30.0))
    fixed_answers_path: str = Field(default_factory=lambda: os.getenv("FIXED_ANSWERS_PATH", "").strip())
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    @field_validator("messages_api_base")
    @classmethod
    def _strip_base(cls, value: str) -> str:
        return value.strip().rstrip("/")

    # A page size below 1 never produces a short page and never advances the offset.
    @field_validator("messages_page_size")
    @classmethod
    def _positive_page_size(cls, value: int) -> int:
        if value < 1:
            logger.warning("Ignoring messages_page_size=%d, using %d", value, DEFAULT_PAGE_SIZE)
            return DEFAULT_PAGE_SIZE
        return value

    @field_validator("messages_max_skip")
    @classmethod
    def _non_negative_max_skip(cls, value: int) -> int:
        if value < 0:
            logger.warning("Ignoring messages_max_skip=%d, using %d", value, DEFAULT_MAX_SKIP)
            return DEFAULT_MAX_SKIP
        return value


@lru_cache()
def get_settings() -> Settings:
    return Settings()
