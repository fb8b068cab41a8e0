import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

# Message used when neither the requested locale nor the default table knows a rule.
FALLBACK_MESSAGE = "The input value is not valid"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Runtime settings, read from FIELDRULES_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="FIELDRULES_", extra="ignore")

    default_locale: str = "en"
    fallback_message: str = FALLBACK_MESSAGE
    log_level: str = "WARNING"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Library code only ever calls logging.getLogger(__name__); applications that
    want to see those records call this once at startup.
    """
    logger = logging.getLogger("fieldrules")
    logger.setLevel((level or get_settings().log_level).upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
