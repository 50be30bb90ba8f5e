import logging
import os
from dataclasses import dataclass

import pytz

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    timezone: str = "America/Chicago"
    log_format: str = "text"
    log_level: int = logging.INFO
    allow_future_doses: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        timezone = os.environ.get("MEDTRACK_TIMEZONE", "America/Chicago")
        try:
            pytz.timezone(timezone)
        except pytz.UnknownTimeZoneError:
            raise RuntimeError(f"MEDTRACK_TIMEZONE is not a known timezone: {timezone}") from None

        log_format = os.environ.get("MEDTRACK_LOG_FORMAT", "text").lower()
        if log_format not in ("json", "text"):
            raise RuntimeError("MEDTRACK_LOG_FORMAT must be 'json' or 'text'")

        level_name = os.environ.get("MEDTRACK_LOG_LEVEL", "INFO").upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise RuntimeError(f"MEDTRACK_LOG_LEVEL is not a logging level: {level_name}")

        return cls(
            timezone=timezone,
            log_format=log_format,
            log_level=level,
            allow_future_doses=os.environ.get("MEDTRACK_ALLOW_FUTURE_DOSES", "").lower() in _TRUTHY,
        )
