"""Configuration management for the tender pipeline."""

from typing import Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings


DIGEST_REQUIRED_VARS = [
    "RESEND_API_KEY",
    "ALERT_EMAIL",
]


class Config(BaseSettings):
    """Application configuration from environment variables.

    Every adapter queries public data, so nothing is required to run a
    collection. The digest needs its own variables (see DIGEST_REQUIRED_VARS).
    """

    # Collection
    lookback_days: int = 3
    max_lookback_days: int = 30
    request_timeout_seconds: float = 30.0
    max_pages: int = 5
    scoring_profile_path: Optional[str] = None

    # Scheduled trigger / digest
    cron_secret: Optional[str] = None
    resend_api_key: Optional[str] = None
    alert_email: Optional[str] = None
    from_email: str = "tenders@urbanchain.energy"
    digest_top_n: int = 5
    digest_days: int = 1
    digest_hour_utc: int = 7

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "case_sensitive": False, "extra": "ignore"}

    @field_validator("lookback_days", "max_lookback_days", "max_pages", "digest_top_n", "digest_days")
    @classmethod
    def positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be at least 1, got {v}")
        return v

    @field_validator("request_timeout_seconds")
    @classmethod
    def timeout_range(cls, v: float) -> float:
        if not 0 < v <= 120:
            raise ValueError(f"must be between 0 and 120 seconds, got {v}")
        return v

    @field_validator("digest_hour_utc")
    @classmethod
    def hour_range(cls, v: int) -> int:
        if not 0 <= v <= 23:
            raise ValueError(f"must be an hour between 0 and 23, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {v!r}")
        return level

    def clamp_days(self, days: Optional[int]) -> int:
        """Clamp a requested lookback window to [1, max_lookback_days]."""
        if not days:
            days = self.lookback_days
        return max(1, min(days, self.max_lookback_days))


def validate_config() -> Config:
    """Load and validate configuration from environment.

    Raises ValueError with descriptive message listing ALL invalid
    variables (not just the first one).
    """
    try:
        return Config()
    except ValidationError as exc:
        names = sorted({str(err["loc"][0]).upper() for err in exc.errors() if err.get("loc")})
        raise ValueError(
            f"Invalid environment variable(s): {', '.join(names)}. "
            "Please fix them in your .env file or environment."
        ) from exc


def validate_digest_config(config: Config) -> None:
    """Raise ValueError listing every digest variable that is not set."""
    missing = [var for var in DIGEST_REQUIRED_VARS if not getattr(config, var.lower())]
    if missing:
        raise ValueError(
            f"Missing required environment variable(s) for the digest: {', '.join(missing)}. "
            "Please set them in your .env file or environment."
        )


def load_config() -> Config:
    """Load configuration from environment (startup entry point)."""
    return validate_config()
