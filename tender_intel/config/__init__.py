"""Environment configuration."""

from .config import Config, load_config, validate_config, validate_digest_config

__all__ = ["Config", "load_config", "validate_config", "validate_digest_config"]
