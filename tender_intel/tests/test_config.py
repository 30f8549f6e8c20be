"""Tests for configuration validation."""

import os
from unittest.mock import patch

import pytest

from tender_intel.config import Config, validate_config, validate_digest_config
from tender_intel.config.config import DIGEST_REQUIRED_VARS

CONFIG_VARS = (
    "LOOKBACK_DAYS",
    "MAX_LOOKBACK_DAYS",
    "REQUEST_TIMEOUT_SECONDS",
    "MAX_PAGES",
    "SCORING_PROFILE_PATH",
    "CRON_SECRET",
    "RESEND_API_KEY",
    "ALERT_EMAIL",
    "FROM_EMAIL",
    "DIGEST_TOP_N",
    "DIGEST_DAYS",
    "DIGEST_HOUR_UTC",
    "LOG_LEVEL",
)


def _clean_env(**overrides):
    env = {k: v for k, v in os.environ.items() if k.upper() not in CONFIG_VARS}
    env.update(overrides)
    return env


class TestConfigValidation:
    """Test startup config validation."""

    def test_defaults_need_no_environment(self):
        with patch.dict(os.environ, _clean_env(), clear=True):
            config = validate_config()

        assert config.lookback_days == 3
        assert config.max_lookback_days == 30
        assert config.max_pages == 5
        assert config.digest_hour_utc == 7
        assert config.resend_api_key is None
        assert config.log_level == "INFO"

    def test_environment_overrides(self):
        env = _clean_env(
            LOOKBACK_DAYS="7",
            RESEND_API_KEY="re_test_123",
            ALERT_EMAIL="bids@example.com",
            DIGEST_HOUR_UTC="6",
            LOG_LEVEL="debug",
        )
        with patch.dict(os.environ, env, clear=True):
            config = validate_config()

        assert config.lookback_days == 7
        assert config.resend_api_key == "re_test_123"
        assert config.alert_email == "bids@example.com"
        assert config.digest_hour_utc == 6
        assert config.log_level == "DEBUG"

    def test_invalid_values_are_all_reported(self):
        env = _clean_env(LOOKBACK_DAYS="0", DIGEST_HOUR_UTC="25", MAX_PAGES="many")
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ValueError) as exc_info:
                validate_config()

        message = str(exc_info.value)
        assert "LOOKBACK_DAYS" in message
        assert "DIGEST_HOUR_UTC" in message
        assert "MAX_PAGES" in message

    def test_unknown_log_level_rejected(self):
        with patch.dict(os.environ, _clean_env(LOG_LEVEL="chatty"), clear=True):
            with pytest.raises(ValueError, match="LOG_LEVEL"):
                validate_config()


class TestClampDays:
    @pytest.mark.parametrize("days, expected", [(None, 3), (0, 3), (1, 1), (30, 30), (31, 30), (-2, 1)])
    def test_clamp(self, days, expected):
        config = Config(lookback_days=3, max_lookback_days=30)
        assert config.clamp_days(days) == expected


class TestDigestConfig:
    def test_missing_digest_vars_listed(self):
        config = Config(resend_api_key=None, alert_email=None)

        with pytest.raises(ValueError) as exc_info:
            validate_digest_config(config)

        for var in DIGEST_REQUIRED_VARS:
            assert var in str(exc_info.value)

    def test_complete_digest_config_passes(self):
        config = Config(resend_api_key="re_test", alert_email="bids@example.com")
        validate_digest_config(config)
