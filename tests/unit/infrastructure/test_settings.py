"""
Unit tests for Settings.

Usage:
    pytest tests/unit/infrastructure/test_settings.py
"""

import pytest
from pydantic import ValidationError

from douanier.config.settings import Settings

REQUIRED = {
    "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
    "JWT_SECRET_KEY": "secret",
}


class TestSettings:
    """Tests for configuration parsing."""

    def test_defaults(self):
        settings = Settings(**REQUIRED)

        assert settings.SESSION_TTL_MINUTES == 15
        assert settings.DISCOUNT_CODE_PREFIX == "DKG"
        assert settings.chain_endpoints() == {}

    def test_chain_endpoints_merge_shortcuts(self):
        settings = Settings(
            **REQUIRED,
            ETHEREUM_RPC_URL="http://eth.test",
            POLYGON_RPC_URL="http://polygon.test",
            CHAIN_RPC_URLS={
                137: "http://polygon-override.test",
                8453: "http://base.test",
            },
        )

        assert settings.chain_endpoints() == {
            1: "http://eth.test",
            137: "http://polygon-override.test",
            8453: "http://base.test",
        }

    def test_log_level_normalized(self):
        assert Settings(**REQUIRED, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(**REQUIRED, LOG_LEVEL="LOUD")

    def test_code_prefix_upper_cased(self):
        settings = Settings(**REQUIRED, DISCOUNT_CODE_PREFIX="vip")
        assert settings.DISCOUNT_CODE_PREFIX == "VIP"

    def test_code_prefix_must_be_alphanumeric(self):
        with pytest.raises(ValidationError):
            Settings(**REQUIRED, DISCOUNT_CODE_PREFIX="a-b")
