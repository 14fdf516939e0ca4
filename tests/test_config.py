"""Tests for settings."""

import pytest

from chainfeed.config import Settings
from chainfeed.constants import DEFAULT_CURRENCY


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test defaults match a local bitcoind."""
        monkeypatch.delenv("CHAINFEED_CURRENCY_SYMBOL", raising=False)
        settings = Settings(_env_file=None)

        assert settings.currency_symbol == DEFAULT_CURRENCY == "BTC"
        assert settings.subscription_url == "tcp://127.0.0.1:28332"
        assert settings.subscription_msg_timeout is None
        assert settings.rpc_timeout == 30.0

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test CHAINFEED_* variables are read."""
        monkeypatch.setenv("CHAINFEED_RPC_URL", "http://u:p@node:9332")
        monkeypatch.setenv("CHAINFEED_RPC_TIMEOUT", "5")
        monkeypatch.setenv("CHAINFEED_SUBSCRIPTION_MSG_TIMEOUT", "600")
        monkeypatch.setenv("CHAINFEED_CURRENCY_SYMBOL", "LTC")

        settings = Settings(_env_file=None)

        assert settings.rpc_url.get_secret_value() == "http://u:p@node:9332"
        assert "p@node" not in repr(settings)
        assert settings.rpc_timeout == 5.0
        assert settings.subscription_msg_timeout == 600.0
        assert settings.currency_symbol == "LTC"

    def test_empty_currency_falls_back(self) -> None:
        """Test an empty symbol uses the default."""
        settings = Settings(_env_file=None, currency_symbol="")

        assert settings.currency_symbol == DEFAULT_CURRENCY

    def test_non_positive_timeouts_disable(self) -> None:
        """Test zero timeouts mean no timeout."""
        settings = Settings(_env_file=None, subscription_timeout=0, subscription_msg_timeout=-1)

        assert settings.subscription_timeout is None
        assert settings.subscription_msg_timeout is None
