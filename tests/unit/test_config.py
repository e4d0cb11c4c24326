"""Unit tests for application settings."""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from pydantic import ValidationError as SchemaValidationError

from policy_pricing.core.config import (
    DEFAULT_RATES_FILE,
    Settings,
    clear_settings_cache,
    get_settings,
)
from policy_pricing.core.logging_utils import (
    configure_logging,
    get_logger,
    level_from_name,
)


class TestSettings:
    """Test settings defaults and environment overrides."""

    def test_defaults(self) -> None:
        """Defaults price against the packaged rate file."""
        settings = Settings()

        assert settings.rates_path == DEFAULT_RATES_FILE
        assert settings.rates_path.name == "pricing-rules.json"
        assert settings.feature_dynamic_rates is None
        assert settings.quote_validity_days == 30
        assert settings.premium_floor_policy == "allow_negative"
        assert settings.slow_quote_threshold_ms == 50

    def test_environment_overrides(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Environment variables feed the settings."""
        monkeypatch.setenv("FEATURE_DYNAMIC_RATES", "true")
        monkeypatch.setenv("RATES_PATH", str(tmp_path / "rules.json"))
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.feature_dynamic_rates is True
        assert settings.rates_path == tmp_path / "rules.json"
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level_rejected(self) -> None:
        """Unknown level names are rejected."""
        with pytest.raises(SchemaValidationError):
            Settings(log_level="chatty")

    def test_invalid_floor_policy_rejected(self) -> None:
        """Only the two floor policies exist."""
        with pytest.raises(SchemaValidationError):
            Settings(premium_floor_policy="round_up")

    def test_settings_are_frozen(self) -> None:
        """Settings cannot change after construction."""
        settings = Settings()

        with pytest.raises(SchemaValidationError):
            settings.quote_validity_days = 10  # type: ignore[misc]

    def test_get_settings_is_cached(self) -> None:
        """The same instance is returned until the cache is cleared."""
        first = get_settings()

        assert get_settings() is first

        clear_settings_cache()
        assert get_settings() is not first


class TestLogging:
    """Test logging helpers."""

    def test_level_from_name(self) -> None:
        """Level names map to logging levels with INFO as the fallback."""
        assert level_from_name("debug") == 10
        assert level_from_name("ERROR") == 40
        assert level_from_name("nonsense") == 20

    def test_get_logger_uses_package_default(self) -> None:
        """Unnamed loggers belong to the package."""
        assert get_logger().name == "policy_pricing"
        assert get_logger("policy_pricing.sub").name == "policy_pricing.sub"

    @pytest.fixture
    def restore_root_level(self) -> Generator[None, None, None]:
        """Put the root logger level back after the test."""
        root = logging.getLogger()
        previous = root.level
        yield
        root.setLevel(previous)

    def test_configured_level_applies_after_import(
        self, restore_root_level: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """LOG_LEVEL takes effect even though module loggers exist already."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        get_logger("policy_pricing.services.rating.rating_engine")

        configure_logging(level=level_from_name(Settings().log_level))

        assert logging.getLogger().level == logging.DEBUG
        assert get_logger().isEnabledFor(logging.DEBUG)

    def test_repeat_call_without_level_keeps_level(
        self, restore_root_level: None
    ) -> None:
        """Calling again without a level changes nothing."""
        configure_logging(level=logging.WARNING)
        configure_logging()

        assert logging.getLogger().level == logging.WARNING
