"""Testes para config.settings (base + relay Stripe)."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from app.constants.stripe import CategoryTag
from config.settings import (
    DEFAULT_SERVICE_NAME,
    KNOWN_CATEGORIES,
    RELAY_CONFIG_ENV,
    BaseSettings,
    StripeRelaySettings,
    get_base_settings,
    get_relay_settings,
    load_relay_settings,
)
from utils.errors import RelayConfigError


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_base_settings.cache_clear()
    get_relay_settings.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_relay_settings.cache_clear()


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "relay.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestBaseSettings:
    """Testes para BaseSettings."""

    def test_defaults_from_empty_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("ENVIRONMENT", "SERVICE_NAME", "DEBUG", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = get_base_settings()
        assert settings.environment == "development"
        assert settings.service_name == DEFAULT_SERVICE_NAME
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.validate() == []

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "prod")
        monkeypatch.setenv("SERVICE_NAME", "relay-worker")
        monkeypatch.setenv("LOG_LEVEL", "warning")
        monkeypatch.setenv("DEBUG", "false")
        settings = get_base_settings()
        assert settings.is_production
        assert settings.service_name == "relay-worker"
        assert settings.effective_log_level == "WARNING"

    def test_debug_forces_debug_level(self) -> None:
        assert BaseSettings(debug=True, log_level="ERROR").effective_log_level == "DEBUG"

    def test_validate_errors(self) -> None:
        errors = BaseSettings(
            environment="production", service_name="", debug=True, log_level="LOUD"
        ).validate()
        assert len(errors) == 3
        assert any("SERVICE_NAME" in error for error in errors)
        assert any("LOG_LEVEL" in error for error in errors)
        assert any("DEBUG" in error for error in errors)


class TestStripeRelaySettings:
    """Testes para StripeRelaySettings."""

    def test_defaults(self) -> None:
        """Todas as categorias conhecidas habilitadas; unhandled não notificado."""
        settings = StripeRelaySettings()
        assert settings.enabled_categories == KNOWN_CATEGORIES
        assert len(KNOWN_CATEGORIES) == 13
        assert all(settings.is_notified(category) for category in KNOWN_CATEGORIES)
        assert settings.is_notified(CategoryTag.UNHANDLED) is False
        assert settings.validate() == []

    def test_validate_rejects_unhandled_in_enabled(self) -> None:
        settings = StripeRelaySettings(enabled_categories=frozenset({CategoryTag.UNHANDLED}))
        assert settings.validate()

    def test_validate_rejects_nothing_enabled(self) -> None:
        assert StripeRelaySettings(enabled_categories=frozenset()).validate()
        assert StripeRelaySettings(enabled_categories=frozenset(), notify_unhandled=True).validate() == []


class TestLoadRelaySettings:
    """Testes para load_relay_settings (YAML)."""

    def test_loads_document(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "enabled_categories:\n  - invoice\n  - charge\nnotify_unhandled: true\n",
        )
        settings = load_relay_settings(path)
        assert settings.enabled_categories == frozenset({CategoryTag.INVOICE, CategoryTag.CHARGE})
        assert settings.notify_unhandled is True
        assert settings.is_notified(CategoryTag.PAYOUT) is False

    def test_empty_document_yields_defaults(self, tmp_path: Path) -> None:
        assert load_relay_settings(_write(tmp_path, "")) == StripeRelaySettings()

    def test_null_categories_yield_defaults(self, tmp_path: Path) -> None:
        settings = load_relay_settings(_write(tmp_path, "enabled_categories:\n"))
        assert settings.enabled_categories == KNOWN_CATEGORIES

    @pytest.mark.parametrize(
        "content",
        [
            "enabled_categories: [invoice, refund]\n",
            "enabled_categories: invoice\n",
            "enabled_categories: [unhandled]\n",
            "enabled_categories: []\n",
            "notify_unhandled: 'yes'\n",
            "- invoice\n",
            "enable_categories: [invoice]\n",
            "enabled_categories: [invoice\n",
        ],
    )
    def test_invalid_documents(self, tmp_path: Path, content: str) -> None:
        with pytest.raises(RelayConfigError):
            load_relay_settings(_write(tmp_path, content))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(RelayConfigError, match="não foi possível ler"):
            load_relay_settings(tmp_path / "missing.yaml")


class TestGetRelaySettings:
    """Testes para get_relay_settings (env)."""

    def test_fallback_without_config(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.delenv(RELAY_CONFIG_ENV, raising=False)
        with caplog.at_level(logging.INFO, logger="config.settings.stripe"):
            settings = get_relay_settings()

        assert settings == StripeRelaySettings()
        record = next(r for r in caplog.records if getattr(r, "fallback_used", False))
        assert record.component == "stripe_relay_settings"
        assert record.reason == "config_not_set"

    def test_loads_from_env_path(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        path = _write(tmp_path, "enabled_categories: [topup]\n")
        monkeypatch.setenv(RELAY_CONFIG_ENV, str(path))
        settings = get_relay_settings()
        assert settings.enabled_categories == frozenset({CategoryTag.TOPUP})
        assert get_relay_settings() is settings
