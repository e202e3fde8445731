"""Testes para app.bootstrap (composition root)."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest

from app.bootstrap import (
    create_stripe_relay_use_case,
    initialize_app,
    validate_runtime_settings,
)
from app.constants.stripe import CategoryTag
from config.logging import CorrelationIdFilter
from config.settings import RELAY_CONFIG_ENV, StripeRelaySettings, get_base_settings, get_relay_settings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in ("ENVIRONMENT", "SERVICE_NAME", "DEBUG", "LOG_LEVEL", RELAY_CONFIG_ENV):
        monkeypatch.delenv(name, raising=False)
    get_base_settings.cache_clear()
    get_relay_settings.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_relay_settings.cache_clear()


class TestInitializeApp:
    """Testes para initialize_app."""

    def test_configures_root_logger(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        initialize_app()
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert any(isinstance(f, CorrelationIdFilter) for f in root.handlers[0].filters)


class TestValidateRuntimeSettings:
    """Testes para validate_runtime_settings."""

    def test_invalid_settings_fail_in_production(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        with pytest.raises(RuntimeError, match="LOG_LEVEL"):
            validate_runtime_settings()

    def test_invalid_settings_only_warn_in_development(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        with caplog.at_level(logging.WARNING, logger="app.bootstrap"):
            validate_runtime_settings()
        assert any(r.message == "settings_validation_failed" for r in caplog.records)


class TestCreateStripeRelayUseCase:
    """Testes para create_stripe_relay_use_case."""

    def test_wires_explicit_settings(self) -> None:
        settings = StripeRelaySettings(enabled_categories=frozenset({CategoryTag.CHARGE}))
        relay = create_stripe_relay_use_case(settings)
        raw = json.dumps({"type": "invoice.paid", "id": "evt_1"}).encode("utf-8")
        result = relay.execute(raw)
        assert result.category is CategoryTag.INVOICE
        assert result.display is None

    def test_defaults_from_env(self) -> None:
        relay = create_stripe_relay_use_case()
        result = relay.execute({"type": "invoice.paid", "id": "evt_1"})
        assert result.notified is True
