"""Testes para app.observability (correlation_id e métricas)."""

from __future__ import annotations

import logging

import pytest

from app.observability import (
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    record_event_outcome,
    record_latency,
    record_rejection,
    reset_correlation_id,
    set_correlation_id,
)


class TestCorrelationId:
    """Testes para o ContextVar de correlation_id."""

    def test_default_is_empty(self) -> None:
        assert get_correlation_id() == ""

    def test_set_and_reset(self) -> None:
        token = set_correlation_id("evt_1")
        assert get_correlation_id() == "evt_1"
        reset_correlation_id(token)
        assert get_correlation_id() == ""

    def test_set_without_value_generates_uuid(self) -> None:
        token = set_correlation_id(None)
        try:
            assert len(get_correlation_id()) == 36
        finally:
            reset_correlation_id(token)

    def test_generate_is_unique(self) -> None:
        assert generate_correlation_id() != generate_correlation_id()

    def test_scope_restores_previous_value(self) -> None:
        token = set_correlation_id("outer")
        try:
            with correlation_scope("evt_inner") as value:
                assert value == "evt_inner"
                assert get_correlation_id() == "evt_inner"
            assert get_correlation_id() == "outer"
        finally:
            reset_correlation_id(token)

    def test_scope_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError), correlation_scope("evt_1"):
            raise RuntimeError("boom")
        assert get_correlation_id() == ""


class TestMetrics:
    """Testes das métricas via log estruturado."""

    def test_record_latency(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="app.observability.metrics"):
            record_latency("stripe_relay", "execute", 12.3456, "evt_1")

        record = caplog.records[-1]
        assert record.message == "metric_latency"
        assert record.latency_ms == 12.35
        assert record.operation == "execute"

    def test_record_event_outcome(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="app.observability.metrics"):
            record_event_outcome("charge", "forwarded", "evt_2")

        record = caplog.records[-1]
        assert record.message == "metric_event_outcome"
        assert record.metric_type == "event_outcome"
        assert record.category == "charge"
        assert record.outcome == "forwarded"

    def test_record_rejection(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="app.observability.metrics"):
            record_rejection("invalid_json")

        record = caplog.records[-1]
        assert record.message == "metric_rejection"
        assert record.reason == "invalid_json"
        assert record.correlation_id is None
