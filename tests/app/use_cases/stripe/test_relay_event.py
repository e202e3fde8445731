"""Testes para RelayStripeEventUseCase."""

from __future__ import annotations

import json
import logging
from typing import Any

import pytest

from api.normalizers.stripe import StripeEventNormalizer
from api.payload_builders.slack import SlackMessageComposer, loads_message
from app.constants.stripe import CategoryTag
from app.observability import get_correlation_id
from app.use_cases.stripe import RelayStripeEventUseCase
from config.settings.stripe import StripeRelaySettings
from utils.errors import MalformedEventError


def _raw(event_type: str, event_id: str = "evt_1", **obj: Any) -> bytes:
    envelope = {
        "type": event_type,
        "id": event_id,
        "api_version": "2020-08-27",
        "created": 1700000000,
        "livemode": True,
        "pending_webhooks": 0,
        "data": {"object": obj},
    }
    return json.dumps(envelope).encode("utf-8")


class SpyComposer(SlackMessageComposer):
    """Composer que registra os correlation_ids vistos."""

    def __init__(self) -> None:
        self.seen_correlation_ids: list[str] = []
        self.digest_sizes: list[int] = []

    def compose(self, event):  # type: ignore[no-untyped-def]
        self.seen_correlation_ids.append(get_correlation_id())
        return super().compose(event)

    def compose_digest(self, events):  # type: ignore[no-untyped-def]
        self.digest_sizes.append(len(events))
        return super().compose_digest(events)


def _use_case(
    settings: StripeRelaySettings | None = None,
    composer: SlackMessageComposer | None = None,
) -> RelayStripeEventUseCase:
    return RelayStripeEventUseCase(
        normalizer=StripeEventNormalizer(),
        composer=composer or SlackMessageComposer(),
        settings=settings,
    )


class TestExecute:
    """Testes de relay de evento único."""

    def test_known_category_is_notified(self) -> None:
        result = _use_case().execute(_raw("charge.succeeded", id="ch_1", amount=500))

        assert result.event_id == "evt_1"
        assert result.category is CategoryTag.CHARGE
        assert result.notified is True
        canonical = json.loads(result.canonical)
        assert canonical["category"] == "charge"
        assert canonical["data"]["id"] == "ch_1"
        assert result.display is not None
        message = loads_message(result.display)
        assert len(message.blocks) == 2

    def test_unhandled_not_notified_by_default(self) -> None:
        """Evento não tratado é encaminhado sem mensagem."""
        result = _use_case().execute(_raw("some.unknown.event"))
        assert result.category is CategoryTag.UNHANDLED
        assert result.display is None
        assert json.loads(result.canonical)["data"]["message"] == "Event type not handled"

    def test_unhandled_notified_when_enabled(self) -> None:
        settings = StripeRelaySettings(notify_unhandled=True)
        result = _use_case(settings).execute(_raw("some.unknown.event"))
        assert result.notified is True

    def test_disabled_category_forwarded_only(self) -> None:
        settings = StripeRelaySettings(enabled_categories=frozenset({CategoryTag.INVOICE}))
        result = _use_case(settings).execute(_raw("payout.paid", id="po_1"))
        assert result.category is CategoryTag.PAYOUT
        assert result.display is None
        assert json.loads(result.canonical)["data"]["id"] == "po_1"

    def test_malformed_input_propagates(self, caplog: pytest.LogCaptureFixture) -> None:
        with (
            caplog.at_level(logging.INFO, logger="app.observability.metrics"),
            pytest.raises(MalformedEventError) as exc_info,
        ):
            _use_case().execute(b'{"id": "evt_1"}')

        assert exc_info.value.reason == "missing_type"
        record = next(r for r in caplog.records if r.message == "metric_rejection")
        assert record.reason == "missing_type"

    def test_correlation_id_is_event_id_during_relay(self) -> None:
        """correlation_id = id do evento durante o relay; restaurado depois."""
        composer = SpyComposer()
        _use_case(composer=composer).execute(_raw("topup.created", event_id="evt_42"))

        assert composer.seen_correlation_ids == ["evt_42"]
        assert get_correlation_id() == ""

    def test_metrics_recorded(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="app.observability.metrics"):
            _use_case().execute(_raw("invoice.paid", event_id="evt_9"))

        outcome = next(r for r in caplog.records if r.message == "metric_event_outcome")
        assert outcome.category == "invoice"
        assert outcome.outcome == "notified"
        assert outcome.correlation_id == "evt_9"
        latency = next(r for r in caplog.records if r.message == "metric_latency")
        assert latency.component == "stripe_relay"
        assert latency.latency_ms >= 0


class TestExecuteMany:
    """Testes de relay em lote."""

    def test_rejections_are_collected(self) -> None:
        raws = [
            _raw("charge.failed", event_id="evt_1"),
            b"{broken",
            _raw("some.unknown.event", event_id="evt_2"),
            b"[]",
        ]
        summary = _use_case().execute_many(raws)

        assert summary.relayed == 2
        assert summary.notified == 1
        assert [r.event_id for r in summary.results] == ["evt_1", "evt_2"]
        assert [(r.index, r.reason) for r in summary.rejected] == [
            (1, "invalid_json"),
            (3, "not_an_object"),
        ]
        assert summary.digest is None

    def test_digest_of_notified_events(self) -> None:
        composer = SpyComposer()
        raws = [
            _raw("charge.failed", event_id="evt_1"),
            _raw("some.unknown.event", event_id="evt_2"),
            _raw("payout.paid", event_id="evt_3"),
        ]
        summary = _use_case(composer=composer).execute_many(raws, digest=True)

        assert composer.digest_sizes == [2]
        assert summary.digest is not None
        header = loads_message(summary.digest).blocks[0]
        assert header.text.text == "Stripe events (2)"

    def test_out_of_range_timestamp_does_not_abort_batch(self) -> None:
        raws = [
            _raw("invoice.created", event_id="evt_1", id="in_1", period_end=10**13),
            _raw("charge.succeeded", event_id="evt_2", id="ch_1"),
        ]
        summary = _use_case().execute_many(raws, digest=True)

        assert summary.relayed == 2
        assert summary.notified == 2
        assert summary.rejected == ()
        assert summary.digest is not None

    def test_deeply_nested_payload_is_rejected(self) -> None:
        nested = b'{"type": "some.unknown", "data": ' + b"[" * 200_000 + b"]" * 200_000 + b"}"
        summary = _use_case().execute_many([nested, _raw("topup.created", event_id="evt_5")])

        assert [r.event_id for r in summary.results] == ["evt_5"]
        assert [(r.index, r.reason) for r in summary.rejected] == [(0, "too_deep")]

    def test_empty_batch(self) -> None:
        summary = _use_case().execute_many([], digest=True)
        assert summary.relayed == 0
        assert summary.rejected == ()
        assert summary.digest is None
