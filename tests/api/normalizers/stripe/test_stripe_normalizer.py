"""Testes para api.normalizers.stripe.normalizer (pipeline de redução)."""

from __future__ import annotations

import json
import logging
from typing import Any

import pytest

from api.normalizers.stripe import StripeEventNormalizer, normalize_event, parse_raw_event
from app.constants.stripe import CategoryTag
from app.domain.stripe_event import InvoicePayload, UnhandledPayload
from utils.errors import MalformedEventError, PipelineError

INVOICE_CREATED: dict[str, Any] = {
    "type": "invoice.created",
    "id": "evt_1",
    "api_version": "2020-08-27",
    "created": 1,
    "livemode": False,
    "pending_webhooks": 0,
    "data": {
        "object": {
            "id": "in_1",
            "customer": "cus_1",
            "amount_due": 1000,
            "amount_paid": 0,
            "currency": "usd",
            "lines": {"data": [{"description": "Plan", "amount": 1000, "currency": "usd"}]},
        }
    },
}

UNKNOWN_EVENT: dict[str, Any] = {
    "type": "some.unknown.event",
    "id": "evt_2",
    "api_version": "2020-08-27",
    "created": 2,
    "livemode": True,
    "pending_webhooks": 1,
    "data": {"object": {"id": "obj_1", "email": "someone@example.com"}},
}


# Aninhamento além do limite de recursão do decoder json
_DEEPLY_NESTED = b'{"type": "some.unknown", "data": ' + b"[" * 200_000 + b"]" * 200_000 + b"}"


class TestParseRawEvent:
    """Testes da borda de ingestão."""

    def test_accepts_bytes(self) -> None:
        envelope = parse_raw_event(json.dumps(INVOICE_CREATED).encode("utf-8"))
        assert envelope["type"] == "invoice.created"

    def test_accepts_str(self) -> None:
        envelope = parse_raw_event(json.dumps(INVOICE_CREATED))
        assert envelope["id"] == "evt_1"

    def test_accepts_mapping(self) -> None:
        envelope = parse_raw_event(INVOICE_CREATED)
        assert envelope == INVOICE_CREATED
        assert envelope is not INVOICE_CREATED

    @pytest.mark.parametrize(
        ("raw", "reason"),
        [
            (b"\xff\xfe\x00", "invalid_encoding"),
            (b"{not json", "invalid_json"),
            ("", "invalid_json"),
            ("[1, 2]", "not_an_object"),
            ("\"invoice.created\"", "not_an_object"),
            ("null", "not_an_object"),
            ("{}", "missing_type"),
            ('{"type": 42}', "missing_type"),
            ('{"type": null, "data": {}}', "missing_type"),
            (_DEEPLY_NESTED, "too_deep"),
        ],
    )
    def test_rejects_malformed(self, raw: bytes | str, reason: str) -> None:
        """Entrada malformada levanta MalformedEventError com motivo."""
        with pytest.raises(MalformedEventError) as exc_info:
            parse_raw_event(raw)
        assert exc_info.value.reason == reason

    def test_malformed_is_pipeline_error(self) -> None:
        """MalformedEventError é PipelineError e ValueError."""
        with pytest.raises(PipelineError):
            parse_raw_event("[]")
        with pytest.raises(ValueError):
            parse_raw_event("[]")


class TestNormalizeEvent:
    """Testes end-to-end da redução."""

    def test_invoice_created_scenario(self) -> None:
        """Cenário invoice.created → categoria invoice com campos projetados."""
        event = normalize_event(json.dumps(INVOICE_CREATED).encode("utf-8"))

        assert event.category is CategoryTag.INVOICE
        assert isinstance(event.data, InvoicePayload)
        assert event.id == "evt_1"
        assert event.api_version == "2020-08-27"
        assert event.created == 1
        assert event.livemode is False
        assert event.pending_webhooks == 0

        data = event.to_dict()["data"]
        assert data["id"] == "in_1"
        assert data["customer"] == "cus_1"
        assert data["amount_due"] == 1000
        assert data["amount_paid"] == 0
        assert data["currency"] == "usd"
        assert data["lines"] == [{"description": "Plan", "amount": 1000, "currency": "usd"}]
        assert data["event_type"] == "invoice.created"

    def test_unknown_event_scenario(self) -> None:
        """Tipo desconhecido → unhandled com mensagem fixa, sem campos do objeto."""
        event = normalize_event(UNKNOWN_EVENT)

        assert event.category is CategoryTag.UNHANDLED
        assert isinstance(event.data, UnhandledPayload)
        assert event.to_dict()["data"] == {
            "event_type": "some.unknown.event",
            "message": "Event type not handled",
        }
        assert event.to_dict()["category"] == "unhandled"

    def test_prefix_near_miss_is_unhandled(self) -> None:
        raw = {**INVOICE_CREATED, "type": "invoice.something_new"}
        event = normalize_event(raw)
        assert event.category is CategoryTag.UNHANDLED
        assert event.event_type == "invoice.something_new"

    def test_missing_data_object_projects_defaults(self) -> None:
        """Sem data.object o projetor recebe {} e aplica defaults."""
        event = normalize_event({"type": "charge.failed", "id": "evt_3"})
        assert event.category is CategoryTag.CHARGE
        assert event.data.event_type == "charge.failed"
        assert event.to_dict()["data"]["amount"] == 0

    def test_envelope_scalars_are_coerced(self) -> None:
        raw = {
            "type": "payout.paid",
            "id": 99,
            "api_version": None,
            "created": "yesterday",
            "livemode": "true",
            "pending_webhooks": True,
        }
        event = normalize_event(raw)
        assert event.id == ""
        assert event.api_version is None
        assert event.created == 0
        assert event.livemode is False
        assert event.pending_webhooks == 0

    def test_canonical_json_round_trip(self) -> None:
        """JSON canônico recarrega para o mesmo evento."""
        event = normalize_event(INVOICE_CREATED)
        reloaded = type(event).model_validate_json(event.to_json_bytes())
        assert reloaded == event


class TestStripeEventNormalizer:
    """Testes do normalizer com logging."""

    def test_normalize_logs_category(self, caplog: pytest.LogCaptureFixture) -> None:
        normalizer = StripeEventNormalizer()
        with caplog.at_level(logging.DEBUG, logger="api.normalizers.stripe.normalizer"):
            event = normalizer.normalize(INVOICE_CREATED)

        assert event.category is CategoryTag.INVOICE
        record = next(r for r in caplog.records if r.message == "stripe_event_normalized")
        assert record.category == "invoice"
        assert record.event_id == "evt_1"

    def test_normalize_logs_unhandled(self, caplog: pytest.LogCaptureFixture) -> None:
        normalizer = StripeEventNormalizer()
        with caplog.at_level(logging.INFO, logger="api.normalizers.stripe.normalizer"):
            normalizer.normalize(UNKNOWN_EVENT)

        record = next(r for r in caplog.records if r.message == "stripe_event_unhandled")
        assert record.event_type == "some.unknown.event"

    def test_normalize_logs_and_reraises_rejection(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        normalizer = StripeEventNormalizer()
        with (
            caplog.at_level(logging.WARNING, logger="api.normalizers.stripe.normalizer"),
            pytest.raises(MalformedEventError),
        ):
            normalizer.normalize(b"{broken")

        record = next(r for r in caplog.records if r.message == "stripe_event_rejected")
        assert record.reason == "invalid_json"

    def test_logs_never_carry_payload_contents(self, caplog: pytest.LogCaptureFixture) -> None:
        """Nenhum log contém dados do objeto (PII)."""
        normalizer = StripeEventNormalizer()
        with caplog.at_level(logging.DEBUG):
            normalizer.normalize(UNKNOWN_EVENT)

        for record in caplog.records:
            assert "someone@example.com" not in str(record.__dict__)
