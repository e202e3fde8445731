"""Normalizer Stripe — reduz envelope bruto de webhook para CanonicalEvent.

Fluxo por evento (sem estado compartilhado):
1. parse: bytes/str/dict → dict (rejeita entrada malformada)
2. classify: `type` → CategoryTag (tabela literal)
3. project: `data.object` → payload da categoria (ou Unhandled)

O pipeline nunca descarta evento por tipo; apenas entrada malformada
é rejeitada com MalformedEventError.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from app.constants.stripe import CategoryTag, classify
from app.domain.stripe_event import CanonicalEvent
from utils.errors import MalformedEventError

from .extractor import (
    as_bool,
    as_int,
    as_optional_str,
    as_str,
    extract_data_object,
)
from .projectors import project

logger = logging.getLogger(__name__)

RawEvent = bytes | bytearray | str | Mapping[str, Any]


def parse_raw_event(raw: RawEvent) -> dict[str, Any]:
    """Decodifica o envelope bruto e valida a borda de ingestão.

    Args:
        raw: Bytes UTF-8, texto JSON ou dict já decodificado pelo coletor

    Returns:
        Envelope como dict

    Raises:
        MalformedEventError: encoding inválido, JSON inválido ou aninhado demais,
            raiz que não é objeto ou envelope sem string `type`
    """
    if isinstance(raw, bytes | bytearray):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedEventError(
                "payload não é UTF-8 válido", reason="invalid_encoding"
            ) from exc

    if isinstance(raw, str):
        try:
            envelope: Any = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MalformedEventError(
                f"payload não é JSON válido (posição {exc.pos})", reason="invalid_json"
            ) from exc
        except RecursionError as exc:
            raise MalformedEventError(
                "payload JSON excede a profundidade de aninhamento suportada", reason="too_deep"
            ) from exc
    else:
        envelope = raw

    if not isinstance(envelope, Mapping):
        raise MalformedEventError("raiz do payload não é objeto JSON", reason="not_an_object")

    envelope = dict(envelope)
    if not isinstance(envelope.get("type"), str):
        raise MalformedEventError("envelope sem campo `type` string", reason="missing_type")

    return envelope


def normalize_event(raw: RawEvent) -> CanonicalEvent:
    """Reduz um evento bruto Stripe para o esquema canônico.

    Tipos fora da tabela resultam em categoria UNHANDLED, nunca em erro.

    Raises:
        MalformedEventError: entrada rejeitada na borda (ver parse_raw_event)
    """
    envelope = parse_raw_event(raw)
    event_type: str = envelope["type"]
    category = classify(event_type)
    payload = project(category, extract_data_object(envelope), event_type)

    return CanonicalEvent(
        api_version=as_optional_str(envelope.get("api_version")),
        created=as_int(envelope.get("created")),
        id=as_str(envelope.get("id")),
        livemode=as_bool(envelope.get("livemode")),
        pending_webhooks=as_int(envelope.get("pending_webhooks")),
        category=category,
        data=payload,
    )


class StripeEventNormalizer:
    """Normalizer de eventos Stripe com logging estruturado.

    Não registra conteúdo do payload (PII); apenas id, tipo e categoria.
    """

    def normalize(self, payload: RawEvent) -> CanonicalEvent:
        try:
            event = normalize_event(payload)
        except MalformedEventError as exc:
            logger.warning("stripe_event_rejected", extra={"reason": exc.reason})
            raise

        if event.category is CategoryTag.UNHANDLED:
            logger.info(
                "stripe_event_unhandled",
                extra={"event_id": event.id, "event_type": event.event_type},
            )
        else:
            logger.debug(
                "stripe_event_normalized",
                extra={
                    "event_id": event.id,
                    "event_type": event.event_type,
                    "category": event.category.value,
                },
            )
        return event
