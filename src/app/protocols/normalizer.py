"""Protocolos de normalização inbound."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.stripe_event import CanonicalEvent


class EventNormalizerProtocol(Protocol):
    """Contrato mínimo para reduzir um evento bruto ao esquema canônico."""

    def normalize(self, payload: bytes | str | Mapping[str, Any]) -> CanonicalEvent: ...
