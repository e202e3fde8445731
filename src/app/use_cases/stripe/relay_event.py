"""Use case de relay Stripe → Slack.

Fluxo por evento:
1. Normaliza o payload bruto (rejeita malformado)
2. Serializa o evento canônico (sempre encaminhado)
3. Compõe a mensagem Slack se a categoria estiver habilitada

Sem I/O: o chamador publica `canonical` e `display` nos sinks externos.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from api.payload_builders.slack.blocks import dumps_message
from app.constants.stripe import CategoryTag
from app.observability import (
    correlation_scope,
    get_correlation_id,
    record_event_outcome,
    record_latency,
    record_rejection,
)
from config.settings.stripe import StripeRelaySettings
from utils.errors import MalformedEventError

if TYPE_CHECKING:
    from api.normalizers.stripe.normalizer import RawEvent
    from app.domain.stripe_event import CanonicalEvent
    from app.protocols import EventNormalizerProtocol, MessageComposerProtocol

logger = logging.getLogger(__name__)

COMPONENT = "stripe_relay"


@dataclass(frozen=True, slots=True)
class RelayResult:
    """Resultado do relay de um evento."""

    event_id: str
    category: CategoryTag
    canonical: bytes
    display: bytes | None

    @property
    def notified(self) -> bool:
        return self.display is not None


@dataclass(frozen=True, slots=True)
class RelayRejection:
    """Payload rejeitado em um lote (posição + motivo, sem conteúdo)."""

    index: int
    reason: str
    message: str


@dataclass(frozen=True, slots=True)
class RelayBatchSummary:
    """Resultado do relay de um lote."""

    results: tuple[RelayResult, ...]
    rejected: tuple[RelayRejection, ...]
    digest: bytes | None = None

    @property
    def relayed(self) -> int:
        return len(self.results)

    @property
    def notified(self) -> int:
        return sum(1 for result in self.results if result.notified)


class RelayStripeEventUseCase:
    """Reduz eventos Stripe e compõe notificações Slack."""

    def __init__(
        self,
        *,
        normalizer: EventNormalizerProtocol,
        composer: MessageComposerProtocol,
        settings: StripeRelaySettings | None = None,
    ) -> None:
        self._normalizer = normalizer
        self._composer = composer
        self._settings = settings or StripeRelaySettings()

    def execute(self, raw: RawEvent) -> RelayResult:
        """Relay de um evento.

        Raises:
            MalformedEventError: Payload rejeitado na borda de ingestão
        """
        result, _ = self._relay(raw)
        return result

    def execute_many(self, raws: Iterable[RawEvent], *, digest: bool = False) -> RelayBatchSummary:
        """Relay de um lote; rejeições são coletadas em vez de propagadas.

        Args:
            raws: Payloads brutos na ordem de chegada
            digest: Se True, compõe também uma mensagem-resumo com os
                eventos notificados do lote
        """
        results: list[RelayResult] = []
        rejected: list[RelayRejection] = []
        notified_events: list[CanonicalEvent] = []

        for index, raw in enumerate(raws):
            try:
                result, event = self._relay(raw)
            except MalformedEventError as exc:
                rejected.append(RelayRejection(index=index, reason=exc.reason, message=str(exc)))
                continue
            results.append(result)
            if result.notified:
                notified_events.append(event)

        digest_bytes = None
        if digest and notified_events:
            digest_bytes = dumps_message(self._composer.compose_digest(notified_events))

        summary = RelayBatchSummary(
            results=tuple(results),
            rejected=tuple(rejected),
            digest=digest_bytes,
        )
        logger.info(
            "stripe_batch_relayed",
            extra={
                "component": COMPONENT,
                "relayed": summary.relayed,
                "notified": summary.notified,
                "rejected": len(summary.rejected),
            },
        )
        return summary

    def _relay(self, raw: RawEvent) -> tuple[RelayResult, CanonicalEvent]:
        start = time.perf_counter()
        try:
            event = self._normalizer.normalize(raw)
        except MalformedEventError as exc:
            record_rejection(exc.reason, get_correlation_id() or None)
            raise

        with correlation_scope(event.id or None) as correlation_id:
            display = None
            if self._settings.is_notified(event.category):
                display = dumps_message(self._composer.compose(event))

            result = RelayResult(
                event_id=event.id,
                category=event.category,
                canonical=event.to_json_bytes(),
                display=display,
            )
            outcome = "notified" if result.notified else "forwarded"
            record_event_outcome(event.category.value, outcome, correlation_id)
            record_latency(
                COMPONENT, "execute", (time.perf_counter() - start) * 1000, correlation_id
            )
            logger.info(
                "stripe_event_relayed",
                extra={
                    "component": COMPONENT,
                    "event_type": event.event_type,
                    "category": event.category.value,
                    "outcome": outcome,
                },
            )
        return result, event
