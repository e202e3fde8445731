"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente por sistemas como BigQuery, CloudWatch Insights, etc.

Métricas suportadas:
- Latência: histogram de tempos de execução por componente/operação
- Evento: counter de eventos relayed por categoria e desfecho
- Rejeição: counter de payloads malformados por motivo

Uso:
    from app.observability.metrics import record_latency, record_event_outcome

    start = time.perf_counter()
    # ... operação ...
    latency_ms = (time.perf_counter() - start) * 1000
    record_latency("stripe_relay", "execute", latency_ms, correlation_id)

    record_event_outcome("invoice", "notified", correlation_id)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "stripe_relay")
        operation: Nome da operação (ex: "execute", "compose")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_event_outcome(
    category: str,
    outcome: str,
    correlation_id: str | None = None,
) -> None:
    """Registra desfecho de um evento relayed.

    Args:
        category: Categoria canônica (ex: "invoice", "unhandled")
        outcome: "notified" (mensagem composta) ou "forwarded" (só canônico)
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_event_outcome",
        extra={
            "metric_type": "event_outcome",
            "component": "stripe_relay",
            "category": category,
            "outcome": outcome,
            "correlation_id": correlation_id,
        },
    )


def record_rejection(
    reason: str,
    correlation_id: str | None = None,
) -> None:
    """Registra payload rejeitado na borda de ingestão.

    Args:
        reason: Motivo curto (ex: "invalid_json", "missing_type")
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_rejection",
        extra={
            "metric_type": "rejection",
            "component": "stripe_relay",
            "reason": reason,
            "correlation_id": correlation_id,
        },
    )
