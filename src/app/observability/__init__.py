"""Observabilidade — logs estruturados, tracing, métricas.

Re-exporta funções de correlation_id e métricas para uso em toda a aplicação.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_event_outcome, record_rejection
"""

from app.observability.correlation import (
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_event_outcome,
    record_latency,
    record_rejection,
)

__all__ = [
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "record_event_outcome",
    "record_latency",
    "record_rejection",
    "reset_correlation_id",
    "set_correlation_id",
]
