"""Filters de logging para injeção de contexto e redação.

Filters adicionam campos contextuais aos logs sem que o chamador
precise informá-los manualmente, e removem conteúdo que não pode
chegar ao sink de logs.

Campos injetados:
- correlation_id: ID de rastreamento (id do evento no relay)
- service: Nome do serviço (ex: stripe_slack_relay)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Atributos de `extra` que nunca devem ser emitidos com conteúdo
REDACTED_ATTRIBUTES = frozenset({"payload", "raw", "raw_event", "body", "canonical", "display"})
REDACTED_PLACEHOLDER = "[redacted]"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class PayloadRedactionFilter(logging.Filter):
    """Substitui atributos de payload passados via `extra` por placeholder.

    Eventos Stripe carregam PII (email, endereço, telefone); nenhum
    payload bruto, canônico ou de exibição chega ao sink de logs.
    """

    def __init__(self, attributes: frozenset[str] = REDACTED_ATTRIBUTES) -> None:
        super().__init__()
        self._attributes = attributes

    def filter(self, record: logging.LogRecord) -> bool:
        for name in self._attributes:
            if name in record.__dict__:
                setattr(record, name, REDACTED_PLACEHOLDER)
        return True
