"""Setup do logging JSON do relay Stripe → Slack.

Um único handler no root logger, instalado por `app.bootstrap`:
- saída JSON (python-json-logger) com campos fixos + campos estáticos
- correlation_id = id do evento Stripe em relay (via getter do ContextVar)
- redação de payloads Stripe passados via `extra`

Módulos do projeto usam `logging.getLogger(__name__)` e emitem eventos
snake_case (`stripe_event_relayed`, `metric_latency`, ...).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import REDACTED_ATTRIBUTES, CorrelationIdFilter, PayloadRedactionFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "stripe_slack_relay"

# Evento emitido quando um default de configuração substitui um documento ausente
FALLBACK_EVENT = "settings_fallback_applied"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    static_fields: dict[str, str] | None = None,
    redacted_attributes: frozenset[str] = REDACTED_ATTRIBUTES,
) -> logging.Handler:
    """Substitui os handlers do root logger pelo handler JSON do relay.

    Args:
        level: Nível de log (case-insensitive).
        service_name: Valor do campo `service` em todo record.
        correlation_id_getter: Getter do correlation_id corrente; no relay,
            `app.observability.get_correlation_id`.
        static_fields: Campos constantes (ex: {"environment": "production"}).
        redacted_attributes: Atributos de `extra` emitidos como "[redacted]".

    Returns:
        O handler instalado (permite redirecionar o stream em testes).

    Raises:
        ValueError: Nível de log desconhecido.
    """
    level_name = level.upper()
    if level_name not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = _build_handler(
        service_name, correlation_id_getter, static_fields, redacted_attributes
    )
    handler.setLevel(level_name)

    root = logging.getLogger()
    root.setLevel(level_name)
    root.handlers = [handler]
    return handler


def _build_handler(
    service_name: str,
    correlation_id_getter: Callable[[], str] | None,
    static_fields: dict[str, str] | None,
    redacted_attributes: frozenset[str],
) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(create_json_formatter(static_fields))
    # Ordem importa: correlation primeiro, redação por último antes do formatter
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(PayloadRedactionFilter(redacted_attributes))
    return handler


def log_fallback(logger: logging.Logger, component: str, reason: str) -> None:
    """Registra que um default determinístico substituiu configuração ausente.

    Ex: `STRIPE_RELAY_CONFIG` não definido → todas as categorias conhecidas
    habilitadas (`component="stripe_relay_settings"`, `reason="config_not_set"`).
    """
    logger.info(
        FALLBACK_EVENT,
        extra={"fallback_used": True, "component": component, "reason": reason},
    )
