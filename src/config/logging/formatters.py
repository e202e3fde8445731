"""Formatters de logging estruturado.

Define formatters para logs JSON com campos obrigatórios:
- correlation_id (id do evento Stripe durante um relay)
- service
- timestamp (asctime)
- level
- logger (name)
- message

Regra: logs estruturados, sem payload bruto de webhook.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem dos campos no JSON de saída
LOG_FIELD_ORDER: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = frozenset(LOG_FIELD_ORDER)

# Mapeamento de nomes de campos para formato padrão
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter(static_fields: dict[str, str] | None = None) -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Args:
        static_fields: Campos constantes adicionados a todo record
            (ex: {"environment": "production"})

    Exemplo de output:
        {
            "asctime": "2026-02-02T10:30:00",
            "level": "INFO",
            "logger": "app.use_cases.stripe.relay_event",
            "message": "stripe_event_relayed",
            "correlation_id": "evt_1NqQ...",
            "service": "stripe_slack_relay",
            "category": "invoice"
        }
    """
    format_string = " ".join(f"%({field})s" for field in LOG_FIELD_ORDER)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        static_fields=dict(static_fields or {}),
        json_ensure_ascii=False,
    )
