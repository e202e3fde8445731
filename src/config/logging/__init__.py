"""Logging estruturado JSON do relay.

Uso (app.bootstrap):
    configure_logging(
        level="INFO",
        service_name="stripe_slack_relay",
        correlation_id_getter=get_correlation_id,
    )

Todo record sai com asctime, level, logger, message, correlation_id e
service; payloads Stripe passados via `extra` saem como "[redacted]".
"""

from config.logging.config import (
    DEFAULT_SERVICE_NAME,
    FALLBACK_EVENT,
    VALID_LOG_LEVELS,
    configure_logging,
    log_fallback,
)
from config.logging.filters import REDACTED_ATTRIBUTES, CorrelationIdFilter, PayloadRedactionFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    LOG_FIELD_ORDER,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "DEFAULT_SERVICE_NAME",
    "FALLBACK_EVENT",
    "FIELD_RENAME_MAP",
    "LOG_FIELD_ORDER",
    "REDACTED_ATTRIBUTES",
    "REQUIRED_LOG_FIELDS",
    "VALID_LOG_LEVELS",
    "CorrelationIdFilter",
    "PayloadRedactionFilter",
    "configure_logging",
    "create_json_formatter",
    "log_fallback",
]
