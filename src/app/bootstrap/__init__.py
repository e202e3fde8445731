"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, create_stripe_relay_use_case

    # Na inicialização do serviço
    initialize_app()
    relay = create_stripe_relay_use_case()
"""

from __future__ import annotations

import logging

from api.normalizers.stripe import StripeEventNormalizer
from api.payload_builders.slack import SlackMessageComposer
from app.observability import get_correlation_id
from app.use_cases.stripe import RelayStripeEventUseCase
from config.logging import configure_logging
from config.settings import StripeRelaySettings, get_base_settings, get_relay_settings

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação.

    Deve ser chamada uma vez no início do serviço. Configura logging
    estruturado JSON com correlation_id e valida settings.
    """
    base = get_base_settings()
    configure_logging(
        level=base.effective_log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
    )
    validate_runtime_settings()


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (DEBUG, serviço com sufixo)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{get_base_settings().service_name}_test",
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.

    Raises:
        RuntimeError: Configuração inválida em ambiente estrito
        RelayConfigError: Documento de relay ilegível (qualquer ambiente)
    """
    base = get_base_settings()
    strict_mode = base.environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"stripe_relay: {error}" for error in get_relay_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


def create_stripe_relay_use_case(
    settings: StripeRelaySettings | None = None,
) -> RelayStripeEventUseCase:
    """Cria use case de relay com dependências injetadas.

    Args:
        settings: Settings explícitas; default carrega de STRIPE_RELAY_CONFIG
    """
    return RelayStripeEventUseCase(
        normalizer=StripeEventNormalizer(),
        composer=SlackMessageComposer(),
        settings=settings or get_relay_settings(),
    )
