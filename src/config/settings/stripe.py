"""Settings do relay Stripe → Slack.

Define quais categorias geram notificação Slack. O evento canônico é
sempre encaminhado; apenas a composição da mensagem é filtrada.

Documento YAML opcional (caminho em STRIPE_RELAY_CONFIG):

    enabled_categories:
      - invoice
      - charge
    notify_unhandled: false

Sem documento configurado: todas as categorias conhecidas habilitadas,
eventos não tratados não notificados.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from app.constants.stripe import CategoryTag
from config.logging import log_fallback
from utils.errors import RelayConfigError

logger = logging.getLogger(__name__)

RELAY_CONFIG_ENV = "STRIPE_RELAY_CONFIG"

# Categorias notificáveis por padrão (UNHANDLED é governado por notify_unhandled)
KNOWN_CATEGORIES: frozenset[CategoryTag] = frozenset(
    tag for tag in CategoryTag if tag is not CategoryTag.UNHANDLED
)

_DOCUMENT_KEYS = frozenset({"enabled_categories", "notify_unhandled"})


@dataclass(frozen=True)
class StripeRelaySettings:
    """Configurações do relay.

    Attributes:
        enabled_categories: Categorias que geram mensagem Slack
        notify_unhandled: Notifica eventos fora da tabela de categorias
    """

    enabled_categories: frozenset[CategoryTag] = KNOWN_CATEGORIES
    notify_unhandled: bool = False

    def is_notified(self, category: CategoryTag) -> bool:
        """Retorna True se a categoria deve gerar mensagem de exibição."""
        if category is CategoryTag.UNHANDLED:
            return self.notify_unhandled
        return category in self.enabled_categories

    def validate(self) -> list[str]:
        """Valida configurações do relay.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if CategoryTag.UNHANDLED in self.enabled_categories:
            errors.append("enabled_categories não aceita 'unhandled'; use notify_unhandled")

        if not self.enabled_categories and not self.notify_unhandled:
            errors.append("nenhuma categoria habilitada para notificação")

        return errors


def _parse_categories(value: Any) -> frozenset[CategoryTag]:
    if not isinstance(value, list):
        raise RelayConfigError("enabled_categories deve ser lista")
    categories: set[CategoryTag] = set()
    for item in value:
        try:
            categories.add(CategoryTag(item))
        except ValueError as exc:
            raise RelayConfigError(f"categoria desconhecida: {item!r}") from exc
    return frozenset(categories)


def load_relay_settings(path: str | Path) -> StripeRelaySettings:
    """Carrega StripeRelaySettings de um documento YAML.

    Documento vazio resulta nos defaults.

    Args:
        path: Caminho do arquivo YAML

    Raises:
        RelayConfigError: Arquivo ilegível, YAML inválido ou valores fora do esquema
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except OSError as exc:
        raise RelayConfigError(f"não foi possível ler {path}: {exc.strerror}") from exc
    except yaml.YAMLError as exc:
        raise RelayConfigError(f"YAML inválido em {path}") from exc

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise RelayConfigError("documento de configuração deve ser um dicionário")

    unknown = sorted(str(key) for key in set(document) - _DOCUMENT_KEYS)
    if unknown:
        raise RelayConfigError(f"chaves desconhecidas: {', '.join(unknown)}")

    enabled = KNOWN_CATEGORIES
    if document.get("enabled_categories") is not None:
        enabled = _parse_categories(document["enabled_categories"])

    notify_unhandled = document.get("notify_unhandled", False)
    if not isinstance(notify_unhandled, bool):
        raise RelayConfigError("notify_unhandled deve ser booleano")

    settings = StripeRelaySettings(
        enabled_categories=enabled,
        notify_unhandled=notify_unhandled,
    )
    errors = settings.validate()
    if errors:
        raise RelayConfigError("; ".join(errors))

    logger.debug(
        "stripe_relay_settings_loaded",
        extra={
            "path": str(path),
            "enabled_count": len(settings.enabled_categories),
            "notify_unhandled": settings.notify_unhandled,
        },
    )
    return settings


def _load_relay_from_env() -> StripeRelaySettings:
    """Carrega StripeRelaySettings do documento apontado por STRIPE_RELAY_CONFIG."""
    config_path = os.getenv(RELAY_CONFIG_ENV, "").strip()
    if not config_path:
        log_fallback(logger, "stripe_relay_settings", reason="config_not_set")
        return StripeRelaySettings()
    return load_relay_settings(config_path)


@lru_cache(maxsize=1)
def get_relay_settings() -> StripeRelaySettings:
    """Retorna instância cacheada de StripeRelaySettings."""
    return _load_relay_from_env()
