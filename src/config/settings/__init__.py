"""Agregador de settings do relay Stripe → Slack.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    DEFAULT_SERVICE_NAME,
    BaseSettings,
    Environment,
    get_base_settings,
)

# Relay settings
from config.settings.stripe import (
    KNOWN_CATEGORIES,
    RELAY_CONFIG_ENV,
    StripeRelaySettings,
    get_relay_settings,
    load_relay_settings,
)

__all__ = [
    "DEFAULT_SERVICE_NAME",
    "KNOWN_CATEGORIES",
    "RELAY_CONFIG_ENV",
    "BaseSettings",
    "Environment",
    "StripeRelaySettings",
    "get_base_settings",
    "get_relay_settings",
    "load_relay_settings",
]
