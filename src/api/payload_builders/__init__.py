"""Payload builders por destino — construção de payloads para APIs externas.

Estrutura:
- slack/: mensagens em blocos para webhook Slack

Cada destino tem seus próprios builders, garantindo SRP e isolamento de falhas.
"""

from .slack import SlackMessageComposer, compose, compose_digest, dumps_message, loads_message

__all__ = [
    "SlackMessageComposer",
    "compose",
    "compose_digest",
    "dumps_message",
    "loads_message",
]
