"""Payload builder Slack — blocos de exibição para notificação de eventos.

Responsabilidades:
- Compor DisplayMessage a partir de CanonicalEvent (composer)
- Codificar/decodificar blocos no formato de wire Slack (blocks)
"""

from .blocks import (
    decode_block,
    decode_message,
    decode_text_object,
    dumps_message,
    encode_block,
    encode_message,
    encode_text_object,
    loads_message,
)
from .composer import SlackMessageComposer, build_title, compose, compose_digest, summarize

__all__ = [
    "SlackMessageComposer",
    "build_title",
    "compose",
    "compose_digest",
    "decode_block",
    "decode_message",
    "decode_text_object",
    "dumps_message",
    "encode_block",
    "encode_message",
    "encode_text_object",
    "loads_message",
    "summarize",
]
