"""Protocolos e contratos do core da aplicação."""

from .normalizer import EventNormalizerProtocol
from .payload_builder import MessageComposerProtocol

__all__ = [
    "EventNormalizerProtocol",
    "MessageComposerProtocol",
]
