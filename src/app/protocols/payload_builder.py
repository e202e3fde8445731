"""Protocolos de construção de payload outbound."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.slack_message import DisplayMessage
    from app.domain.stripe_event import CanonicalEvent


class MessageComposerProtocol(Protocol):
    """Contrato mínimo para compor mensagens de exibição."""

    def compose(self, event: CanonicalEvent) -> DisplayMessage: ...

    def compose_digest(self, events: Sequence[CanonicalEvent]) -> DisplayMessage: ...
