"""Mensagem de exibição — blocos tipados para notificação Slack.

Os modelos não carregam o discriminante de wire (`type`); o codec em
api/payload_builders/slack/blocks.py escreve e interpreta esse campo.
SectionText e SectionFields compartilham o discriminante "section".
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class TextKind(StrEnum):
    """Formatação do texto."""

    MRKDWN = "mrkdwn"
    PLAIN_TEXT = "plain_text"


class TextObject(BaseModel):
    """Menor primitiva de exibição."""

    model_config = ConfigDict(frozen=True)

    text: str
    kind: TextKind = TextKind.MRKDWN


class HeaderBlock(BaseModel):
    model_config = ConfigDict(frozen=True)
    wire_type: ClassVar[str] = "header"

    text: TextObject


class SectionTextBlock(BaseModel):
    model_config = ConfigDict(frozen=True)
    wire_type: ClassVar[str] = "section"

    text: TextObject


class SectionFieldsBlock(BaseModel):
    model_config = ConfigDict(frozen=True)
    wire_type: ClassVar[str] = "section"

    fields: list[TextObject] = Field(default_factory=list)


class DividerBlock(BaseModel):
    model_config = ConfigDict(frozen=True)
    wire_type: ClassVar[str] = "divider"


Block = HeaderBlock | SectionTextBlock | SectionFieldsBlock | DividerBlock


class DisplayMessage(BaseModel):
    """Sequência ordenada de blocos (renderizada de cima para baixo)."""

    model_config = ConfigDict(frozen=True)

    blocks: list[Block] = Field(default_factory=list)
