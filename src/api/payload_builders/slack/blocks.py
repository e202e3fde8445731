"""Codec de blocos Slack — modelos tipados ↔ JSON de wire.

SectionText e SectionFields compartilham `type: "section"`. A decodificação
desambigua pela estrutura, nesta ordem:
1. `fields` (lista) → SectionFieldsBlock
2. `text` (objeto) → SectionTextBlock
Sem nenhuma das chaves é erro, nunca default silencioso.
"""

from __future__ import annotations

import json
from typing import Any

from app.domain.slack_message import (
    Block,
    DisplayMessage,
    DividerBlock,
    HeaderBlock,
    SectionFieldsBlock,
    SectionTextBlock,
    TextKind,
    TextObject,
)
from utils.errors import BlockDecodeError


def encode_text_object(text: TextObject) -> dict[str, Any]:
    return {"type": text.kind.value, "text": text.text}


def decode_text_object(data: Any) -> TextObject:
    """Decodifica `{"type": "mrkdwn"|"plain_text", "text": str}`."""
    if not isinstance(data, dict):
        raise BlockDecodeError("text object deve ser objeto JSON")
    try:
        kind = TextKind(data.get("type"))
    except ValueError as exc:
        raise BlockDecodeError(f"tipo de texto desconhecido: {data.get('type')!r}") from exc
    text = data.get("text")
    if not isinstance(text, str):
        raise BlockDecodeError("text object sem campo `text` string")
    return TextObject(text=text, kind=kind)


def encode_block(block: Block) -> dict[str, Any]:
    """Serializa o bloco com o discriminante de wire."""
    encoded: dict[str, Any] = {"type": block.wire_type}
    if isinstance(block, HeaderBlock | SectionTextBlock):
        encoded["text"] = encode_text_object(block.text)
    elif isinstance(block, SectionFieldsBlock):
        encoded["fields"] = [encode_text_object(field) for field in block.fields]
    return encoded


def decode_block(data: Any) -> Block:
    """Decodifica um bloco de wire.

    Raises:
        BlockDecodeError: Objeto que não corresponde a nenhuma variante
    """
    if not isinstance(data, dict):
        raise BlockDecodeError("bloco deve ser objeto JSON")

    block_type = data.get("type")
    if block_type == "divider":
        return DividerBlock()
    if block_type == "header":
        return HeaderBlock(text=decode_text_object(data.get("text")))
    if block_type == "section":
        return _decode_section(data)
    raise BlockDecodeError(f"tipo de bloco desconhecido: {block_type!r}")


def _decode_section(data: dict[str, Any]) -> Block:
    if "fields" in data:
        fields = data["fields"]
        if not isinstance(fields, list):
            raise BlockDecodeError("section `fields` deve ser lista")
        return SectionFieldsBlock(fields=[decode_text_object(item) for item in fields])
    if "text" in data:
        return SectionTextBlock(text=decode_text_object(data["text"]))
    raise BlockDecodeError("section sem `fields` nem `text`")


def encode_message(message: DisplayMessage) -> dict[str, Any]:
    return {"blocks": [encode_block(block) for block in message.blocks]}


def decode_message(data: Any) -> DisplayMessage:
    if not isinstance(data, dict):
        raise BlockDecodeError("mensagem deve ser objeto JSON")
    blocks = data.get("blocks")
    if not isinstance(blocks, list):
        raise BlockDecodeError("mensagem sem lista `blocks`")
    return DisplayMessage(blocks=[decode_block(item) for item in blocks])


def dumps_message(message: DisplayMessage) -> bytes:
    """Serializa a mensagem para bytes JSON (payload do webhook Slack)."""
    return json.dumps(encode_message(message), ensure_ascii=False).encode("utf-8")


def loads_message(raw: bytes | str) -> DisplayMessage:
    """Decodifica bytes/str JSON em DisplayMessage.

    Raises:
        BlockDecodeError: JSON inválido ou estrutura fora do esquema
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise BlockDecodeError("mensagem não é JSON válido") from exc
    return decode_message(data)
