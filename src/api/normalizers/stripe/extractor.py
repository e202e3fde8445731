"""Coerções totais sobre o JSON bruto Stripe.

Nenhuma função deste módulo levanta exceção: ambiguidades resolvem para
um default seguro ("", 0, False, None). Não faz classificação nem monta
records; apenas extração estrutural.
"""

from __future__ import annotations

from typing import Any


def as_reference(value: Any) -> str:
    """Normaliza uma referência expansível.

    Stripe entrega esses campos como id (string) ou como objeto expandido.
    Apenas o id bruto é mantido; objeto, null ou ausência viram "".
    """
    return value if isinstance(value, str) else ""


def as_str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def as_optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def as_int(value: Any, default: int = 0) -> int:
    """Inteiro JSON; bool nunca é aceito como inteiro."""
    coerced = as_optional_int(value)
    return default if coerced is None else coerced


def as_optional_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def as_bool(value: Any, default: bool = False) -> bool:
    return value if isinstance(value, bool) else default


def as_optional_bool(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


def as_object(value: Any) -> dict[str, Any] | None:
    """Objeto JSON ou None (objeto aninhado opcional)."""
    return value if isinstance(value, dict) else None


def as_list(value: Any) -> list[Any]:
    """Lista JSON; aceita também o envelope de lista Stripe (`{"data": [...]}`)."""
    if isinstance(value, list):
        return value
    if isinstance(value, dict) and isinstance(value.get("data"), list):
        return value["data"]
    return []


def as_str_list(value: Any) -> list[str]:
    return [item for item in as_list(value) if isinstance(item, str)]


def extract_data_object(envelope: dict[str, Any]) -> dict[str, Any]:
    """Extrai `data.object` do envelope; ausente ou malformado vira {}."""
    data = as_object(envelope.get("data")) or {}
    return as_object(data.get("object")) or {}
