"""Formatação de valores canônicos para texto mrkdwn.

Funções puras; retornam None quando não há valor a exibir, deixando o
placeholder a cargo do composer.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from decimal import Decimal

from app.domain.stripe_event import LineItem

PLACEHOLDER = "-"
DATE_FORMAT = "%b %d, %Y"


def format_amount(amount: int | None, currency: str | None) -> str | None:
    """Valor em unidade menor → "12.50 USD"."""
    if amount is None:
        return None
    value = f"{Decimal(amount) / 100:.2f}"
    if not currency:
        return value
    return f"{value} {currency.upper()}"


def format_timestamp(timestamp: int | None) -> str | None:
    """Epoch em segundos → data UTC. Zero ou fora do intervalo de datetime conta como ausente."""
    if not timestamp:
        return None
    try:
        moment = datetime.fromtimestamp(timestamp, tz=UTC)
    except (ValueError, OverflowError, OSError):
        return None
    return moment.strftime(DATE_FORMAT)


def format_period(start: int | None, end: int | None) -> str | None:
    start_text = format_timestamp(start)
    end_text = format_timestamp(end)
    if start_text and end_text:
        return f"{start_text} to {end_text}"
    return start_text or end_text


def format_line_items(lines: Iterable[LineItem]) -> str | None:
    """Uma linha por item: `- Plan (10.00 USD)`."""
    rendered = [
        f"- {item.description or PLACEHOLDER} ({format_amount(item.amount, item.currency)})"
        for item in lines
    ]
    return "\n".join(rendered) or None


def camel_case(value: str) -> str:
    """`payment_failed` → `PaymentFailed`."""
    return "".join(part.capitalize() for part in value.split("_") if part)


def human_event_type(event_type: str) -> str:
    """Remove o prefixo do objeto e junta o restante em CamelCase.

    `invoice.payment_failed` → `PaymentFailed`;
    `customer.subscription.trial_will_end` → `SubscriptionTrialWillEnd`.
    """
    segments = event_type.split(".")
    if len(segments) > 1:
        segments = segments[1:]
    return "".join(camel_case(segment) for segment in segments)


def human_status(status: str) -> str:
    """`requires_payment_method` → `Requires Payment Method`."""
    return " ".join(part.capitalize() for part in status.split("_") if part)


def first_present(*values: str | None) -> str | None:
    """Primeiro valor não vazio."""
    for value in values:
        if value:
            return value
    return None


def join_present(*values: str | None, separator: str = " | ") -> str | None:
    """Junta os valores não vazios; None quando nenhum sobra."""
    present = [value for value in values if value]
    return separator.join(present) if present else None


def render_field(label: str, value: str | None) -> str:
    return f"*{label}:* {value or PLACEHOLDER}"
