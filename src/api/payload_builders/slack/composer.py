"""Composer Slack — CanonicalEvent → DisplayMessage.

Mensagem de evento único:
1. SectionText com o título de uma linha
2. SectionFields com campos em ordem fixa (independente de categoria)

Campos sem valor saem com "-" para manter o bloco estável.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from app.constants.stripe import CategoryTag
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
from app.domain.stripe_event import (
    CanonicalEvent,
    CanonicalModel,
    ChargePayload,
    CustomerPayload,
    InvoiceItemPayload,
    InvoicePayload,
    IssuingAuthorizationPayload,
    IssuingCardholderPayload,
    IssuingCardPayload,
    IssuingDisputePayload,
    PaymentIntentPayload,
    PayoutPayload,
    SourcePayload,
    SubscriptionSchedulePayload,
    TopupPayload,
)

from ._formatting import (
    first_present,
    format_amount,
    format_line_items,
    format_period,
    format_timestamp,
    human_event_type,
    human_status,
    join_present,
    render_field,
)

FIELD_LABELS: tuple[str, ...] = (
    "ID",
    "Account",
    "Customer",
    "Amount",
    "Status",
    "Period",
    "Items",
    "Details",
)

CATEGORY_LABELS: dict[CategoryTag, str] = {
    CategoryTag.INVOICE: "invoice",
    CategoryTag.CUSTOMER: "customer",
    CategoryTag.CHARGE: "charge",
    CategoryTag.SUBSCRIPTION_SCHEDULE: "subscription schedule",
    CategoryTag.INVOICE_ITEM: "invoice item",
    CategoryTag.PAYMENT_INTENT: "payment intent",
    CategoryTag.PAYOUT: "payout",
    CategoryTag.ISSUING_CARDHOLDER: "issuing cardholder",
    CategoryTag.ISSUING_CARD: "issuing card",
    CategoryTag.ISSUING_DISPUTE: "issuing dispute",
    CategoryTag.TOPUP: "top-up",
    CategoryTag.SOURCE: "source",
    CategoryTag.ISSUING_AUTHORIZATION: "issuing authorization",
    CategoryTag.UNHANDLED: "event",
}

TEST_MODE_MARK = ":memo:"
DIGEST_TITLE = "Stripe events ({count})"


@dataclass(frozen=True)
class EventSummary:
    """Valores exibíveis de um evento (None vira placeholder)."""

    id: str | None = None
    account: str | None = None
    customer: str | None = None
    amount: str | None = None
    status: str | None = None
    period: str | None = None
    items: str | None = None
    details: str | None = None

    def as_fields(self) -> list[tuple[str, str | None]]:
        values = (
            self.id,
            self.account,
            self.customer,
            self.amount,
            self.status,
            self.period,
            self.items,
            self.details,
        )
        return list(zip(FIELD_LABELS, values, strict=True))


# ──────────────────────────────────────────────────────────────
# Resumos por categoria
# ──────────────────────────────────────────────────────────────


def _summarize_invoice(data: InvoicePayload) -> EventSummary:
    return EventSummary(
        id=data.id,
        account=first_present(data.account_name, data.account_country),
        customer=first_present(data.customer_name, data.customer_email, data.customer),
        amount=format_amount(data.amount_due, data.currency),
        status=data.status,
        period=format_period(data.period_start, data.period_end),
        items=format_line_items(data.lines),
        details=join_present(
            f"Paid {format_amount(data.amount_paid, data.currency)}",
            first_present(data.hosted_invoice_url, data.billing_reason),
        ),
    )


def _summarize_customer(data: CustomerPayload) -> EventSummary:
    status = None
    if data.delinquent is not None:
        status = "delinquent" if data.delinquent else "active"
    return EventSummary(
        id=data.id,
        customer=first_present(data.name, data.email, data.phone),
        amount=format_amount(data.balance, data.currency),
        status=status,
        period=format_timestamp(data.created),
        details=data.description,
    )


def _summarize_charge(data: ChargePayload) -> EventSummary:
    return EventSummary(
        id=data.id,
        customer=data.customer,
        amount=format_amount(data.amount, data.currency),
        status=data.status,
        period=format_timestamp(data.created),
        details=first_present(data.failure_message, data.description, data.receipt_url),
    )


def _summarize_subscription_schedule(data: SubscriptionSchedulePayload) -> EventSummary:
    return EventSummary(
        id=data.id,
        customer=data.customer,
        status=data.status,
        period=format_timestamp(data.created),
        details=data.end_behavior,
    )


def _summarize_invoice_item(data: InvoiceItemPayload) -> EventSummary:
    return EventSummary(
        id=data.id,
        customer=data.customer,
        amount=format_amount(data.amount, data.currency),
        period=format_period(data.period.start, data.period.end),
        items=data.description,
        details=f"quantity {data.quantity}" if data.quantity else None,
    )


def _summarize_payment_intent(data: PaymentIntentPayload) -> EventSummary:
    return EventSummary(
        id=data.id,
        customer=first_present(data.customer, data.receipt_email),
        amount=format_amount(data.amount, data.currency),
        status=data.status,
        period=format_timestamp(data.created),
        details=first_present(data.cancellation_reason, data.description),
    )


def _summarize_payout(data: PayoutPayload) -> EventSummary:
    return EventSummary(
        id=data.id,
        amount=format_amount(data.amount, data.currency),
        status=data.status,
        period=format_timestamp(data.arrival_date),
        details=first_present(data.failure_message, data.description, data.method),
    )


def _summarize_issuing_cardholder(data: IssuingCardholderPayload) -> EventSummary:
    return EventSummary(
        id=data.id,
        customer=first_present(data.name, data.email),
        status=data.status,
        period=format_timestamp(data.created),
        details=data.type_,
    )


def _summarize_issuing_card(data: IssuingCardPayload) -> EventSummary:
    card = f"{data.brand} {data.last4}".strip()
    return EventSummary(
        id=data.id,
        customer=first_present(data.cardholder.email, data.cardholder.id),
        status=data.status,
        period=format_timestamp(data.created),
        details=first_present(data.cancellation_reason, card),
    )


def _summarize_issuing_dispute(data: IssuingDisputePayload) -> EventSummary:
    return EventSummary(
        id=data.id,
        amount=format_amount(data.amount, data.currency),
        status=data.status,
        period=format_timestamp(data.created),
        details=first_present(data.loss_reason, data.reason),
    )


def _summarize_topup(data: TopupPayload) -> EventSummary:
    return EventSummary(
        id=data.id,
        amount=format_amount(data.amount, data.currency),
        status=data.status,
        period=format_timestamp(data.expected_availability_date),
        details=first_present(data.failure_message, data.description),
    )


def _summarize_source(data: SourcePayload) -> EventSummary:
    owner = data.owner
    return EventSummary(
        id=data.id,
        customer=first_present(
            data.customer,
            owner.name if owner else None,
            owner.email if owner else None,
        ),
        amount=format_amount(data.amount, data.currency),
        status=data.status,
        period=format_timestamp(data.created),
        details=data.type_,
    )


def _summarize_issuing_authorization(data: IssuingAuthorizationPayload) -> EventSummary:
    return EventSummary(
        id=data.id,
        account=data.card,
        customer=data.cardholder,
        amount=format_amount(data.amount, data.currency),
        status=data.status,
        period=format_timestamp(data.created),
        details=first_present(data.merchant_data.name, data.merchant_data.category),
    )


Summarizer = Callable[[CanonicalModel], EventSummary]

# Mapeamento de categoria para resumo (UNHANDLED não tem campos próprios)
_SUMMARIZERS: dict[CategoryTag, Summarizer] = {
    CategoryTag.INVOICE: _summarize_invoice,
    CategoryTag.CUSTOMER: _summarize_customer,
    CategoryTag.CHARGE: _summarize_charge,
    CategoryTag.SUBSCRIPTION_SCHEDULE: _summarize_subscription_schedule,
    CategoryTag.INVOICE_ITEM: _summarize_invoice_item,
    CategoryTag.PAYMENT_INTENT: _summarize_payment_intent,
    CategoryTag.PAYOUT: _summarize_payout,
    CategoryTag.ISSUING_CARDHOLDER: _summarize_issuing_cardholder,
    CategoryTag.ISSUING_CARD: _summarize_issuing_card,
    CategoryTag.ISSUING_DISPUTE: _summarize_issuing_dispute,
    CategoryTag.TOPUP: _summarize_topup,
    CategoryTag.SOURCE: _summarize_source,
    CategoryTag.ISSUING_AUTHORIZATION: _summarize_issuing_authorization,
}


def summarize(event: CanonicalEvent) -> EventSummary:
    """Extrai os valores exibíveis do evento."""
    summarizer = _SUMMARIZERS.get(event.category)
    if summarizer is None:
        return EventSummary(id=event.id)
    return summarizer(event.data)


def build_title(event: CanonicalEvent, status: str | None = None) -> str:
    """Título mrkdwn de uma linha.

    Exemplo: `New *Stripe* invoice – *PaymentFailed* (Open)`
    """
    if event.category is CategoryTag.UNHANDLED:
        title = f"New *Stripe* event – *{event.event_type}* (not handled)"
    else:
        label = CATEGORY_LABELS[event.category]
        title = f"New *Stripe* {label} – *{human_event_type(event.event_type)}*"
        if status:
            title += f" ({human_status(status)})"
    if not event.livemode:
        title += f" {TEST_MODE_MARK}"
    return title


def compose(event: CanonicalEvent) -> DisplayMessage:
    """Compõe a mensagem de um evento (título + campos)."""
    return DisplayMessage(blocks=_event_blocks(event))


def compose_digest(events: Sequence[CanonicalEvent]) -> DisplayMessage:
    """Compõe um resumo de vários eventos.

    Header com a contagem, depois os blocos de cada evento separados
    por Divider.
    """
    header = HeaderBlock(
        text=TextObject(text=DIGEST_TITLE.format(count=len(events)), kind=TextKind.PLAIN_TEXT)
    )
    blocks: list[Block] = [header]
    for index, event in enumerate(events):
        if index:
            blocks.append(DividerBlock())
        blocks.extend(_event_blocks(event))
    return DisplayMessage(blocks=blocks)


def _event_blocks(event: CanonicalEvent) -> list[Block]:
    summary = summarize(event)
    title = SectionTextBlock(text=TextObject(text=build_title(event, summary.status)))
    fields = SectionFieldsBlock(
        fields=[TextObject(text=render_field(label, value)) for label, value in summary.as_fields()]
    )
    return [title, fields]


class SlackMessageComposer:
    """Composer de mensagens Slack para eventos Stripe (sem I/O)."""

    def compose(self, event: CanonicalEvent) -> DisplayMessage:
        return compose(event)

    def compose_digest(self, events: Sequence[CanonicalEvent]) -> DisplayMessage:
        return compose_digest(events)
