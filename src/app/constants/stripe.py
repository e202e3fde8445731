"""Tabela de categorias de eventos Stripe.

Fonte única de verdade para classificação: cada literal de tipo de evento
mapeia para exatamente uma categoria canônica. Não há casamento por prefixo;
`invoice.something_new` cai em UNHANDLED mesmo compartilhando o prefixo
`invoice.` com tipos conhecidos.
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType


class CategoryTag(StrEnum):
    """Categorias canônicas de evento."""

    INVOICE = "invoice"
    CUSTOMER = "customer"
    CHARGE = "charge"
    SUBSCRIPTION_SCHEDULE = "subscription_schedule"
    INVOICE_ITEM = "invoiceitem"
    PAYMENT_INTENT = "payment_intent"
    PAYOUT = "payout"
    ISSUING_CARDHOLDER = "issuing_cardholder"
    ISSUING_CARD = "issuing_card"
    ISSUING_DISPUTE = "issuing_dispute"
    TOPUP = "topup"
    SOURCE = "source"
    ISSUING_AUTHORIZATION = "issuing_authorization"
    UNHANDLED = "unhandled"


_C = CategoryTag

EVENT_CATEGORIES: MappingProxyType[str, CategoryTag] = MappingProxyType(
    {
        # Invoice
        "invoice.created": _C.INVOICE,
        "invoice.deleted": _C.INVOICE,
        "invoice.finalization_failed": _C.INVOICE,
        "invoice.finalized": _C.INVOICE,
        "invoice.will_be_due": _C.INVOICE,
        "invoice.marked_uncollectible": _C.INVOICE,
        "invoice.overdue": _C.INVOICE,
        "invoice.paid": _C.INVOICE,
        "invoice.payment_action_required": _C.INVOICE,
        "invoice.payment_failed": _C.INVOICE,
        "invoice.payment_succeeded": _C.INVOICE,
        "invoice.sent": _C.INVOICE,
        "invoice.upcoming": _C.INVOICE,
        "invoice.updated": _C.INVOICE,
        "invoice.voided": _C.INVOICE,
        # Customer
        "customer.bank_account.created": _C.CUSTOMER,
        "customer.bank_account.deleted": _C.CUSTOMER,
        "customer.bank_account.updated": _C.CUSTOMER,
        "customer.card.created": _C.CUSTOMER,
        "customer.card.deleted": _C.CUSTOMER,
        "customer.card.updated": _C.CUSTOMER,
        "customer.created": _C.CUSTOMER,
        "customer.deleted": _C.CUSTOMER,
        "customer.subscription.created": _C.CUSTOMER,
        "customer.subscription.deleted": _C.CUSTOMER,
        "customer.subscription.paused": _C.CUSTOMER,
        "customer.subscription.pending_update_applied": _C.CUSTOMER,
        "customer.subscription.pending_update_expired": _C.CUSTOMER,
        "customer.subscription.resumed": _C.CUSTOMER,
        "customer.subscription.trial_will_end": _C.CUSTOMER,
        "customer.subscription.updated": _C.CUSTOMER,
        "customer.updated": _C.CUSTOMER,
        # Charge
        "charge.captured": _C.CHARGE,
        "charge.dispute.closed": _C.CHARGE,
        "charge.dispute.created": _C.CHARGE,
        "charge.dispute.funds_reinstated": _C.CHARGE,
        "charge.dispute.funds_withdrawn": _C.CHARGE,
        "charge.dispute.updated": _C.CHARGE,
        "charge.expired": _C.CHARGE,
        "charge.failed": _C.CHARGE,
        "charge.pending": _C.CHARGE,
        "charge.refund.updated": _C.CHARGE,
        "charge.refunded": _C.CHARGE,
        "charge.succeeded": _C.CHARGE,
        "charge.updated": _C.CHARGE,
        # Invoice item
        "invoiceitem.created": _C.INVOICE_ITEM,
        "invoiceitem.deleted": _C.INVOICE_ITEM,
        # Issuing
        "issuing_authorization.created": _C.ISSUING_AUTHORIZATION,
        "issuing_authorization.updated": _C.ISSUING_AUTHORIZATION,
        "issuing_card.created": _C.ISSUING_CARD,
        "issuing_card.updated": _C.ISSUING_CARD,
        "issuing_cardholder.created": _C.ISSUING_CARDHOLDER,
        "issuing_cardholder.updated": _C.ISSUING_CARDHOLDER,
        "issuing_dispute.closed": _C.ISSUING_DISPUTE,
        "issuing_dispute.created": _C.ISSUING_DISPUTE,
        "issuing_dispute.funds_reinstated": _C.ISSUING_DISPUTE,
        "issuing_dispute.funds_rescinded": _C.ISSUING_DISPUTE,
        "issuing_dispute.submitted": _C.ISSUING_DISPUTE,
        "issuing_dispute.updated": _C.ISSUING_DISPUTE,
        # Payment intent
        "payment_intent.amount_capturable_updated": _C.PAYMENT_INTENT,
        "payment_intent.canceled": _C.PAYMENT_INTENT,
        "payment_intent.created": _C.PAYMENT_INTENT,
        "payment_intent.partially_funded": _C.PAYMENT_INTENT,
        "payment_intent.payment_failed": _C.PAYMENT_INTENT,
        "payment_intent.processing": _C.PAYMENT_INTENT,
        "payment_intent.requires_action": _C.PAYMENT_INTENT,
        "payment_intent.succeeded": _C.PAYMENT_INTENT,
        # Payout
        "payout.canceled": _C.PAYOUT,
        "payout.created": _C.PAYOUT,
        "payout.failed": _C.PAYOUT,
        "payout.paid": _C.PAYOUT,
        "payout.reconciliation_completed": _C.PAYOUT,
        "payout.updated": _C.PAYOUT,
        # Source
        "source.canceled": _C.SOURCE,
        "source.chargeable": _C.SOURCE,
        "source.failed": _C.SOURCE,
        "source.mandate_notification": _C.SOURCE,
        "source.refund_attributes_required": _C.SOURCE,
        "source.transaction.created": _C.SOURCE,
        "source.transaction.updated": _C.SOURCE,
        # Subscription schedule
        "subscription_schedule.aborted": _C.SUBSCRIPTION_SCHEDULE,
        "subscription_schedule.canceled": _C.SUBSCRIPTION_SCHEDULE,
        "subscription_schedule.completed": _C.SUBSCRIPTION_SCHEDULE,
        "subscription_schedule.created": _C.SUBSCRIPTION_SCHEDULE,
        "subscription_schedule.expiring": _C.SUBSCRIPTION_SCHEDULE,
        "subscription_schedule.released": _C.SUBSCRIPTION_SCHEDULE,
        "subscription_schedule.updated": _C.SUBSCRIPTION_SCHEDULE,
        # Topup
        "topup.canceled": _C.TOPUP,
        "topup.created": _C.TOPUP,
        "topup.failed": _C.TOPUP,
        "topup.reversed": _C.TOPUP,
        "topup.succeeded": _C.TOPUP,
    }
)

# Mensagem fixa do payload de eventos sem categoria
UNHANDLED_MESSAGE = "Event type not handled"


def classify(raw_type: str) -> CategoryTag:
    """Classifica o tipo bruto do evento.

    Args:
        raw_type: Valor literal do campo `type` do envelope.

    Returns:
        Categoria canônica, ou UNHANDLED se o literal não estiver na tabela.
    """
    return EVENT_CATEGORIES.get(raw_type, CategoryTag.UNHANDLED)


def event_types_for(category: CategoryTag) -> list[str]:
    """Retorna os literais conhecidos de uma categoria, ordenados."""
    return sorted(t for t, c in EVENT_CATEGORIES.items() if c is category)
