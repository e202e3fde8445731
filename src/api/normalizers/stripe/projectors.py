"""Projetores por categoria — objeto bruto Stripe → payload canônico.

Regras comuns:
- Escalares copiados pelo nome com coerção total.
- Referências expansíveis (customer, invoice, card...) viram id ou "".
- Objetos aninhados opcionais só entram quando presentes no bruto.
- `event_type` sempre vem do `type` do envelope, não do objeto.

Projeção nunca falha por campo ausente.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from app.constants.stripe import CategoryTag
from app.domain.stripe_event import (
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
    UnhandledPayload,
)

from ._projection_helpers import (
    project_amount_details,
    project_billing_address,
    project_card_cardholder,
    project_customer_address,
    project_default_settings,
    project_individual,
    project_line_items,
    project_merchant_data,
    project_period,
    project_source_owner,
)
from .extractor import (
    as_bool,
    as_int,
    as_object,
    as_optional_bool,
    as_optional_int,
    as_optional_str,
    as_reference,
    as_str,
    as_str_list,
)

Projector = Callable[[dict[str, Any], str], CanonicalModel]


def project_invoice(obj: dict[str, Any], event_type: str) -> InvoicePayload:
    return InvoicePayload(
        account_country=as_optional_str(obj.get("account_country")),
        account_name=as_optional_str(obj.get("account_name")),
        amount_due=as_int(obj.get("amount_due")),
        amount_paid=as_int(obj.get("amount_paid")),
        amount_remaining=as_int(obj.get("amount_remaining")),
        amount_shipping=as_int(obj.get("amount_shipping")),
        attempt_count=as_int(obj.get("attempt_count")),
        attempted=as_bool(obj.get("attempted")),
        billing_reason=as_optional_str(obj.get("billing_reason")),
        collection_method=as_str(obj.get("collection_method")),
        created=as_int(obj.get("created")),
        currency=as_str(obj.get("currency")),
        customer=as_reference(obj.get("customer")),
        customer_email=as_optional_str(obj.get("customer_email")),
        customer_name=as_optional_str(obj.get("customer_name")),
        event_type=event_type,
        hosted_invoice_url=as_optional_str(obj.get("hosted_invoice_url")),
        id=as_optional_str(obj.get("id")),
        lines=project_line_items(obj.get("lines")),
        paid=as_bool(obj.get("paid")),
        paid_out_of_band=as_bool(obj.get("paid_out_of_band")),
        period_end=as_int(obj.get("period_end")),
        period_start=as_int(obj.get("period_start")),
        status=as_optional_str(obj.get("status")),
        subtotal=as_int(obj.get("subtotal")),
        total=as_int(obj.get("total")),
    )


def project_customer(obj: dict[str, Any], event_type: str) -> CustomerPayload:
    return CustomerPayload(
        address=project_customer_address(obj.get("address")),
        balance=as_optional_int(obj.get("balance")),
        created=as_int(obj.get("created")),
        currency=as_optional_str(obj.get("currency")),
        delinquent=as_optional_bool(obj.get("delinquent")),
        description=as_optional_str(obj.get("description")),
        email=as_optional_str(obj.get("email")),
        event_type=event_type,
        id=as_str(obj.get("id")),
        invoice_prefix=as_optional_str(obj.get("invoice_prefix")),
        name=as_optional_str(obj.get("name")),
        next_invoice_sequence=as_optional_int(obj.get("next_invoice_sequence")),
        phone=as_optional_str(obj.get("phone")),
    )


def project_charge(obj: dict[str, Any], event_type: str) -> ChargePayload:
    return ChargePayload(
        amount=as_int(obj.get("amount")),
        amount_captured=as_int(obj.get("amount_captured")),
        amount_refunded=as_int(obj.get("amount_refunded")),
        balance_transaction=as_reference(obj.get("balance_transaction")),
        calculated_statement_descriptor=as_optional_str(
            obj.get("calculated_statement_descriptor")
        ),
        captured=as_bool(obj.get("captured")),
        created=as_int(obj.get("created")),
        currency=as_str(obj.get("currency")),
        customer=as_reference(obj.get("customer")),
        description=as_optional_str(obj.get("description")),
        disputed=as_bool(obj.get("disputed")),
        event_type=event_type,
        failure_code=as_optional_str(obj.get("failure_code")),
        failure_message=as_optional_str(obj.get("failure_message")),
        id=as_str(obj.get("id")),
        invoice=as_reference(obj.get("invoice")),
        paid=as_bool(obj.get("paid")),
        receipt_url=as_optional_str(obj.get("receipt_url")),
        refunded=as_bool(obj.get("refunded")),
        status=as_str(obj.get("status")),
    )


def project_subscription_schedule(
    obj: dict[str, Any], event_type: str
) -> SubscriptionSchedulePayload:
    return SubscriptionSchedulePayload(
        canceled_at=as_optional_int(obj.get("canceled_at")),
        completed_at=as_optional_int(obj.get("completed_at")),
        created=as_int(obj.get("created")),
        customer=as_reference(obj.get("customer")),
        default_settings=project_default_settings(obj.get("default_settings")),
        end_behavior=as_str(obj.get("end_behavior")),
        event_type=event_type,
        id=as_str(obj.get("id")),
        released_at=as_optional_int(obj.get("released_at")),
        status=as_str(obj.get("status")),
    )


def project_invoice_item(obj: dict[str, Any], event_type: str) -> InvoiceItemPayload:
    return InvoiceItemPayload(
        amount=as_int(obj.get("amount")),
        currency=as_str(obj.get("currency")),
        customer=as_reference(obj.get("customer")),
        date=as_int(obj.get("date")),
        description=as_optional_str(obj.get("description")),
        event_type=event_type,
        id=as_str(obj.get("id")),
        period=project_period(obj.get("period")),
        quantity=as_int(obj.get("quantity")),
    )


def project_payment_intent(obj: dict[str, Any], event_type: str) -> PaymentIntentPayload:
    return PaymentIntentPayload(
        amount=as_int(obj.get("amount")),
        amount_received=as_optional_int(obj.get("amount_received")),
        canceled_at=as_optional_int(obj.get("canceled_at")),
        cancellation_reason=as_optional_str(obj.get("cancellation_reason")),
        capture_method=as_str(obj.get("capture_method")),
        confirmation_method=as_str(obj.get("confirmation_method")),
        created=as_int(obj.get("created")),
        currency=as_str(obj.get("currency")),
        customer=as_reference(obj.get("customer")),
        description=as_optional_str(obj.get("description")),
        event_type=event_type,
        id=as_str(obj.get("id")),
        invoice=as_reference(obj.get("invoice")),
        payment_method_types=as_str_list(obj.get("payment_method_types")),
        receipt_email=as_optional_str(obj.get("receipt_email")),
        status=as_str(obj.get("status")),
    )


def project_payout(obj: dict[str, Any], event_type: str) -> PayoutPayload:
    return PayoutPayload(
        amount=as_int(obj.get("amount")),
        arrival_date=as_int(obj.get("arrival_date")),
        automatic=as_bool(obj.get("automatic")),
        balance_transaction=as_reference(obj.get("balance_transaction")),
        created=as_int(obj.get("created")),
        currency=as_str(obj.get("currency")),
        description=as_optional_str(obj.get("description")),
        event_type=event_type,
        failure_code=as_optional_str(obj.get("failure_code")),
        failure_message=as_optional_str(obj.get("failure_message")),
        id=as_str(obj.get("id")),
        method=as_str(obj.get("method")),
        reconciliation_status=as_str(obj.get("reconciliation_status")),
        source_type=as_str(obj.get("source_type")),
        statement_descriptor=as_optional_str(obj.get("statement_descriptor")),
        status=as_str(obj.get("status")),
        type_=as_str(obj.get("type")),
    )


def project_issuing_cardholder(
    obj: dict[str, Any], event_type: str
) -> IssuingCardholderPayload:
    return IssuingCardholderPayload(
        billing=project_billing_address(obj.get("billing")),
        created=as_int(obj.get("created")),
        email=as_optional_str(obj.get("email")),
        event_type=event_type,
        id=as_str(obj.get("id")),
        individual=project_individual(obj.get("individual")),
        name=as_str(obj.get("name")),
        phone_number=as_optional_str(obj.get("phone_number")),
        status=as_str(obj.get("status")),
        type_=as_str(obj.get("type")),
    )


def project_issuing_card(obj: dict[str, Any], event_type: str) -> IssuingCardPayload:
    return IssuingCardPayload(
        brand=as_str(obj.get("brand")),
        cancellation_reason=as_optional_str(obj.get("cancellation_reason")),
        cardholder=project_card_cardholder(obj.get("cardholder")),
        created=as_int(obj.get("created")),
        currency=as_str(obj.get("currency")),
        cvc=as_optional_str(obj.get("cvc")),
        event_type=event_type,
        exp_month=as_int(obj.get("exp_month")),
        exp_year=as_int(obj.get("exp_year")),
        financial_account=as_optional_str(obj.get("financial_account")),
        id=as_str(obj.get("id")),
        last4=as_str(obj.get("last4")),
        status=as_str(obj.get("status")),
        type_=as_str(obj.get("type")),
    )


def project_issuing_dispute(obj: dict[str, Any], event_type: str) -> IssuingDisputePayload:
    # Stripe Issuing guarda o motivo em evidence.reason
    reason = obj.get("reason")
    if not isinstance(reason, str):
        reason = (as_object(obj.get("evidence")) or {}).get("reason")
    return IssuingDisputePayload(
        amount=as_int(obj.get("amount")),
        created=as_int(obj.get("created")),
        currency=as_str(obj.get("currency")),
        event_type=event_type,
        id=as_str(obj.get("id")),
        loss_reason=as_optional_str(obj.get("loss_reason")),
        reason=as_str(reason),
        status=as_str(obj.get("status")),
    )


def project_topup(obj: dict[str, Any], event_type: str) -> TopupPayload:
    return TopupPayload(
        amount=as_int(obj.get("amount")),
        created=as_int(obj.get("created")),
        currency=as_str(obj.get("currency")),
        description=as_optional_str(obj.get("description")),
        event_type=event_type,
        expected_availability_date=as_optional_int(obj.get("expected_availability_date")),
        failure_code=as_optional_str(obj.get("failure_code")),
        failure_message=as_optional_str(obj.get("failure_message")),
        id=as_str(obj.get("id")),
        status=as_str(obj.get("status")),
    )


def project_source(obj: dict[str, Any], event_type: str) -> SourcePayload:
    return SourcePayload(
        amount=as_optional_int(obj.get("amount")),
        client_secret=as_str(obj.get("client_secret")),
        created=as_int(obj.get("created")),
        currency=as_optional_str(obj.get("currency")),
        customer=as_reference(obj.get("customer")),
        event_type=event_type,
        id=as_str(obj.get("id")),
        owner=project_source_owner(obj.get("owner")),
        statement_descriptor=as_optional_str(obj.get("statement_descriptor")),
        status=as_str(obj.get("status")),
        type_=as_str(obj.get("type")),
    )


def project_issuing_authorization(
    obj: dict[str, Any], event_type: str
) -> IssuingAuthorizationPayload:
    return IssuingAuthorizationPayload(
        amount=as_int(obj.get("amount")),
        amount_details=project_amount_details(obj.get("amount_details")),
        approved=as_bool(obj.get("approved")),
        authorization_method=as_str(obj.get("authorization_method")),
        card=as_reference(obj.get("card")),
        cardholder=as_reference(obj.get("cardholder")),
        created=as_int(obj.get("created")),
        currency=as_str(obj.get("currency")),
        event_type=event_type,
        id=as_str(obj.get("id")),
        merchant_amount=as_int(obj.get("merchant_amount")),
        merchant_currency=as_str(obj.get("merchant_currency")),
        merchant_data=project_merchant_data(obj.get("merchant_data")),
        status=as_str(obj.get("status")),
        wallet=as_optional_str(obj.get("wallet")),
    )


def project_unhandled(obj: dict[str, Any], event_type: str) -> UnhandledPayload:
    _ = obj  # objeto bruto descartado
    return UnhandledPayload(event_type=event_type)


# Mapeamento de categoria para projetor
_PROJECTORS: dict[CategoryTag, Projector] = {
    CategoryTag.INVOICE: project_invoice,
    CategoryTag.CUSTOMER: project_customer,
    CategoryTag.CHARGE: project_charge,
    CategoryTag.SUBSCRIPTION_SCHEDULE: project_subscription_schedule,
    CategoryTag.INVOICE_ITEM: project_invoice_item,
    CategoryTag.PAYMENT_INTENT: project_payment_intent,
    CategoryTag.PAYOUT: project_payout,
    CategoryTag.ISSUING_CARDHOLDER: project_issuing_cardholder,
    CategoryTag.ISSUING_CARD: project_issuing_card,
    CategoryTag.ISSUING_DISPUTE: project_issuing_dispute,
    CategoryTag.TOPUP: project_topup,
    CategoryTag.SOURCE: project_source,
    CategoryTag.ISSUING_AUTHORIZATION: project_issuing_authorization,
    CategoryTag.UNHANDLED: project_unhandled,
}


def get_projector(category: CategoryTag) -> Projector:
    """Retorna o projetor da categoria."""
    return _PROJECTORS[category]


def project(category: CategoryTag, raw_object: dict[str, Any], event_type: str) -> CanonicalModel:
    """Projeta `data.object` bruto no payload da categoria.

    Args:
        category: Categoria já classificada
        raw_object: Conteúdo de `data.object` (pode ser {})
        event_type: Literal `type` do envelope

    Returns:
        Record canônico da categoria
    """
    return get_projector(category)(raw_object, event_type)
