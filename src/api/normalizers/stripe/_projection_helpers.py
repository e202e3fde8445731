"""Helpers de projeção de sub-objetos Stripe.

Separado de projectors.py para manter SRP: cada função reduz um
sub-objeto bruto ao record canônico correspondente. Objetos opcionais
retornam None quando ausentes para que a serialização omita a chave.
"""

from __future__ import annotations

from typing import Any

from app.domain.stripe_event import (
    Address,
    CustomerAddress,
    IssuingAuthorizationAmountDetails,
    IssuingCardCardholder,
    IssuingCardholderDob,
    IssuingCardholderIndividual,
    LineItem,
    MerchantData,
    Period,
    SourceOwner,
    SubscriptionDefaultSettings,
)

from .extractor import (
    as_int,
    as_list,
    as_object,
    as_optional_int,
    as_optional_str,
    as_str,
)


def project_line_items(value: Any) -> list[LineItem]:
    """Projeta itens de fatura preservando ordem e contagem."""
    items: list[LineItem] = []
    for raw_item in as_list(value):
        item = as_object(raw_item) or {}
        items.append(
            LineItem(
                description=as_str(item.get("description")),
                amount=as_int(item.get("amount")),
                currency=as_str(item.get("currency")),
            )
        )
    return items


def project_customer_address(value: Any) -> CustomerAddress | None:
    """Endereço de cliente; `postal_code` bruto sai como `postal-code`."""
    raw = as_object(value)
    if raw is None:
        return None
    return CustomerAddress(
        city=as_optional_str(raw.get("city")),
        country=as_optional_str(raw.get("country")),
        line1=as_optional_str(raw.get("line1")),
        line2=as_optional_str(raw.get("line2")),
        postal_code=as_optional_str(raw.get("postal_code")),
        state=as_optional_str(raw.get("state")),
    )


def project_address(value: Any) -> Address | None:
    raw = as_object(value)
    if raw is None:
        return None
    return Address(
        city=as_optional_str(raw.get("city")),
        country=as_optional_str(raw.get("country")),
        line1=as_optional_str(raw.get("line1")),
        line2=as_optional_str(raw.get("line2")),
        postal_code=as_optional_str(raw.get("postal_code")),
        state=as_optional_str(raw.get("state")),
    )


def project_billing_address(value: Any) -> Address:
    """Endereço de cobrança do cardholder (sempre presente).

    Stripe aninha em `billing.address`; aceita também o endereço direto.
    """
    billing = as_object(value) or {}
    address = as_object(billing.get("address"))
    if address is None:
        address = billing
    return project_address(address) or Address()


def project_default_settings(value: Any) -> SubscriptionDefaultSettings:
    raw = as_object(value) or {}
    return SubscriptionDefaultSettings(
        billing_cycle_anchor=as_str(raw.get("billing_cycle_anchor")),
        collection_method=as_optional_str(raw.get("collection_method")),
    )


def project_period(value: Any) -> Period:
    raw = as_object(value) or {}
    return Period(start=as_int(raw.get("start")), end=as_int(raw.get("end")))


def project_individual(value: Any) -> IssuingCardholderIndividual | None:
    raw = as_object(value)
    if raw is None:
        return None
    dob_raw = as_object(raw.get("dob"))
    dob = None
    if dob_raw is not None:
        dob = IssuingCardholderDob(
            day=as_optional_int(dob_raw.get("day")),
            month=as_optional_int(dob_raw.get("month")),
            year=as_optional_int(dob_raw.get("year")),
        )
    return IssuingCardholderIndividual(
        dob=dob,
        first_name=as_optional_str(raw.get("first_name")),
        last_name=as_optional_str(raw.get("last_name")),
    )


def project_card_cardholder(value: Any) -> IssuingCardCardholder:
    """Cardholder do cartão: id solto ou objeto expandido."""
    if isinstance(value, str):
        return IssuingCardCardholder(id=value)
    raw = as_object(value) or {}
    return IssuingCardCardholder(
        email=as_optional_str(raw.get("email")),
        id=as_optional_str(raw.get("id")),
    )


def project_source_owner(value: Any) -> SourceOwner | None:
    raw = as_object(value)
    if raw is None:
        return None
    return SourceOwner(
        address=project_address(raw.get("address")),
        email=as_optional_str(raw.get("email")),
        name=as_optional_str(raw.get("name")),
        phone=as_optional_str(raw.get("phone")),
    )


def project_amount_details(value: Any) -> IssuingAuthorizationAmountDetails | None:
    raw = as_object(value)
    if raw is None:
        return None
    return IssuingAuthorizationAmountDetails(
        atm_fee=as_optional_int(raw.get("atm_fee")),
        cashback_amount=as_optional_int(raw.get("cashback_amount")),
    )


def project_merchant_data(value: Any) -> MerchantData:
    raw = as_object(value) or {}
    return MerchantData(
        category=as_str(raw.get("category")),
        category_code=as_str(raw.get("category_code")),
        city=as_optional_str(raw.get("city")),
        country=as_optional_str(raw.get("country")),
        name=as_optional_str(raw.get("name")),
        network_id=as_str(raw.get("network_id")),
        postal_code=as_optional_str(raw.get("postal_code")),
        state=as_optional_str(raw.get("state")),
        tax_id=as_optional_str(raw.get("tax_id")),
        terminal_id=as_optional_str(raw.get("terminal_id")),
        url=as_optional_str(raw.get("url")),
    )
