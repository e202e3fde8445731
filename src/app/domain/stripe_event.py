"""Evento canônico Stripe — esquema reduzido e fortemente tipado.

Cada categoria tem seu próprio record concreto; não há tipo de endereço
compartilhado. `CustomerAddress` usa a chave `postal-code` (hífen) enquanto
`Address` usa `postal_code`; consumidores downstream dependem dessas chaves.

Regras de serialização:
- Escalares opcionais ausentes saem como null (chave mantida).
- Objetos aninhados opcionais (`omit_when_absent`) saem do dict quando ausentes.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)

from app.constants.stripe import UNHANDLED_MESSAGE, CategoryTag


class CanonicalModel(BaseModel):
    """Base imutável dos records canônicos."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    # Campos omitidos da saída quando None (nunca emitidos como null)
    omit_when_absent: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        fields = type(self).model_fields
        for name in self.omit_when_absent:
            if getattr(self, name) is not None:
                continue
            data.pop(name, None)
            alias = fields[name].alias
            if alias:
                data.pop(alias, None)
        return data


# ──────────────────────────────────────────────────────────────
# Sub-objetos
# ──────────────────────────────────────────────────────────────


class LineItem(CanonicalModel):
    """Item de fatura reduzido."""

    description: str = ""
    amount: int = 0
    currency: str = ""


class CustomerAddress(CanonicalModel):
    """Endereço do cliente (chave `postal-code`)."""

    city: str | None = None
    country: str | None = None
    line1: str | None = None
    line2: str | None = None
    postal_code: str | None = Field(default=None, alias="postal-code")
    state: str | None = None


class Address(CanonicalModel):
    """Endereço de cobrança/owner (chave `postal_code`)."""

    city: str | None = None
    country: str | None = None
    line1: str | None = None
    line2: str | None = None
    postal_code: str | None = None
    state: str | None = None


class SubscriptionDefaultSettings(CanonicalModel):
    billing_cycle_anchor: str = ""
    collection_method: str | None = None


class Period(CanonicalModel):
    start: int = 0
    end: int = 0


class IssuingCardholderDob(CanonicalModel):
    day: int | None = None
    month: int | None = None
    year: int | None = None


class IssuingCardholderIndividual(CanonicalModel):
    omit_when_absent: ClassVar[frozenset[str]] = frozenset({"dob"})

    dob: IssuingCardholderDob | None = None
    first_name: str | None = None
    last_name: str | None = None


class IssuingCardCardholder(CanonicalModel):
    email: str | None = None
    id: str | None = None


class SourceOwner(CanonicalModel):
    omit_when_absent: ClassVar[frozenset[str]] = frozenset({"address"})

    address: Address | None = None
    email: str | None = None
    name: str | None = None
    phone: str | None = None


class IssuingAuthorizationAmountDetails(CanonicalModel):
    atm_fee: int | None = None
    cashback_amount: int | None = None


class MerchantData(CanonicalModel):
    category: str = ""
    category_code: str = ""
    city: str | None = None
    country: str | None = None
    name: str | None = None
    network_id: str = ""
    postal_code: str | None = None
    state: str | None = None
    tax_id: str | None = None
    terminal_id: str | None = None
    url: str | None = None


# ──────────────────────────────────────────────────────────────
# Payloads por categoria
# ──────────────────────────────────────────────────────────────


class InvoicePayload(CanonicalModel):
    omit_when_absent: ClassVar[frozenset[str]] = frozenset({"hosted_invoice_url"})

    account_country: str | None = None
    account_name: str | None = None
    amount_due: int = 0
    amount_paid: int = 0
    amount_remaining: int = 0
    amount_shipping: int = 0
    attempt_count: int = 0
    attempted: bool = False
    billing_reason: str | None = None
    collection_method: str = ""
    created: int = 0
    currency: str = ""
    customer: str = ""
    customer_email: str | None = None
    customer_name: str | None = None
    event_type: str = ""
    hosted_invoice_url: str | None = None
    id: str | None = None
    lines: list[LineItem] = Field(default_factory=list)
    paid: bool = False
    paid_out_of_band: bool = False
    period_end: int = 0
    period_start: int = 0
    status: str | None = None
    subtotal: int = 0
    total: int = 0


class CustomerPayload(CanonicalModel):
    omit_when_absent: ClassVar[frozenset[str]] = frozenset({"address"})

    address: CustomerAddress | None = None
    balance: int | None = None
    created: int = 0
    currency: str | None = None
    delinquent: bool | None = None
    description: str | None = None
    email: str | None = None
    event_type: str = ""
    id: str = ""
    invoice_prefix: str | None = None
    name: str | None = None
    next_invoice_sequence: int | None = None
    phone: str | None = None


class ChargePayload(CanonicalModel):
    amount: int = 0
    amount_captured: int = 0
    amount_refunded: int = 0
    balance_transaction: str = ""
    calculated_statement_descriptor: str | None = None
    captured: bool = False
    created: int = 0
    currency: str = ""
    customer: str = ""
    description: str | None = None
    disputed: bool = False
    event_type: str = ""
    failure_code: str | None = None
    failure_message: str | None = None
    id: str = ""
    invoice: str = ""
    paid: bool = False
    receipt_url: str | None = None
    refunded: bool = False
    status: str = ""


class SubscriptionSchedulePayload(CanonicalModel):
    canceled_at: int | None = None
    completed_at: int | None = None
    created: int = 0
    customer: str = ""
    default_settings: SubscriptionDefaultSettings = Field(
        default_factory=SubscriptionDefaultSettings
    )
    end_behavior: str = ""
    event_type: str = ""
    id: str = ""
    released_at: int | None = None
    status: str = ""


class InvoiceItemPayload(CanonicalModel):
    amount: int = 0
    currency: str = ""
    customer: str = ""
    date: int = 0
    description: str | None = None
    event_type: str = ""
    id: str = ""
    period: Period = Field(default_factory=Period)
    quantity: int = 0


class PaymentIntentPayload(CanonicalModel):
    amount: int = 0
    amount_received: int | None = None
    canceled_at: int | None = None
    cancellation_reason: str | None = None
    capture_method: str = ""
    confirmation_method: str = ""
    created: int = 0
    currency: str = ""
    customer: str = ""
    description: str | None = None
    event_type: str = ""
    id: str = ""
    invoice: str = ""
    payment_method_types: list[str] = Field(default_factory=list)
    receipt_email: str | None = None
    status: str = ""


class PayoutPayload(CanonicalModel):
    amount: int = 0
    arrival_date: int = 0
    automatic: bool = False
    balance_transaction: str = ""
    created: int = 0
    currency: str = ""
    description: str | None = None
    event_type: str = ""
    failure_code: str | None = None
    failure_message: str | None = None
    id: str = ""
    method: str = ""
    reconciliation_status: str = ""
    source_type: str = ""
    statement_descriptor: str | None = None
    status: str = ""
    type_: str = Field(default="", alias="type")


class IssuingCardholderPayload(CanonicalModel):
    omit_when_absent: ClassVar[frozenset[str]] = frozenset({"individual"})

    billing: Address = Field(default_factory=Address)
    created: int = 0
    email: str | None = None
    event_type: str = ""
    id: str = ""
    individual: IssuingCardholderIndividual | None = None
    name: str = ""
    phone_number: str | None = None
    status: str = ""
    type_: str = Field(default="", alias="type")


class IssuingCardPayload(CanonicalModel):
    brand: str = ""
    cancellation_reason: str | None = None
    cardholder: IssuingCardCardholder = Field(default_factory=IssuingCardCardholder)
    created: int = 0
    currency: str = ""
    cvc: str | None = None
    event_type: str = ""
    exp_month: int = 0
    exp_year: int = 0
    financial_account: str | None = None
    id: str = ""
    last4: str = ""
    status: str = ""
    type_: str = Field(default="", alias="type")


class IssuingDisputePayload(CanonicalModel):
    amount: int = 0
    created: int = 0
    currency: str = ""
    event_type: str = ""
    id: str = ""
    loss_reason: str | None = None
    reason: str = ""
    status: str = ""


class TopupPayload(CanonicalModel):
    amount: int = 0
    created: int = 0
    currency: str = ""
    description: str | None = None
    event_type: str = ""
    expected_availability_date: int | None = None
    failure_code: str | None = None
    failure_message: str | None = None
    id: str = ""
    status: str = ""


class SourcePayload(CanonicalModel):
    omit_when_absent: ClassVar[frozenset[str]] = frozenset({"owner"})

    amount: int | None = None
    client_secret: str = ""
    created: int = 0
    currency: str | None = None
    customer: str = ""
    event_type: str = ""
    id: str = ""
    owner: SourceOwner | None = None
    statement_descriptor: str | None = None
    status: str = ""
    type_: str = Field(default="", alias="type")


class IssuingAuthorizationPayload(CanonicalModel):
    omit_when_absent: ClassVar[frozenset[str]] = frozenset({"amount_details"})

    amount: int = 0
    amount_details: IssuingAuthorizationAmountDetails | None = None
    approved: bool = False
    authorization_method: str = ""
    card: str = ""
    cardholder: str = ""
    created: int = 0
    currency: str = ""
    event_type: str = ""
    id: str = ""
    merchant_amount: int = 0
    merchant_currency: str = ""
    merchant_data: MerchantData = Field(default_factory=MerchantData)
    status: str = ""
    wallet: str | None = None


class UnhandledPayload(CanonicalModel):
    """Fallback para tipos fora da tabela de categorias."""

    event_type: str = ""
    message: str = UNHANDLED_MESSAGE


CategoryPayload = (
    InvoicePayload
    | CustomerPayload
    | ChargePayload
    | SubscriptionSchedulePayload
    | InvoiceItemPayload
    | PaymentIntentPayload
    | PayoutPayload
    | IssuingCardholderPayload
    | IssuingCardPayload
    | IssuingDisputePayload
    | TopupPayload
    | SourcePayload
    | IssuingAuthorizationPayload
    | UnhandledPayload
)

# Record concreto por categoria (fonte para validação e round-trip)
PAYLOAD_MODELS: dict[CategoryTag, type[CanonicalModel]] = {
    CategoryTag.INVOICE: InvoicePayload,
    CategoryTag.CUSTOMER: CustomerPayload,
    CategoryTag.CHARGE: ChargePayload,
    CategoryTag.SUBSCRIPTION_SCHEDULE: SubscriptionSchedulePayload,
    CategoryTag.INVOICE_ITEM: InvoiceItemPayload,
    CategoryTag.PAYMENT_INTENT: PaymentIntentPayload,
    CategoryTag.PAYOUT: PayoutPayload,
    CategoryTag.ISSUING_CARDHOLDER: IssuingCardholderPayload,
    CategoryTag.ISSUING_CARD: IssuingCardPayload,
    CategoryTag.ISSUING_DISPUTE: IssuingDisputePayload,
    CategoryTag.TOPUP: TopupPayload,
    CategoryTag.SOURCE: SourcePayload,
    CategoryTag.ISSUING_AUTHORIZATION: IssuingAuthorizationPayload,
    CategoryTag.UNHANDLED: UnhandledPayload,
}


class CanonicalEvent(BaseModel):
    """Evento reduzido: envelope + payload da categoria.

    Invariante: `type(data) is PAYLOAD_MODELS[category]`.
    """

    model_config = ConfigDict(frozen=True)

    api_version: str | None = None
    created: int = 0
    id: str = ""
    livemode: bool = False
    pending_webhooks: int = 0
    category: CategoryTag
    data: CategoryPayload

    @model_validator(mode="before")
    @classmethod
    def _select_payload_model(cls, values: Any) -> Any:
        # JSON não carrega o discriminante dentro de `data`; vem de `category`
        if not isinstance(values, dict):
            return values
        data = values.get("data")
        if not isinstance(data, dict):
            return values
        try:
            category = CategoryTag(values.get("category"))
        except ValueError:
            return values
        return {**values, "data": PAYLOAD_MODELS[category].model_validate(data)}

    @model_validator(mode="after")
    def _check_category_agreement(self) -> CanonicalEvent:
        expected = PAYLOAD_MODELS[self.category]
        if type(self.data) is not expected:
            raise ValueError(
                f"payload {type(self.data).__name__} não corresponde à categoria "
                f"{self.category.value}"
            )
        return self

    @property
    def event_type(self) -> str:
        """Tipo bruto do evento (presente em todo payload)."""
        return self.data.event_type

    def to_dict(self) -> dict[str, Any]:
        """Serializa para dict JSON-compatível (chaves por alias)."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json_bytes(self) -> bytes:
        """Serializa para bytes JSON (saída canônica encaminhada downstream)."""
        return self.model_dump_json(by_alias=True).encode("utf-8")
