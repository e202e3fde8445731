"""Normalizer Stripe — classificação e projeção de eventos de webhook.

Responsabilidades:
- Decodificar o envelope bruto e rejeitar entrada malformada
- Classificar o `type` do evento pela tabela literal de categorias
- Projetar `data.object` no payload canônico da categoria

Categorias: invoice, customer, charge, subscription_schedule, invoiceitem,
payment_intent, payout, issuing_*, topup, source e o fallback unhandled.
"""

from .normalizer import StripeEventNormalizer, normalize_event, parse_raw_event
from .projectors import get_projector, project

__all__ = [
    "StripeEventNormalizer",
    "get_projector",
    "normalize_event",
    "parse_raw_event",
    "project",
]
