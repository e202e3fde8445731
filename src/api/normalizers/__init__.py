"""Normalizers por fonte — conversão de payloads externos para modelos internos.

Estrutura:
- stripe/: eventos de webhook Stripe → CanonicalEvent

Cada fonte tem seu próprio extractor e normalizer, mantendo SRP.
"""

from .stripe import StripeEventNormalizer, normalize_event, parse_raw_event

__all__ = [
    "StripeEventNormalizer",
    "normalize_event",
    "parse_raw_event",
]
