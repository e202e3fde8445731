"""Use cases específicos de Stripe."""

from .relay_event import (
    RelayBatchSummary,
    RelayRejection,
    RelayResult,
    RelayStripeEventUseCase,
)

__all__ = [
    "RelayBatchSummary",
    "RelayRejection",
    "RelayResult",
    "RelayStripeEventUseCase",
]
