"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    BlockDecodeError,
    MalformedEventError,
    PipelineError,
    RelayConfigError,
)

__all__ = [
    "BlockDecodeError",
    "MalformedEventError",
    "PipelineError",
    "RelayConfigError",
]
