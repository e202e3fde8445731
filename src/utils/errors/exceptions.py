"""Exceções de domínio do pipeline Stripe → Slack."""

from __future__ import annotations


class PipelineError(ValueError):
    """Base para falhas do pipeline de redução/projeção."""


class MalformedEventError(PipelineError):
    """Payload bruto rejeitado na borda de ingestão.

    Cobre bytes que não são JSON válido, raiz que não é objeto e envelope
    sem string `type`. O evento não é encaminhado; o roteamento do rejeito
    é responsabilidade do chamador.

    Args:
        message: Descrição legível (sem conteúdo do payload).
        reason: Código curto para métricas (ex: "invalid_json").
    """

    def __init__(self, message: str, *, reason: str) -> None:
        super().__init__(message)
        self.reason = reason


class BlockDecodeError(PipelineError):
    """JSON de bloco de exibição que não corresponde a nenhuma variante."""


class RelayConfigError(PipelineError):
    """Documento de configuração do relay ilegível ou inválido."""
