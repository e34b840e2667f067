"""
Atlas Infra — Canonical Exceptions (v1)

Este módulo define a exceção base tipada do Atlas Infra.

Objetivo:
- Permitir que schema, config e binders levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para AtlasErrorPayload
- Evitar ValueError/RuntimeError genéricos em guardrails críticos

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Cada subclasse declara seu código estável em `error_type`.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .errors import AtlasErrorPayload


class AtlasInfraError(Exception):
    """Base class para exceções internas do Atlas Infra.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    error_type: str = "ATLAS_INFRA_ERROR"
    default_hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        self.hint = hint if hint is not None else self.default_hint

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> AtlasErrorPayload:
        return AtlasErrorPayload(
            type=self.error_type,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )
