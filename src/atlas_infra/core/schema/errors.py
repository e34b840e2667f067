"""Erros canônicos do domínio de Schema (Atlas Infra).

A validação de schema nunca falha na primeira violação: o erro levantado
carrega sempre a lista completa de issues encontradas na passada.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

from atlas_infra.core.errors import SCHEMA_VALIDATION_FAILED, AtlasErrorPayload, schema_validation_failed
from atlas_infra.core.exceptions import AtlasInfraError

if TYPE_CHECKING:  # pragma: no cover
    from .types import ValidationIssue


class SchemaError(AtlasInfraError):
    """Erro base do domínio de schema."""


class SchemaValidationError(SchemaError):
    """Uma ou mais violações estruturais (tipo, enum, chave desconhecida, ...)."""

    error_type = SCHEMA_VALIDATION_FAILED

    def __init__(self, issues: Sequence["ValidationIssue"], *, message: str = "") -> None:
        self.issues: List["ValidationIssue"] = list(issues)
        summary = "; ".join(f"{i.path or '<root>'}: {i.message}" for i in self.issues)
        super().__init__(
            message or f"schema validation failed with {len(self.issues)} issue(s): {summary}",
            details={"issues": [i.to_dict() for i in self.issues]},
        )

    @property
    def paths(self) -> List[str]:
        return [i.path for i in self.issues]

    def to_payload(self) -> AtlasErrorPayload:
        payload = schema_validation_failed(issues=[i.to_dict() for i in self.issues])
        if self.error_type == payload.type:
            return payload
        return AtlasErrorPayload(
            type=self.error_type,
            message=self.message,
            details=payload.details,
            hint=payload.hint,
        )
