"""
Tipos canônicos da validação de schema do Atlas Infra.

Componentes principais:
    - ValidationIssue  → uma violação estrutural localizada por path
    - ValidationResult → coleção completa de violações de uma passada

Princípios fundamentais:
    - Tipos são imutáveis e serializáveis
    - Nenhuma lógica de validação vive neste módulo

Invariantes:
    - Cada issue possui `path`, `code` e `message`
    - Um ValidationResult sem issues é considerado válido
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .errors import SchemaValidationError


ISSUE_TYPE = "type"
ISSUE_ENUM = "enum"
ISSUE_UNKNOWN_KEY = "unknown_key"
ISSUE_REQUIRED = "required"
ISSUE_MINIMUM = "minimum"
ISSUE_MAXIMUM = "maximum"


@dataclass(frozen=True)
class ValidationIssue:
    """
    Violação estrutural encontrada durante a validação.

    Campos:
        - path: caminho pontuado até o valor (`""` representa a raiz;
          elementos de lista aparecem como `tags[0]`)
        - code: código estável da violação (type, enum, unknown_key, ...)
        - message: mensagem curta e humana
    """

    path: str
    code: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "code": self.code, "message": self.message}


@dataclass(frozen=True)
class ValidationResult:
    """Resultado completo de uma passada de validação (nunca apenas o primeiro erro)."""

    issues: Tuple[ValidationIssue, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.issues

    def paths(self) -> List[str]:
        return [i.path for i in self.issues]

    def raise_for_issues(self) -> None:
        if self.issues:
            raise SchemaValidationError(list(self.issues))
