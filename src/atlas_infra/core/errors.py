"""
Atlas Infra — Canonical Error Structures (v1)

Este módulo define o padrão canônico de payloads de erro do Atlas Infra.
Erros são considerados artefatos de domínio e fazem parte do contrato
operacional do sistema, devendo ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

O autor do manifest precisa conseguir corrigir todos os problemas
de uma vez, portanto payloads carregam a lista completa de violações
quando existir mais de uma.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AtlasErrorPayload:
    """
    Payload canônico de erro do Atlas Infra.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao autor do manifest (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        # o chamador deve garantir que details seja serializável
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Schema / Configuração
SCHEMA_VALIDATION_FAILED = "SCHEMA_VALIDATION_FAILED"
CONFIGURATION_INVALID = "CONFIGURATION_INVALID"
CONFIGURATION_SOURCE_INVALID = "CONFIGURATION_SOURCE_INVALID"

# Binding
BINDING_DESCRIPTOR_INVALID = "BINDING_DESCRIPTOR_INVALID"
BINDING_TARGET_ATTRIBUTE_MISSING = "BINDING_TARGET_ATTRIBUTE_MISSING"
BINDING_TARGET_ATTRIBUTE_INVALID = "BINDING_TARGET_ATTRIBUTE_INVALID"
BINDING_CAPABILITY_UNSUPPORTED = "BINDING_CAPABILITY_UNSUPPORTED"
BINDING_SERVICE_UNKNOWN = "BINDING_SERVICE_UNKNOWN"
BINDING_EXECUTION_ERROR = "BINDING_EXECUTION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def schema_validation_failed(
    *,
    issues: List[Dict[str, Any]],
    hint: str = "Corrija todos os campos listados no manifest e reexecute a resolução.",
) -> AtlasErrorPayload:
    return AtlasErrorPayload(
        type=SCHEMA_VALIDATION_FAILED,
        message="Configuração viola o schema declarado",
        details={"issues": issues, "issue_count": len(issues)},
        hint=hint,
    )


def binding_execution_error(
    *,
    binding: Optional[Dict[str, Any]] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o binding declarado e os atributos do componente alvo. Nenhum fallback é aplicado automaticamente.",
) -> AtlasErrorPayload:
    return AtlasErrorPayload(
        type=BINDING_EXECUTION_ERROR,
        message="Falha inesperada durante a resolução do binding",
        details={
            "binding": binding,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )
