"""
Exceções canônicas da camada de binding do Atlas Infra.

Hierarquia:
    BindingError
     ├── BindingDescriptorError
     │    └── UnsupportedAccessModeError
     ├── MissingTargetAttributeError
     ├── InvalidTargetAttributeError
     ├── UnsupportedCapabilityError
     └── UnknownServiceTypeError

Invariantes:
    - Toda falha é levantada antes de qualquer mutação do componente de origem
    - Listas em `details` são sempre ordenadas (mensagens determinísticas)
"""

from __future__ import annotations

from typing import Iterable, Optional

from atlas_infra.core.errors import (
    BINDING_CAPABILITY_UNSUPPORTED,
    BINDING_DESCRIPTOR_INVALID,
    BINDING_EXECUTION_ERROR,
    BINDING_SERVICE_UNKNOWN,
    BINDING_TARGET_ATTRIBUTE_INVALID,
    BINDING_TARGET_ATTRIBUTE_MISSING,
)
from atlas_infra.core.exceptions import AtlasInfraError


class BindingError(AtlasInfraError):
    """Erro base do domínio de binding."""

    error_type = BINDING_EXECUTION_ERROR


class BindingDescriptorError(BindingError):
    """Descriptor de binding malformado (capability, access, from/to ou env)."""

    error_type = BINDING_DESCRIPTOR_INVALID
    default_hint = "Corrija a declaração do binding no manifest."


class UnsupportedAccessModeError(BindingDescriptorError):
    """
    Modos de acesso válidos no vocabulário, mas não aceitos pela estratégia.

    Todos os modos ofensores são listados de uma vez.
    """

    def __init__(
        self,
        modes: Iterable[str],
        *,
        capability: str,
        accepted: Iterable[str],
        service_type: Optional[str] = None,
    ) -> None:
        self.modes = sorted(modes)
        self.accepted = sorted(accepted)
        self.capability = capability
        super().__init__(
            f"access mode(s) {self.modes} not supported for capability '{capability}'",
            details={
                "capability": capability,
                "service_type": service_type,
                "modes": self.modes,
                "accepted": self.accepted,
            },
        )


class MissingTargetAttributeError(BindingError):
    """Atributo obrigatório ausente no componente alvo."""

    error_type = BINDING_TARGET_ATTRIBUTE_MISSING
    default_hint = "Garanta que o componente alvo foi sintetizado antes do binding."

    def __init__(
        self,
        field: str,
        *,
        capability: Optional[str] = None,
        service_type: Optional[str] = None,
    ) -> None:
        self.field = field
        self.capability = capability
        super().__init__(
            f"target component is missing required attribute '{field}'",
            details={"field": field, "capability": capability, "service_type": service_type},
        )


class InvalidTargetAttributeError(BindingError):
    """
    Atributo do alvo presente, mas sem a forma de um handle de recurso.

    Handles (ARNs, nomes, ids) são strings; mapas e outros objetos nunca
    viram recurso de permissão nem entrada de ambiente.
    """

    error_type = BINDING_TARGET_ATTRIBUTE_INVALID
    default_hint = "O atributo do alvo deve ser uma string (ARN, nome ou id)."

    def __init__(
        self,
        field: Optional[str],
        value: object,
        *,
        capability: Optional[str] = None,
        service_type: Optional[str] = None,
    ) -> None:
        self.field = field
        self.capability = capability
        super().__init__(
            f"target attribute '{field}' must be a string, got {type(value).__name__}",
            details={
                "field": field,
                "value": repr(value),
                "capability": capability,
                "service_type": service_type,
            },
        )


class UnsupportedCapabilityError(BindingError):
    """Capability não atendida pela estratégia selecionada."""

    error_type = BINDING_CAPABILITY_UNSUPPORTED

    def __init__(self, capability: str, supported: Iterable[str], *, service_type: Optional[str] = None) -> None:
        self.capability = capability
        self.supported = sorted(supported)
        super().__init__(
            f"unsupported capability '{capability}', supported: {self.supported}",
            details={"capability": capability, "supported": self.supported, "service_type": service_type},
            hint=f"Use uma das capabilities suportadas: {', '.join(self.supported)}",
        )


class UnknownServiceTypeError(BindingError):
    """Nenhuma estratégia registrada para o tipo de serviço."""

    error_type = BINDING_SERVICE_UNKNOWN

    def __init__(self, service_type: Optional[str], known: Iterable[str] = ()) -> None:
        self.service_type = service_type
        self.known = sorted(known)
        super().__init__(
            f"no binder strategy registered for service type '{service_type}'",
            details={"service_type": service_type, "known": self.known},
        )
