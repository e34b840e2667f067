"""Atlas Infra — Components.

Catálogo de especificações de configuração por tipo de componente.
"""

from typing import Dict, List

from atlas_infra.core.config.errors import UnknownComponentTypeError
from atlas_infra.core.config.resolver import ComponentConfigSpec

from . import auto_scaling_group, lambda_worker


_CATALOG: Dict[str, ComponentConfigSpec] = {
    auto_scaling_group.SPEC.component_type: auto_scaling_group.SPEC,
    lambda_worker.SPEC.component_type: lambda_worker.SPEC,
}


def list_component_types() -> List[str]:
    return sorted(_CATALOG.keys())


def get_component_spec(component_type: str) -> ComponentConfigSpec:
    """
    Retorna a especificação de configuração de um tipo de componente.

    Raises:
        UnknownComponentTypeError: Se o tipo não estiver no catálogo.
    """
    if component_type not in _CATALOG:
        raise UnknownComponentTypeError(
            f"unknown component type: {component_type}",
            details={"component_type": component_type, "known": list_component_types()},
        )
    return _CATALOG[component_type]
