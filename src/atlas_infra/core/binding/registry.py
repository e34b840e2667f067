# src/atlas_infra/core/binding/registry.py
"""
Registry canônico de estratégias de binding.

Mapa plano de tipo de serviço alvo → estratégia. O registry expõe
validação de capability, listagens por categoria e recomendações
estáticas para tooling.

Decisões arquiteturais:
    - Registro explícito: não existe discovery automático
    - Re-registrar um tipo de serviço substitui a estratégia anterior
      (o último registro vence)
    - Recomendações são apenas descritivas e nunca consultadas por `bind`
    - `default_registry()` constrói o catálogo v1 uma única vez por processo
    - Registrar `None` como estratégia é rejeitado na hora (`TypeError`),
      em vez de falhar depois dentro de `bind`

Invariantes:
    - Consultas com `None` ou `""` retornam ausência / lista vazia
    - Listagens são determinísticas (ordenadas)
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .context import BindingContext
from .descriptor import ComponentBinding
from .errors import UnknownServiceTypeError
from .source import SourceComponent
from .strategy import BinderStrategy


UNCATEGORIZED = "Uncategorized"


class BinderRegistry:
    """Registry determinístico de estratégias de binding."""

    def __init__(self, strategies: Optional[Iterable[BinderStrategy]] = None):
        self._strategies: Dict[str, BinderStrategy] = {}
        if strategies:
            for s in strategies:
                self.register(getattr(s, "service_type", None), s)

    @classmethod
    def v1(cls) -> "BinderRegistry":
        """Factory do catálogo v1 (todas as estratégias de `atlas_infra.binders`)."""
        from atlas_infra.binders import default_strategies_v1

        return cls(strategies=default_strategies_v1())

    def register(self, service_type: Optional[str], strategy: BinderStrategy) -> None:
        if not isinstance(service_type, str) or not service_type.strip():
            raise ValueError("service_type must be a non-empty string")
        if not isinstance(strategy, BinderStrategy):
            raise TypeError("strategy must expose supported_capabilities and bind()")
        self._strategies[service_type] = strategy

    def get(self, service_type: Optional[str]) -> Optional[BinderStrategy]:
        if not service_type:
            return None
        return self._strategies.get(service_type)

    def get_supported_capabilities(self, service_type: Optional[str]) -> List[str]:
        strategy = self.get(service_type)
        if strategy is None:
            return []
        return list(strategy.supported_capabilities)

    def validate_binding(self, service_type: Optional[str], capability: Optional[str]) -> bool:
        return bool(capability) and capability in self.get_supported_capabilities(service_type)

    def get_all_service_types(self) -> List[str]:
        return sorted(self._strategies.keys())

    def get_categories(self) -> List[str]:
        return sorted(self.get_services_by_category().keys())

    def get_services_by_category(self) -> Dict[str, List[str]]:
        grouped: Dict[str, List[str]] = {}
        for service_type in self.get_all_service_types():
            category = getattr(self._strategies[service_type], "category", None) or UNCATEGORIZED
            grouped.setdefault(category, []).append(service_type)
        return grouped

    def get_services_in_category(self, category: Optional[str]) -> List[str]:
        if not category:
            return []
        return list(self.get_services_by_category().get(category, []))

    def get_binding_recommendations(self, service_type: Optional[str]) -> List[str]:
        strategy = self.get(service_type)
        if strategy is None:
            return []
        return list(getattr(strategy, "recommendations", ()) or ())

    def bind(
        self,
        service_type: Optional[str],
        source: SourceComponent,
        target: Any,
        binding: ComponentBinding,
        context: BindingContext,
    ) -> None:
        """
        Localiza a estratégia do tipo de serviço e executa o binding.

        Raises:
            UnknownServiceTypeError: Se não houver estratégia registrada.
        """
        strategy = self.get(service_type)
        if strategy is None:
            raise UnknownServiceTypeError(service_type, known=self.get_all_service_types())
        strategy.bind(source, target, binding, context)


_DEFAULT: Optional[BinderRegistry] = None


def default_registry() -> BinderRegistry:
    """Registry v1 compartilhado pelo processo (construído no primeiro uso)."""
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = BinderRegistry.v1()
    return _DEFAULT
