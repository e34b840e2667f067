# src/atlas_infra/core/binding/strategy.py
"""
Contrato canônico de estratégias de binding.

Uma estratégia resolve um único tipo de serviço alvo (ex.: `sqs`, `eks`)
e transforma um `ComponentBinding` em permissões least-privilege e
entradas de ambiente no componente de origem.

Decisões arquiteturais:
    - Estratégias implementam o protocolo via duck typing, sem herança
    - Lógica compartilhada vive em funções livres (`prepare_binding`,
      `commit_binding` e o módulo `secure`)
    - Pré-condições são verificadas em ordem fixa antes de qualquer emissão:
        1. capability suportada
        2. modos de acesso aceitos
        3. atributos obrigatórios do alvo

Invariantes:
    - Um binding que falha não deixa nenhuma mutação na origem
    - A ordem das emissões é fixada pela estratégia, nunca pelo descriptor
    - Replays com os mesmos inputs produzem o mesmo estado
"""

from __future__ import annotations

from typing import Any, FrozenSet, Mapping, Protocol, Tuple, runtime_checkable

from .context import BindingContext
from .descriptor import ComponentBinding
from .errors import UnsupportedAccessModeError, UnsupportedCapabilityError
from .plan import BindingPlan
from .source import SourceComponent
from .target import TargetShape, require_attributes


@runtime_checkable
class BinderStrategy(Protocol):
    """
    Protocolo mínimo de uma estratégia de binding.

    Atributos opcionais lidos pelo registry (quando presentes):
        - service_type: chave de registro
        - category: categoria para listagens
        - recommendations: dicas estáticas para tooling/documentação
    """

    supported_capabilities: Tuple[str, ...]

    def bind(
        self,
        source: SourceComponent,
        target: Any,
        binding: ComponentBinding,
        context: BindingContext,
    ) -> None: ...


def check_capability(binding: ComponentBinding, supported: Tuple[str, ...], *, service_type: str) -> None:
    if binding.capability not in supported:
        raise UnsupportedCapabilityError(binding.capability, supported, service_type=service_type)


def check_access(binding: ComponentBinding, accepted: FrozenSet[str], *, service_type: str) -> None:
    offenders = binding.access - accepted
    if offenders:
        raise UnsupportedAccessModeError(
            offenders,
            capability=binding.capability,
            accepted=accepted,
            service_type=service_type,
        )


def prepare_binding(
    binding: ComponentBinding,
    target: Any,
    *,
    service_type: str,
    shapes: Mapping[str, TargetShape],
    accepted_access: FrozenSet[str],
) -> TargetShape:
    """
    Executa as pré-condições na ordem canônica e retorna o shape da capability.

    Raises:
        UnsupportedCapabilityError: capability fora de `shapes`.
        UnsupportedAccessModeError: modos fora de `accepted_access`.
        MissingTargetAttributeError: campo obrigatório ausente no alvo.
    """
    check_capability(binding, tuple(shapes), service_type=service_type)
    check_access(binding, accepted_access, service_type=service_type)
    shape = shapes[binding.capability]
    require_attributes(target, shape, capability=binding.capability, service_type=service_type)
    return shape


def commit_binding(
    plan: BindingPlan,
    source: SourceComponent,
    binding: ComponentBinding,
    context: BindingContext,
    *,
    service_type: str,
) -> None:
    """Aplica o plano na origem e registra o evento de sucesso."""
    plan.apply_to(source)
    context.log(
        scope=f"binding.{service_type}",
        level="INFO",
        message=f"bound {binding.from_} -> {binding.to} ({binding.capability})",
        capability=binding.capability,
        access=sorted(binding.access),
        statements=len(plan.statements),
        env_entries=len(plan.environment),
    )
