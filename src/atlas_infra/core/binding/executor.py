# src/atlas_infra/core/binding/executor.py
"""
Execução em lote dos bindings de uma passada de síntese.

Recebe a sequência de bindings declarados no manifest e os executa em
ordem via registry, convertendo cada resultado em um `BindingOutcome`.

Política de execução (v1):
    - `options.enabled is False` → SKIPPED (nenhuma estratégia é chamada)
    - sucesso                   → SUCCESS
    - exceção                   → FAILED, com `AtlasErrorPayload` serializável
    - `fail_fast=True`          → a primeira falha é registrada e relançada
    - `fail_fast=False`         → as requisições restantes continuam

Decisões arquiteturais:
    - Exceções tipadas do Atlas Infra viram o payload da própria exceção
    - Exceções inesperadas viram BINDING_EXECUTION_ERROR, sem stack trace
    - Não existe retry: falhas são síncronas e imediatas

Limites explícitos:
    - Não paraleliza; bindings de um mesmo componente são serializados
    - Não persiste resultados
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from atlas_infra.core.errors import AtlasErrorPayload, binding_execution_error
from atlas_infra.core.exceptions import AtlasInfraError

from .context import BindingContext
from .descriptor import ComponentBinding
from .registry import BinderRegistry
from .source import SourceComponent


_SCOPE = "binding.executor"


class BindingStatus(str, Enum):
    """Estados finais de um binding executado em lote."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class BindingRequest:
    """Um binding a executar: tipo de serviço alvo, origem, bag do alvo e descriptor."""

    service_type: str
    source: SourceComponent
    target: Any
    binding: ComponentBinding


@dataclass(frozen=True)
class BindingOutcome:
    binding: ComponentBinding
    status: BindingStatus
    error: Optional[AtlasErrorPayload] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "binding": self.binding.to_dict(),
            "status": self.status.value,
            "error": self.error.to_dict() if self.error else None,
        }


@dataclass(frozen=True)
class BindingReport:
    """Resultado agregado de uma passada de bindings."""

    outcomes: List[BindingOutcome] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(o.status != BindingStatus.FAILED for o in self.outcomes)

    def by_status(self, status: BindingStatus) -> List[BindingOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def failed(self) -> List[BindingOutcome]:
        return self.by_status(BindingStatus.FAILED)


def _exception_to_error(exc: Exception, binding: ComponentBinding) -> AtlasErrorPayload:
    if isinstance(exc, AtlasInfraError):
        return exc.to_payload()
    return binding_execution_error(
        binding=binding.to_dict(),
        exc_type=exc.__class__.__name__,
        exc_message=str(exc),
    )


def run_bindings(
    registry: BinderRegistry,
    requests: Iterable[BindingRequest],
    context: BindingContext,
    *,
    fail_fast: bool = True,
) -> BindingReport:
    """
    Executa os bindings em ordem e retorna o relatório.

    Raises:
        Exception: A primeira falha, quando `fail_fast` está ativo
            (o relatório parcial fica em `context.meta["binding_report"]`).
    """
    report = BindingReport()

    for request in requests:
        binding = request.binding

        if binding.options.get("enabled") is False:
            report.outcomes.append(BindingOutcome(binding=binding, status=BindingStatus.SKIPPED))
            context.log(scope=_SCOPE, level="INFO", message="skipped by options", to=binding.to)
            continue

        try:
            registry.bind(request.service_type, request.source, request.target, binding, context)
        except Exception as e:
            error = _exception_to_error(e, binding)
            report.outcomes.append(BindingOutcome(binding=binding, status=BindingStatus.FAILED, error=error))
            context.log(
                scope=_SCOPE,
                level="ERROR",
                message=error.message,
                to=binding.to,
                error_type=error.type,
            )
            if fail_fast:
                context.meta["binding_report"] = report
                raise
            continue

        report.outcomes.append(BindingOutcome(binding=binding, status=BindingStatus.SUCCESS))

    return report
