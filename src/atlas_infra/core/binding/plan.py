# src/atlas_infra/core/binding/plan.py
"""
Plano de emissões de um binding (tudo-ou-nada).

As estratégias nunca escrevem diretamente no componente de origem:
registram permissões e entradas de ambiente em um `BindingPlan` e só o
aplicam quando todos os passos terminaram sem erro. Uma falha no meio da
resolução deixa a origem intacta.

Política de valores de ambiente:
    - `None` ou vazio  → entrada omitida
    - bool             → "true" / "false"
    - lista ou tupla   → valores unidos por vírgula
    - demais           → `str(valor)`

Recursos de permissão são sempre handles string lidos do alvo; qualquer
outra forma falha com `InvalidTargetAttributeError` antes do commit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import InvalidTargetAttributeError
from .source import PermissionStatement, SourceComponent


def env_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


@dataclass
class BindingPlan:
    """Emissões pendentes, aplicadas na ordem em que foram registradas."""

    statements: List[PermissionStatement] = field(default_factory=list)
    environment: List[Tuple[str, str]] = field(default_factory=list)

    def grant(
        self,
        actions: Sequence[str],
        resources: Union[str, Sequence[str]],
        *,
        conditions: Optional[Mapping[str, Any]] = None,
    ) -> None:
        handles = [resources] if isinstance(resources, str) else resources
        if not isinstance(handles, (list, tuple)) or not all(isinstance(h, str) and h for h in handles):
            raise InvalidTargetAttributeError(None, resources)
        statement = PermissionStatement(actions=tuple(actions), resources=resources, conditions=conditions)
        if statement not in self.statements:
            self.statements.append(statement)

    def env(self, key: str, value: Any) -> None:
        if value is None or (isinstance(value, (str, list, tuple)) and not value):
            return
        self.environment.append((key, env_value(value)))

    @property
    def empty(self) -> bool:
        return not self.statements and not self.environment

    def apply_to(self, source: SourceComponent) -> None:
        for statement in self.statements:
            source.add_to_role_policy(statement)
        for key, value in self.environment:
            source.add_environment(key, value)
