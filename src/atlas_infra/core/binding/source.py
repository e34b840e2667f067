# src/atlas_infra/core/binding/source.py
"""
Superfície de mutação do componente de origem.

Uma estratégia de binding só pode fazer duas coisas com o componente de
origem: anexar uma permissão à sua role e definir uma variável de ambiente.

Componentes principais:
    - PermissionStatement → permissão imutável (effect, actions, resources)
    - SourceComponent     → protocolo mínimo esperado de qualquer componente
    - ComponentHandle     → implementação de referência em memória

Invariantes:
    - Ambas as operações são monotônicas (apenas adicionam)
    - Reanexar uma permissão idêntica não tem efeito, portanto replays de
      um mesmo binding produzem o mesmo estado
    - Para uma mesma chave de ambiente, a última escrita vence
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Set, Tuple, Union, runtime_checkable


def _as_tuple(value: Union[str, Sequence[str]], what: str) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = (value,)
    elif not isinstance(value, (list, tuple)):
        # um Mapping iterado viraria a lista das suas chaves
        raise ValueError(f"permission statement {what} must be a string or a list of strings")
    items = tuple(value)
    if not items or any(not isinstance(v, str) or not v for v in items):
        raise ValueError(f"permission statement {what} must be non-empty strings")
    return items


@dataclass(frozen=True)
class PermissionStatement:
    """Permissão least-privilege anexada à role do componente de origem."""

    actions: Tuple[str, ...]
    resources: Tuple[str, ...]
    effect: str = "Allow"
    conditions: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "actions", _as_tuple(self.actions, "actions"))
        object.__setattr__(self, "resources", _as_tuple(self.resources, "resources"))
        if self.effect not in ("Allow", "Deny"):
            raise ValueError(f"invalid effect: {self.effect}")

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "Effect": self.effect,
            "Action": list(self.actions),
            "Resource": list(self.resources),
        }
        if self.conditions:
            out["Condition"] = dict(self.conditions)
        return out


@runtime_checkable
class SourceComponent(Protocol):
    """Contrato mínimo do componente de origem (duck typing)."""

    def add_to_role_policy(self, statement: PermissionStatement) -> None: ...

    def add_environment(self, key: str, value: str) -> None: ...


@dataclass
class ComponentHandle:
    """
    Componente de origem em memória.

    Acumula permissões (ordenadas, sem duplicatas) e o contrato de ambiente
    que o subsistema de provisionamento materializa depois.
    """

    name: str
    statements: List[PermissionStatement] = field(default_factory=list)
    environment: Dict[str, str] = field(default_factory=dict)

    def add_to_role_policy(self, statement: PermissionStatement) -> None:
        if statement not in self.statements:
            self.statements.append(statement)

    def add_environment(self, key: str, value: str) -> None:
        self.environment[key] = value

    @property
    def untouched(self) -> bool:
        return not self.statements and not self.environment

    def actions(self) -> Set[str]:
        return {a for s in self.statements for a in s.actions}

    def resources(self) -> Set[str]:
        return {r for s in self.statements for r in s.resources}

    def policy_document(self) -> Dict[str, Any]:
        return {
            "Version": "2012-10-17",
            "Statement": [s.to_dict() for s in self.statements],
        }
