# src/atlas_infra/core/binding/descriptor.py
"""
Descriptor canônico de binding entre dois componentes.

O `ComponentBinding` descreve uma única relação declarada no manifest:
"conecte o componente A ao componente B para a capability C com os
modos de acesso M".

Forma no manifest:

    binds:
      - from: api
        to: orders-queue
        capability: sqs:queue
        access: [read, write]
        options:
          requireSecureAccess: true
        env:
          ORDERS_QUEUE_ALIAS: orders

Decisões arquiteturais:
    - O descriptor é imutável: `access` vira `frozenset`, `options` e `env`
      viram mapeamentos somente-leitura
    - A validação acontece na construção; um descriptor existente é sempre
      estruturalmente válido
    - `options` é livre e interpretado apenas pela estratégia selecionada

Invariantes:
    - `capability` segue o formato `<serviço>:<tipo-de-recurso>`
    - `access` é não vazio e contido no vocabulário fixo
    - `env` mapeia string → string

Limites explícitos:
    - Não conhece estratégias nem registry
    - Não valida se a estratégia aceita os modos (ver `strategy`)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Union

from .errors import BindingDescriptorError


ACCESS_VOCABULARY: FrozenSet[str] = frozenset(
    {
        "read",
        "write",
        "admin",
        "encrypt",
        "decrypt",
        "backup",
        "process",
        "execute",
        "poll",
        "send",
        "invoke",
        "publish",
        "subscribe",
        "shadow",
        "policy",
    }
)

_CAPABILITY_RE = re.compile(r"^[a-z0-9][a-z0-9-]*:[a-z0-9][a-z0-9-]*$")


def _freeze(mapping: Any, what: str) -> Mapping[str, Any]:
    if mapping is None:
        return MappingProxyType({})
    if not isinstance(mapping, Mapping):
        raise BindingDescriptorError(
            f"binding {what} must be a mapping, got {type(mapping).__name__}",
            details={"field": what},
        )
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ComponentBinding:
    """
    Relação declarada entre um componente de origem e um alvo.

    Campos:
        - from_: identificador do componente de origem (`from` no manifest)
        - to: identificador do componente alvo
        - capability: tag namespaced (ex.: `sqs:queue`, `eks:cluster`)
        - access: conjunto de modos de acesso (ordem irrelevante)
        - options: toggles livres lidos pela estratégia
        - env: entradas de ambiente pré-definidas (menor precedência)
    """

    from_: str
    to: str
    capability: str
    access: FrozenSet[str]
    options: Mapping[str, Any] = field(default_factory=dict)
    env: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("from_", "to"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise BindingDescriptorError(
                    f"binding '{name.rstrip('_')}' must be a non-empty string",
                    details={"field": name.rstrip("_")},
                )

        if not isinstance(self.capability, str) or not _CAPABILITY_RE.match(self.capability):
            raise BindingDescriptorError(
                f"invalid capability {self.capability!r}, expected '<service>:<resource-kind>'",
                details={"field": "capability", "capability": self.capability},
            )

        access: Union[str, Iterable[str], None] = self.access
        if isinstance(access, str):
            access = [access]
        elif access is None:
            access = []
        elif not isinstance(access, (list, tuple, set, frozenset)):
            raise BindingDescriptorError(
                f"binding access must be a string or a list of strings, got {type(access).__name__}",
                details={"field": "access", "invalid": [repr(access)]},
            )
        invalid = sorted((m for m in access if not isinstance(m, str)), key=repr)
        if invalid:
            raise BindingDescriptorError(
                f"binding access modes must be strings: {', '.join(repr(m) for m in invalid)}",
                details={"field": "access", "invalid": [repr(m) for m in invalid]},
            )
        modes = frozenset(access)
        if not modes:
            raise BindingDescriptorError(
                "binding access must declare at least one mode",
                details={"field": "access"},
            )
        unknown = sorted(m for m in modes if m not in ACCESS_VOCABULARY)
        if unknown:
            raise BindingDescriptorError(
                f"unknown access mode(s): {unknown}",
                details={"field": "access", "unknown": unknown, "vocabulary": sorted(ACCESS_VOCABULARY)},
            )

        env = _freeze(self.env, "env")
        bad_env = sorted(
            (k for k, v in env.items() if not isinstance(k, str) or not isinstance(v, str)),
            key=repr,
        )
        if bad_env:
            raise BindingDescriptorError(
                f"binding env entries must be string to string: {bad_env}",
                details={"field": "env", "keys": bad_env},
            )

        object.__setattr__(self, "access", modes)
        object.__setattr__(self, "options", _freeze(self.options, "options"))
        object.__setattr__(self, "env", env)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ComponentBinding":
        """Constrói a partir da forma do manifest (`from`, `to`, `capability`, ...)."""
        if not isinstance(data, Mapping):
            raise BindingDescriptorError(
                f"binding must be a mapping, got {type(data).__name__}",
                details={"field": "<root>"},
            )
        return cls(
            from_=data.get("from", data.get("from_")),
            to=data.get("to"),
            capability=data.get("capability"),
            access=data.get("access") or (),
            options=data.get("options") or {},
            env=data.get("env") or {},
        )

    @property
    def service(self) -> str:
        return self.capability.split(":", 1)[0]

    def has_access(self, *modes: str) -> bool:
        """True se qualquer um dos modos informados foi declarado."""
        return any(m in self.access for m in modes)

    def option(self, key: str, default: Any = None) -> Any:
        return self.options.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.from_,
            "to": self.to,
            "capability": self.capability,
            "access": sorted(self.access),
            "options": dict(self.options),
            "env": dict(self.env),
        }
