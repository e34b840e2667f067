# src/atlas_infra/core/binding/target.py
"""
Leitura estruturada do bag de atributos do componente alvo.

O alvo é um bag fracamente tipado (mapping ou objeto com atributos),
produzido pelo subsistema que sintetizou aquele componente. Cada
estratégia declara, por capability, um `TargetShape` com os campos
obrigatórios, e a checagem acontece antes de qualquer emissão.

Invariantes:
    - O alvo nunca é mutado
    - `None` e string vazia contam como ausência
    - O primeiro campo de `required` é o handle primário do recurso
    - Campos obrigatórios são handles string; mapas nunca são aceitos
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from .errors import InvalidTargetAttributeError, MissingTargetAttributeError


@dataclass(frozen=True)
class TargetShape:
    """Campos obrigatórios do alvo para uma capability."""

    required: Tuple[str, ...]

    @property
    def primary(self) -> str:
        return self.required[0]


def read_attr(target: Any, name: str, default: Any = None) -> Any:
    """
    Lê um atributo do alvo por nome (aceita paths pontuados, ex.: `vpc.vpc_id`).

    Mappings são lidos por chave; outros objetos por atributo.
    """
    current = target
    for part in name.split("."):
        if current is None:
            return default
        if isinstance(current, Mapping):
            current = current.get(part)
        else:
            current = getattr(current, part, None)
    return default if current is None else current


def has_attr(target: Any, name: str) -> bool:
    value = read_attr(target, name)
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict)) and not value:
        return False
    return True


def first_attr(target: Any, *names: str) -> Tuple[Optional[str], Any]:
    """Retorna (nome, valor) do primeiro atributo presente, ou (None, None)."""
    for name in names:
        if has_attr(target, name):
            return name, read_attr(target, name)
    return None, None


def require_attributes(
    target: Any,
    shape: TargetShape,
    *,
    capability: Optional[str] = None,
    service_type: Optional[str] = None,
) -> None:
    """
    Garante que o alvo existe e carrega todos os campos do shape.

    Raises:
        MissingTargetAttributeError: No primeiro campo obrigatório ausente.
        InvalidTargetAttributeError: Se um campo obrigatório não for string.
    """
    for name in shape.required:
        if target is None or not has_attr(target, name):
            raise MissingTargetAttributeError(name, capability=capability, service_type=service_type)
        value = read_attr(target, name)
        if not isinstance(value, str):
            raise InvalidTargetAttributeError(name, value, capability=capability, service_type=service_type)
