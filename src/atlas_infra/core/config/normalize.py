# src/atlas_infra/core/config/normalize.py
"""
Normalização de sub-estruturas opcionais após o merge de camadas.

Depois do deep-merge, um sub-objeto declarado no schema pode ter ficado
parcialmente preenchido (ex.: um elemento de lista de objetos informado
pelo usuário apenas com `port`). A normalização percorre o schema e
preenche cada folha ainda ausente a partir do default documentado
daquele próprio objeto.

Política de normalização (v1):
    - chave ausente com `default` declarado      → default copiado
    - sub-objeto declarado com defaults internos → materializado e preenchido
    - lista ausente                              → `[]`
    - mapa aberto de strings ausente             → `{}`
    - elementos de lista de objetos              → preenchidos pelo schema de `items`
    - chave presente (inclusive None)            → nunca sobrescrita

Invariantes:
    - A normalização é idempotente
    - O input nunca é mutado
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Mapping

from atlas_infra.core.schema.defaults import is_object_schema, is_string_map


_ABSENT = object()


def _is_array_schema(schema: Mapping[str, Any]) -> bool:
    declared = schema.get("type")
    if isinstance(declared, str):
        return declared == "array"
    return bool(declared) and "array" in declared


def _materialize(schema: Mapping[str, Any]) -> Any:
    if "default" in schema:
        value = deepcopy(schema["default"])
        if isinstance(value, dict) and "properties" in schema:
            _fill(value, schema)
        return value

    if is_object_schema(schema) and "properties" in schema:
        nested: Dict[str, Any] = {}
        _fill(nested, schema)
        return nested if nested else _ABSENT

    if is_object_schema(schema) and is_string_map(schema):
        return {}

    if _is_array_schema(schema):
        return []

    return _ABSENT


def _fill(target: Dict[str, Any], schema: Mapping[str, Any]) -> None:
    for key, child in (schema.get("properties") or {}).items():
        if key not in target:
            value = _materialize(child)
            if value is not _ABSENT:
                target[key] = value
            continue

        current = target[key]
        if isinstance(current, dict) and "properties" in child:
            _fill(current, child)
        elif isinstance(current, list):
            items = child.get("items")
            if isinstance(items, Mapping) and "properties" in items:
                for element in current:
                    if isinstance(element, dict):
                        _fill(element, items)


def normalize(config: Mapping[str, Any], schema: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Retorna uma cópia da configuração com todas as sub-estruturas declaradas preenchidas.

    Args:
        config (Mapping[str, Any]): Configuração já mesclada.
        schema (Mapping[str, Any]): Schema do componente.

    Returns:
        Dict[str, Any]: Nova configuração normalizada.
    """
    result = deepcopy(dict(config))
    _fill(result, schema)
    return result
