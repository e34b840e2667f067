"""
Extração de defaults declarados em schema e helpers de construção.

Este módulo transforma os `default` declarados em um schema na camada
de defaults de schema (camada 2 da resolução de configuração) e oferece
helpers para declarar estruturas recorrentes, como mapas abertos de strings.

Invariantes:
    - A extração é puramente funcional (o schema nunca é mutado)
    - Sub-objetos sem nenhum default declarado não aparecem no resultado
    - Valores default são sempre copiados (deepcopy)
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Mapping


def string_map(**extra: Any) -> Dict[str, Any]:
    """
    Declara um mapa aberto de strings (ex.: tags livres).

    Qualquer chave string é aceita; todo valor deve ser string. Este é o
    único ponto onde um objeto aceita chaves não declaradas.
    """
    node: Dict[str, Any] = {"type": "object", "additionalProperties": {"type": "string"}}
    node.update(extra)
    return node


def is_string_map(schema: Mapping[str, Any]) -> bool:
    extra = schema.get("additionalProperties")
    return "properties" not in schema and isinstance(extra, Mapping)


def is_object_schema(schema: Mapping[str, Any]) -> bool:
    declared = schema.get("type")
    if isinstance(declared, str):
        return declared == "object"
    return bool(declared) and "object" in declared


def extract_defaults(schema: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Extrai recursivamente os defaults declarados em um schema de objeto.

    Args:
        schema (Mapping[str, Any]): Schema de objeto com `properties`.

    Returns:
        Dict[str, Any]: Configuração parcial composta apenas pelos defaults.
    """
    result: Dict[str, Any] = {}
    for key, child in (schema.get("properties") or {}).items():
        nested: Dict[str, Any] = {}
        if "properties" in child:
            nested = extract_defaults(child)

        if "default" in child:
            value = deepcopy(child["default"])
            if nested and isinstance(value, dict):
                nested.update(value)
                value = nested
            result[key] = value
        elif nested:
            result[key] = nested
    return result
