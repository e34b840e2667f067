# src/atlas_infra/core/config/merge.py
"""
Utilitário canônico de deep-merge de camadas de configuração.

Este módulo implementa a política oficial de deep-merge utilizada pelo
Atlas Infra para sobrepor camadas de defaults (fallback, schema, perfil
nomeado e manifest do usuário).

Política de merge (v1):
    - dict + dict → merge recursivo por chave
    - list        → sobrescrita total (sem concatenação)
    - escalar     → sobrescrita direta
    - chave ausente no override → valor da base preservado
    - chave presente com None   → sobrescreve (None é um valor explícito)
    - conflito de tipos         → o override vence; a validação de schema
                                  reporta a incompatibilidade depois

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - `0`, `False` e `""` são overrides presentes, nunca "ausência"

Limites explícitos:
    - Não carrega arquivos de configuração
    - Não valida tipos (responsabilidade do validador de schema)
"""

from copy import deepcopy
from typing import Any, Dict, Iterable, List, Mapping, Tuple


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre duas camadas de configuração.

    Args:
        base (Mapping[str, Any]): Camada de menor precedência.
        override (Mapping[str, Any]): Camada de maior precedência.

    Returns:
        Dict[str, Any]: Nova configuração resultante do deep-merge.

    Raises:
        TypeError: Se alguma das camadas não for um mapeamento no nível raiz.
    """
    if not isinstance(base, Mapping) or not isinstance(override, Mapping):
        raise TypeError(
            f"Deep-merge requer mapeamentos no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = {k: deepcopy(v) for k, v in base.items()}

    for key, override_value in override.items():
        base_value = result.get(key)

        # dict -> merge recursivo
        if isinstance(base_value, Mapping) and isinstance(override_value, Mapping):
            result[key] = deep_merge(base_value, override_value)
            continue

        # list, escalar, None ou conflito de tipo -> sobrescrita total
        result[key] = deepcopy(override_value)

    return result


def merge_layers(layers: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Mescla camadas em ordem crescente de precedência."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        merged = deep_merge(merged, layer)
    return merged


def flatten_leaves(config: Mapping[str, Any], prefix: str = "") -> List[Tuple[str, Any]]:
    """
    Lista as folhas de uma configuração como pares (path pontuado, valor).

    Dicts vazios e listas são tratados como folhas.
    """
    leaves: List[Tuple[str, Any]] = []
    for key, value in config.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping) and value:
            leaves.extend(flatten_leaves(value, path))
        else:
            leaves.append((path, value))
    return leaves
