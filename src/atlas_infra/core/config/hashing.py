# src/atlas_infra/core/config/hashing.py
"""
Hashing canônico de configuração resolvida.

O hash representa a identidade estrutural da configuração de um componente
e permite detectar divergência entre duas resoluções (ex.: um perfil
alterado entre execuções do pipeline de provisionamento).

Política de hashing (v1):
    - Serialização JSON canônica (sort_keys, separadores compactos)
    - Codificação UTF-8
    - SHA-256

Invariantes:
    - Configurações estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico de uma configuração resolvida.

    Args:
        config (Dict[str, Any]): Configuração resolvida do componente.

    Returns:
        str: Hash SHA-256 hexadecimal da configuração.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
