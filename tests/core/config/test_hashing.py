# tests/core/config/test_hashing.py
"""
Testes do hashing canônico de configuração resolvida.

Os testes asseguram que:
- configurações equivalentes produzem o mesmo hash
- o hash é exatamente SHA-256 do JSON canônico
- qualquer alteração de valor altera o hash
- entradas que não são dict são rejeitadas

Este módulo existe para garantir determinismo,
rastreabilidade e confiança na identificação de configurações.
"""

import hashlib
import json

import pytest

try:
    from atlas_infra.core.config.hashing import compute_config_hash
except Exception as e:  # noqa: BLE001
    compute_config_hash = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _canonical_json_bytes(obj: dict) -> bytes:
    """
    Converte um dicionário em sua representação JSON canônica em bytes.

    Usada exclusivamente nos testes como referência explícita para validar
    o comportamento de `compute_config_hash`.
    """
    s = json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing hashing module. Implement:\n"
            "- src/atlas_infra/core/config/hashing.py (compute_config_hash)\n"
            "Policy expected: SHA-256 of canonical JSON serialization.\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_hash_is_deterministic():
    """
    Verifica que o hash da configuração é determinístico e independente da ordem das chaves.

    Invariantes:
        - A ordem de inserção das chaves não afeta o hash
        - O valor é sempre uma string hexadecimal de 64 caracteres
    """
    _require_imports()
    h1 = compute_config_hash({"b": 2, "a": 1})
    h2 = compute_config_hash({"a": 1, "b": 2})
    assert h1 == h2
    assert isinstance(h1, str)
    assert len(h1) == 64


def test_hash_matches_sha256_of_canonical_json():
    _require_imports()
    cfg = {
        "autoScaling": {"minCapacity": 1, "maxCapacity": 3, "desiredCapacity": 2},
        "tags": {"owner": "plataforma"},
    }
    expected = hashlib.sha256(_canonical_json_bytes(cfg)).hexdigest()
    assert compute_config_hash(cfg) == expected


def test_hash_changes_on_override():
    """
    Verifica que alterações na configuração resultam em hashes diferentes.

    Usado para garantir:
        - Detecção de divergência entre duas resoluções (ex.: perfil alterado)
    """
    _require_imports()
    base = {"storage": {"encrypted": False}}
    changed = {"storage": {"encrypted": True}}
    assert compute_config_hash(base) != compute_config_hash(changed)


def test_hash_rejects_non_dict():
    _require_imports()
    with pytest.raises(TypeError):
        compute_config_hash(["not", "a", "dict"])
