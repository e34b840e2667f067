# tests/core/schema/test_defaults.py
"""
Testes da extração de defaults declarados em schema (camada de schema).
"""

import pytest

try:
    from atlas_infra.core.schema.defaults import extract_defaults, is_string_map, string_map
except Exception as e:  # noqa: BLE001
    extract_defaults = None
    is_string_map = None
    string_map = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing schema defaults module. Implement:\n"
            "- src/atlas_infra/core/schema/defaults.py (extract_defaults, string_map)\n"
            f"Import error: {_IMPORT_ERR}"
        )


SCHEMA = {
    "type": "object",
    "properties": {
        "runtime": {"type": "string", "default": "nodejs20.x"},
        "handler": {"type": "string"},
        "logging": {
            "type": "object",
            "properties": {
                "logRetentionDays": {"type": "integer", "default": 30},
                "logFormat": {"type": "string"},
            },
        },
        "deadLetterQueue": {
            "type": "object",
            "properties": {"queueArn": {"type": "string"}},
        },
        "vpc": {
            "type": "object",
            "default": {"enabled": False},
            "properties": {
                "enabled": {"type": "boolean", "default": True},
                "subnetIds": {"type": "array", "default": []},
            },
        },
        "environment": string_map(default={}),
    },
}


def test_extract_defaults():
    """
    Verifica a extração recursiva de defaults.

    Invariantes:
        - Campos sem default não aparecem
        - Sub-objetos sem nenhum default não aparecem
        - O `default` de um objeto prevalece sobre os defaults dos filhos
    """
    _require_imports()
    assert extract_defaults(SCHEMA) == {
        "runtime": "nodejs20.x",
        "logging": {"logRetentionDays": 30},
        "vpc": {"enabled": False, "subnetIds": []},
        "environment": {},
    }


def test_extracted_defaults_are_copies():
    _require_imports()
    out = extract_defaults(SCHEMA)
    out["vpc"]["subnetIds"].append("subnet-a")
    assert SCHEMA["properties"]["vpc"]["properties"]["subnetIds"]["default"] == []


def test_string_map_declaration():
    _require_imports()
    node = string_map()
    assert node == {"type": "object", "additionalProperties": {"type": "string"}}
    assert is_string_map(node)
    assert not is_string_map({"type": "object", "properties": {}, "additionalProperties": {"type": "string"}})
