# tests/core/config/test_loader.py
"""
Testes do carregador de camadas de configuração (load_layer_file, load_profiles).

Este módulo valida o comportamento do loader responsável por:
- carregar camadas de configuração em YAML ou JSON
- carregar documentos de perfis nomeados
- rejeitar formatos e estados inválidos

Os testes asseguram que:
- arquivos ausentes são rejeitados com exceção tipada
- formatos não suportados são rejeitados
- o conteúdo raiz precisa ser um dicionário
- YAML vazio vira `{}`
- perfis vazios viram configurações parciais vazias

Decisões arquiteturais:
    - O formato é inferido pela extensão, nunca pelo conteúdo
    - Erros estruturais são tratados como falhas fatais

Limites explícitos:
    - Não valida resolução de camadas
    - Não valida semântica de componente
"""

import json
from pathlib import Path

import pytest

try:
    from atlas_infra.core.config.loader import load_layer_file, load_profiles
    from atlas_infra.core.config.errors import (
        ConfigError,
        InvalidConfigRootTypeError,
        LayerFileNotFoundError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_layer_file = None
    load_profiles = None
    ConfigError = None
    InvalidConfigRootTypeError = None
    LayerFileNotFoundError = None
    UnsupportedConfigFormatError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o loader de camadas e suas exceções tipadas estejam disponíveis.

    Decisões arquiteturais:
        - Falha antecipada e explícita quando contratos do loader estão ausentes
        - Não tenta fallback nem implementação alternativa
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader/errors modules. Implement:\n"
            "- src/atlas_infra/core/config/loader.py (load_layer_file, load_profiles)\n"
            "- src/atlas_infra/core/config/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_missing_file_raises(tmp_path: Path):
    """
    Verifica que a ausência do arquivo de camada é tratada como erro fatal.

    Invariantes:
        - A exceção utilizada é específica (`LayerFileNotFoundError`)
        - A exceção também é um `ConfigError`
        - O path ausente aparece em `details`
    """
    _require_imports()
    missing = tmp_path / "profiles.yaml"
    with pytest.raises(LayerFileNotFoundError) as exc_info:
        load_layer_file(missing)
    assert isinstance(exc_info.value, ConfigError)
    assert exc_info.value.details["path"] == str(missing)


def test_load_yaml_layer(tmp_path: Path):
    _require_imports()
    layer = tmp_path / "user.yaml"
    layer.write_text("instanceType: m5.large\nstorage:\n  encrypted: true\n", encoding="utf-8")
    assert load_layer_file(layer) == {"instanceType": "m5.large", "storage": {"encrypted": True}}


def test_load_json_layer(tmp_path: Path):
    _require_imports()
    layer = tmp_path / "user.json"
    layer.write_text(json.dumps({"autoScaling": {"maxCapacity": 6}}), encoding="utf-8")
    assert load_layer_file(str(layer)) == {"autoScaling": {"maxCapacity": 6}}


def test_empty_yaml_is_empty_dict(tmp_path: Path):
    _require_imports()
    layer = tmp_path / "empty.yml"
    layer.write_text("", encoding="utf-8")
    assert load_layer_file(layer) == {}


def test_invalid_root_type_raises(tmp_path: Path):
    """
    Verifica que o conteúdo raiz de uma camada precisa ser um dicionário.

    Listas ou valores escalares no root são inválidos e devem levantar
    `InvalidConfigRootTypeError`, sem retorno parcial.
    """
    _require_imports()
    layer = tmp_path / "user.yaml"
    layer.write_text("- just\n- a\n- list\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_layer_file(layer)


def test_unsupported_extension_raises(tmp_path: Path):
    _require_imports()
    layer = tmp_path / "user.toml"
    layer.write_text("instanceType = 'm5.large'\n", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_layer_file(layer)


def test_load_profiles_document(tmp_path: Path, profiles_yaml):
    """
    Verifica o carregamento de um documento de perfis nomeados.

    Um perfil declarado sem conteúdo (`baseline:`) vira `{}`; os demais
    são retornados como configurações parciais.
    """
    _require_imports()
    doc = tmp_path / "profiles.yaml"
    doc.write_text(profiles_yaml, encoding="utf-8")

    profiles = load_profiles(doc)

    assert set(profiles) == {"baseline", "fedramp-moderate", "fedramp-high"}
    assert profiles["baseline"] == {}
    assert profiles["fedramp-high"]["instanceType"] == "m5.large"
    assert profiles["fedramp-high"]["storage"] == {"encrypted": True, "rootVolumeSize": 100}


def test_load_profiles_rejects_non_dict_profile(tmp_path: Path):
    _require_imports()
    doc = tmp_path / "profiles.yaml"
    doc.write_text("baseline: {}\nfedramp-high: [m5.large]\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError) as exc_info:
        load_profiles(doc)
    assert exc_info.value.details["profile"] == "fedramp-high"
