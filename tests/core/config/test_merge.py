# tests/core/config/test_merge.py
"""
Testes da política de deep-merge de camadas de configuração.

Este módulo valida o comportamento de `deep_merge` e `merge_layers`,
responsáveis por sobrepor as camadas fallback → schema → perfil → usuário
na resolução de configuração de componentes.

Os testes asseguram que:
- valores escalares são sobrescritos corretamente
- dicionários são mesclados de forma recursiva
- listas são sobrescritas integralmente
- None explícito sobrescreve (é um valor, não ausência)
- conflitos de tipo não abortam o merge: o override vence
- objetos de entrada não são mutados durante o merge

Decisões arquiteturais:
    - O merge é determinístico e puramente funcional
    - Não há heurísticas implícitas para listas ou tipos mistos
    - Incompatibilidades de tipo são reportadas depois, pela validação

Limites explícitos:
    - Não valida carregamento de arquivos YAML
    - Não valida hashing de configuração
"""

import pytest

try:
    from atlas_infra.core.config.merge import deep_merge, flatten_leaves, merge_layers
except Exception as e:  # noqa: BLE001
    deep_merge = None
    flatten_leaves = None
    merge_layers = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que os módulos de merge de config estejam disponíveis para os testes.

    Falha explicitamente com uma mensagem orientada quando `deep_merge`
    e/ou `merge_layers` não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing config merge modules. Implement:\n"
            "- src/atlas_infra/core/config/merge.py (deep_merge, merge_layers)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_merge_simple_override():
    """
    Verifica o comportamento básico de override de valores escalares no deep-merge.

    Invariantes:
        - O valor sobrescrito reflete exatamente o override
        - Chaves não sobrescritas permanecem inalteradas
        - `base` e `override` não sofrem mutação
    """
    _require_imports()
    base = {"a": 1, "b": 2}
    override = {"b": 99}
    out = deep_merge(base, override)
    assert out == {"a": 1, "b": 99}
    assert base == {"a": 1, "b": 2}
    assert override == {"b": 99}


def test_merge_nested_dict():
    """
    Verifica que dicionários aninhados são mesclados recursivamente no deep-merge.

    Este teste valida que, quando ambos os valores associados a uma chave
    são dicionários, apenas as chaves presentes no override são atualizadas
    e as irmãs são preservadas da base.

    Usado para garantir:
        - Que `{storage: {encrypted: true}}` não apaga `storage.rootVolumeSize`
        - Estabilidade da resolução de config em camadas
    """
    _require_imports()
    base = {"storage": {"rootVolumeSize": 20, "encrypted": False}}
    override = {"storage": {"encrypted": True}}
    out = deep_merge(base, override)
    assert out == {"storage": {"rootVolumeSize": 20, "encrypted": True}}


def test_merge_list_override_total():
    """
    Verifica que listas são sobrescritas integralmente durante o deep-merge.

    Decisões arquiteturais:
        - Listas não são mescladas elemento a elemento
        - O override de lista é sempre total
    """
    _require_imports()
    base = {"vpc": {"subnetIds": ["subnet-a", "subnet-b"]}}
    override = {"vpc": {"subnetIds": ["subnet-c"]}}
    out = deep_merge(base, override)
    assert out == {"vpc": {"subnetIds": ["subnet-c"]}}


def test_merge_explicit_none_overrides():
    _require_imports()
    out = deep_merge({"reservedConcurrency": 10}, {"reservedConcurrency": None})
    assert out == {"reservedConcurrency": None}


def test_merge_falsy_values_are_present_overrides():
    """`0`, `False` e `""` são overrides presentes, nunca ausência."""
    _require_imports()
    base = {"minCapacity": 1, "encrypted": True, "keyName": "ops"}
    out = deep_merge(base, {"minCapacity": 0, "encrypted": False, "keyName": ""})
    assert out == {"minCapacity": 0, "encrypted": False, "keyName": ""}


def test_merge_type_conflict_override_wins():
    """
    Verifica que conflitos de tipo não abortam o merge.

    Um dicionário sobrescrito por um escalar é substituído por inteiro; a
    validação de schema é quem reporta a incompatibilidade depois.
    """
    _require_imports()
    base = {"storage": {"encrypted": True}}
    override = {"storage": "encrypted"}
    assert deep_merge(base, override) == {"storage": "encrypted"}


def test_merge_does_not_alias_nested_values():
    _require_imports()
    base = {"tags": {"team": "core"}}
    out = deep_merge(base, {})
    out["tags"]["team"] = "other"
    assert base == {"tags": {"team": "core"}}


def test_merge_rejects_non_mapping_root():
    _require_imports()
    with pytest.raises(TypeError):
        deep_merge({"a": 1}, ["a"])


def test_merge_layers_applies_in_increasing_precedence():
    """
    Verifica a ordem canônica das quatro camadas.

    Cada camada sobrescreve apenas o que declara; a última vence.
    """
    _require_imports()
    fallback = {"instanceType": "t3.micro", "storage": {"rootVolumeSize": 20, "encrypted": False}}
    schema = {"storage": {"rootVolumeType": "gp3"}}
    profile = {"storage": {"encrypted": True}}
    user = {"instanceType": "m5.large"}

    out = merge_layers([fallback, schema, profile, user])

    assert out == {
        "instanceType": "m5.large",
        "storage": {"rootVolumeSize": 20, "encrypted": True, "rootVolumeType": "gp3"},
    }


def test_flatten_leaves_uses_dotted_paths():
    _require_imports()
    leaves = dict(flatten_leaves({"a": {"b": 1, "c": {}}, "d": [1, 2]}))
    assert leaves == {"a.b": 1, "a.c": {}, "d": [1, 2]}
