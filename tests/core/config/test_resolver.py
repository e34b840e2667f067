# tests/core/config/test_resolver.py
"""
Testes da engine de resolução de configuração em camadas.

Este módulo valida o comportamento de `ConfigResolver` / `resolve_config`
sobre uma especificação reduzida (limites de capacidade, tipo de
instância, storage e tags).

Os testes asseguram que:
- o fallback embutido é aplicado quando nada mais é declarado
- a camada de usuário sempre vence as demais (lei de precedência)
- overrides parciais não apagam campos irmãos
- chaves não declaradas falham a resolução, nomeando a chave
- todas as violações são reportadas de uma vez
- a resolução é idempotente
- perfis desconhecidos caem no `baseline` com um evento WARNING

Decisões arquiteturais:
    - O erro de resolução é `ConfigurationError`, que também é um
      `SchemaValidationError`
    - Proveniência é diagnóstica e não participa da igualdade

Limites explícitos:
    - Não valida o catálogo real de componentes (ver tests/components)
"""

from copy import deepcopy

import pytest

try:
    from atlas_infra.core.config.errors import ConfigError, ConfigurationError
    from atlas_infra.core.config.resolver import (
        BASELINE_PROFILE,
        ConfigResolver,
        resolve_config,
    )
    from atlas_infra.core.events import EventLog
    from atlas_infra.core.schema.errors import SchemaValidationError
except Exception as e:  # noqa: BLE001
    ConfigError = None
    ConfigurationError = None
    BASELINE_PROFILE = None
    ConfigResolver = None
    resolve_config = None
    EventLog = None
    SchemaValidationError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que a engine de resolução e suas exceções estejam disponíveis.

    Falha explicitamente quando `resolver`, `errors` ou `events` não podem
    ser importados, evitando falhas indiretas nos testes abaixo.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing config resolver modules. Implement:\n"
            "- src/atlas_infra/core/config/resolver.py (ConfigResolver, resolve_config)\n"
            "- src/atlas_infra/core/config/errors.py (ConfigurationError)\n"
            "- src/atlas_infra/core/events.py (EventLog)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_capacity_defaults_from_fallback(capacity_spec):
    """
    Verifica que uma configuração vazia no perfil baseline resolve os limites do fallback.

    Invariantes:
        - `autoScaling` é exatamente `{min: 1, max: 3, desired: 2}`
        - O perfil efetivo é `baseline`
    """
    _require_imports()
    resolved = resolve_config(capacity_spec, {}, "baseline")

    assert resolved.profile == BASELINE_PROFILE
    assert resolved.config["autoScaling"] == {"minCapacity": 1, "maxCapacity": 3, "desiredCapacity": 2}
    assert resolved.get("autoScaling.maxCapacity") == 3
    assert resolved.get("autoScaling.missing", "n/a") == "n/a"


def test_full_resolution_shape(capacity_spec):
    _require_imports()
    resolved = resolve_config(capacity_spec)
    assert resolved.config == {
        "instanceType": "t3.micro",
        "autoScaling": {"minCapacity": 1, "maxCapacity": 3, "desiredCapacity": 2},
        "storage": {"rootVolumeSize": 20, "encrypted": False, "rootVolumeType": "gp3"},
        "tags": {},
    }


@pytest.mark.parametrize("profile", [None, "baseline", "fedramp-high", "unknown-tier"])
def test_user_layer_always_wins(capacity_spec, profile):
    """
    Verifica a lei de precedência: o valor do usuário vence qualquer camada inferior.

    O fallback declara `t3.micro` e o perfil `fedramp-high` declara
    `m5.large`; o usuário declara `c5.xlarge` e deve sempre prevalecer.
    """
    _require_imports()
    resolved = resolve_config(capacity_spec, {"instanceType": "c5.xlarge"}, profile)
    assert resolved.config["instanceType"] == "c5.xlarge"


def test_user_override_over_fallback(capacity_spec):
    _require_imports()
    resolved = resolve_config(capacity_spec, {"instanceType": "m5.large"})
    assert resolved.config["instanceType"] == "m5.large"


def test_profile_over_fallback(capacity_spec):
    _require_imports()
    resolved = resolve_config(capacity_spec, {}, "fedramp-high")
    assert resolved.profile == "fedramp-high"
    assert resolved.config["instanceType"] == "m5.large"
    assert resolved.config["storage"]["encrypted"] is True


def test_partial_override_keeps_siblings(capacity_spec):
    """
    Verifica que `{storage: {encrypted: true}}` não apaga os demais campos de `storage`.

    Usado para garantir:
        - Que nenhum campo irmão fica indefinido depois de um override parcial
    """
    _require_imports()
    resolved = resolve_config(capacity_spec, {"storage": {"encrypted": True}})
    assert resolved.config["storage"] == {"rootVolumeSize": 20, "rootVolumeType": "gp3", "encrypted": True}


def test_unknown_key_fails_naming_the_key(capacity_spec):
    """
    Verifica que uma chave não declarada falha a resolução.

    Invariantes:
        - A exceção é `ConfigurationError`, capturável como
          `SchemaValidationError` e como `ConfigError`
        - O path `storage.bogus` aparece nas issues com código `unknown_key`
    """
    _require_imports()
    with pytest.raises(SchemaValidationError) as exc_info:
        resolve_config(capacity_spec, {"storage": {"bogus": 1}})

    err = exc_info.value
    assert isinstance(err, ConfigurationError)
    assert isinstance(err, ConfigError)
    assert "storage.bogus" in err.paths
    assert [i.code for i in err.issues if i.path == "storage.bogus"] == ["unknown_key"]
    assert "storage.bogus" in str(err)


def test_all_violations_are_reported_at_once(capacity_spec):
    _require_imports()
    partial = {
        "storage": {"bogus": 1, "rootVolumeType": "io9"},
        "autoScaling": {"minCapacity": -1},
        "tags": {"team": 7},
    }
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_config(capacity_spec, partial)

    assert sorted(exc_info.value.paths) == [
        "autoScaling.minCapacity",
        "storage.bogus",
        "storage.rootVolumeType",
        "tags.team",
    ]


def test_failure_payload_is_configuration_invalid(capacity_spec):
    _require_imports()
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_config(capacity_spec, {"storage": {"bogus": 1}}, "fedramp-high")

    payload = exc_info.value.to_payload().to_dict()
    assert payload["type"] == "CONFIGURATION_INVALID"
    assert payload["details"]["issues"][0]["path"] == "storage.bogus"
    assert payload["hint"]
    assert exc_info.value.profile == "fedramp-high"
    assert exc_info.value.component_type == "scaling-group"


def test_type_conflict_is_reported_by_validation(capacity_spec):
    _require_imports()
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_config(capacity_spec, {"storage": "encrypted"})
    assert [(i.path, i.code) for i in exc_info.value.issues] == [("storage", "type")]


@pytest.mark.parametrize(
    "tags, bad_path",
    [
        ({2024: "a"}, "tags.2024"),
        ({1: "a", "team": "b"}, "tags.1"),
    ],
)
def test_non_string_map_keys_fail_resolution(capacity_spec, tags, bad_path):
    """
    Verifica que chaves não-string em mapas abertos falham a resolução.

    YAML produz chaves inteiras com facilidade (`2024: a`). O erro deve ser
    `ConfigurationError` nomeando a chave, nunca uma falha de serialização
    no cálculo do hash.
    """
    _require_imports()
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_config(capacity_spec, {"tags": tags}, "baseline")

    assert [(i.path, i.code) for i in exc_info.value.issues] == [(bad_path, "type")]


def test_explicit_none_overrides_and_is_validated(capacity_spec):
    _require_imports()
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_config(capacity_spec, {"instanceType": None})
    assert exc_info.value.paths == ["instanceType"]


def test_non_mapping_user_partial_is_rejected(capacity_spec):
    _require_imports()
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_config(capacity_spec, ["instanceType", "m5.large"])
    assert [(i.path, i.code) for i in exc_info.value.issues] == [("", "type")]


@pytest.mark.parametrize(
    "partial,profile",
    [
        ({}, None),
        ({"instanceType": "m5.large"}, "baseline"),
        ({"storage": {"encrypted": True}, "tags": {"team": "core"}}, "fedramp-high"),
        ({"autoScaling": {"desiredCapacity": 3}}, "unknown-tier"),
    ],
)
def test_resolution_is_idempotent(capacity_spec, partial, profile):
    """
    Verifica que resolver `as_partial()` de um resultado reproduz o mesmo resultado.

    Usado para garantir:
        - Que a configuração resolvida pode ser persistida e reaplicada
          como manifest sem deriva
    """
    _require_imports()
    first = resolve_config(capacity_spec, partial, profile)
    second = resolve_config(capacity_spec, first.as_partial(), profile)
    assert second == first
    assert second.config_hash == first.config_hash


def test_inputs_are_not_mutated(capacity_spec):
    _require_imports()
    partial = {"storage": {"encrypted": True}}
    fallbacks = deepcopy(dict(capacity_spec.fallbacks))
    resolved = resolve_config(capacity_spec, partial, "fedramp-high")
    resolved.config["storage"]["encrypted"] = False

    assert partial == {"storage": {"encrypted": True}}
    assert dict(capacity_spec.fallbacks) == fallbacks
    assert resolve_config(capacity_spec, partial, "fedramp-high").config["storage"]["encrypted"] is True


def test_unknown_profile_falls_back_to_baseline_with_warning(capacity_spec):
    """
    Verifica que um perfil desconhecido seleciona o baseline e registra um evento.

    Invariantes:
        - A resolução não falha
        - Um evento WARNING é registrado no scope `config.resolve`
        - O evento carrega o perfil solicitado
    """
    _require_imports()
    events = EventLog()
    resolved = ConfigResolver(capacity_spec, events=events).resolve({}, "gov-cloud-x")

    assert resolved.profile == "baseline"
    warnings = [e for e in events.events_for("config.resolve") if e["level"] == "WARNING"]
    assert len(warnings) == 1
    assert warnings[0]["requested_profile"] == "gov-cloud-x"


def test_resolution_events(capacity_spec):
    _require_imports()
    events = EventLog()
    resolver = ConfigResolver(capacity_spec, events=events)

    resolved = resolver.resolve({}, "baseline")
    info = events.events_for("config.resolve")[-1]
    assert info["level"] == "INFO"
    assert info["config_hash"] == resolved.config_hash

    with pytest.raises(ConfigurationError):
        resolver.resolve({"storage": {"bogus": 1}})
    error = events.events_for("config.resolve")[-1]
    assert error["level"] == "ERROR"
    assert error["issues"][0]["path"] == "storage.bogus"


def test_provenance_names_the_winning_layer(capacity_spec):
    _require_imports()
    resolved = resolve_config(capacity_spec, {"autoScaling": {"maxCapacity": 6}}, "fedramp-high")

    assert resolved.provenance["autoScaling.maxCapacity"] == "user"
    assert resolved.provenance["autoScaling.minCapacity"] == "fallback"
    assert resolved.provenance["storage.rootVolumeType"] == "schema"
    assert resolved.provenance["storage.encrypted"] == "profile"
    assert resolved.provenance["tags"] == "normalization"


def test_explain_lists_overridden_paths(capacity_spec):
    _require_imports()
    contributions = ConfigResolver(capacity_spec).explain({"instanceType": "c5.xlarge"}, "fedramp-high")
    by_path = {c.path: c for c in contributions}

    assert by_path["instanceType"].winner == "user"
    assert [layer for layer, _ in by_path["instanceType"].values] == ["fallback", "profile", "user"]
    assert by_path["storage.encrypted"].winner == "profile"
    assert "autoScaling.minCapacity" not in by_path
