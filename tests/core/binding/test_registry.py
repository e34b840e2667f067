# tests/core/binding/test_registry.py
"""
Testes do registry de estratégias de binding.

Os testes asseguram que:
- o catálogo v1 registra as 23 estratégias por tipo de serviço
- consultas com `None` ou `""` retornam ausência / lista vazia
- listagens são determinísticas (ordenadas)
- re-registrar um tipo substitui a estratégia anterior
- `bind` com tipo desconhecido levanta `UnknownServiceTypeError`

Decisões arquiteturais:
    - Registro explícito, sem discovery automático
    - Recomendações são apenas descritivas
"""

import pytest

try:
    from atlas_infra.core.binding.errors import UnknownServiceTypeError
    from atlas_infra.core.binding.registry import UNCATEGORIZED, BinderRegistry, default_registry
except Exception as e:  # noqa: BLE001
    UnknownServiceTypeError = None
    BinderRegistry = None
    default_registry = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


V1_SERVICE_TYPES = [
    "amplify",
    "app-runner",
    "batch",
    "cloudfront",
    "dynamodb",
    "ecs-fargate",
    "efs",
    "eks",
    "elastic-beanstalk",
    "emr",
    "eventbridge",
    "iot-core",
    "kinesis",
    "kms",
    "lambda",
    "lightsail",
    "neptune",
    "sagemaker",
    "secrets-manager",
    "sns",
    "sqs",
    "step-functions",
    "vpc",
]


def _require_imports():
    """
    Garante que o registry e suas exceções estejam disponíveis para os testes.

    Decisões arquiteturais:
        - Falha antecipada e explícita quando contratos do registry estão ausentes
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing binder registry modules. Implement:\n"
            "- src/atlas_infra/core/binding/registry.py (BinderRegistry, default_registry)\n"
            f"Import error: {_IMPORT_ERR}"
        )


class _Recorder:
    def __init__(self, capabilities=("x:a",), category=None):
        self.supported_capabilities = tuple(capabilities)
        self.category = category
        self.calls = []

    def bind(self, source, target, binding, context):
        self.calls.append((source, target, binding, context))


def test_v1_catalog_service_types():
    _require_imports()
    registry = BinderRegistry.v1()
    assert registry.get_all_service_types() == V1_SERVICE_TYPES


def test_default_registry_is_a_singleton():
    _require_imports()
    assert default_registry() is default_registry()
    assert default_registry().get_all_service_types() == V1_SERVICE_TYPES


def test_lookups_with_empty_keys():
    """
    Verifica que consultas com `None` ou `""` nunca levantam exceção.

    Invariantes:
        - `get` retorna None
        - listagens retornam listas vazias
        - `validate_binding` retorna False
    """
    _require_imports()
    registry = BinderRegistry.v1()
    for key in (None, ""):
        assert registry.get(key) is None
        assert registry.get_supported_capabilities(key) == []
        assert registry.get_binding_recommendations(key) == []
        assert registry.get_services_in_category(key) == []
        assert registry.validate_binding(key, "sqs:queue") is False
    assert registry.validate_binding("sqs", None) is False
    assert registry.validate_binding("sqs", "") is False


def test_capability_validation():
    _require_imports()
    registry = BinderRegistry.v1()
    assert registry.get_supported_capabilities("sqs") == ["sqs:queue", "sqs:dead-letter-queue"]
    assert registry.validate_binding("sqs", "sqs:dead-letter-queue")
    assert not registry.validate_binding("sqs", "sns:topic")
    assert not registry.validate_binding("unknown", "sqs:queue")


def test_services_by_category():
    _require_imports()
    grouped = BinderRegistry.v1().get_services_by_category()

    assert grouped["Messaging"] == ["eventbridge", "sns", "sqs"]
    assert grouped["Compute"] == [
        "app-runner",
        "batch",
        "ecs-fargate",
        "eks",
        "elastic-beanstalk",
        "lambda",
        "lightsail",
    ]
    assert grouped["Database"] == ["dynamodb", "neptune"]
    assert grouped["ML"] == ["sagemaker"]
    assert grouped["Security"] == ["kms", "secrets-manager"]
    assert sorted(s for services in grouped.values() for s in services) == V1_SERVICE_TYPES


def test_categories_are_sorted():
    _require_imports()
    categories = BinderRegistry.v1().get_categories()
    assert categories == sorted(categories)
    assert "Networking" in categories


def test_recommendations_are_static_strings():
    _require_imports()
    registry = BinderRegistry.v1()
    for service_type in V1_SERVICE_TYPES:
        recommendations = registry.get_binding_recommendations(service_type)
        assert recommendations
        assert all(isinstance(r, str) and r for r in recommendations)
    assert "Enable automatic key rotation for compliance" in registry.get_binding_recommendations("kms")


def test_last_registration_wins():
    _require_imports()
    registry = BinderRegistry()
    first, second = _Recorder(("x:a",)), _Recorder(("x:b",))
    registry.register("x", first)
    registry.register("x", second)

    assert registry.get("x") is second
    assert registry.get_supported_capabilities("x") == ["x:b"]


def test_uncategorized_strategies():
    _require_imports()
    registry = BinderRegistry()
    registry.register("x", _Recorder())
    assert registry.get_services_by_category() == {UNCATEGORIZED: ["x"]}


def test_register_rejects_invalid_inputs():
    _require_imports()
    registry = BinderRegistry()
    with pytest.raises(ValueError):
        registry.register("", _Recorder())
    with pytest.raises(TypeError):
        registry.register("x", object())
    with pytest.raises(TypeError):
        registry.register("x", None)
    assert registry.get_all_service_types() == []


def test_bind_dispatches_to_strategy(source, binding_context, make_binding):
    _require_imports()
    registry = BinderRegistry()
    recorder = _Recorder()
    registry.register("x", recorder)
    binding = make_binding("x:a", ["read"])

    registry.bind("x", source, {"a": 1}, binding, binding_context)

    assert recorder.calls == [(source, {"a": 1}, binding, binding_context)]


def test_bind_unknown_service_type(source, binding_context, make_binding):
    _require_imports()
    registry = BinderRegistry.v1()
    with pytest.raises(UnknownServiceTypeError) as exc_info:
        registry.bind("s3", source, {}, make_binding("s3:bucket", ["read"]), binding_context)

    payload = exc_info.value.to_payload()
    assert payload.type == "BINDING_SERVICE_UNKNOWN"
    assert payload.details["known"] == V1_SERVICE_TYPES
    assert source.untouched
