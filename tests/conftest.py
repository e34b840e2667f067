# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas Infra.

Este módulo define fixtures reutilizáveis que fornecem:
- uma especificação de componente reduzida (limites de capacidade + storage)
- contexto de binding controlado (BindingContext)
- componente de origem em memória (ComponentHandle)
- bags de atributos de alvo determinísticos
- documentos YAML de perfis para testes do loader

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas
    - Bags de alvo são dicts puros (o mesmo formato que o subsistema
      de síntese entrega às estratégias)

Invariantes:
    - Nenhuma fixture acessa rede ou provedores de nuvem
    - Dados retornados são determinísticos e isolados
    - Todas as fixtures são seguras para execução em paralelo

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica de domínio
"""

from typing import Any, Dict

import pytest


ACCOUNT = "123456789012"
REGION = "us-east-1"


def arn(service: str, resource: str) -> str:
    return f"arn:aws:{service}:{REGION}:{ACCOUNT}:{resource}"


# =====================================================
# Config — especificação reduzida
# =====================================================

@pytest.fixture
def capacity_schema() -> Dict[str, Any]:
    """
    Schema reduzido com limites de capacidade, tipo de instância e storage.

    Apenas `storage.rootVolumeType` declara default no schema; os demais
    valores vêm do fallback, para que o teste enxergue as duas camadas.
    """
    return {
        "type": "object",
        "properties": {
            "instanceType": {"type": "string"},
            "autoScaling": {
                "type": "object",
                "properties": {
                    "minCapacity": {"type": "integer", "minimum": 0},
                    "maxCapacity": {"type": "integer", "minimum": 1},
                    "desiredCapacity": {"type": "integer", "minimum": 0},
                },
            },
            "storage": {
                "type": "object",
                "properties": {
                    "rootVolumeSize": {"type": "integer", "minimum": 8},
                    "rootVolumeType": {"type": "string", "enum": ["gp2", "gp3"], "default": "gp3"},
                    "encrypted": {"type": "boolean"},
                },
            },
            "tags": {"type": "object", "additionalProperties": {"type": "string"}},
        },
    }


@pytest.fixture
def capacity_spec(capacity_schema):
    from atlas_infra.core.config.resolver import ComponentConfigSpec

    return ComponentConfigSpec(
        component_type="scaling-group",
        schema=capacity_schema,
        fallbacks={
            "instanceType": "t3.micro",
            "autoScaling": {"minCapacity": 1, "maxCapacity": 3, "desiredCapacity": 2},
            "storage": {"rootVolumeSize": 20, "encrypted": False},
        },
        profiles={
            "baseline": {},
            "fedramp-high": {"instanceType": "m5.large", "storage": {"encrypted": True}},
        },
    )


@pytest.fixture
def profiles_yaml() -> str:
    """Documento de perfis no formato aceito por `load_profiles`."""
    return """\
baseline:
fedramp-moderate:
  storage:
    encrypted: true
fedramp-high:
  instanceType: m5.large
  storage:
    encrypted: true
    rootVolumeSize: 100
"""


# =====================================================
# Binding — contexto, origem e alvos
# =====================================================

@pytest.fixture
def binding_context():
    from atlas_infra.core.binding.context import BindingContext

    return BindingContext(environment="test", region=REGION, account_id=ACCOUNT)


@pytest.fixture
def source():
    from atlas_infra.core.binding.source import ComponentHandle

    return ComponentHandle(name="api")


@pytest.fixture
def make_binding():
    """Factory de `ComponentBinding` com defaults de origem e alvo."""
    from atlas_infra.core.binding.descriptor import ComponentBinding

    def _make(capability: str, access, **kwargs: Any):
        return ComponentBinding(
            from_=kwargs.pop("from_", "api"),
            to=kwargs.pop("to", "target"),
            capability=capability,
            access=access,
            **kwargs,
        )

    return _make


@pytest.fixture
def queue_target() -> Dict[str, Any]:
    """Bag de uma fila SQS sintetizada, sem chave KMS nem posicionamento de rede."""
    return {
        "queue_arn": arn("sqs", "orders"),
        "queue_url": f"https://sqs.{REGION}.amazonaws.com/{ACCOUNT}/orders",
        "queue_name": "orders",
    }
