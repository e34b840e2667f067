# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do Atlas Infra.

Este módulo contém testes mínimos cujo único objetivo é garantir que:
- o pacote e seus subpacotes são importáveis
- o ambiente de testes (pytest) está funcional

Invariantes:
    - Estes testes devem sempre passar em um setup correto
    - Não dependem de filesystem ou I/O

Limites explícitos:
    - Não testar lógica de negócio
    - Não acumular asserts funcionais
"""

import importlib

import pytest


@pytest.mark.parametrize(
    "module",
    [
        "atlas_infra",
        "atlas_infra.core.schema",
        "atlas_infra.core.config",
        "atlas_infra.core.binding",
        "atlas_infra.binders",
        "atlas_infra.components",
    ],
)
def test_smoke_imports(module):
    """
    Smoke test mínimo do repositório.

    Garante que o projeto pode ser importado sem falhas estruturais
    (dependências declaradas, imports circulares, erros de sintaxe).
    """
    assert importlib.import_module(module) is not None
