"""
Exceções canônicas da camada de configuração do Atlas Infra.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento de camadas, a resolução e a validação da configuração
de componentes.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são tratados como falhas fatais
    - Falhas de validação carregam a lista completa de violações

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - `ConfigurationError` também é um `SchemaValidationError`, permitindo
      captura por qualquer um dos dois contratos

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de binders ou registry
"""

from __future__ import annotations

from typing import Optional, Sequence

from atlas_infra.core.errors import CONFIGURATION_INVALID, CONFIGURATION_SOURCE_INVALID
from atlas_infra.core.exceptions import AtlasInfraError
from atlas_infra.core.schema.errors import SchemaValidationError
from atlas_infra.core.schema.types import ValidationIssue


class ConfigError(AtlasInfraError):
    """
    Exceção base para erros relacionados à configuração do Atlas Infra.

    Todas as exceções levantadas durante carregamento de camadas e
    resolução de configuração devem herdar desta classe.
    """

    error_type = CONFIGURATION_SOURCE_INVALID


class ConfigurationError(ConfigError, SchemaValidationError):
    """
    Exceção levantada quando a configuração resolvida não passa no schema.

    A resolução mescla as quatro camadas, normaliza e só então valida;
    qualquer violação encontrada nesse ponto é reportada de uma vez.

    Invariantes:
        - `issues` contém todas as violações, nunca apenas a primeira
        - Nenhuma configuração parcial é retornada em caso de falha
    """

    error_type = CONFIGURATION_INVALID
    default_hint = "Corrija todos os campos listados no manifest e reexecute a resolução."

    def __init__(
        self,
        issues: Sequence[ValidationIssue],
        *,
        component_type: Optional[str] = None,
        profile: Optional[str] = None,
    ) -> None:
        issues = list(issues)
        label = component_type or "component"
        SchemaValidationError.__init__(
            self,
            issues,
            message=(
                f"{label} configuration is invalid ({len(issues)} issue(s)): "
                + "; ".join(f"{i.path or '<root>'}: {i.message}" for i in issues)
            ),
        )
        self.component_type = component_type
        self.profile = profile
        self.details.update({"component_type": component_type, "profile": profile})


class LayerFileNotFoundError(ConfigError):
    """
    Exceção levantada quando um arquivo de camada (perfis ou manifest)
    não é encontrado no caminho especificado.

    Limites explícitos:
        - Não tenta inferir ou criar o arquivo automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de camada não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz de uma camada não é um dicionário.

    Listas ou valores escalares no root são inválidos.
    """


class UnknownComponentTypeError(ConfigError):
    """Tipo de componente sem especificação de configuração registrada."""
