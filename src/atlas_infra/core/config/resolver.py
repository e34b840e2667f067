# src/atlas_infra/core/config/resolver.py
"""
Engine canônica de resolução de configuração de componentes.

Este módulo transforma uma configuração parcial informada pelo usuário
em uma configuração resolvida, normalizada e válida segundo o schema
do componente.

Camadas (da menor para a maior precedência):
    1. fallback  → literal embutido na especificação do componente
    2. schema    → defaults declarados no schema
    3. profile   → perfil nomeado (tier de ambiente/compliance)
    4. user      → configuração parcial do manifest

Algoritmo:
    - deep-merge das quatro camadas, na ordem acima
    - normalização de sub-estruturas opcionais
    - validação completa contra o schema
    - falha com `ConfigurationError` carregando todas as violações

Decisões arquiteturais:
    - Um perfil desconhecido seleciona explicitamente o perfil `baseline`
      (registrado como evento), nunca falha
    - A precedência é implementada por um único merge genérico, nunca por
      cadeias de defaults espalhadas por campo
    - Proveniência (qual camada definiu cada folha) é calculada para
      diagnóstico, mas não participa da igualdade do resultado

Invariantes:
    - A resolução é idempotente: resolver `as_partial()` de um resultado
      com o mesmo perfil produz um resultado igual
    - Nenhum input é mutado
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from atlas_infra.core.events import EventLog
from atlas_infra.core.schema.defaults import extract_defaults
from atlas_infra.core.schema.types import ISSUE_TYPE, ValidationIssue
from atlas_infra.core.schema.validator import validate

from .errors import ConfigurationError
from .hashing import compute_config_hash
from .merge import flatten_leaves, merge_layers
from .normalize import normalize


BASELINE_PROFILE = "baseline"

LAYER_FALLBACK = "fallback"
LAYER_SCHEMA = "schema"
LAYER_PROFILE = "profile"
LAYER_USER = "user"
LAYER_NORMALIZATION = "normalization"

_SCOPE = "config.resolve"


@dataclass(frozen=True)
class ComponentConfigSpec:
    """
    Especificação de configuração de um tipo de componente.

    Campos:
        - component_type: identificador do tipo (ex.: `auto-scaling-group`)
        - schema: schema declarativo do componente
        - fallbacks: literal de fallback (camada 1)
        - profiles: perfis nomeados (camada 3), incluindo `baseline`
    """

    component_type: str
    schema: Mapping[str, Any]
    fallbacks: Mapping[str, Any] = field(default_factory=dict)
    profiles: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    description: str = ""

    def select_profile(self, profile_key: Optional[str]) -> Tuple[str, Dict[str, Any]]:
        """Retorna (perfil efetivo, configuração parcial) para a chave informada."""
        if profile_key is not None and profile_key in self.profiles:
            return profile_key, deepcopy(dict(self.profiles[profile_key]))
        return BASELINE_PROFILE, deepcopy(dict(self.profiles.get(BASELINE_PROFILE, {})))


@dataclass(frozen=True)
class ConfigLayer:
    """Uma camada nomeada com sua prioridade (maior vence)."""

    name: str
    priority: int
    config: Dict[str, Any]


@dataclass(frozen=True)
class LayerContribution:
    """Um path definido por mais de uma camada e a camada vencedora."""

    path: str
    values: Tuple[Tuple[str, Any], ...]
    winner: str


@dataclass(frozen=True)
class ResolvedConfig:
    """
    Configuração resolvida, normalizada e válida de um componente.

    `provenance` mapeia cada folha (path pontuado) para a camada que a
    definiu e fica fora da igualdade: duas resoluções com a mesma
    configuração final são iguais independentemente da origem das folhas.
    """

    component_type: str
    profile: str
    config: Dict[str, Any]
    config_hash: str
    provenance: Dict[str, str] = field(default_factory=dict, compare=False, repr=False)

    def as_partial(self) -> Dict[str, Any]:
        return deepcopy(self.config)

    def get(self, path: str, default: Any = None) -> Any:
        current: Any = self.config
        for part in path.split("."):
            if not isinstance(current, Mapping) or part not in current:
                return default
            current = current[part]
        return current


def _provenance(layers: List[ConfigLayer], final: Mapping[str, Any]) -> Dict[str, str]:
    owners: Dict[str, str] = {}
    for layer in layers:
        for path, value in flatten_leaves(layer.config):
            # dict vazio não apaga nada no merge
            if isinstance(value, Mapping):
                continue
            # um override substitui tudo que estava abaixo ou acima deste path
            stale = [p for p in owners if p.startswith(path + ".") or path.startswith(p + ".")]
            for p in stale:
                del owners[p]
            owners[path] = layer.name

    result: Dict[str, str] = {}
    for path, _ in flatten_leaves(final):
        result[path] = owners.get(path, LAYER_NORMALIZATION)
    return result


class ConfigResolver:
    """
    Resolve configurações de um tipo de componente a partir das quatro camadas.

    Args:
        spec (ComponentConfigSpec): Especificação do componente.
        events (Optional[EventLog]): Log estruturado opcional para eventos
            de resolução (fallback de perfil, resolução concluída).
    """

    def __init__(self, spec: ComponentConfigSpec, *, events: Optional[EventLog] = None):
        self.spec = spec
        self.events = events

    def _log(self, level: str, message: str, **extra: Any) -> None:
        if self.events is not None:
            self.events.log(scope=_SCOPE, level=level, message=message, **extra)

    def layers(
        self,
        user_partial: Optional[Mapping[str, Any]] = None,
        profile_key: Optional[str] = None,
    ) -> Tuple[str, List[ConfigLayer]]:
        """Monta as camadas em ordem de prioridade e retorna o perfil efetivo."""
        if user_partial is None:
            user_partial = {}
        if not isinstance(user_partial, Mapping):
            raise ConfigurationError(
                [
                    ValidationIssue(
                        path="",
                        code=ISSUE_TYPE,
                        message=f"expected object, got {type(user_partial).__name__}",
                    )
                ],
                component_type=self.spec.component_type,
                profile=profile_key,
            )

        profile, profile_partial = self.spec.select_profile(profile_key)
        if profile_key is not None and profile != profile_key:
            self._log(
                "WARNING",
                f"unknown profile '{profile_key}', using '{BASELINE_PROFILE}'",
                component_type=self.spec.component_type,
                requested_profile=profile_key,
            )

        return profile, [
            ConfigLayer(LAYER_FALLBACK, 1, deepcopy(dict(self.spec.fallbacks))),
            ConfigLayer(LAYER_SCHEMA, 2, extract_defaults(self.spec.schema)),
            ConfigLayer(LAYER_PROFILE, 3, profile_partial),
            ConfigLayer(LAYER_USER, 4, deepcopy(dict(user_partial))),
        ]

    def resolve(
        self,
        user_partial: Optional[Mapping[str, Any]] = None,
        profile_key: Optional[str] = None,
    ) -> ResolvedConfig:
        """
        Resolve a configuração final do componente.

        Args:
            user_partial (Optional[Mapping[str, Any]]): Configuração parcial do manifest.
            profile_key (Optional[str]): Perfil nomeado (ex.: `fedramp-high`).

        Returns:
            ResolvedConfig: Configuração resolvida e válida.

        Raises:
            ConfigurationError: Se o resultado normalizado violar o schema
                (todas as violações são reportadas de uma vez).
        """
        profile, layers = self.layers(user_partial, profile_key)

        merged = merge_layers(
            layer.config for layer in sorted(layers, key=lambda l: l.priority)
        )
        final = normalize(merged, self.spec.schema)

        result = validate(final, self.spec.schema)
        if not result.ok:
            self._log(
                "ERROR",
                "configuration failed schema validation",
                component_type=self.spec.component_type,
                issues=[i.to_dict() for i in result.issues],
            )
            raise ConfigurationError(
                result.issues,
                component_type=self.spec.component_type,
                profile=profile,
            )

        config_hash = compute_config_hash(final)
        self._log(
            "INFO",
            "configuration resolved",
            component_type=self.spec.component_type,
            profile=profile,
            config_hash=config_hash,
        )
        return ResolvedConfig(
            component_type=self.spec.component_type,
            profile=profile,
            config=final,
            config_hash=config_hash,
            provenance=_provenance(layers, final),
        )

    def explain(
        self,
        user_partial: Optional[Mapping[str, Any]] = None,
        profile_key: Optional[str] = None,
    ) -> List[LayerContribution]:
        """
        Lista os paths definidos por mais de uma camada e a camada vencedora.

        Não valida nem normaliza: serve para inspecionar a precedência.
        """
        _, layers = self.layers(user_partial, profile_key)

        seen: Dict[str, List[Tuple[str, Any]]] = {}
        for layer in layers:
            for path, value in flatten_leaves(layer.config):
                seen.setdefault(path, []).append((layer.name, value))

        return [
            LayerContribution(path=path, values=tuple(values), winner=values[-1][0])
            for path, values in sorted(seen.items())
            if len(values) > 1
        ]


def resolve_config(
    spec: ComponentConfigSpec,
    user_partial: Optional[Mapping[str, Any]] = None,
    profile_key: Optional[str] = None,
    *,
    events: Optional[EventLog] = None,
) -> ResolvedConfig:
    """Atalho funcional para `ConfigResolver(spec).resolve(...)`."""
    return ConfigResolver(spec, events=events).resolve(user_partial, profile_key)
