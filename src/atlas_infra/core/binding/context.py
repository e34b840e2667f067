# src/atlas_infra/core/binding/context.py
"""
Contexto de resolução de bindings.

O `BindingContext` é passado a todas as estratégias e carrega a
identidade do ambiente de provisionamento (ambiente, região, conta)
junto com o log estruturado de eventos da resolução.

Decisões arquiteturais:
    - Estratégias registram eventos apenas via contexto
    - Não existe estado global: cada passada de síntese cria o seu contexto
    - O contexto nunca decide comportamento de binding (secure mode vem
      das `options` do descriptor, não do ambiente)

Limites explícitos:
    - Não executa bindings
    - Não acessa rede ou provedores de nuvem
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from atlas_infra.core.events import EventLog


@dataclass
class BindingContext(EventLog):
    """
    Contexto de uma passada de bindings.

    Campos:
        - environment: nome do ambiente (ex.: `dev`, `prod`)
        - region: região de provisionamento
        - account_id: conta alvo
        - meta: metadados livres do chamador
    """

    environment: str = "dev"
    region: str = "us-east-1"
    account_id: str = ""
    meta: Dict[str, Any] = field(default_factory=dict)

    def log(self, *, scope: str, level: str, message: str, **extra: Any) -> None:
        super().log(
            scope=scope,
            level=level,
            message=message,
            environment=self.environment,
            region=self.region,
            **extra,
        )
