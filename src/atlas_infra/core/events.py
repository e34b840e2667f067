# src/atlas_infra/core/events.py
"""
Registro estruturado de eventos do Atlas Infra.

Este módulo define o `EventLog`, a estrutura canônica utilizada para
registrar logs estruturados e warnings não fatais durante a resolução
de configuração e de bindings.

Princípios fundamentais:
    - Logs são eventos estruturados, não texto livre
    - Cada evento carrega `scope`, `level`, `message` e `timestamp`
    - Warnings são agrupados por `scope`
    - Nenhum estado global: cada resolução recebe seu próprio log

Limites explícitos:
    - Não persiste eventos
    - Não envia telemetria
    - Não decide políticas de falha
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass
class EventLog:
    """
    Coleção de eventos estruturados e warnings de uma resolução.

    Invariantes:
        - A ordem de inserção dos eventos é preservada
        - Campos extras passados a `log` são mantidos sem filtragem
        - Warnings são associados explicitamente a um `scope`
    """

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def log(self, *, scope: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "scope": scope,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, scope: str, message: str) -> None:
        if scope not in self.warnings:
            self.warnings[scope] = []
        self.warnings[scope].append(message)

    def events_for(self, scope: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["scope"] == scope]
