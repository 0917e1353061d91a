# src/envlayer/core/traceability/events.py
"""
Event log estruturado da montagem de configuração.

Este módulo define o `EventLog`, o registro canônico de eventos de uma
montagem. Cada estágio (contexto, presets, camadas, finalização) registra
eventos estruturados em vez de strings livres.

Invariantes:
    - Todo evento inclui `assembly_id`, `stage`, `level`, `message` e `timestamp`
    - Timestamps são timezone-aware (UTC) em ISO-8601
    - A coleção de eventos cresce de forma incremental e ordenada

Limites explícitos:
    - Não persiste eventos
    - Não filtra por nível
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import uuid4


LEVELS = ("debug", "info", "warning", "error")


@dataclass
class EventLog:
    """Registro de eventos estruturados de uma montagem."""

    assembly_id: str = field(default_factory=lambda: uuid4().hex)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)

    def log(self, *, stage: str, level: str, message: str, **extra: Any) -> None:
        if level not in LEVELS:
            raise ValueError(f"unknown log level: {level!r}")
        event = {
            "assembly_id": self.assembly_id,
            "stage": stage,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def for_stage(self, stage: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["stage"] == stage]
