# src/envlayer/core/presets/registry.py
"""
Registro de presets nomeados.

Este módulo define o `PresetRegistry`, responsável por registrar presets,
validar a unicidade de seus nomes e aplicá-los sobre um `ConfigStore`.

Decisões arquiteturais:
    - As escritas são calculadas antes de qualquer mutação da árvore
    - Um nome desconhecido falha antes de tocar a árvore
    - A ordem de registro é preservada separadamente

Invariantes:
    - Cada preset registrado possui um `name` único
    - `names()` reflete exatamente a ordem de registro

Limites explícitos:
    - Não decide quais presets um contexto recebe (responsabilidade do assembler)
    - Não desfaz escritas já aplicadas
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from envlayer.core.config.store import ConfigStore
from envlayer.core.traceability.events import EventLog

from .errors import DuplicatePresetError, PresetParameterError, UnknownPresetError
from .types import Preset, Write


@dataclass
class PresetRegistry:
    """Registro canônico de presets, indexado por nome."""

    _presets: Dict[str, Preset] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def register(self, preset: Preset) -> None:
        name = getattr(preset, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise ValueError("preset.name must be a non-empty string")

        if name in self._presets:
            raise DuplicatePresetError(f"Duplicate preset name: {name}")

        self._presets[name] = preset
        self._order.append(name)

    def get(self, name: str) -> Preset:
        if name not in self._presets:
            raise UnknownPresetError(f"Unknown preset: {name!r}")
        return self._presets[name]

    def names(self) -> List[str]:
        return list(self._order)

    def __contains__(self, name: object) -> bool:
        return name in self._presets

    def build(self, name: str, **params: Any) -> List[Write]:
        """
        Calcula as escritas de um preset sem aplicá-las.

        Raises:
            UnknownPresetError: Se o preset não estiver registrado.
            PresetParameterError: Se os parâmetros forem inválidos.
        """
        preset = self.get(name)
        try:
            return list(preset.build(**params))
        except PresetParameterError:
            raise
        except (TypeError, ValueError) as exc:
            raise PresetParameterError(f"invalid parameters for preset {name!r}: {exc}") from exc

    def apply(
        self,
        store: ConfigStore,
        name: str,
        *,
        events: Optional[EventLog] = None,
        **params: Any,
    ) -> List[Write]:
        """
        Aplica um preset sobre a árvore e retorna as escritas realizadas.

        Raises:
            UnknownPresetError: Se o preset não estiver registrado.
            PresetParameterError: Se os parâmetros forem inválidos.
        """
        writes = self.build(name, **params)
        for write in writes:
            write.apply(store)

        if events is not None:
            events.log(
                stage="presets",
                level="info",
                message="preset applied",
                preset=name,
                writes=len(writes),
            )
        return writes
