# src/envlayer/core/presets/__init__.py
"""
Presets: pacotes nomeados de mutações de configuração.

Componentes:
    - types: `Preset`, `Write`, `WriteOp`
    - registry: `PresetRegistry`
    - builtin: presets embutidos e `default_registry()`
"""

from .builtin import BUILTIN_PRESETS, DEBUG_FLAG_PATHS, default_registry
from .errors import (
    DuplicatePresetError,
    PresetError,
    PresetParameterError,
    UnknownPresetError,
)
from .registry import PresetRegistry
from .types import Preset, Write, WriteOp

__all__ = [
    "BUILTIN_PRESETS",
    "DEBUG_FLAG_PATHS",
    "DuplicatePresetError",
    "Preset",
    "PresetError",
    "PresetParameterError",
    "PresetRegistry",
    "UnknownPresetError",
    "Write",
    "WriteOp",
    "default_registry",
]
