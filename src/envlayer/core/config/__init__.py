# src/envlayer/core/config/__init__.py

"""
Camada de configuração do envlayer.

Este pacote contém a árvore de configuração montada (`ConfigStore`), as
políticas de merge, o hashing canônico e as settings do assembler.

Responsabilidades do pacote:
    - Escrita e leitura por key path
    - Merge com precedência explícita (override ou backfill)
    - Hash canônico da árvore final
    - Carregamento das settings do assembler (defaults + local)

Invariantes:
    - A raiz da árvore é sempre um dicionário puro (dict)
    - Após o congelamento, a árvore é somente leitura

Limites explícitos:
    - Não resolve contexto
    - Não conhece presets nem fragmentos
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    InvalidSettingsError,
    NotFoundError,
    SettingsNotFoundError,
    StoreFrozenError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .merge import backfill_merge, deep_merge
from .settings import AssemblerSettings, load_settings, settings_from_mapping
from .store import ConfigStore, KeyPath, split_path

__all__ = [
    "AssemblerSettings",
    "ConfigError",
    "ConfigStore",
    "ConfigTypeConflictError",
    "InvalidConfigRootTypeError",
    "InvalidSettingsError",
    "KeyPath",
    "NotFoundError",
    "SettingsNotFoundError",
    "StoreFrozenError",
    "UnsupportedConfigFormatError",
    "backfill_merge",
    "compute_config_hash",
    "deep_merge",
    "load_settings",
    "settings_from_mapping",
    "split_path",
]
