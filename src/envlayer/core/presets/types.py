# src/envlayer/core/presets/types.py
"""
Tipos canônicos de presets.

Um preset é uma função pura que, a partir de parâmetros explícitos,
produz uma lista de escritas (`Write`). O preset nunca toca o
`ConfigStore` diretamente: quem aplica as escritas é o `PresetRegistry`.

Invariantes:
    - `Preset.build` não tem efeitos colaterais
    - Reaplicar as mesmas escritas de `set` produz a mesma árvore
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List

from envlayer.core.config.store import ConfigStore, KeyPath


class WriteOp(str, Enum):
    """
    Operações de escrita suportadas sobre o `ConfigStore`.

    Operações definidas:
        - SET: o último vence
        - MERGE_DEFAULTS: backfill, o existente vence
        - APPEND: adiciona a uma lista
        - CONCAT: concatena a uma string
    """

    SET = "set"
    MERGE_DEFAULTS = "merge_defaults"
    APPEND = "append"
    CONCAT = "concat"


@dataclass(frozen=True)
class Write:
    """Escrita imutável produzida por um preset."""

    op: WriteOp
    path: KeyPath
    value: Any

    def __post_init__(self):
        # aceita o valor cru do enum (ex.: "set")
        object.__setattr__(self, "op", WriteOp(self.op))

    def apply(self, store: ConfigStore) -> None:
        if self.op == WriteOp.SET:
            store.set(self.path, self.value)
        elif self.op == WriteOp.MERGE_DEFAULTS:
            store.merge_defaults(self.path, self.value)
        elif self.op == WriteOp.APPEND:
            store.append(self.path, self.value)
        elif self.op == WriteOp.CONCAT:
            store.concat(self.path, self.value)
        else:  # pragma: no cover
            raise ValueError(f"unsupported write op: {self.op!r}")


def set_(path: KeyPath, value: Any) -> Write:
    return Write(WriteOp.SET, path, value)


def merge_defaults(path: KeyPath, value: Any) -> Write:
    return Write(WriteOp.MERGE_DEFAULTS, path, value)


def append(path: KeyPath, value: Any) -> Write:
    return Write(WriteOp.APPEND, path, value)


def concat(path: KeyPath, value: str) -> Write:
    return Write(WriteOp.CONCAT, path, value)


@dataclass(frozen=True)
class Preset:
    """
    Pacote nomeado de mutações de configuração aplicado como unidade.

    Campos:
        - name: identificador único no registro
        - build: função pura `(**params) -> List[Write]`
        - description: resumo humano do efeito do preset
    """

    name: str
    build: Callable[..., List[Write]]
    description: str = ""
