# src/envlayer/core/config/store.py
"""
Árvore de configuração mutável do envlayer (`ConfigStore`).

O `ConfigStore` é o único destino de escrita de presets e fragmentos
durante a montagem. Ele substitui o array global compartilhado por um
objeto explícito, criado pelo assembler e devolvido ao chamador.

Key paths:
    - string pontuada: `"SYS.caching.cacheConfigurations"`
    - tupla/lista de chaves: `("LOG", "deprecations", "notice")`, útil
      para chaves que contêm `.` ou não são strings
    - path vazio (`""`, `()` ou `None`) representa a raiz

Ciclo de vida:
    - Criado vazio (ou a partir de uma árvore inicial)
    - Populado de forma monotônica durante a montagem
    - Congelado via `freeze()` e tratado como somente leitura depois disso

Limites explícitos:
    - Não valida schema
    - Não possui locking (montagem single-threaded)
    - Não persiste a árvore
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .errors import ConfigTypeConflictError, NotFoundError, StoreFrozenError
from .merge import backfill_merge, deep_merge

KeyPath = Union[str, Sequence[Any], None]

_MISSING = object()
_ABSENT = object()


def split_path(path: KeyPath) -> Tuple[Any, ...]:
    """Normaliza um key path para uma tupla de chaves."""
    if path is None:
        return ()
    if isinstance(path, str):
        if not path:
            return ()
        keys = tuple(path.split("."))
        if any(k == "" for k in keys):
            raise ValueError(f"key path inválido: {path!r}")
        return keys
    return tuple(path)


def format_path(keys: Sequence[Any]) -> str:
    return ".".join(str(k) for k in keys) or "<root>"


class ConfigStore:
    """
    Árvore de key paths para valores escalares ou mapas aninhados.

    Decisões arquiteturais:
        - `set` segue "o último vence"
        - `merge_defaults` segue backfill: o existente vence
        - Mapas intermediários são criados sob demanda
        - Escrever através de um valor não-mapa é conflito estrutural

    Invariantes:
        - A raiz é sempre um `dict`
        - Após `freeze()`, toda escrita levanta `StoreFrozenError`
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = deepcopy(initial) if initial else {}
        self._frozen = False

    # -----------------------------
    # Leitura
    # -----------------------------

    def get(self, path: KeyPath, default: Any = _MISSING) -> Any:
        keys = split_path(path)
        node: Any = self._data
        for i, key in enumerate(keys):
            if not isinstance(node, dict) or key not in node:
                if default is not _MISSING:
                    return default
                raise NotFoundError(f"key path não encontrado: {format_path(keys[: i + 1])}")
            node = node[key]
        return node

    def has(self, path: KeyPath) -> bool:
        return self.get(path, _ABSENT) is not _ABSENT

    def to_dict(self) -> Dict[str, Any]:
        return deepcopy(self._data)

    # -----------------------------
    # Escrita
    # -----------------------------

    def set(self, path: KeyPath, value: Any) -> None:
        keys = self._writable_keys(path)
        if not keys:
            if not isinstance(value, dict):
                raise ConfigTypeConflictError("a raiz da configuração deve ser um dict")
            self._data = deepcopy(value)
            return
        parent = self._parent_of(keys)
        parent[keys[-1]] = deepcopy(value)

    def merge_defaults(self, path: KeyPath, defaults: Dict[str, Any]) -> None:
        """
        Aplica `defaults` em `path` com semântica de backfill.

        Valores já existentes nunca são sobrescritos; apenas chaves
        ausentes são preenchidas. Se `path` não existir, os defaults são
        gravados integralmente.

        Raises:
            ConfigTypeConflictError: Se `defaults` não for um dict ou se o
                valor existente em `path` não for um mapa.
        """
        keys = self._writable_keys(path)
        if not isinstance(defaults, dict):
            raise ConfigTypeConflictError(
                f"merge_defaults requer dict, recebido: {type(defaults).__name__}"
            )
        if not keys:
            self._data = backfill_merge(self._data, defaults)
            return

        parent = self._parent_of(keys)
        current = parent.get(keys[-1], _MISSING)
        if current is _MISSING or current is None:
            parent[keys[-1]] = deepcopy(defaults)
            return
        if not isinstance(current, dict):
            raise ConfigTypeConflictError(
                f"Conflito de tipo em '{format_path(keys)}': "
                f"{type(current).__name__} vs dict"
            )
        parent[keys[-1]] = backfill_merge(current, defaults)

    def merge(self, path: KeyPath, override: Dict[str, Any]) -> None:
        """
        Aplica `override` em `path` via deep-merge (o override vence).

        Um valor não-mapa existente em `path` é substituído por inteiro.
        """
        keys = self._writable_keys(path)
        current = self.get(keys, {})
        if not isinstance(current, dict):
            current = {}
        self.set(keys, deep_merge(current, override))

    def append(self, path: KeyPath, value: Any) -> None:
        keys = self._writable_keys(path)
        if not keys:
            raise ConfigTypeConflictError("append não é suportado na raiz")
        parent = self._parent_of(keys)
        current = parent.get(keys[-1])
        if current is None:
            current = []
            parent[keys[-1]] = current
        if not isinstance(current, list):
            raise ConfigTypeConflictError(
                f"append requer lista em '{format_path(keys)}', "
                f"encontrado: {type(current).__name__}"
            )
        current.append(deepcopy(value))

    def concat(self, path: KeyPath, suffix: str) -> None:
        keys = self._writable_keys(path)
        if not keys:
            raise ConfigTypeConflictError("concat não é suportado na raiz")
        parent = self._parent_of(keys)
        current = parent.get(keys[-1])
        if current is None:
            current = ""
        if isinstance(current, dict) or isinstance(current, list):
            raise ConfigTypeConflictError(
                f"concat requer escalar em '{format_path(keys)}', "
                f"encontrado: {type(current).__name__}"
            )
        parent[keys[-1]] = f"{current}{suffix}"

    # -----------------------------
    # Ciclo de vida
    # -----------------------------

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -----------------------------
    # Internos
    # -----------------------------

    def _writable_keys(self, path: KeyPath) -> Tuple[Any, ...]:
        if self._frozen:
            raise StoreFrozenError(
                f"ConfigStore congelado, escrita rejeitada em: {format_path(split_path(path))}"
            )
        return split_path(path)

    def _parent_of(self, keys: Tuple[Any, ...]) -> Dict[Any, Any]:
        node: Dict[Any, Any] = self._data
        walked: List[Any] = []
        for key in keys[:-1]:
            walked.append(key)
            child = node.get(key)
            if child is None:
                child = {}
                node[key] = child
            elif not isinstance(child, dict):
                raise ConfigTypeConflictError(
                    f"Conflito de tipo em '{format_path(walked)}': "
                    f"{type(child).__name__} não é um mapa"
                )
            node = child
        return node

    def __repr__(self) -> str:  # pragma: no cover
        return f"ConfigStore(frozen={self._frozen}, keys={sorted(map(str, self._data))})"

