# src/envlayer/core/context/types.py
"""
Representação imutável do contexto de implantação.

Um contexto é um nome completo (ex.: `Production/Qa`) com um pai opcional
(`Production`), formando uma cadeia finita e acíclica que termina em um
contexto raiz (`Development`, `Testing` ou `Production`).

Invariantes:
    - O `name` de um filho sempre começa com o `name` do pai seguido de `/`
    - A cadeia de ancestrais termina em um contexto sem pai
    - Instâncias nunca são alteradas após criadas
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


DEVELOPMENT = "Development"
TESTING = "Testing"
PRODUCTION = "Production"


@dataclass(frozen=True)
class Context:
    """
    Contexto de implantação resolvido no início do processo.

    Campos:
        - name: nome completo do contexto (ex.: `Production/Qa`)
        - parent: contexto pai, ou None para o contexto raiz
    """

    name: str
    parent: Optional["Context"] = None

    @property
    def segment(self) -> str:
        return self.name.rsplit("/", 1)[-1]

    @property
    def segments(self) -> List[str]:
        return self.name.split("/")

    @property
    def root(self) -> "Context":
        current = self
        while current.parent is not None:
            current = current.parent
        return current

    def ancestors(self) -> List["Context"]:
        """Retorna a cadeia completa, do contexto raiz até este contexto."""
        chain: List[Context] = []
        current: Optional[Context] = self
        while current is not None:
            chain.append(current)
            current = current.parent
        chain.reverse()
        return chain

    def is_development(self) -> bool:
        return self.root.name == DEVELOPMENT

    def is_testing(self) -> bool:
        return self.root.name == TESTING

    def is_production(self) -> bool:
        return self.root.name == PRODUCTION

    def __str__(self) -> str:
        return self.name
