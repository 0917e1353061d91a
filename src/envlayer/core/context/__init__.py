# src/envlayer/core/context/__init__.py
"""
Resolução do contexto de implantação (Development, Testing, Production).

Componentes:
    - types: `Context`, cadeia imutável de contextos
    - resolver: `resolve`, `parse_context`, `is_local_dev_environment`
    - errors: `ContextError`, `InvalidContextError`
"""

from .errors import ContextError, InvalidContextError
from .resolver import is_local_dev_environment, parse_context, resolve
from .types import DEVELOPMENT, PRODUCTION, TESTING, Context

__all__ = [
    "Context",
    "ContextError",
    "DEVELOPMENT",
    "InvalidContextError",
    "PRODUCTION",
    "TESTING",
    "is_local_dev_environment",
    "parse_context",
    "resolve",
]
