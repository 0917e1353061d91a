# src/envlayer/core/context/resolver.py
"""
Resolução do contexto de implantação a partir do ambiente.

O contexto é lido uma única vez, na inicialização do processo:
    1. variável de override (`AssemblerSettings.context_env_var`)
    2. fallback para `AssemblerSettings.default_context`

O nome resolvido é dividido em segmentos por `/` e transformado em uma
cadeia de `Context`. Apenas raízes presentes em `allowed_roots` são aceitas.

Limites explícitos:
    - Não aplica presets
    - Não carrega fragmentos
    - Não mantém estado global (o chamador guarda o `Context`)
"""

from __future__ import annotations

import os
from typing import Iterable, Mapping, Optional

from envlayer.core.config.settings import AssemblerSettings

from .errors import InvalidContextError
from .types import Context


def parse_context(name: str, *, allowed_roots: Iterable[str]) -> Context:
    """
    Constrói a cadeia de contextos a partir de um nome completo.

    Exemplo:
        `Production/Qa` → Context("Production/Qa", parent=Context("Production"))

    Raises:
        InvalidContextError: Se o nome for vazio, contiver segmentos vazios
            ou relativos (`.`, `..`), ou se a raiz não estiver em `allowed_roots`.
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidContextError("context name must be a non-empty string")

    segments = [s.strip() for s in name.strip().split("/")]
    if any(not s for s in segments):
        raise InvalidContextError(f"context name has an empty segment: {name!r}")
    if any(s in (".", "..") for s in segments):
        raise InvalidContextError(f"context name has a relative segment: {name!r}")

    allowed = tuple(allowed_roots)
    if segments[0] not in allowed:
        raise InvalidContextError(
            f"context root {segments[0]!r} is not allowed, expected one of: {', '.join(allowed)}"
        )

    context = Context(name=segments[0])
    for i in range(1, len(segments)):
        context = Context(name="/".join(segments[: i + 1]), parent=context)

    return context


def resolve(
    environ: Optional[Mapping[str, str]] = None,
    *,
    settings: Optional[AssemblerSettings] = None,
) -> Context:
    """
    Resolve o contexto ativo a partir das variáveis de ambiente.

    Args:
        environ: Mapeamento de ambiente; `os.environ` quando omitido.
        settings: Settings do assembler; defaults quando omitidas.

    Raises:
        InvalidContextError: Se o contexto resolvido não for reconhecido.
    """
    settings = settings or AssemblerSettings()
    env = os.environ if environ is None else environ

    raw = env.get(settings.context_env_var)
    if raw is None or not raw.strip():
        raw = settings.default_context

    return parse_context(raw, allowed_roots=settings.allowed_roots)


def is_local_dev_environment(
    environ: Optional[Mapping[str, str]] = None,
    *,
    settings: Optional[AssemblerSettings] = None,
) -> bool:
    """Verdadeiro apenas quando a flag local vale exatamente `"true"`."""
    settings = settings or AssemblerSettings()
    env = os.environ if environ is None else environ
    return env.get(settings.local_dev_env_var) == "true"
