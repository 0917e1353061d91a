# src/envlayer/core/layers/loader.py
"""
Loader de fragmentos de configuração em camadas.

Dado o contexto `Production/Qa` e o diretório base `config/`, as camadas
são procuradas do contexto mais geral ao mais específico:

    1. config/production.<ext>
    2. config/production/qa.<ext>   (maior prioridade)

Formatos de fragmento (v1):
    - YAML (.yaml, .yml) e JSON (.json): mapa aplicado via deep-merge
    - Python (.py): executado com `config`, `context` e `apply_preset`
      disponíveis no escopo global do módulo

Decisões arquiteturais:
    - Fragmentos ausentes são ignorados silenciosamente (apenas evento `debug`)
    - Dentro de uma camada, as extensões são visitadas na ordem configurada
    - Qualquer falha de um fragmento presente vira `FragmentLoadError`

Invariantes:
    - Camadas são aplicadas estritamente da raiz para a folha
    - Um valor da folha sempre vence um valor da raiz para a mesma chave

Limites explícitos:
    - Não resolve o contexto
    - Não aplica presets padrão
    - Não congela a árvore
"""

from __future__ import annotations

import json
import runpy
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml  # PyYAML

from envlayer.core.config.settings import DEFAULT_FRAGMENT_EXTENSIONS
from envlayer.core.config.store import ConfigStore
from envlayer.core.context.types import Context
from envlayer.core.presets.registry import PresetRegistry
from envlayer.core.traceability.events import EventLog

from .errors import FragmentLoadError

_DATA_SUFFIXES = {".yaml", ".yml", ".json"}


def fragment_candidates(
    context: Context,
    base_path: Union[str, Path],
    extensions: Iterable[str] = DEFAULT_FRAGMENT_EXTENSIONS,
) -> List[Path]:
    """Caminhos candidatos, em ordem de aplicação (raiz → folha)."""
    base = Path(base_path)
    exts = tuple(extensions)
    candidates: List[Path] = []
    for ancestor in context.ancestors():
        stem = ancestor.name.lower()
        for ext in exts:
            candidates.append(base / f"{stem}{ext}")
    return candidates


def _read_data_fragment(path: Path) -> Dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(raw)
    else:
        data = yaml.safe_load(raw)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"fragment root must be a mapping, got {type(data).__name__}")
    return data


def _run_python_fragment(
    path: Path,
    *,
    store: ConfigStore,
    context: Context,
    registry: Optional[PresetRegistry],
    events: Optional[EventLog],
) -> None:
    def apply_preset(name: str, **params: Any) -> None:
        if registry is None:
            raise RuntimeError("no preset registry available to this fragment")
        registry.apply(store, name, events=events, **params)

    runpy.run_path(
        str(path),
        init_globals={
            "config": store,
            "context": context,
            "apply_preset": apply_preset,
        },
        run_name=f"envlayer.fragment.{path.stem}",
    )


def load_layers(
    store: ConfigStore,
    context: Context,
    base_path: Union[str, Path],
    *,
    extensions: Optional[Iterable[str]] = None,
    registry: Optional[PresetRegistry] = None,
    events: Optional[EventLog] = None,
) -> List[Path]:
    """
    Aplica os fragmentos da cadeia de contexto sobre a árvore.

    Args:
        store: Árvore de configuração em montagem.
        context: Contexto resolvido.
        base_path: Diretório base dos fragmentos.
        extensions: Extensões procuradas por camada, em ordem.
        registry: Registro exposto aos fragmentos Python via `apply_preset`.
        events: Event log da montagem.

    Returns:
        List[Path]: Fragmentos efetivamente carregados, em ordem.

    Raises:
        FragmentLoadError: Se um fragmento presente falhar.
    """
    exts = tuple(extensions) if extensions is not None else DEFAULT_FRAGMENT_EXTENSIONS
    loaded: List[Path] = []

    for path in fragment_candidates(context, base_path, exts):
        if not path.is_file():
            if events is not None:
                events.log(stage="layers", level="debug", message="fragment not found", path=str(path))
            continue

        try:
            if path.suffix.lower() in _DATA_SUFFIXES:
                store.merge(None, _read_data_fragment(path))
            else:
                _run_python_fragment(
                    path, store=store, context=context, registry=registry, events=events
                )
        except Exception as exc:
            if events is not None:
                events.log(
                    stage="layers",
                    level="error",
                    message="fragment failed",
                    path=str(path),
                    error=f"{exc.__class__.__name__}: {exc}",
                )
            raise FragmentLoadError(path, f"{exc.__class__.__name__}: {exc}") from exc

        loaded.append(path)
        if events is not None:
            events.log(stage="layers", level="info", message="fragment loaded", path=str(path))

    return loaded
