# src/envlayer/core/assembly/assembler.py
"""
Pipeline de montagem da configuração.

O `Assembler` executa, uma única vez na inicialização do processo, os
estágios explícitos da montagem:

    1. resolve_context              → resolve o `Context` a partir do ambiente
    2. apply_defaults               → presets padrão do contexto
    3. append_context_to_site_name  → sufixo do nome do site fora de produção
    4. load_layers                  → fragmentos raiz → folha
    5. finish                       → congela a árvore e produz `AssemblyResult`

Não existe singleton: o chamador guarda o `Assembler` (ou apenas o
`AssemblyResult`) e o repassa explicitamente a quem precisar.

Decisões arquiteturais:
    - Cada estágio registra eventos estruturados no `EventLog`
    - Erros de contexto, preset ou fragmento interrompem a montagem
    - Após `finish()`, nenhum estágio pode ser executado novamente

Limites explícitos:
    - Não persiste a configuração
    - Não tenta recuperar falhas (reexecução do processo é o único recovery)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
import os
from typing import Any, List, Mapping, Optional, Tuple, Union

from envlayer.core.config.hashing import compute_config_hash
from envlayer.core.config.settings import AssemblerSettings
from envlayer.core.config.store import ConfigStore
from envlayer.core.context.resolver import is_local_dev_environment, resolve
from envlayer.core.context.types import Context
from envlayer.core.layers.loader import load_layers as _load_layers
from envlayer.core.presets.builtin import default_registry
from envlayer.core.presets.registry import PresetRegistry
from envlayer.core.traceability.events import EventLog

from .errors import AssemblyFinishedError


@dataclass(frozen=True)
class AssemblyResult:
    """
    Resultado imutável de uma montagem.

    Campos:
        - context: contexto resolvido
        - config: visão somente leitura da árvore final
        - config_hash: SHA-256 canônico da árvore final
        - applied_presets: nomes dos presets aplicados, em ordem
        - loaded_fragments: fragmentos carregados, em ordem
        - events: eventos estruturados da montagem
    """

    context: Context
    config: Mapping[str, Any]
    config_hash: str
    applied_presets: Tuple[str, ...] = field(default_factory=tuple)
    loaded_fragments: Tuple[Path, ...] = field(default_factory=tuple)
    events: Tuple[Mapping[str, Any], ...] = field(default_factory=tuple)


def _read_only(value: Any) -> Any:
    if isinstance(value, dict):
        return MappingProxyType({k: _read_only(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_read_only(v) for v in value)
    return value


class Assembler:
    """Montador canônico da configuração (contexto + presets + camadas)."""

    def __init__(
        self,
        *,
        settings: Optional[AssemblerSettings] = None,
        registry: Optional[PresetRegistry] = None,
        environ: Optional[Mapping[str, str]] = None,
        store: Optional[ConfigStore] = None,
        events: Optional[EventLog] = None,
    ):
        self.settings: AssemblerSettings = settings or AssemblerSettings()
        self.registry: PresetRegistry = registry or default_registry()
        self.environ: Mapping[str, str] = os.environ if environ is None else environ
        self.store: ConfigStore = store or ConfigStore()
        self.events: EventLog = events or EventLog()

        self._context: Optional[Context] = None
        self._applied: List[str] = []
        self._loaded: List[Path] = []
        self._result: Optional[AssemblyResult] = None

    # ------------------------------------------------------------------
    # Estado
    # ------------------------------------------------------------------

    @property
    def context(self) -> Context:
        if self._context is None:
            return self.resolve_context()
        return self._context

    @property
    def finished(self) -> bool:
        return self._result is not None

    def _ensure_open(self, stage: str) -> None:
        if self._result is not None:
            raise AssemblyFinishedError(f"assembly already finished, cannot run stage '{stage}'")

    # ------------------------------------------------------------------
    # Estágios
    # ------------------------------------------------------------------

    def resolve_context(self) -> Context:
        self._ensure_open("context")
        if self._context is None:
            self._context = resolve(self.environ, settings=self.settings)
            self.events.log(
                stage="context",
                level="info",
                message="context resolved",
                context=str(self._context),
                segments=self._context.segments,
            )
        return self._context

    def apply_preset(self, name: str, **params: Any) -> "Assembler":
        self._ensure_open("presets")
        self.registry.apply(self.store, name, events=self.events, **params)
        self._applied.append(name)
        return self

    def is_local_dev_environment(self) -> bool:
        return is_local_dev_environment(self.environ, settings=self.settings)

    def apply_defaults(self) -> "Assembler":
        """
        Aplica os presets padrão do contexto.

        Política:
            - sempre: `forbid_invalid_cache_hash`, `forbid_no_cache_parameter`
            - Development: `development` e, no ambiente local, `local_dev`
            - Production: `production`
            - Testing: nenhum preset adicional
        """
        context = self.context
        self.apply_preset("forbid_invalid_cache_hash")
        self.apply_preset("forbid_no_cache_parameter")

        if context.is_development():
            self.apply_preset("development")
            if self.is_local_dev_environment():
                mail_host = self.environ.get(self.settings.mail_host_env_var) or None
                self.apply_preset("local_dev", mail_host=mail_host)
        elif context.is_production():
            self.apply_preset("production")
        return self

    def append_context_to_site_name(self) -> "Assembler":
        context = self.context
        if not context.is_production():
            self.apply_preset(
                "append_context_to_site_name",
                context_name=str(context),
                path=self.settings.site_name_path,
            )
        return self

    def load_layers(self, base_path: Union[str, Path, None] = None) -> "Assembler":
        self._ensure_open("layers")
        base = base_path if base_path is not None else self.settings.fragment_dir
        if base is None:
            self.events.log(stage="layers", level="debug", message="no fragment directory configured")
            return self

        loaded = _load_layers(
            self.store,
            self.context,
            base,
            extensions=self.settings.fragment_extensions,
            registry=self.registry,
            events=self.events,
        )
        self._loaded.extend(loaded)
        return self

    def finish(self) -> AssemblyResult:
        self._ensure_open("finish")
        context = self.context
        self.store.freeze()

        snapshot = self.store.to_dict()
        config_hash = compute_config_hash(snapshot)
        self.events.log(stage="finish", level="info", message="store frozen", config_hash=config_hash)

        self._result = AssemblyResult(
            context=context,
            config=_read_only(snapshot),
            config_hash=config_hash,
            applied_presets=tuple(self._applied),
            loaded_fragments=tuple(self._loaded),
            events=tuple(dict(e) for e in self.events.events),
        )
        return self._result

    def run(self, base_path: Union[str, Path, None] = None) -> AssemblyResult:
        """Executa o pipeline completo conforme as settings."""
        self.resolve_context()
        if self.settings.apply_defaults:
            self.apply_defaults()
            if self.settings.append_context_to_site_name:
                self.append_context_to_site_name()
        self.load_layers(base_path)
        return self.finish()


def assemble(
    *,
    settings: Optional[AssemblerSettings] = None,
    registry: Optional[PresetRegistry] = None,
    environ: Optional[Mapping[str, str]] = None,
    store: Optional[ConfigStore] = None,
    base_path: Union[str, Path, None] = None,
) -> AssemblyResult:
    """Atalho para `Assembler(...).run(base_path)`."""
    return Assembler(
        settings=settings,
        registry=registry,
        environ=environ,
        store=store,
    ).run(base_path)
