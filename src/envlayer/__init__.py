# src/envlayer/__init__.py
"""
envlayer — montagem de configuração em camadas por contexto de implantação.

O envlayer monta, na inicialização do processo, a árvore de configuração
de uma aplicação CMS a partir de:
    - um contexto de implantação (Development, Testing, Production e sub-contextos)
    - presets nomeados (debug, hosts confiáveis, cache, e-mail, imagem, ...)
    - fragmentos de configuração por camada de contexto

Princípios centrais:
    - Nenhum estado global: a árvore é um objeto explícito
    - A montagem ocorre uma única vez e termina congelada
    - Falhas são explícitas e interrompem a inicialização

Uso típico:

    from envlayer import assemble

    result = assemble(base_path="config")
    result.config["FE"]["debug"]
"""

from .core.assembly import Assembler, AssemblyFinishedError, AssemblyResult, assemble
from .core.config import AssemblerSettings, ConfigStore, NotFoundError, load_settings
from .core.context import Context, InvalidContextError, resolve
from .core.layers import FragmentLoadError, load_layers
from .core.presets import PresetRegistry, UnknownPresetError, default_registry

__all__ = [
    "Assembler",
    "AssemblerSettings",
    "AssemblyFinishedError",
    "AssemblyResult",
    "ConfigStore",
    "Context",
    "FragmentLoadError",
    "InvalidContextError",
    "NotFoundError",
    "PresetRegistry",
    "UnknownPresetError",
    "assemble",
    "default_registry",
    "load_layers",
    "load_settings",
    "resolve",
]
