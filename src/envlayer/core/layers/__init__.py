# src/envlayer/core/layers/__init__.py
"""Carregamento de fragmentos de configuração por camada de contexto."""

from .errors import FragmentLoadError, LayerError
from .loader import fragment_candidates, load_layers

__all__ = ["FragmentLoadError", "LayerError", "fragment_candidates", "load_layers"]
