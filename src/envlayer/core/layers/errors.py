"""Erros canônicos do carregamento de fragmentos (envlayer).

Um fragmento ausente não é erro. Um fragmento presente que falha ao ser
lido ou executado interrompe a montagem.
"""

from pathlib import Path


class LayerError(Exception):
    """Erro base do carregamento em camadas."""


class FragmentLoadError(LayerError):
    """Fragmento presente falhou durante parse ou execução."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
