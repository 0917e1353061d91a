"""Erros canônicos da resolução de contexto (envlayer)."""


class ContextError(Exception):
    """Erro base da resolução de contexto."""


class InvalidContextError(ContextError):
    """Nome de contexto vazio, malformado ou com raiz fora da allow-list."""
