"""Erros canônicos do pipeline de montagem (envlayer)."""


class AssemblyError(Exception):
    """Erro base do domínio de montagem."""


class AssemblyFinishedError(AssemblyError, RuntimeError):
    """Estágio executado após `finish()`."""
