"""Erros canônicos do registro de presets (envlayer).

Falhas de preset interrompem a montagem: não existe fallback para um
preset desconhecido ou mal parametrizado.
"""


class PresetError(Exception):
    """Erro base do domínio de presets."""


class UnknownPresetError(PresetError):
    """Nome de preset não registrado."""


class DuplicatePresetError(PresetError, ValueError):
    """Preset registrado duas vezes com o mesmo nome."""


class PresetParameterError(PresetError):
    """Parâmetros ausentes ou inválidos para o preset."""
