"""Pipeline de montagem: contexto → presets → camadas → resultado imutável."""

from .assembler import Assembler, AssemblyResult, assemble
from .errors import AssemblyError, AssemblyFinishedError

__all__ = ["Assembler", "AssemblyError", "AssemblyFinishedError", "AssemblyResult", "assemble"]
