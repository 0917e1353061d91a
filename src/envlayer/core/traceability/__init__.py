# src/envlayer/core/traceability/__init__.py
"""Rastreabilidade da montagem: event log estruturado."""

from .events import LEVELS, EventLog

__all__ = ["EventLog", "LEVELS"]
