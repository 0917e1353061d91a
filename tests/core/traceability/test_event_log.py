# tests/core/traceability/test_event_log.py
"""
Testes do event log estruturado da montagem.

Os testes asseguram que:
- cada evento contém metadados mínimos de rastreabilidade
- campos adicionais são preservados sem perda
- níveis desconhecidos são rejeitados
"""

from datetime import datetime

import pytest

from envlayer.core.traceability.events import EventLog


def test_log_structured_event():
    log = EventLog(assembly_id="a-1")
    log.log(stage="context", level="info", message="context resolved", context="Production")

    (event,) = log.events
    assert event["assembly_id"] == "a-1"
    assert event["stage"] == "context"
    assert event["level"] == "info"
    assert event["message"] == "context resolved"
    assert event["context"] == "Production"
    assert datetime.fromisoformat(event["timestamp"]).tzinfo is not None


def test_events_grow_in_order_and_filter_by_stage():
    log = EventLog()
    log.log(stage="presets", level="info", message="first")
    log.log(stage="layers", level="debug", message="second")
    log.log(stage="presets", level="info", message="third")

    assert [e["message"] for e in log.events] == ["first", "second", "third"]
    assert [e["message"] for e in log.for_stage("presets")] == ["first", "third"]


def test_assembly_ids_are_unique():
    assert EventLog().assembly_id != EventLog().assembly_id


def test_unknown_level_rejected():
    with pytest.raises(ValueError):
        EventLog().log(stage="x", level="fatal", message="nope")
