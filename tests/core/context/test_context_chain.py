# tests/core/context/test_context_chain.py
"""Testes da cadeia imutável de `Context`."""

import dataclasses

import pytest

from envlayer.core.context.types import Context


def _chain(*segments):
    ctx = None
    for i in range(len(segments)):
        ctx = Context("/".join(segments[: i + 1]), parent=ctx)
    return ctx


def test_segment_and_root():
    ctx = _chain("Development", "Docker", "Alice")
    assert ctx.segment == "Alice"
    assert ctx.root.name == "Development"
    assert ctx.root.parent is None


def test_ancestors_are_root_to_leaf_and_terminate():
    ctx = _chain("Production", "Qa", "Eu")
    names = [c.name for c in ctx.ancestors()]
    assert names == ["Production", "Production/Qa", "Production/Qa/Eu"]
    assert ctx.ancestors()[-1] is ctx


def test_root_predicates():
    assert _chain("Testing").is_testing()
    assert not _chain("Testing").is_production()
    assert _chain("Development", "Local").is_development()


def test_context_is_immutable():
    ctx = _chain("Production")
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctx.name = "Development"


def test_str_is_full_name():
    assert str(_chain("Production", "Qa")) == "Production/Qa"
