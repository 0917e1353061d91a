# tests/core/context/test_resolver.py
"""
Testes da resolução de contexto (`resolve`, `parse_context`).

Os testes asseguram que:
- a variável de override tem prioridade sobre o contexto padrão
- `Production/Qa` produz a cadeia `["Production", "Qa"]`
- raízes fora da allow-list e nomes malformados são rejeitados
- a flag de ambiente local exige exatamente `"true"`
"""

import pytest

from envlayer.core.config.settings import AssemblerSettings
from envlayer.core.context.errors import ContextError, InvalidContextError
from envlayer.core.context.resolver import is_local_dev_environment, parse_context, resolve


def test_resolve_uses_override_variable(development_env):
    ctx = resolve(development_env)
    assert ctx.name == "Development"
    assert ctx.parent is None
    assert ctx.is_development()


def test_resolve_falls_back_to_default_context():
    ctx = resolve({})
    assert ctx.name == "Production"
    assert ctx.is_production()


def test_resolve_blank_variable_falls_back():
    assert resolve({"APP_CONTEXT": "   "}).name == "Production"


def test_resolve_sub_context_chain():
    ctx = resolve({"APP_CONTEXT": "Production/Qa"})
    assert ctx.segments == ["Production", "Qa"]
    assert [str(c) for c in ctx.ancestors()] == ["Production", "Production/Qa"]
    assert ctx.parent.name == "Production"
    assert ctx.is_production()


def test_resolve_honours_custom_settings():
    settings = AssemblerSettings(context_env_var="TYPO3_CONTEXT", default_context="Testing")
    assert resolve({"TYPO3_CONTEXT": "Development/Docker"}, settings=settings).name == "Development/Docker"
    assert resolve({"APP_CONTEXT": "Development"}, settings=settings).name == "Testing"


def test_resolve_reads_os_environ_by_default(monkeypatch):
    monkeypatch.setenv("APP_CONTEXT", "Testing/Ci")
    ctx = resolve()
    assert ctx.name == "Testing/Ci"
    assert ctx.is_testing()


@pytest.mark.parametrize(
    "name",
    ["Staging", "production", "Production//Qa", "/Production", "Production/", ""],
)
def test_invalid_context_names_raise(name):
    with pytest.raises(InvalidContextError):
        parse_context(name, allowed_roots=("Development", "Testing", "Production"))


@pytest.mark.parametrize("name", ["Production/../../etc", "Production/.", "Production/Qa/.."])
def test_relative_segments_are_rejected(name):
    with pytest.raises(InvalidContextError, match="relative segment"):
        parse_context(name, allowed_roots=("Development", "Testing", "Production"))


def test_invalid_context_from_environment_raises():
    with pytest.raises(ContextError):
        resolve({"APP_CONTEXT": "Staging/Qa"})


def test_allowed_roots_are_configurable():
    settings = AssemblerSettings(allowed_roots=("Staging",), default_context="Staging")
    ctx = resolve({}, settings=settings)
    assert ctx.name == "Staging"
    assert not ctx.is_production()
    assert not ctx.is_development()


@pytest.mark.parametrize(
    "value, expected",
    [("true", True), ("TRUE", False), ("1", False), ("", False), (None, False)],
)
def test_local_dev_flag_requires_exact_true(value, expected):
    env = {} if value is None else {"IS_DDEV_PROJECT": value}
    assert is_local_dev_environment(env) is expected
