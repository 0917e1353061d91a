# tests/core/assembly/test_assembler.py
"""
Testes do pipeline de montagem (`Assembler`, `assemble`).

Os testes asseguram que:
- os presets padrão dependem do contexto resolvido
- o ambiente local aplica banco, ImageMagick e Mailhog
- o nome do site recebe o contexto fora de produção
- fragmentos são aplicados depois dos presets
- o resultado é imutável e a árvore termina congelada
"""

import pytest

from envlayer.core.assembly.assembler import Assembler, AssemblyResult, assemble
from envlayer.core.assembly.errors import AssemblyError, AssemblyFinishedError
from envlayer.core.config.errors import StoreFrozenError
from envlayer.core.config.settings import AssemblerSettings
from envlayer.core.config.store import ConfigStore
from envlayer.core.context.errors import InvalidContextError
from envlayer.core.layers.errors import FragmentLoadError
from envlayer.core.presets.errors import UnknownPresetError
from envlayer.core.presets.registry import PresetRegistry


def test_production_assembly(production_env):
    result = assemble(environ=production_env, store=ConfigStore({"SYS": {"sitename": "Acme"}}))

    assert isinstance(result, AssemblyResult)
    assert result.context.name == "Production"
    assert result.applied_presets == (
        "forbid_invalid_cache_hash",
        "forbid_no_cache_parameter",
        "production",
    )
    assert result.config["BE"]["debug"] is False
    assert result.config["FE"]["debug"] is False
    assert result.config["FE"]["disableNoCacheParameter"] is True
    assert result.config["FE"]["pageNotFoundOnCHashError"] is True
    assert result.config["SYS"]["sitename"] == "Acme"


def test_development_assembly(development_env):
    result = assemble(environ=development_env, store=ConfigStore({"SYS": {"sitename": "Acme"}}))

    assert result.config["BE"]["debug"] is True
    assert result.config["SYS"]["trustedHostsPattern"] == ".*.*"
    assert result.config["SYS"]["sitename"] == "Acme - Development"
    assert "local_dev" not in result.applied_presets
    assert "DB" not in result.config


def test_local_dev_assembly(local_dev_env):
    store = ConfigStore({"DB": {"Connections": {"Default": {"password": "secret"}}}})
    result = assemble(environ=local_dev_env, store=store)

    assert "local_dev" in result.applied_presets
    conn = result.config["DB"]["Connections"]["Default"]
    assert conn["host"] == "db"
    assert conn["password"] == "secret"
    assert result.config["GFX"]["processor"] == "ImageMagick"
    assert result.config["MAIL"]["transport_smtp_server"] == "127.0.0.1:1025"
    assert result.config["SYS"]["sitename"] == " - Development/Local"


def test_local_dev_flag_ignored_outside_development():
    result = assemble(environ={"APP_CONTEXT": "Production", "IS_DDEV_PROJECT": "true"})
    assert "local_dev" not in result.applied_presets
    assert "GFX" not in result.config


def test_testing_gets_only_cache_presets():
    result = assemble(environ={"APP_CONTEXT": "Testing"})
    assert result.applied_presets == (
        "forbid_invalid_cache_hash",
        "forbid_no_cache_parameter",
        "append_context_to_site_name",
    )
    assert "BE" not in result.config
    assert result.config["SYS"]["sitename"] == " - Testing"


def test_defaults_can_be_disabled(development_env):
    settings = AssemblerSettings(apply_defaults=False)
    result = assemble(environ=development_env, settings=settings)
    assert result.applied_presets == ()
    assert dict(result.config) == {}


def test_fragments_override_presets(write_fragment, fragment_dir):
    write_fragment("production.yaml", "SYS:\n  displayErrors: 0\n")
    write_fragment("production/qa.py", "config.set('BE.debug', True)\n")

    result = assemble(
        environ={"APP_CONTEXT": "Production/Qa"},
        base_path=fragment_dir,
    )

    assert result.config["SYS"]["displayErrors"] == 0
    assert result.config["BE"]["debug"] is True
    assert result.config["FE"]["debug"] is False
    assert result.loaded_fragments == (
        fragment_dir / "production.yaml",
        fragment_dir / "production" / "qa.py",
    )
    assert "sitename" not in result.config["SYS"]


def test_fragment_dir_from_settings(write_fragment, fragment_dir):
    write_fragment("testing.yaml", "MAIL:\n  transport: 'null'\n")
    settings = AssemblerSettings(fragment_dir=str(fragment_dir))
    result = assemble(environ={"APP_CONTEXT": "Testing"}, settings=settings)
    assert result.config["MAIL"]["transport"] == "null"


def test_result_is_read_only(production_env):
    result = assemble(environ=production_env)
    with pytest.raises(TypeError):
        result.config["FE"]["debug"] = True
    with pytest.raises(TypeError):
        result.config["NEW"] = {}


def test_store_is_frozen_after_run(production_env):
    assembler = Assembler(environ=production_env)
    assembler.run()
    assert assembler.finished
    with pytest.raises(StoreFrozenError):
        assembler.store.set("FE.debug", True)
    with pytest.raises(AssemblyFinishedError):
        assembler.apply_preset("development")
    with pytest.raises(AssemblyFinishedError):
        assembler.finish()
    assert issubclass(AssemblyFinishedError, AssemblyError)


def test_explicit_stages(development_env):
    assembler = Assembler(environ=development_env)
    assembler.resolve_context()
    assembler.apply_preset("development").apply_preset("redis_caching", host="redis")
    result = assembler.finish()

    assert result.applied_presets == ("development", "redis_caching")
    assert result.config["SYS"]["caching"]["cacheConfigurations"]["pages"]["options"]["hostname"] == "redis"


def test_hash_matches_identical_assemblies(production_env):
    a = assemble(environ=production_env)
    b = assemble(environ=production_env)
    assert a.config_hash == b.config_hash
    assert a.config_hash != assemble(environ={"APP_CONTEXT": "Development"}).config_hash


def test_events_cover_every_stage(production_env, write_fragment, fragment_dir):
    write_fragment("production.yaml", "FE:\n  debug: false\n")
    result = assemble(environ=production_env, base_path=fragment_dir)
    stages = {e["stage"] for e in result.events}
    assert stages == {"context", "presets", "layers", "finish"}
    assert len({e["assembly_id"] for e in result.events}) == 1


def test_invalid_context_aborts():
    with pytest.raises(InvalidContextError):
        assemble(environ={"APP_CONTEXT": "Staging"})


def test_registry_without_builtins_aborts(production_env):
    with pytest.raises(UnknownPresetError):
        assemble(environ=production_env, registry=PresetRegistry())


def test_fragment_failure_aborts(production_env, write_fragment, fragment_dir):
    write_fragment("production.py", "1 / 0\n")
    assembler = Assembler(environ=production_env)
    with pytest.raises(FragmentLoadError):
        assembler.run(fragment_dir)
    assert not assembler.finished
