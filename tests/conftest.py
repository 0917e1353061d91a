# tests/conftest.py
"""
Fixtures compartilhados para testes do envlayer.

Este módulo define fixtures reutilizáveis que fornecem:
- ambientes (`environ`) determinísticos, sem tocar `os.environ`
- conteúdo YAML de settings semelhante ao uso real
- um diretório de fragmentos montado sob `tmp_path`
- árvores de configuração vazias e pré-populadas

Decisões arquiteturais:
    - Ambientes são dicionários simples injetados explicitamente
    - Fragmentos são escritos sob `tmp_path`, nunca no repositório
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Limites explícitos:
    - Não substituir testes de integração do assembler
    - Não conter lógica condicional complexa
"""

from pathlib import Path
from typing import Callable, Dict

import pytest


# =====================================================
# Ambiente
# =====================================================

@pytest.fixture
def production_env() -> Dict[str, str]:
    return {"APP_CONTEXT": "Production"}


@pytest.fixture
def development_env() -> Dict[str, str]:
    return {"APP_CONTEXT": "Development"}


@pytest.fixture
def local_dev_env() -> Dict[str, str]:
    """
    Ambiente de desenvolvimento local (container), com capturador de e-mails.

    Usado por:
        - Testes do estágio de defaults no ambiente local
        - Testes do preset `local_dev`
    """
    return {
        "APP_CONTEXT": "Development/Local",
        "IS_DDEV_PROJECT": "true",
        "MH_SMTP_BIND_ADDR": "127.0.0.1:1025",
    }


# =====================================================
# Settings
# =====================================================

@pytest.fixture
def settings_defaults_yaml() -> str:
    """
    YAML de settings base (defaults) semelhante ao uso real do projeto.

    Invariantes:
        - YAML sintaticamente válido
        - Contém apenas chaves conhecidas de `AssemblerSettings`

    Returns:
        str: Conteúdo YAML das settings padrão.
    """
    return """\
context_env_var: APP_CONTEXT
default_context: Production
allowed_roots:
  - Development
  - Testing
  - Production
fragment_dir: config
"""


@pytest.fixture
def settings_local_yaml() -> str:
    return """\
default_context: Development
apply_defaults: false
"""


# =====================================================
# Store
# =====================================================

@pytest.fixture
def store():
    from envlayer.core.config.store import ConfigStore

    return ConfigStore()


@pytest.fixture
def populated_store():
    from envlayer.core.config.store import ConfigStore

    return ConfigStore(
        {
            "SYS": {"sitename": "Acme", "displayErrors": 0},
            "DB": {"Connections": {"Default": {"host": "mysql.internal", "port": "3307"}}},
        }
    )


# =====================================================
# Fragmentos
# =====================================================

@pytest.fixture
def write_fragment(tmp_path: Path) -> Callable[[str, str], Path]:
    """
    Fábrica de fragmentos sob `tmp_path / "config"`.

    Exemplo:
        write_fragment("production/qa.yaml", "FE:\\n  debug: true\\n")

    Returns:
        Callable[[str, str], Path]: função (caminho relativo, conteúdo) → Path.
    """
    base = tmp_path / "config"
    base.mkdir(exist_ok=True)

    def _write(relative: str, content: str) -> Path:
        path = base / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fragment_dir(tmp_path: Path) -> Path:
    base = tmp_path / "config"
    base.mkdir(exist_ok=True)
    return base
