# src/envlayer/core/config/settings.py
"""
Settings do próprio assembler do envlayer.

Este módulo define `AssemblerSettings`, o conjunto explícito de parâmetros
que controla a montagem (nomes de variáveis de ambiente, contexto padrão,
diretório de fragmentos, estágios automáticos), e o loader que resolve
essas settings a partir de arquivos.

As settings são resolvidas a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional)

Princípios fundamentais:
    - Settings são declarativas e explícitas
    - Chaves desconhecidas são rejeitadas, nunca ignoradas
    - A mesma entrada sempre produz as mesmas settings

Limites explícitos:
    - Não resolve o contexto de execução
    - Não escreve na árvore de configuração da aplicação
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    InvalidConfigRootTypeError,
    InvalidSettingsError,
    SettingsNotFoundError,
    UnsupportedConfigFormatError,
)


DEFAULT_ALLOWED_ROOTS: Tuple[str, ...] = ("Development", "Testing", "Production")
DEFAULT_FRAGMENT_EXTENSIONS: Tuple[str, ...] = (".yaml", ".yml", ".json", ".py")


@dataclass(frozen=True)
class AssemblerSettings:
    """
    Parâmetros canônicos da montagem de configuração.

    Campos:
        - context_env_var: variável de ambiente com o contexto (ex.: `Production/Qa`)
        - default_context: contexto usado quando a variável está ausente
        - allowed_roots: nomes de contexto raiz aceitos
        - local_dev_env_var: flag de ambiente de desenvolvimento local
        - mail_host_env_var: endereço SMTP do capturador de e-mails local
        - fragment_dir: diretório base dos fragmentos (None desativa o estágio)
        - fragment_extensions: extensões procuradas por camada, em ordem
        - apply_defaults: aplica os presets padrão do contexto
        - append_context_to_site_name: sufixa o nome do site fora de produção
        - site_name_path: key path do nome do site
    """

    context_env_var: str = "APP_CONTEXT"
    default_context: str = "Production"
    allowed_roots: Tuple[str, ...] = DEFAULT_ALLOWED_ROOTS
    local_dev_env_var: str = "IS_DDEV_PROJECT"
    mail_host_env_var: str = "MH_SMTP_BIND_ADDR"
    fragment_dir: Optional[str] = None
    fragment_extensions: Tuple[str, ...] = DEFAULT_FRAGMENT_EXTENSIONS
    apply_defaults: bool = True
    append_context_to_site_name: bool = True
    site_name_path: str = "SYS.sitename"

    def with_overrides(self, **overrides: Any) -> "AssemblerSettings":
        return settings_from_mapping(overrides, base=self)


_TUPLE_FIELDS = {"allowed_roots", "fragment_extensions"}
_BOOL_FIELDS = {"apply_defaults", "append_context_to_site_name"}


def settings_from_mapping(
    data: Dict[str, Any],
    *,
    base: Optional[AssemblerSettings] = None,
) -> AssemblerSettings:
    """
    Constrói `AssemblerSettings` a partir de um dicionário.

    Raises:
        InvalidSettingsError: Para chaves desconhecidas ou tipos inválidos.
    """
    base = base or AssemblerSettings()
    known = {f.name for f in fields(AssemblerSettings)}

    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidSettingsError(f"chaves de settings desconhecidas: {unknown}")

    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key in _TUPLE_FIELDS:
            if isinstance(value, str) or not isinstance(value, (list, tuple)):
                raise InvalidSettingsError(f"'{key}' deve ser uma lista de strings")
            value = tuple(str(v) for v in value)
            if not value:
                raise InvalidSettingsError(f"'{key}' não pode ser vazio")
        elif key in _BOOL_FIELDS:
            if not isinstance(value, bool):
                raise InvalidSettingsError(f"'{key}' deve ser booleano")
        elif key == "fragment_dir":
            if value is not None:
                value = str(value)
        elif not isinstance(value, str) or not value.strip():
            raise InvalidSettingsError(f"'{key}' deve ser uma string não vazia")
        values[key] = value

    return replace(base, **values)


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de settings e valida sua estrutura básica.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Decisões arquiteturais:
        - Arquivos vazios são interpretados como dicionários vazios
        - Formatos não suportados geram erro explícito

    Raises:
        SettingsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise SettingsNotFoundError(f"Arquivo de settings não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Settings root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_settings(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> AssemblerSettings:
    """
    Carrega e resolve as settings efetivas do assembler.

    Política de resolução:
        - O arquivo de defaults é obrigatório
        - O arquivo local é opcional e, quando presente, tem prioridade
        - A resolução utiliza `deep_merge`

    Args:
        defaults_path (str): Caminho para o arquivo base.
        local_path (Optional[str]): Caminho opcional para overrides locais.

    Returns:
        AssemblerSettings: Settings resolvidas.

    Raises:
        SettingsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        InvalidSettingsError: Se houver chaves desconhecidas ou tipos inválidos.
    """

    effective = _load_file(Path(defaults_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return settings_from_mapping(effective)
