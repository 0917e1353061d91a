# src/envlayer/core/presets/builtin.py
"""
Presets embutidos do envlayer.

A árvore segue o layout de configuração do CMS:
    - BE / FE: flags de backend e frontend
    - SYS: sistema (erros, hosts confiáveis, caching, handlers)
    - GFX: ferramentas de processamento de imagem
    - MAIL: transporte de e-mail
    - DB: conexões de banco de dados
    - LOG: configuração de writers de log

Todos os presets são funções puras que retornam listas de `Write`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from .errors import PresetParameterError
from .registry import PresetRegistry
from .types import Preset, Write, append, concat, merge_defaults, set_


DEBUG_FLAG_PATHS = ("BE.debug", "FE.debug")

DEPRECATION_WRITER_PATH = (
    "LOG", "TYPO3", "CMS", "deprecations", "writerConfiguration",
    "notice", "TYPO3\\CMS\\Core\\Log\\Writer\\FileWriter", "disabled",
)

REDIS_BACKEND = "TYPO3\\CMS\\Core\\Cache\\Backend\\RedisBackend"

CACHE_LIFETIME_30_DAYS = 86400 * 30

DEFAULT_FILE_CACHES = ("cache_core", "fluid_template", "assets", "l10n")

LOCAL_DEV_DATABASE = {
    "dbname": "db",
    "host": "db",
    "password": "db",
    "port": "3306",
    "user": "db",
}


def _require_str(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise PresetParameterError(f"'{name}' must be a non-empty string")
    return value


def _require_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise PresetParameterError(f"'{name}' must be an integer")
    return value


# ---------------------------------------------------------------------------
# Contexto
# ---------------------------------------------------------------------------

def production() -> List[Write]:
    return [
        set_("BE.debug", False),
        set_("FE.debug", False),
        set_("SYS.devIPmask", ""),
        set_("SYS.displayErrors", -1),
        set_("SYS.trustedHostsPattern", "SERVER_NAME"),
    ]


def development() -> List[Write]:
    return [
        set_("BE.debug", True),
        set_("FE.debug", True),
        set_("SYS.devIPmask", "*"),
        set_("SYS.displayErrors", 1),
        set_("SYS.trustedHostsPattern", ".*.*"),
        *enable_deprecation_logging(),
    ]


def local_dev(mail_host: Optional[str] = None) -> List[Write]:
    """Banco do container local, ImageMagick e Mailhog."""
    return [
        *database_connection(LOCAL_DEV_DATABASE),
        *image_magick(),
        *mailhog(mail_host or "localhost"),
    ]


# ---------------------------------------------------------------------------
# Processamento de imagem
# ---------------------------------------------------------------------------

def _image_processor(processor: str, path: str) -> List[Write]:
    path = _require_str("path", path)
    return [
        set_("GFX.processor", processor),
        set_("GFX.processor_path", path),
        set_("GFX.processor_path_lzw", path),
    ]


def image_magick(path: str = "/usr/bin/") -> List[Write]:
    return _image_processor("ImageMagick", path)


def graphics_magick(path: str = "/usr/bin/") -> List[Write]:
    return _image_processor("GraphicsMagick", path)


# ---------------------------------------------------------------------------
# E-mail
# ---------------------------------------------------------------------------

def mailhog(host: str = "localhost", port: Optional[int] = None) -> List[Write]:
    host = _require_str("host", host)
    server = host
    if port:
        server = f"{host}:{_require_int('port', port)}"
    return [
        set_("MAIL.transport", "smtp"),
        set_("MAIL.transport_smtp_encrypt", ""),
        set_("MAIL.transport_smtp_password", ""),
        set_("MAIL.transport_smtp_server", server),
        set_("MAIL.transport_smtp_username", ""),
    ]


# ---------------------------------------------------------------------------
# Parâmetros de cache do frontend
# ---------------------------------------------------------------------------

def allow_no_cache_parameter() -> List[Write]:
    return [set_("FE.disableNoCacheParameter", False)]


def forbid_no_cache_parameter() -> List[Write]:
    return [set_("FE.disableNoCacheParameter", True)]


def allow_invalid_cache_hash() -> List[Write]:
    return [set_("FE.pageNotFoundOnCHashError", False)]


def forbid_invalid_cache_hash() -> List[Write]:
    return [set_("FE.pageNotFoundOnCHashError", True)]


def cache_hash_excluded_parameter(parameter: str) -> List[Write]:
    return [append("FE.cacheHash.excludedParameters", _require_str("parameter", parameter))]


# ---------------------------------------------------------------------------
# Logging e erros
# ---------------------------------------------------------------------------

def enable_deprecation_logging() -> List[Write]:
    return [set_(DEPRECATION_WRITER_PATH, False)]


def disable_deprecation_logging() -> List[Write]:
    return [set_(DEPRECATION_WRITER_PATH, True)]


def exception_handlers(production_handler: str, debug_handler: str) -> List[Write]:
    return [
        set_("SYS.productionExceptionHandler", _require_str("production_handler", production_handler)),
        set_("SYS.debugExceptionHandler", _require_str("debug_handler", debug_handler)),
    ]


# ---------------------------------------------------------------------------
# Caching
# ---------------------------------------------------------------------------

def default_redis_caches(*, legacy_cache_names: bool = False) -> Dict[str, int]:
    """Caches recomendados para Redis e seus lifetimes padrão (segundos)."""
    prefix = "cache_" if legacy_cache_names else ""
    return {
        f"{prefix}pages": CACHE_LIFETIME_30_DAYS,
        f"{prefix}pagesection": CACHE_LIFETIME_30_DAYS,
        f"{prefix}hash": CACHE_LIFETIME_30_DAYS,
        f"{prefix}rootline": CACHE_LIFETIME_30_DAYS,
        f"{prefix}extbase": 0,
    }


def redis_caching(
    caches: Optional[Mapping[str, int]] = None,
    host: str = "127.0.0.1",
    start_db: int = 0,
    port: int = 6379,
    backend: Optional[str] = None,
    legacy_cache_names: bool = False,
) -> List[Write]:
    """
    Ativa caching em Redis, um database por cache.

    Os databases são atribuídos em ordem, a partir de `start_db`.
    """
    host = _require_str("host", host)
    db = _require_int("start_db", start_db)
    port = _require_int("port", port)
    backend = _require_str("backend", backend) if backend is not None else REDIS_BACKEND
    if caches is None:
        caches = default_redis_caches(legacy_cache_names=legacy_cache_names)
    if not isinstance(caches, Mapping):
        raise PresetParameterError("'caches' must be a mapping of cache name to lifetime")

    writes: List[Write] = []
    for cache_name, lifetime in caches.items():
        base = ("SYS", "caching", "cacheConfigurations", cache_name)
        writes.append(set_(base + ("backend",), backend))
        writes.append(
            set_(
                base + ("options",),
                {
                    "database": db,
                    "hostname": host,
                    "port": port,
                    "defaultLifetime": _require_int("lifetime", lifetime),
                },
            )
        )
        db += 1
    return writes


def alternative_cache_path(path: str, caches: Optional[Sequence[str]] = None) -> List[Write]:
    path = _require_str("path", path)
    if caches is None:
        caches = DEFAULT_FILE_CACHES
    if not isinstance(caches, (list, tuple)):
        raise PresetParameterError("'caches' must be a list of cache names")
    caches = [_require_str("caches[]", name) for name in caches]
    return [
        set_(("SYS", "caching", "cacheConfigurations", name, "options", "cacheDirectory"), path)
        for name in caches
    ]


# ---------------------------------------------------------------------------
# Banco de dados e identidade
# ---------------------------------------------------------------------------

def database_connection(options: Mapping[str, Any], connection_name: str = "Default") -> List[Write]:
    """Preenche a conexão com `options` sem sobrescrever valores existentes."""
    if not isinstance(options, Mapping):
        raise PresetParameterError("'options' must be a mapping")
    connection_name = _require_str("connection_name", connection_name)
    return [merge_defaults(("DB", "Connections", connection_name), dict(options))]


def append_context_to_site_name(context_name: str, path: str = "SYS.sitename") -> List[Write]:
    return [concat(path, f" - {_require_str('context_name', context_name)}")]


BUILTIN_PRESETS = (
    Preset("production", production, "debug off, errors hidden, trusted hosts locked"),
    Preset("development", development, "debug on, errors shown, trusted hosts open, deprecation log"),
    Preset("local_dev", local_dev, "local container database, ImageMagick and Mailhog"),
    Preset("image_magick", image_magick, "ImageMagick as image processor"),
    Preset("graphics_magick", graphics_magick, "GraphicsMagick as image processor"),
    Preset("mailhog", mailhog, "SMTP transport to a local mail catcher"),
    Preset("allow_no_cache_parameter", allow_no_cache_parameter, "allow the no_cache query parameter"),
    Preset("forbid_no_cache_parameter", forbid_no_cache_parameter, "ignore the no_cache query parameter"),
    Preset("allow_invalid_cache_hash", allow_invalid_cache_hash, "render pages with an invalid cHash"),
    Preset("forbid_invalid_cache_hash", forbid_invalid_cache_hash, "404 on an invalid cHash"),
    Preset("cache_hash_excluded_parameter", cache_hash_excluded_parameter, "exclude a query parameter from cHash"),
    Preset("enable_deprecation_logging", enable_deprecation_logging, "write deprecations to the log file"),
    Preset("disable_deprecation_logging", disable_deprecation_logging, "stop writing deprecations"),
    Preset("exception_handlers", exception_handlers, "production and debug exception handlers"),
    Preset("redis_caching", redis_caching, "Redis cache backend, one database per cache"),
    Preset("alternative_cache_path", alternative_cache_path, "cache directory for file caches"),
    Preset("database_connection", database_connection, "backfill a database connection"),
    Preset("append_context_to_site_name", append_context_to_site_name, "suffix the site name with the context"),
)


def default_registry() -> PresetRegistry:
    """Retorna um novo registro contendo todos os presets embutidos."""
    registry = PresetRegistry()
    for preset in BUILTIN_PRESETS:
        registry.register(preset)
    return registry
