# src/envlayer/core/config/hashing.py
"""
Hashing canônico da configuração montada.

O hash representa a **identidade estrutural** da árvore final entregue à
aplicação e permite comparar montagens entre processos e ambientes.

Política de hashing (v1):
    - Serialização JSON canônica
    - Ordenação estável de chaves
    - Separadores compactos
    - Valores não serializáveis em JSON são convertidos via `str`
    - Chaves não-string são convertidas via `str`; colisões são rejeitadas
    - Codificação UTF-8 e algoritmo SHA-256

Invariantes:
    - Configurações estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""


import json
import hashlib
from typing import Dict, Any


def _stringify_keys(value: Any) -> Any:
    # sort_keys não aceita chaves mistas (int + str)
    if isinstance(value, dict):
        out: Dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key in out:
                raise ValueError(f"Chaves distintas colidem após normalização para string: {key!r}")
            out[key] = _stringify_keys(v)
        return out
    if isinstance(value, (list, tuple)):
        return [_stringify_keys(v) for v in value]
    return value


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash SHA-256 determinístico da configuração.

    Args:
        config (Dict[str, Any]): Árvore de configuração.

    Returns:
        str: Hash SHA-256 hexadecimal.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
        ValueError: Se chaves distintas (ex.: `1` e `"1"`) colidirem como string.
    """

    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        _stringify_keys(config),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
