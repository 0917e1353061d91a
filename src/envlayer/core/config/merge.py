# src/envlayer/core/config/merge.py
"""
Utilitários canônicos de merge da árvore de configuração.

Este módulo implementa as duas políticas de merge utilizadas pelo envlayer:

Política `deep_merge` (override, o último vence):
    - dict + dict → merge recursivo por chave
    - list        → sobrescrita total (sem merge elemento a elemento)
    - escalar     → sobrescrita direta, inclusive entre tipos escalares distintos
    - dict vs não-dict → o override substitui o valor da base por inteiro

Política `backfill_merge` (o existente vence):
    - dict + dict → merge recursivo por chave
    - chave ausente no existente → preenchida a partir dos defaults
    - qualquer outro caso → o valor existente é preservado

Princípios fundamentais:
    - Ambos os merges são determinísticos e puramente funcionais
    - Nenhum input é mutado durante o processo

Limites explícitos:
    - Não carrega arquivos de configuração
    - Não conhece key paths nem o `ConfigStore`
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico em que o override tem precedência.

    Utilizado na aplicação de fragmentos declarativos (YAML/JSON) e na
    resolução de settings (defaults + local).

    Decisões arquiteturais:
        - O merge é puramente funcional (inputs não são mutados)
        - Um mapa substituído por escalar ou `None` (ou o inverso) não conflita:
          o override sempre vence
        - Escalares de tipos diferentes não conflitam (ex.: `1` → `"1"`)

    Invariantes:
        - A estrutura retornada é sempre um novo dicionário
        - Chaves não presentes no override são preservadas da base

    Args:
        base (Dict[str, Any]): Configuração base.
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Nova configuração resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se `base` ou `override` não forem dicts.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        # dict -> merge recursivo
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        # list / escalar / mapa vs não-mapa -> sobrescrita
        result[key] = deepcopy(override_value)

    return result


def backfill_merge(existing: Dict[str, Any], defaults: Dict[str, Any]) -> Dict[str, Any]:
    """
    Preenche lacunas de `existing` a partir de `defaults`, sem sobrescrever.

    Dado `{"a": 1}` e defaults `{"a": 2, "b": 3}`, o resultado é
    `{"a": 1, "b": 3}`.

    Invariantes:
        - Nenhuma chave já presente em `existing` é alterada
        - O merge nunca falha por diferença de tipos
    """
    result: Dict[str, Any] = deepcopy(existing)

    for key, default_value in defaults.items():
        if key not in result:
            result[key] = deepcopy(default_value)
            continue

        current = result[key]
        if isinstance(current, dict) and isinstance(default_value, dict):
            result[key] = backfill_merge(current, default_value)

    return result
