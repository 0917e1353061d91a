# src/envlayer/core/__init__.py
"""
Core do envlayer.

Este pacote reúne as responsabilidades da montagem de configuração:
    - core.context       → resolução do contexto de implantação
    - core.config        → árvore de configuração, merge, hashing e settings
    - core.presets       → presets nomeados e registro
    - core.layers        → fragmentos por camada de contexto
    - core.assembly      → pipeline de montagem e resultado imutável
    - core.traceability  → event log estruturado

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de estado global
"""
