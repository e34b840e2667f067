# src/atlas_infra/core/__init__.py
"""
Core do Atlas Infra.

Este pacote reúne a implementação canônica e independente de adapters
das duas engines do Atlas Infra:

    - schema   → validação estrutural (coleta completa de violações)
    - config   → resolução de configuração em camadas (fallback, schema,
                 perfil nomeado, manifest do usuário)
    - binding  → resolução de bindings entre componentes (descriptor,
                 strategies, registry, executor em lote)

O core é projetado para ser:
    - determinístico
    - síncrono e livre de I/O de rede
    - testável de forma isolada
    - orientado a contratos explícitos

Limites explícitos:
    - Não define strategies concretas de serviço (ver `atlas_infra.binders`)
    - Não define schemas concretos de componente (ver `atlas_infra.components`)
    - Não materializa recursos de infraestrutura
"""
