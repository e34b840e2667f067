# src/atlas_infra/__init__.py
"""
Atlas Infra — resolução de configuração e binding de capabilities entre componentes.

Este pacote raiz define o namespace público do Atlas Infra, o núcleo de
provisionamento da plataforma: componentes descrevem recursos de nuvem via
configuração tipada, e binders conectam componentes calculando permissões
de menor privilégio e contratos de variáveis de ambiente.

Princípios centrais:
    - Configuração é resolvida em camadas explícitas e determinísticas
    - Bindings são resolvidos por strategies independentes, selecionadas por registry
    - Nenhuma decisão silenciosa: toda falha é explícita e tipada
    - Rastreabilidade é um requisito de primeira classe

Arquitetura em alto nível:
    - core.schema   → validação estrutural de configuração contra schema
    - core.config   → camadas de defaults, deep-merge, normalização e hashing
    - core.binding  → descriptor, contrato de strategy, registry e executor
    - binders       → strategies concretas por serviço alvo
    - components    → catálogo de schemas e defaults de componentes

Limites explícitos:
    - Não gera recursos reais do provedor de nuvem
    - Não contém CLI nem parsing de argumentos
    - Não realiza I/O de rede
"""
