# src/sitepipe/core/__init__.py
"""
Core do sitepipe.

Este pacote reúne o motor genérico de dataflow, independente dos estágios
concretos de build de site.

Componentes principais:
    - record     → FileRecord (valor que flui pelo grafo)
    - pipeline   → Pipe (nó do grafo), PipeKind e RunContext
    - engine     → planner (aciclicidade/ordem) e Engine (driver da execução)
    - config     → resolução de configuração (defaults + override local)
    - errors     → catálogo canônico de erros serializáveis
    - exceptions → exceções tipadas levantadas pelos estágios

Limites explícitos:
    - Não contém lógica de markdown ou templates
    - Não conhece o layout de diretórios de um site
"""
