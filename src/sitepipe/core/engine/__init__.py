# src/sitepipe/core/engine/__init__.py
"""
Engine do sitepipe.

Este pacote contém a validação estrutural e a execução do grafo de build.

Componentes principais:
    - planner → descoberta do grafo a partir das fontes, detecção de ciclos
                e ordenação topológica determinística
    - engine  → disparo das fontes, join de todo o trabalho despachado e
                consolidação das falhas em RunResult

Invariantes:
    - Nenhuma fonte é disparada antes de o grafo ser validado
    - O build só termina quando não resta trabalho pendente
    - Toda falha de ramo aparece no RunResult
"""

from .engine import Engine, RunResult
from .planner import CycleDetectedError, plan_graph

__all__ = ["Engine", "RunResult", "CycleDetectedError", "plan_graph"]
