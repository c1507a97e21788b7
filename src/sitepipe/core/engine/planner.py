# src/sitepipe/core/engine/planner.py
"""
Planejador do grafo de build.

Este módulo valida a estrutura do grafo já ligado (a partir de seus nós de
origem) antes que qualquer fonte seja disparada, e produz uma ordem
topológica determinística dos Pipes alcançáveis.

O planner opera exclusivamente em nível estrutural, analisando:
    - identificadores de Pipes
    - ligações downstream
    - formação de ciclos

Decisões arquiteturais:
    - O grafo é descoberto a partir das fontes (não existe registro global)
    - A ordenação usa o algoritmo de Kahn
    - Empates são resolvidos pela ordem de descoberta (fontes na ordem
      recebida, downstream na ordem de ligação)
    - Ids repetidos são permitidos: a identidade de um Pipe é a referência

Invariantes:
    - Nenhum Pipe aparece antes de um Pipe que o alimenta
    - Todo Pipe alcançável aparece exatamente uma vez
    - A mesma montagem de grafo produz sempre a mesma ordem

Limites explícitos:
    - Não executa Pipes
    - Não interage com RunContext
"""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List

from sitepipe.core.pipeline.pipe import Pipe


class CycleDetectedError(ValueError):
    """
    Exceção levantada quando as ligações entre Pipes formam um ciclo.

    Um ciclo faria um valor circular indefinidamente pelo grafo; o build
    exige um grafo acíclico e nenhuma fonte é disparada quando um ciclo
    é detectado.

    Limites explícitos:
        - Não tenta resolver ou quebrar ciclos automaticamente
        - Não modifica as ligações dos Pipes
    """


def _discover(sources: List[Pipe]) -> List[Pipe]:
    seen: Dict[int, Pipe] = {}
    order: List[Pipe] = []
    queue = deque(sources)
    while queue:
        pipe = queue.popleft()
        if id(pipe) in seen:
            continue
        seen[id(pipe)] = pipe
        order.append(pipe)
        queue.extend(pipe.downstream)
    return order


def plan_graph(sources: Iterable[Pipe]) -> List[Pipe]:
    """
    Valida o grafo alcançável a partir de `sources` e o ordena topologicamente.

    Args:
        sources (Iterable[Pipe]): Nós disparados sem entrada pelo Engine.

    Returns:
        List[Pipe]: Pipes alcançáveis em ordem topológica determinística.

    Raises:
        ValueError: Se algum Pipe possuir `id` inválido.
        CycleDetectedError: Se houver ciclo entre as ligações.
    """
    nodes = _discover(list(sources))
    for pipe in nodes:
        pid = getattr(pipe, "id", None)
        if not isinstance(pid, str) or not pid.strip():
            raise ValueError("pipe.id must be a non-empty string")

    position = {id(p): i for i, p in enumerate(nodes)}
    incoming_count: Dict[int, int] = {id(p): 0 for p in nodes}
    for pipe in nodes:
        for child in pipe.downstream:
            incoming_count[id(child)] += 1

    ready: List[Pipe] = [p for p in nodes if incoming_count[id(p)] == 0]
    order: List[Pipe] = []

    while ready:
        pipe = ready.pop(0)
        order.append(pipe)
        for child in pipe.downstream:
            incoming_count[id(child)] -= 1
            if incoming_count[id(child)] == 0:
                ready.append(child)
                ready.sort(key=lambda p: position[id(p)])

    if len(order) != len(nodes):
        stuck = sorted({p.id for p in nodes if incoming_count[id(p)] > 0})
        raise CycleDetectedError(f"Cycle detected in pipe graph: {', '.join(stuck)}")

    return order
