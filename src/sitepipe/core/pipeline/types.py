# src/sitepipe/core/pipeline/types.py
"""
Tipos canônicos do grafo de build.

Componentes principais:
    - PipeKind    → enum de classificação semântica de Pipes
    - PipeFailure → falha observada de um ramo (Pipe + exceção)

Nenhuma lógica de execução vive neste módulo.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PipeKind(str, Enum):
    """
    Tipos semânticos de Pipes no grafo.

    Os valores são strings para facilitar a serialização em eventos de log
    e relatórios de execução.

    Tipos definidos:
        - SOURCE: disparado sem entrada pelo Engine (ex.: leitura de arquivo)
        - TRANSFORM: transforma a entrada e emite no máximo uma saída
        - BARRIER: retém saídas até uma condição interna ser satisfeita
        - SINK: nó terminal, nunca emite saída
        - INSPECT: repassa a entrada intacta (observabilidade)

    Decisões arquiteturais:
        - O tipo é puramente informativo: o Engine o contabiliza no evento
          "run started", mas não o utiliza para decidir execução
    """
    SOURCE = "source"
    TRANSFORM = "transform"
    BARRIER = "barrier"
    SINK = "sink"
    INSPECT = "inspect"


@dataclass(frozen=True)
class PipeFailure:
    """Exceção levantada por `operate` de um Pipe, observada pelo RunContext."""

    step_id: str
    exception: BaseException
