# src/sitepipe/core/pipeline/__init__.py
"""
# Pipeline Core: sitepipe

Este pacote define os **contratos canônicos** do grafo de dataflow.

Um build é modelado como um **grafo acíclico de Pipes**, onde:
- cada Pipe declara identidade (`id`), tipo semântico (`kind`) e ligações
  downstream (`link`)
- a entrada de um Pipe é sempre a saída de um único nó upstream
- o trabalho assíncrono é despachado e rastreado pelo `RunContext`

## Componentes

- **types**: `PipeKind`, `PipeFailure`
- **pipe**: `Pipe`, a classe base de todo estágio
- **context**: `RunContext` (eventos, warnings, dispatch/join de tasks)

## Invariantes

- Ligar o mesmo nó duas vezes não duplica execuções
- Saída `None` interrompe a propagação
- Toda falha de ramo é registrada no `RunContext`
"""

from .context import RunContext
from .pipe import Pipe
from .types import PipeFailure, PipeKind

__all__ = ["Pipe", "PipeKind", "PipeFailure", "RunContext"]
