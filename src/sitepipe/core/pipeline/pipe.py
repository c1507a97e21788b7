# src/sitepipe/core/pipeline/pipe.py
"""
Pipe: nó canônico do grafo de build.

Um Pipe recebe uma entrada, executa seu trabalho (`operate`) e pode emitir
zero ou uma saída, que é repassada a todos os Pipes ligados a ele.

Responsabilidades de um Pipe concreto:
    - implementar `operate(ctx, value)`, síncrono ou `async`
    - retornar `None` para reter a propagação (barreiras, espera de template)

Decisões arquiteturais:
    - `link` é idempotente por identidade: ligar o mesmo nó duas vezes não
      duplica execuções no fan-out
    - O fan-out é fire-and-forget: `execute` retorna depois de *despachar*
      o trabalho downstream, não depois de concluí-lo
    - Não existe backpressure nem controle de fluxo
    - Exceções de `operate` são registradas no RunContext e propagadas para
      fora da task que as levantou (fail fast do ramo); ramos irmãos seguem

Invariantes:
    - Um Pipe nunca executa antes do nó que produziu sua entrada
    - Saída `None` interrompe a propagação naquele nó
    - A lista de nós downstream preserva a ordem de ligação

Limites explícitos:
    - Não valida aciclicidade (responsabilidade do planner)
    - Não aguarda a conclusão dos ramos (responsabilidade do Engine)
"""

from __future__ import annotations

import inspect
from typing import Any, ClassVar, List, Tuple

from .context import RunContext
from .types import PipeKind


class Pipe:
    """Nó abstrato do grafo de dataflow."""

    kind: ClassVar[PipeKind] = PipeKind.TRANSFORM

    def __init__(self, id: str) -> None:
        self.id = id
        self._downstream: List["Pipe"] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"

    @property
    def downstream(self) -> Tuple["Pipe", ...]:
        return tuple(self._downstream)

    def link(self, next_pipe: "Pipe") -> "Pipe":
        """Registra `next_pipe` como downstream e o retorna para encadeamento."""
        if not any(p is next_pipe for p in self._downstream):
            self._downstream.append(next_pipe)
        return next_pipe

    def operate(self, ctx: RunContext, value: Any) -> Any:
        raise NotImplementedError(f"{type(self).__name__} must implement operate()")

    async def execute(self, ctx: RunContext, value: Any = None) -> None:
        ctx.record_execution(self.id)
        try:
            output = self.operate(ctx, value)
            if inspect.isawaitable(output):
                output = await output
        except Exception as e:
            ctx.log(
                step_id=self.id,
                level="error",
                message=f"{self.id} failed",
                error_type=e.__class__.__name__,
                error_message=str(e) or "error",
            )
            raise

        if output is None:
            return

        for next_pipe in self._downstream:
            ctx.dispatch(next_pipe, output)
