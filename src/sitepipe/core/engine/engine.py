# src/sitepipe/core/engine/engine.py
"""
Engine de execução do grafo de build.

O Engine é o driver externo do grafo: recebe explicitamente a lista de
fontes (não existe registro global de fontes), valida o grafo com o
planner, dispara todas as fontes sem entrada e aguarda **todo** o trabalho
despachado pelo fan-out antes de declarar o build encerrado.

Política de falhas:
- Cada ramo falha de forma independente (fail fast do ramo); ramos irmãos
  continuam e seus arquivos já gravados permanecem em disco.
- Nenhuma exceção fica sem observação: toda falha registrada pelo
  RunContext é convertida em ErrorPayload (serializável e acionável) no
  RunResult.
- Não há retry, rollback nem cancelamento.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from sitepipe.core.errors import ErrorPayload, engine_execution_error
from sitepipe.core.exceptions import SitepipeException
from sitepipe.core.pipeline.context import RunContext
from sitepipe.core.pipeline.pipe import Pipe
from sitepipe.core.pipeline.types import PipeFailure

from .planner import plan_graph

ENGINE_STEP_ID = "engine"


@dataclass(frozen=True)
class RunResult:
    """Resultado agregado de uma execução do grafo."""

    run_id: str
    executions: Dict[str, int] = field(default_factory=dict)
    failures: List[ErrorPayload] = field(default_factory=list)
    warnings: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def total_executions(self) -> int:
        return sum(self.executions.values())


class Engine:
    """Driver canônico do sitepipe (planner + disparo + join)."""

    def __init__(self, *, sources: Sequence[Pipe], ctx: RunContext):
        self.sources: List[Pipe] = list(sources)
        self.ctx: RunContext = ctx

    def _failure_to_error(self, failure: PipeFailure) -> ErrorPayload:
        """Converte uma falha de ramo em ErrorPayload.

        Regras:
        - SitepipeException: mantém código, mensagem, details e hint.
        - Outras exceções: encapsular como ENGINE_EXECUTION_ERROR.
        Em ambos os casos `details.step` identifica o Pipe que falhou.
        """
        exc = failure.exception
        if isinstance(exc, SitepipeException):
            return exc.to_payload(step=failure.step_id)
        return engine_execution_error(step=failure.step_id, exc=exc)

    async def run(self) -> RunResult:
        plan = plan_graph(self.sources)

        self.ctx.log(
            step_id=ENGINE_STEP_ID,
            level="info",
            message="run started",
            sources=len(self.sources),
            pipes=len(plan),
            kinds=dict(Counter(pipe.kind.value for pipe in plan)),
            meta=dict(self.ctx.meta),
        )

        for source in self.sources:
            self.ctx.dispatch(source)
        await self.ctx.join()

        failures = [self._failure_to_error(f) for f in self.ctx.failures]

        self.ctx.log(
            step_id=ENGINE_STEP_ID,
            level="error" if failures else "info",
            message="run finished",
            executions=sum(self.ctx.executions.values()),
            failures=len(failures),
        )

        return RunResult(
            run_id=self.ctx.run_id,
            executions=dict(self.ctx.executions),
            failures=failures,
            warnings={step_id: list(messages) for step_id, messages in self.ctx.warnings.items()},
        )
