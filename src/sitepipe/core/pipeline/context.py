# src/sitepipe/core/pipeline/context.py
"""
Contexto de execução compartilhado de um build.

Este módulo define o `RunContext`, a estrutura passada a todo Pipe durante
a execução do grafo. Além de identidade, configuração e observabilidade
(eventos estruturados e warnings), o contexto é o dono de todo trabalho
assíncrono despachado pelo fan-out.

Responsabilidades do módulo:
    - Manter identidade e metadados da execução
    - Registrar eventos de log estruturados e warnings por Pipe
    - Despachar execuções de Pipes como tasks asyncio rastreadas
    - Aguardar (join) todo o trabalho pendente, inclusive ramos criados
      depois do disparo inicial
    - Registrar toda falha de ramo, sem deixar exceções não observadas

Princípios fundamentais:
    - Fan-out é fire-and-forget para quem despacha, mas nunca para o Engine
    - Isolamento por execução (cada build possui seu próprio contexto)
    - Modelo cooperativo de uma única thread: nenhum lock é necessário

Invariantes:
    - Toda task despachada fica referenciada até terminar
    - Toda task que termina com exceção gera exatamente um PipeFailure
    - Logs sempre incluem `run_id` e `step_id`

Limites explícitos:
    - Não valida o grafo
    - Não cancela trabalho em andamento
    - Não aplica limites de concorrência
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List

from .types import PipeFailure

if TYPE_CHECKING:  # pragma: no cover
    from .pipe import Pipe


@dataclass
class RunContext:
    """
    Contexto de execução de um build.

    O RunContext consolida:
        - identidade da execução (run_id, created_at)
        - configuração resolvida
        - eventos de log estruturados e warnings por Pipe
        - contagem de execuções por Pipe
        - o conjunto de tasks em andamento e as falhas observadas

    Decisões arquiteturais:
        - Pipes despacham downstream via `dispatch`, nunca criando tasks soltas
        - `join` só retorna quando nenhuma task rastreada está pendente
        - Falhas são coletadas em `failures`, na ordem em que terminam
    """
    run_id: str
    created_at: datetime
    config: Dict[str, Any]
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)
    executions: Dict[str, int] = field(default_factory=dict, init=False)
    failures: List[PipeFailure] = field(default_factory=list, init=False)

    _pending: Dict["asyncio.Task[None]", str] = field(default_factory=dict, init=False, repr=False)

    # -----------------------------
    # Execução
    # -----------------------------
    def record_execution(self, step_id: str) -> None:
        self.executions[step_id] = self.executions.get(step_id, 0) + 1

    def dispatch(self, pipe: "Pipe", value: Any = None) -> "asyncio.Task[None]":
        """Agenda `pipe.execute(value)` sem aguardar o término."""
        loop = asyncio.get_running_loop()
        task = loop.create_task(pipe.execute(self, value), name=f"sitepipe:{pipe.id}")
        self._pending[task] = pipe.id
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: "asyncio.Task[None]") -> None:
        step_id = self._pending.pop(task, "<unknown>")
        if task.cancelled():
            self.failures.append(PipeFailure(step_id=step_id, exception=asyncio.CancelledError()))
            return
        exc = task.exception()
        if exc is not None:
            self.failures.append(PipeFailure(step_id=step_id, exception=exc))

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def join(self) -> None:
        """Aguarda todo o trabalho despachado, inclusive o despachado durante a espera."""
        while self._pending:
            await asyncio.wait(list(self._pending))

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, step_id: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, step_id: str, message: str) -> None:
        if step_id not in self.warnings:
            self.warnings[step_id] = []
        self.warnings[step_id].append(message)
