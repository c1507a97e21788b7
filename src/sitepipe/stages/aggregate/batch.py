"""
Estágio de agregação (barreira many-to-one).

O estágio acumula entradas até que exatamente `expected_count` tenham
chegado; então ordena o lote, anexa-o ao registro sintético sob
`metadata["inputs"]` e emite esse registro. Antes disso, nada é emitido
e a propagação para neste nó.

Decisões arquiteturais:
    - O registro sintético é criado na construção e mutado a cada lote
    - A ordenação é estável (`sorted`): entradas com a mesma chave mantêm a
      ordem de chegada, inclusive com `descending=True`
    - Sem `sort_key`, a ordem de chegada é preservada
    - Após cada emissão o buffer é limpo e o estágio se rearma para um novo
      lote
    - Com `expected_count == 0` o estágio é disparado como fonte pelo
      Engine e emite um lote vazio

Invariantes:
    - Exatamente uma emissão por `expected_count` entradas recebidas
    - Nenhuma emissão com menos de `expected_count` entradas
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from sitepipe.core.pipeline.context import RunContext
from sitepipe.core.pipeline.pipe import Pipe
from sitepipe.core.pipeline.types import PipeKind
from sitepipe.core.record import FileRecord

SortKey = Callable[[FileRecord], Any]

INPUTS_KEY = "inputs"


def metadata_key(name: str, default: str = "") -> SortKey:
    """Chave de ordenação pelo primeiro valor de `metadata[name]`."""

    def key(record: FileRecord) -> Any:
        values = record.metadata.get(name)
        if not values:
            return default
        if isinstance(values, (list, tuple)):
            return values[0]
        return values

    return key


class AggregateStage(Pipe):
    """Barreira que emite um registro sintético com o lote ordenado."""

    kind = PipeKind.BARRIER

    def __init__(
        self,
        record: FileRecord,
        *,
        expected_count: int,
        sort_key: Optional[SortKey] = None,
        descending: bool = False,
        id: str = "aggregate",
    ) -> None:
        if expected_count < 0:
            raise ValueError("expected_count must be >= 0")
        super().__init__(id)
        self.record = record
        self.expected_count = expected_count
        self.sort_key = sort_key
        self.descending = descending
        self._buffer: List[FileRecord] = []

    @property
    def buffered(self) -> int:
        return len(self._buffer)

    @property
    def triggers_on_start(self) -> bool:
        """Lote vazio já satisfeito: o estágio deve ser disparado como fonte."""
        return self.expected_count == 0

    def operate(self, ctx: RunContext, value: Optional[FileRecord]) -> Optional[FileRecord]:
        if value is None:
            if self.triggers_on_start:
                return self._emit(ctx, [])
            return None

        self._buffer.append(value)
        if len(self._buffer) != self.expected_count:
            return None

        batch, self._buffer = self._buffer, []
        if self.sort_key is not None:
            batch = sorted(batch, key=self.sort_key, reverse=self.descending)
        return self._emit(ctx, batch)

    def _emit(self, ctx: RunContext, batch: List[FileRecord]) -> FileRecord:
        self.record.metadata[INPUTS_KEY] = batch
        ctx.log(
            step_id=self.id,
            level="info",
            message="batch complete",
            inputs=[r.relative_path for r in batch],
        )
        return self.record
