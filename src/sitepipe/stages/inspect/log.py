"""Passthrough que registra cada FileRecord como evento `info` no RunContext."""

from __future__ import annotations

from sitepipe.core.pipeline.context import RunContext
from sitepipe.core.pipeline.pipe import Pipe
from sitepipe.core.pipeline.types import PipeKind
from sitepipe.core.record import FileRecord


class RecordLogger(Pipe):
    kind = PipeKind.INSPECT

    def __init__(self, *, id: str = "inspect.log", preview_chars: int = 200) -> None:
        super().__init__(id)
        self.preview_chars = preview_chars

    def operate(self, ctx: RunContext, record: FileRecord) -> FileRecord:
        if isinstance(record.content, bytes):
            preview = record.content.decode("utf-8", errors="replace")
        else:
            preview = record.content or ""
        ctx.log(
            step_id=self.id,
            level="info",
            message=str(record.path),
            content=preview.strip()[: self.preview_chars],
            metadata_keys=list(record.metadata),
        )
        return record
