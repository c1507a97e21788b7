"""Estágio terminal: grava FileRecords sob a raiz de saída.

O escritor assume a posse do registro (`root_directory` passa a ser a raiz
de saída), cria o diretório de destino de forma idempotente e grava o
conteúdo sem transformação. Não emite saída.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Union

from sitepipe.core.exceptions import OutputWriteError
from sitepipe.core.pipeline.context import RunContext
from sitepipe.core.pipeline.pipe import Pipe
from sitepipe.core.pipeline.types import PipeKind
from sitepipe.core.record import FileRecord


def _write_file(directory: Path, path: Path, data: bytes) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


class FileWriter(Pipe):
    """Grava `content` em `output_root/relative_directory/base_name+extension`."""

    kind = PipeKind.SINK

    def __init__(self, output_root: Union[str, Path], *, id: str = "write") -> None:
        super().__init__(id)
        self.output_root = Path(output_root)

    async def operate(self, ctx: RunContext, record: FileRecord) -> None:
        record.root_directory = str(self.output_root)
        data = record.payload()
        try:
            await asyncio.to_thread(_write_file, record.directory, record.path, data)
        except OSError as e:
            raise OutputWriteError(
                message=f"Cannot write output file: {record.path}",
                details={"path": str(record.path), "reason": e.strerror or str(e)},
            ) from e

        ctx.log(
            step_id=self.id,
            level="info",
            message="file written",
            path=str(record.path),
            bytes=len(data),
        )
        return None
