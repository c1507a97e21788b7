"""Estágio de origem: leitura de arquivos do diretório-fonte do site.

Responsabilidades:
- criar o FileRecord na construção, com `root_directory` = raiz de origem
- ler o conteúdo em bytes quando disparado (sem entrada) e emiti-lo
- enumerar um subdiretório de origem (recursivamente), criando um leitor
  por arquivo e preservando o caminho relativo

Limites explícitos (v1):
- NÃO decodifica o conteúdo (bytes seguem adiante)
- NÃO faz retry em falhas de leitura
"""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath
from typing import Any, List, Optional, Union

from sitepipe.core.exceptions import SourceReadError
from sitepipe.core.pipeline.context import RunContext
from sitepipe.core.pipeline.pipe import Pipe
from sitepipe.core.pipeline.types import PipeKind
from sitepipe.core.record import FileRecord

PathLike = Union[str, Path]


class FileReader(Pipe):
    """Lê um arquivo de origem e emite seu FileRecord com `content` em bytes."""

    kind = PipeKind.SOURCE

    def __init__(self, relative_path: str, source_root: PathLike, *, id: Optional[str] = None) -> None:
        super().__init__(id or f"read:{relative_path}")
        self.record = FileRecord.from_relative_path(relative_path, root_directory=str(source_root))

    async def operate(self, ctx: RunContext, value: Any = None) -> FileRecord:
        path = self.record.path
        try:
            self.record.content = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise SourceReadError(
                message=f"Cannot read source file: {path}",
                details={"path": str(path), "reason": e.strerror or str(e)},
            ) from e

        ctx.log(
            step_id=self.id,
            level="info",
            message="file read",
            path=str(path),
            bytes=len(self.record.content),
        )
        return self.record


def readers_in_dir(
    source_root: PathLike,
    directory: str,
    *,
    missing_ok: bool = False,
) -> List[FileReader]:
    """
    Cria um FileReader para cada arquivo regular sob `source_root/directory`.

    Subdiretórios são percorridos e cada leitor mantém o caminho relativo à
    raiz (ex.: `static/css/site.css`). Os leitores são criados em ordem de
    caminho relativo. Um diretório vazio produz uma lista vazia.

    Args:
        source_root (PathLike): Raiz de origem do site.
        directory (str): Subdiretório relativo à raiz (ex.: "posts").
        missing_ok (bool): Se True, um diretório ausente produz lista vazia.

    Returns:
        List[FileReader]: Um leitor por arquivo, com caminho relativo à raiz.

    Raises:
        SourceReadError: Se o diretório não puder ser listado.
    """
    base = Path(source_root) / directory
    if not base.is_dir():
        if missing_ok:
            return []
        raise SourceReadError(
            message=f"Source directory not found: {base}",
            details={"path": str(base), "reason": "No such directory"},
        )

    try:
        files = sorted(p.relative_to(base).as_posix() for p in base.rglob("*") if p.is_file())
    except OSError as e:
        raise SourceReadError(
            message=f"Cannot list source directory: {base}",
            details={"path": str(base), "reason": e.strerror or str(e)},
        ) from e

    return [
        FileReader(str(PurePosixPath(directory) / relative), source_root)
        for relative in files
    ]
