"""
Parser de posts: preâmbulo de metadados + título + corpo markdown.

Formato de um post:

    - date: 2020-12-10
    - tags: Brave, News Reader, Browser

    # Título do post

    Corpo em markdown...

O preâmbulo é uma lista não ordenada com `:` separando chave e valores e
`,` separando valores. O exemplo acima produz:

    {
        "date": ["2020-12-10"],
        "tags": ["Brave", "News Reader", "Browser"],
        "title": "Título do post",
    }

Decisões arquiteturais:
    - Linhas em branco do preâmbulo são ignoradas
    - O preâmbulo termina obrigatoriamente em um título H1 (`# ...`);
      `## ...` NÃO é título e torna o post inválido (um parser que só
      exige `#` no início da linha aceitaria `## x` como o título `# x`)
    - O título faz parte do corpo entregue ao renderer, logo o HTML sempre
      começa pelo heading do título
    - Qualquer outra linha no preâmbulo torna o post inválido; não existe
      parsing best-effort

Invariantes:
    - Toda chave de metadado mapeia para uma lista de strings, na ordem do
      preâmbulo
    - `metadata["title"]` é o texto do título
    - Após o parse, `content` é `str` (HTML) e `extension` é `.html`
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Tuple

from sitepipe.core.exceptions import MalformedDocumentError
from sitepipe.core.pipeline.context import RunContext
from sitepipe.core.pipeline.pipe import Pipe
from sitepipe.core.record import FileRecord

from .markdown import MarkdownRenderer

METADATA_RE = re.compile(r"^-\s*(.+?):\s*(.+)$")
TITLE_RE = re.compile(r"^#(?!#)\s*(.+?)\s*$")

HTML_EXTENSION = ".html"


def parse_preamble(lines: List[str], *, path: str = "<memory>") -> Tuple[Dict[str, Any], int]:
    """
    Lê o preâmbulo de `lines` até o título.

    Returns:
        (metadata, índice da linha do título)

    Raises:
        MalformedDocumentError: linha que não é metadado nem título, ou
            documento sem título.
    """
    metadata: Dict[str, Any] = {}
    for i, line in enumerate(lines):
        if not line.strip():
            continue

        m = METADATA_RE.match(line)
        if m:
            metadata[m.group(1).strip()] = [v.strip() for v in m.group(2).split(",")]
            continue

        m = TITLE_RE.match(line)
        if m:
            metadata["title"] = m.group(1)
            return metadata, i

        raise MalformedDocumentError(
            message=f"The post is malformed: {path}",
            details={"path": path, "line_number": i + 1, "line": line},
        )

    raise MalformedDocumentError(
        message=f"The post has no title: {path}",
        details={"path": path, "line_number": len(lines), "line": None},
        hint="Termine o preâmbulo com um título '# Título'.",
    )


class PostParser(Pipe):
    """Extrai metadados do preâmbulo e converte o corpo em HTML."""

    def __init__(self, renderer: MarkdownRenderer, *, id: str = "parse.post") -> None:
        super().__init__(id)
        self.renderer = renderer

    def operate(self, ctx: RunContext, record: FileRecord) -> FileRecord:
        lines = record.text().splitlines()
        metadata, title_index = parse_preamble(lines, path=record.relative_path)

        record.metadata = metadata
        record.content = self.renderer("\n".join(lines[title_index:]))
        record.extension = HTML_EXTENSION

        ctx.log(
            step_id=self.id,
            level="info",
            message="post parsed",
            path=record.relative_path,
            title=metadata["title"],
            metadata_keys=[k for k in metadata if k != "title"],
        )
        return record
