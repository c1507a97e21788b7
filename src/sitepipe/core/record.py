# src/sitepipe/core/record.py
"""
FileRecord: o valor que trafega pelo grafo de build.

Um FileRecord representa um arquivo lógico (post, template, asset ou página
sintética) e acumula, ao longo do grafo, o conteúdo transformado e os
metadados estruturados extraídos dele.

Decisões arquiteturais:
    - Os componentes de caminho são derivados uma única vez, na criação
    - `root_directory` pertence ao estágio de fronteira que detém o registro
      (leitor → raiz de origem; escritor → raiz de saída)
    - `extension` pode ser reatribuída por um estágio que muda o tipo lógico
      do arquivo (ex.: `.md` → `.html`)
    - Identidade é por referência: dois registros com o mesmo caminho não são
      o mesmo arquivo, e o grafo nunca deduplica

Invariantes:
    - Componentes de caminho nunca são recalculados a partir de `content`
    - `root_directory` só participa de joins de caminho, não de identidade
    - `content` é `bytes` depois da leitura e `str` depois de renderizado;
      a conversão é sempre explícita (`text()` / `payload()`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Optional, Union

Content = Union[bytes, str]


@dataclass(eq=False)
class FileRecord:
    """Arquivo lógico com componentes de caminho, conteúdo e metadados."""

    relative_directory: str
    base_name: str
    extension: str
    root_directory: str = ""
    content: Optional[Content] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_relative_path(cls, relative_path: str, *, root_directory: str = "") -> "FileRecord":
        """Decompõe `relative_path` em diretório, nome base e extensão."""
        p = PurePosixPath(relative_path)
        return cls(
            relative_directory=str(p.parent),
            base_name=p.stem,
            extension=p.suffix,
            root_directory=root_directory,
        )

    @property
    def file_name(self) -> str:
        return self.base_name + self.extension

    @property
    def relative_path(self) -> str:
        return str(PurePosixPath(self.relative_directory) / self.file_name)

    @property
    def directory(self) -> Path:
        return Path(self.root_directory) / self.relative_directory

    @property
    def path(self) -> Path:
        return self.directory / self.file_name

    def text(self, encoding: str = "utf-8") -> str:
        """Conteúdo como texto; `bytes` são decodificados explicitamente."""
        if self.content is None:
            raise ValueError(f"FileRecord has no content: {self.relative_path}")
        if isinstance(self.content, bytes):
            return self.content.decode(encoding)
        return self.content

    def payload(self, encoding: str = "utf-8") -> bytes:
        """Conteúdo como bytes, pronto para escrita em disco."""
        if self.content is None:
            raise ValueError(f"FileRecord has no content: {self.relative_path}")
        if isinstance(self.content, str):
            return self.content.encode(encoding)
        return self.content

    def template_context(self) -> Dict[str, Any]:
        """Contexto de renderização: o próprio registro e seus campos por nome."""
        return {
            "record": self,
            "metadata": self.metadata,
            "content": self.content,
            "relative_directory": self.relative_directory,
            "base_name": self.base_name,
            "extension": self.extension,
            "relative_path": self.relative_path,
        }
