# src/sitepipe/__init__.py
"""
sitepipe: pipeline de build de sites estáticos sobre um grafo de dataflow.

Este pacote raiz define o namespace público do sitepipe, uma ferramenta
que lê arquivos-fonte (posts em markdown, templates, assets estáticos),
transforma esses arquivos e grava a saída renderizada.

Princípios centrais:
    - O build é um grafo acíclico de Pipes, montado antes da execução
    - Cada Pipe tem uma única responsabilidade de transformação
    - A execução é assíncrona e cooperativa (um único event loop)
    - Falhas de qualquer ramo são observadas e reportadas pelo Engine

Arquitetura em alto nível:
    - core.record   → FileRecord, o valor que trafega pelo grafo
    - core.pipeline → Pipe, PipeKind e RunContext
    - core.engine   → validação do grafo e execução (driver)
    - core.config   → carregamento e merge de configuração
    - stages        → estágios concretos (io, content, render, aggregate, inspect)
    - site          → montagem do grafo do site a partir da configuração
    - cli           → interface de linha de comando

Limites explícitos:
    - Não implementa rebuild incremental nem cache
    - Não limita concorrência de I/O
    - Não publica o site em serviços remotos
"""

__version__ = "0.1.0"

from .core.record import FileRecord
from .core.pipeline import Pipe, PipeKind, RunContext
from .core.engine import Engine, RunResult

__all__ = [
    "__version__",
    "FileRecord",
    "Pipe",
    "PipeKind",
    "RunContext",
    "Engine",
    "RunResult",
]
