"""
sitepipe: Canonical Exceptions (v1)

Este módulo define as exceções tipadas levantadas pelos estágios do grafo.

Objetivo:
- Permitir que estágios levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para ErrorPayload no Engine
- Evitar OSError/ValueError genéricos nas fronteiras críticas

Regras:
- Cada exceção declara o código estável (`error_type`) do catálogo
- Exceções carregam apenas dados estruturados (serializáveis) em `details`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from .errors import (
    DEFAULT_HINTS,
    DOCUMENT_MALFORMED,
    ENGINE_CONFIGURATION_ERROR,
    ENGINE_EXECUTION_ERROR,
    OUTPUT_WRITE_ERROR,
    SOURCE_READ_ERROR,
    TEMPLATE_NOT_READY,
    ErrorPayload,
)


@dataclass(eq=False)
class SitepipeException(Exception):
    """Base class para exceções internas do sitepipe.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    - Sem `hint` explícito, vale a dica padrão do código no catálogo
    """

    error_type: ClassVar[str] = ENGINE_EXECUTION_ERROR

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message

    def to_payload(self, *, step: Optional[str] = None) -> ErrorPayload:
        details = dict(self.details)
        if step is not None:
            details.setdefault("step", step)
        return ErrorPayload(
            type=self.error_type,
            message=self.message,
            details=details,
            hint=self.hint or DEFAULT_HINTS.get(self.error_type),
        )


# ---------------------------------------------------------------------------
# Documentos
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class MalformedDocumentError(SitepipeException):
    """Linha do preâmbulo não é metadado nem título."""

    error_type: ClassVar[str] = DOCUMENT_MALFORMED


# ---------------------------------------------------------------------------
# I/O
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class SourceReadError(SitepipeException):
    """Arquivo ou diretório de origem ausente ou ilegível."""

    error_type: ClassVar[str] = SOURCE_READ_ERROR


@dataclass(eq=False)
class OutputWriteError(SitepipeException):
    """Falha de mkdir ou de escrita no diretório de saída."""

    error_type: ClassVar[str] = OUTPUT_WRITE_ERROR


# ---------------------------------------------------------------------------
# Templates / Grafo
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class TemplateNotReadyError(SitepipeException):
    """Dado aguardou o template além do timeout configurado."""

    error_type: ClassVar[str] = TEMPLATE_NOT_READY


@dataclass(eq=False)
class GraphConfigurationError(SitepipeException):
    """Configuração ou montagem inconsistente do grafo."""

    error_type: ClassVar[str] = ENGINE_CONFIGURATION_ERROR
