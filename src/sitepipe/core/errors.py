"""
sitepipe: catálogo de erros de build (v1)

Toda falha observada durante um build termina como um `ErrorPayload` no
RunResult: um código estável do catálogo abaixo, uma mensagem curta, os
dados estruturados do caso e uma dica acionável.

Códigos estáveis:
    DOCUMENT_MALFORMED         → post com preâmbulo inválido ou sem título
    SOURCE_READ_ERROR          → arquivo/diretório de origem ilegível
    OUTPUT_WRITE_ERROR         → falha ao gravar na saída
    TEMPLATE_NOT_READY         → template não chegou dentro do timeout
    ENGINE_EXECUTION_ERROR     → exceção não tipada em algum Pipe
    ENGINE_CONFIGURATION_ERROR → grafo ou configuração inválidos
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ErrorPayload:
    """Erro serializável de um build (ver `to_dict`)."""

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DOCUMENT_MALFORMED = "DOCUMENT_MALFORMED"
SOURCE_READ_ERROR = "SOURCE_READ_ERROR"
OUTPUT_WRITE_ERROR = "OUTPUT_WRITE_ERROR"
TEMPLATE_NOT_READY = "TEMPLATE_NOT_READY"
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"
ENGINE_CONFIGURATION_ERROR = "ENGINE_CONFIGURATION_ERROR"

DEFAULT_HINTS: Dict[str, str] = {
    DOCUMENT_MALFORMED: "Use '- chave: v1, v2' no preâmbulo e termine-o com um título '# Título'.",
    SOURCE_READ_ERROR: "Verifique se o arquivo existe e se pode ser lido.",
    OUTPUT_WRITE_ERROR: "Verifique permissões e espaço livre no diretório de saída.",
    TEMPLATE_NOT_READY: "Garanta que o template do estágio existe e está ligado ao grafo.",
    ENGINE_EXECUTION_ERROR: "Consulte os eventos de log do run; nenhum retry é aplicado.",
    ENGINE_CONFIGURATION_ERROR: "Revise a configuração e as ligações do grafo (ids, ciclos) antes de reexecutar.",
}


def engine_execution_error(
    *,
    step: str,
    exc: BaseException,
) -> ErrorPayload:
    """Falha não tipada de um Pipe; a classe da exceção vai em `details`."""
    return ErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message=f"Unexpected failure in {step}",
        details={
            "step": step,
            "exc_type": exc.__class__.__name__,
            "exc_message": str(exc) or None,
        },
        hint=DEFAULT_HINTS[ENGINE_EXECUTION_ERROR],
    )


def engine_configuration_error(
    *,
    message: str = "Invalid graph",
    details: Optional[Dict[str, Any]] = None,
    hint: Optional[str] = None,
) -> ErrorPayload:
    return ErrorPayload(
        type=ENGINE_CONFIGURATION_ERROR,
        message=message,
        details=details or {},
        hint=hint or DEFAULT_HINTS[ENGINE_CONFIGURATION_ERROR],
    )
