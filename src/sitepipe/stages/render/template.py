"""
Estágio de template: compila um template Jinja2 e renderiza registros com ele.

O estágio recebe dois tipos explícitos de entrada:
    - `TemplateSource` → o template (compilado e guardado; nada é emitido)
    - `FileRecord`     → o dado a ser renderizado (emitido após renderizar)

O papel de cada entrada é decidido pela ligação do grafo (via
`TemplateSourceAdapter`), nunca pela extensão do arquivo.

Máquina de estados:
    AWAITING_TEMPLATE --(TemplateSource)--> READY

Decisões arquiteturais:
    - Um dado recebido antes do template não é descartado: a renderização
      suspende até o template ficar disponível (evento asyncio do próprio
      estágio), com timeout opcional
    - Um template recebido em READY é recompilado e substitui o anterior
      (last-write-wins)
    - O contexto de renderização é o próprio registro (`metadata`,
      `content` e campos de caminho acessíveis por nome)
    - Cada instância está ligada a exatamente um template lógico

Limites explícitos:
    - Não carrega templates do disco (o leitor do grafo faz isso)
    - Não protege contra corrida entre duas recompilações
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union

from jinja2 import Environment, Template

from sitepipe.core.exceptions import TemplateNotReadyError
from sitepipe.core.pipeline.context import RunContext
from sitepipe.core.pipeline.pipe import Pipe
from sitepipe.core.pipeline.types import PipeKind
from sitepipe.core.record import FileRecord


class TemplateState(str, Enum):
    AWAITING_TEMPLATE = "awaiting_template"
    READY = "ready"


@dataclass(frozen=True)
class TemplateSource:
    """Variante "template" da entrada do TemplateStage."""

    name: str
    source: str


TemplateInput = Union[TemplateSource, FileRecord]


def build_template_environment(options: Optional[Mapping[str, Any]] = None) -> Environment:
    """Environment Jinja2 a partir da seção `templates` da config."""
    opts = dict(options or {})
    return Environment(
        autoescape=bool(opts.get("autoescape", True)),
        trim_blocks=True,
        lstrip_blocks=True,
    )


class TemplateSourceAdapter(Pipe):
    """Marca o registro de um arquivo de template como `TemplateSource`."""

    def operate(self, ctx: RunContext, record: FileRecord) -> TemplateSource:
        return TemplateSource(name=record.relative_path, source=record.text())


class TemplateStage(Pipe):
    """Renderiza cada FileRecord recebido com o template corrente."""

    kind = PipeKind.BARRIER

    def __init__(
        self,
        *,
        id: str,
        environment: Optional[Environment] = None,
        ready_timeout: Optional[float] = None,
    ) -> None:
        super().__init__(id)
        self.environment = environment or build_template_environment()
        self.ready_timeout = ready_timeout
        self.template_name: Optional[str] = None
        self._template: Optional[Template] = None
        self._ready = asyncio.Event()

    @property
    def state(self) -> TemplateState:
        if self._template is None:
            return TemplateState.AWAITING_TEMPLATE
        return TemplateState.READY

    async def operate(self, ctx: RunContext, value: TemplateInput) -> Optional[FileRecord]:
        if isinstance(value, TemplateSource):
            self._compile(ctx, value)
            return None

        if not isinstance(value, FileRecord):
            raise TypeError(
                f"{self.id} expects TemplateSource or FileRecord, got {type(value).__name__}"
            )

        if self._template is None:
            ctx.log(
                step_id=self.id,
                level="info",
                message="waiting for template",
                path=value.relative_path,
            )
            await self._wait_ready(value)

        value.content = self._template.render(value.template_context())
        ctx.log(
            step_id=self.id,
            level="info",
            message="record rendered",
            path=value.relative_path,
            template=self.template_name,
        )
        return value

    def _compile(self, ctx: RunContext, source: TemplateSource) -> None:
        replaced = self._template is not None
        self._template = self.environment.from_string(source.source)
        self.template_name = source.name
        self._ready.set()
        ctx.log(
            step_id=self.id,
            level="info",
            message="template recompiled" if replaced else "template compiled",
            template=source.name,
        )
        if replaced:
            ctx.add_warning(step_id=self.id, message=f"template replaced by {source.name}")

    async def _wait_ready(self, record: FileRecord) -> None:
        try:
            if self.ready_timeout is None:
                await self._ready.wait()
            else:
                await asyncio.wait_for(self._ready.wait(), timeout=self.ready_timeout)
        except asyncio.TimeoutError as e:
            raise TemplateNotReadyError(
                message=f"Template for {self.id} not available after {self.ready_timeout}s",
                details={
                    "stage": self.id,
                    "record": record.relative_path,
                    "timeout_seconds": self.ready_timeout,
                },
            ) from e
