"""
Montagem e execução do grafo de build de um site.

Layout de origem (nomes configuráveis em `site.directories`):
    static/     → copiados byte a byte para a saída
    images/     → copiados byte a byte para a saída
    templates/  → template de post e template de listagem
    posts/      → um documento por post (preâmbulo + título + corpo)

Grafo montado:

    static/*, images/*  ──────────────────────────────────────────► write
    templates/post      ─► template.post ─► render.post ─┐
    posts/* ─► parse.post ─┬─(inspect.log)─► render.post ─┴──────► write
                           └─► aggregate.posts ─► render.index ──► write
    templates/index     ─► template.index ─► render.index

Decisões arquiteturais:
    - O grafo inteiro é ligado antes de qualquer fonte ser disparada
    - As fontes são devolvidas explicitamente em `SiteGraph.sources`
    - `aggregate.posts` espera exatamente o número de posts encontrados;
      sem posts, é disparado como fonte e a listagem sai vazia
    - `static/` e `images/` são opcionais; `posts/` e os templates não
"""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional

from sitepipe.core.engine.engine import Engine, RunResult
from sitepipe.core.exceptions import GraphConfigurationError
from sitepipe.core.pipeline.context import RunContext
from sitepipe.core.pipeline.pipe import Pipe
from sitepipe.core.record import FileRecord
from sitepipe.stages.aggregate.batch import AggregateStage, metadata_key
from sitepipe.stages.content.markdown import build_markdown_renderer
from sitepipe.stages.content.post import PostParser
from sitepipe.stages.inspect.log import RecordLogger
from sitepipe.stages.io.read import FileReader, readers_in_dir
from sitepipe.stages.io.write import FileWriter
from sitepipe.stages.render.template import (
    TemplateSourceAdapter,
    TemplateStage,
    build_template_environment,
)


@dataclass
class SiteGraph:
    """Grafo ligado e pronto para execução; `sources` são disparadas pelo Engine."""

    sources: List[Pipe]
    writer: FileWriter
    parser: PostParser
    post_template: TemplateStage
    index_template: TemplateStage
    listing: AggregateStage
    assets: List[FileReader] = field(default_factory=list)
    posts: List[FileReader] = field(default_factory=list)


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = config.get(name, {}) if isinstance(config, dict) else {}
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise GraphConfigurationError(
            message=f"Invalid config: '{name}' must be a mapping",
            details={"section": name, "received": type(value).__name__},
        )
    return value


def _required(section: Dict[str, Any], key: str, section_name: str) -> str:
    value = section.get(key)
    if not isinstance(value, str) or not value.strip():
        raise GraphConfigurationError(
            message=f"Missing required config: {section_name}.{key}",
            details={"section": section_name, "key": key},
            hint="Declare o valor no arquivo de configuração ou via CLI.",
        )
    return value


def _template_reader(source_root: str, templates_dir: str, name: str, role: str) -> FileReader:
    return FileReader(str(PurePosixPath(templates_dir) / name), source_root, id=f"read:template.{role}")


def build_site_graph(config: Dict[str, Any]) -> SiteGraph:
    """Lê os diretórios de origem e liga o grafo completo do site."""
    site = _section(config, "site")
    directories = _section(site, "directories")
    templates = _section(config, "templates")
    listing_cfg = _section(config, "listing")

    source_root = _required(site, "source_dir", "site")
    output_root = _required(site, "output_dir", "site")
    templates_dir = directories.get("templates", "templates")

    writer = FileWriter(output_root)

    assets: List[FileReader] = []
    for key in ("static", "images"):
        assets.extend(readers_in_dir(source_root, directories.get(key, key), missing_ok=True))
    for reader in assets:
        reader.link(writer)

    environment = build_template_environment(templates)
    ready_timeout = templates.get("ready_timeout_seconds")
    post_template = TemplateStage(id="render.post", environment=environment, ready_timeout=ready_timeout)
    index_template = TemplateStage(id="render.index", environment=environment, ready_timeout=ready_timeout)

    post_template_reader = _template_reader(
        source_root, templates_dir, _required(templates, "post", "templates"), "post"
    )
    post_template_reader.link(TemplateSourceAdapter("template.post")).link(post_template)

    index_template_reader = _template_reader(
        source_root, templates_dir, _required(templates, "index", "templates"), "index"
    )
    index_template_reader.link(TemplateSourceAdapter("template.index")).link(index_template)

    posts = readers_in_dir(source_root, directories.get("posts", "posts"))
    parser = PostParser(build_markdown_renderer(_section(config, "markdown")))
    for reader in posts:
        reader.link(parser)

    parsed: Pipe = parser.link(RecordLogger()) if site.get("debug") else parser
    parsed.link(post_template).link(writer)

    sort_by = listing_cfg.get("sort_by")
    listing = AggregateStage(
        FileRecord.from_relative_path(_required(listing_cfg, "output_path", "listing")),
        expected_count=len(posts),
        sort_key=metadata_key(sort_by) if sort_by else None,
        descending=bool(listing_cfg.get("descending", False)),
        id="aggregate.posts",
    )
    parsed.link(listing).link(index_template).link(writer)

    sources: List[Pipe] = [*assets, post_template_reader, index_template_reader, *posts]
    if listing.triggers_on_start:
        sources.append(listing)

    return SiteGraph(
        sources=sources,
        writer=writer,
        parser=parser,
        post_template=post_template,
        index_template=index_template,
        listing=listing,
        assets=assets,
        posts=posts,
    )


def new_run_context(config: Dict[str, Any], *, run_id: Optional[str] = None) -> RunContext:
    site = _section(config, "site")
    return RunContext(
        run_id=run_id or uuid.uuid4().hex,
        created_at=datetime.now(timezone.utc),
        config=config,
        meta={"source_dir": site.get("source_dir"), "output_dir": site.get("output_dir")},
    )


async def build_site(config: Dict[str, Any], *, ctx: Optional[RunContext] = None) -> RunResult:
    """Monta o grafo do site e o executa até não restar trabalho pendente."""
    ctx = ctx or new_run_context(config)
    graph = build_site_graph(config)
    return await Engine(sources=graph.sources, ctx=ctx).run()


def run_build(config: Dict[str, Any], *, ctx: Optional[RunContext] = None) -> RunResult:
    return asyncio.run(build_site(config, ctx=ctx))
