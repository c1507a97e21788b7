"""
Build E2E: sitepipe

Valida o grafo do site de ponta a ponta sobre uma árvore real em tmp_path:
- assets de static/ e images/ copiados byte a byte
- um .html por post, renderizado pelo template de post
- página de listagem com os posts em ordem de data decrescente
- post malformado não gera arquivo e vira falha tipada no RunResult
- zero posts ainda produz a listagem (vazia)
"""

from __future__ import annotations

from pathlib import Path

import pytest

from sitepipe.core.errors import (
    DOCUMENT_MALFORMED,
    ENGINE_CONFIGURATION_ERROR,
    SOURCE_READ_ERROR,
    TEMPLATE_NOT_READY,
)
from sitepipe.core.exceptions import GraphConfigurationError, SourceReadError
from sitepipe.site import build_site, build_site_graph, new_run_context


def _out(config: dict) -> Path:
    return Path(config["site"]["output_dir"])


@pytest.mark.asyncio
async def test_build_site_happy_path(site_config: dict, site_tree: Path) -> None:
    result = await build_site(site_config)

    assert result.ok, [f.to_dict() for f in result.failures]
    out = _out(site_config)

    assert (out / "static" / "style.css").read_bytes() == (site_tree / "static" / "style.css").read_bytes()
    assert (out / "images" / "logo.png").read_bytes() == (site_tree / "images" / "logo.png").read_bytes()

    brave = (out / "posts" / "brave.html").read_text(encoding="utf-8")
    assert "<title>Brave News</title>" in brave
    assert '<h1 id="brave-news">Brave News</h1>' in brave
    assert 'target="_blank"' in brave
    assert "2020-12-10" not in brave
    assert not (out / "posts" / "brave.md").exists()

    index = (out / "index.html").read_text(encoding="utf-8")
    positions = [index.index(title) for title in ("Python 3.10", "Brave News", "asyncio")]
    assert positions == sorted(positions)
    assert 'href="posts/python.html"' in index

    assert result.executions["parse.post"] == 3
    assert result.executions["aggregate.posts"] == 3
    assert result.executions["render.index"] == 2
    assert result.executions["write"] == 6


@pytest.mark.asyncio
async def test_malformed_post_produces_no_output(site_config: dict, site_tree: Path) -> None:
    (site_tree / "posts" / "broken.md").write_text("- date: 2022-01-01\nsem título aqui\n", encoding="utf-8")

    result = await build_site(site_config)

    out = _out(site_config)
    assert not result.ok
    assert [f.type for f in result.failures] == [DOCUMENT_MALFORMED]
    assert result.failures[0].details["step"] == "parse.post"
    assert result.failures[0].details["path"] == "posts/broken.md"

    assert not (out / "posts" / "broken.html").exists()
    assert (out / "posts" / "brave.html").exists()
    assert (out / "static" / "style.css").exists()
    # a barreira espera todos os posts descobertos
    assert not (out / "index.html").exists()


@pytest.mark.asyncio
async def test_nested_static_files_are_copied(site_config: dict, site_tree: Path) -> None:
    nested = site_tree / "static" / "css" / "site.css"
    nested.parent.mkdir()
    nested.write_bytes(b"body { margin: 0; }\n")

    result = await build_site(site_config)

    assert result.ok, [f.to_dict() for f in result.failures]
    assert (_out(site_config) / "static" / "css" / "site.css").read_bytes() == nested.read_bytes()
    assert result.executions["read:static/css/site.css"] == 1


@pytest.mark.asyncio
async def test_zero_posts_still_writes_empty_listing(site_config: dict, site_tree: Path) -> None:
    for post in (site_tree / "posts").iterdir():
        post.unlink()

    graph = build_site_graph(site_config)
    assert graph.listing in graph.sources

    result = await build_site(site_config)

    assert result.ok
    index = (_out(site_config) / "index.html").read_text(encoding="utf-8")
    assert "<li>" not in index
    assert "<ul>" in index


@pytest.mark.asyncio
async def test_missing_optional_directories(site_config: dict, site_tree: Path) -> None:
    for d in ("static", "images"):
        for f in (site_tree / d).iterdir():
            f.unlink()
        (site_tree / d).rmdir()

    result = await build_site(site_config)

    assert result.ok
    assert (_out(site_config) / "index.html").exists()


def test_missing_posts_directory_is_configuration_failure(site_config: dict, site_tree: Path) -> None:
    site_config["site"]["directories"]["posts"] = "articles"
    with pytest.raises(SourceReadError) as exc:
        build_site_graph(site_config)
    assert exc.value.error_type == SOURCE_READ_ERROR


@pytest.mark.asyncio
async def test_missing_template_reports_read_error(site_config: dict, site_tree: Path) -> None:
    (site_tree / "templates" / "index.jinja").unlink()
    site_config["templates"]["ready_timeout_seconds"] = 0.2

    result = await build_site(site_config)

    assert [f.type for f in result.failures] == [SOURCE_READ_ERROR, TEMPLATE_NOT_READY]
    assert result.failures[0].details["step"] == "read:template.index"
    assert result.failures[1].details["stage"] == "render.index"
    assert (_out(site_config) / "posts" / "brave.html").exists()
    assert not (_out(site_config) / "index.html").exists()


@pytest.mark.asyncio
async def test_debug_inserts_record_logger(site_config: dict) -> None:
    site_config["site"]["debug"] = True
    ctx = new_run_context(site_config, run_id="debug-run")

    result = await build_site(site_config, ctx=ctx)

    assert result.ok
    assert result.run_id == "debug-run"
    assert result.executions["inspect.log"] == 3
    assert [e for e in ctx.events if e["step_id"] == "inspect.log"]


def test_graph_wiring_is_explicit(site_config: dict) -> None:
    graph = build_site_graph(site_config)

    ids = [p.id for p in graph.sources]
    assert "read:static/style.css" in ids
    assert "read:images/logo.png" in ids
    assert "read:template.post" in ids
    assert "read:template.index" in ids
    assert [p.id for p in graph.posts] == ["read:posts/asyncio.md", "read:posts/brave.md", "read:posts/python.md"]
    assert graph.listing.expected_count == 3
    assert graph.listing not in graph.sources
    assert graph.parser.downstream == (graph.post_template, graph.listing)
    assert graph.post_template.downstream == (graph.writer,)
    assert graph.index_template.downstream == (graph.writer,)


@pytest.mark.parametrize(
    "section, value",
    [("listing", "index.html"), ("templates", {"post": "", "index": "index.jinja"})],
)
def test_invalid_config_section_is_graph_configuration_error(site_config: dict, section, value) -> None:
    site_config[section] = value
    with pytest.raises(GraphConfigurationError) as exc:
        build_site_graph(site_config)
    assert exc.value.to_payload().type == ENGINE_CONFIGURATION_ERROR
