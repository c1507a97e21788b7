"""Renderização markdown → HTML (capacidade externa do parser de posts)."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from markdown_it import MarkdownIt
from mdit_py_plugins.anchors import anchors_plugin

MarkdownRenderer = Callable[[str], str]


def _render_link_in_new_window(self, tokens, idx, options, env):
    tokens[idx].attrSet("target", "_blank")
    tokens[idx].attrSet("rel", "noopener noreferrer")
    return self.renderToken(tokens, idx, options, env)


def build_markdown_renderer(options: Optional[Mapping[str, Any]] = None) -> MarkdownRenderer:
    """Cria a função `render(markdown) -> html` a partir da seção `markdown` da config.

    Opções (todas booleanas):
    - tables: tabelas no estilo GFM
    - linkify: URLs soltas viram links
    - heading_anchors: `id` determinístico (slug do texto) em h1–h6
    - open_links_in_new_window: `target="_blank"` em todos os links
    """
    opts = dict(options or {})
    linkify = bool(opts.get("linkify", True))

    md = MarkdownIt("commonmark", {"html": True, "linkify": linkify})
    if opts.get("tables", True):
        md.enable("table")
    if linkify:
        md.enable("linkify")
    if opts.get("heading_anchors", True):
        md.use(anchors_plugin, min_level=1, max_level=6)
    if opts.get("open_links_in_new_window", False):
        md.add_render_rule("link_open", _render_link_in_new_window)

    return md.render
