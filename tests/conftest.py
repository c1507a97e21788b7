# tests/conftest.py
"""
Fixtures compartilhados para testes do sitepipe.

Este módulo define fixtures reutilizáveis que fornecem:
- configuração mínima e determinística
- contexto de execução controlado (RunContext)
- uma árvore de origem de site completa em `tmp_path`

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas
    - A árvore de site usa apenas `tmp_path` (isolada por teste)

Invariantes:
    - Nenhuma fixture executa o grafo
    - `run_id` e `created_at` são fixos
    - Todas as fixtures são seguras para execução em paralelo

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica de domínio
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest


POST_TEMPLATE = """\
<html>
<head><title>{{ metadata.title }}</title></head>
<body>
{{ content | safe }}
</body>
</html>
"""

INDEX_TEMPLATE = """\
<ul>
{% for post in metadata.inputs %}
<li><a href="{{ post.relative_path }}">{{ post.metadata.title }}</a> {{ post.metadata.date[0] }}</li>
{% endfor %}
</ul>
"""

POSTS = {
    "brave.md": """\
- date: 2020-12-10
- tags: Brave, News Reader, Browser

# Brave News

Brave lançou um [leitor de notícias](https://brave.com).
""",
    "python.md": """\
- date: 2021-03-01
- tags: Python

# Python 3.10

Pattern matching chegou.
""",
    "asyncio.md": """\
- date: 2019-06-15

# asyncio

Tasks e eventos.
""",
}


@pytest.fixture
def dummy_config() -> dict:
    """
    Configuração mínima já resolvida, sem loader nem merge.

    Returns:
        dict: Configuração determinística para testes do core.
    """
    return {
        "site": {"source_dir": "site", "output_dir": "out", "debug": False},
        "templates": {"ready_timeout_seconds": 1},
    }


@pytest.fixture
def dummy_ctx(dummy_config):
    """
    RunContext determinístico para testes.

    O import de RunContext é feito de forma lazy para melhorar a
    legibilidade dos erros quando o core não está disponível.
    """
    from sitepipe.core.pipeline.context import RunContext

    return RunContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        config=dummy_config,
        meta={"source": "pytest"},
    )


@pytest.fixture
def site_tree(tmp_path: Path) -> Path:
    """
    Árvore de origem de um site pequeno, porém completo.

    Layout:
        site/static/style.css
        site/images/logo.png   (bytes não-UTF-8)
        site/templates/post.jinja, index.jinja
        site/posts/brave.md, python.md, asyncio.md

    Returns:
        Path: Diretório raiz de origem (`tmp_path / "site"`).
    """
    root = tmp_path / "site"
    (root / "static").mkdir(parents=True)
    (root / "images").mkdir()
    (root / "templates").mkdir()
    (root / "posts").mkdir()

    (root / "static" / "style.css").write_text("body { margin: 0; }\n", encoding="utf-8")
    (root / "images" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\xff\xfe")
    (root / "templates" / "post.jinja").write_text(POST_TEMPLATE, encoding="utf-8")
    (root / "templates" / "index.jinja").write_text(INDEX_TEMPLATE, encoding="utf-8")
    for name, text in POSTS.items():
        (root / "posts" / name).write_text(text, encoding="utf-8")

    return root


@pytest.fixture
def site_config(site_tree: Path, tmp_path: Path) -> dict:
    """Configuração padrão do pacote apontando para `site_tree` e `tmp_path/out`."""
    from sitepipe.core.config import load_config

    config = load_config()
    config["site"]["source_dir"] = str(site_tree)
    config["site"]["output_dir"] = str(tmp_path / "out")
    config["templates"]["ready_timeout_seconds"] = 5
    return config
