"""Linha de comando do sitepipe."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sitepipe.core.config import ConfigError, load_config
from sitepipe.core.engine import CycleDetectedError, RunResult
from sitepipe.core.errors import ErrorPayload, engine_configuration_error
from sitepipe.core.exceptions import SitepipeException
from sitepipe.core.pipeline.context import RunContext
from sitepipe.site import new_run_context, run_build

console = Console()
app = typer.Typer(help="Gera um site estático a partir de posts, templates e assets.")


@app.callback()
def main() -> None:
    """sitepipe: build de sites estáticos como um grafo de dataflow assíncrono."""


def _apply_overrides(
    config: Dict[str, Any],
    *,
    src: Optional[Path],
    out: Optional[Path],
    debug: bool,
) -> Dict[str, Any]:
    site = dict(config.get("site") or {})
    if src is not None:
        site["source_dir"] = str(src)
    if out is not None:
        site["output_dir"] = str(out)
    if debug:
        site["debug"] = True
    return {**config, "site": site}


def _print_errors(errors: List[ErrorPayload]) -> None:
    for error in errors:
        step = error.details.get("step")
        prefix = f"[{step}] " if step else ""
        console.print(f"❌ {escape(prefix)}{error.type}: {escape(error.message)}")
        for key, value in error.details.items():
            if key != "step":
                console.print(f"    {key}: {escape(str(value))}")
        if error.hint:
            console.print(f"    💡 {escape(error.hint)}")


def _print_summary(result: RunResult) -> None:
    table = Table(title=f"Build {result.run_id[:8]}")
    table.add_column("Pipe")
    table.add_column("Execuções", justify="right")
    for step_id, count in sorted(result.executions.items()):
        table.add_row(step_id, str(count))
    console.print(table)


def _print_warnings(result: RunResult) -> None:
    for step_id, messages in sorted(result.warnings.items()):
        for message in messages:
            console.print(f"⚠️ {escape(f'[{step_id}] {message}')}")


def _print_events(ctx: RunContext) -> None:
    for event in ctx.events:
        extra = {
            k: v
            for k, v in event.items()
            if k not in {"run_id", "step_id", "level", "message", "timestamp"}
        }
        suffix = f" {extra}" if extra else ""
        console.print(f"[dim]{event['level']:>5}[/dim] {escape(event['step_id'])}: {escape(event['message'] + suffix)}")


@app.command()
def build(
    src: Optional[Path] = typer.Option(None, "--src", help="Diretório de origem do site."),
    out: Optional[Path] = typer.Option(None, "--out", help="Diretório de saída."),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        exists=True,
        dir_okay=False,
        help="Arquivo YAML/JSON com overrides da configuração padrão.",
    ),
    debug: bool = typer.Option(False, "--debug", help="Registra cada post parseado e exibe os eventos do run."),
) -> None:
    """Executa o build completo do site."""
    try:
        config = _apply_overrides(load_config(local_path=config_path), src=src, out=out, debug=debug)
    except ConfigError as exc:
        console.print(f"❌ Configuração inválida: {escape(str(exc))}")
        raise typer.Exit(1)

    ctx = new_run_context(config)
    try:
        result = run_build(config, ctx=ctx)
    except SitepipeException as exc:
        _print_errors([exc.to_payload()])
        raise typer.Exit(1)
    except CycleDetectedError as exc:
        _print_errors([engine_configuration_error(details={"reason": str(exc)})])
        raise typer.Exit(1)

    if config["site"].get("debug"):
        _print_events(ctx)
    _print_summary(result)
    _print_warnings(result)

    if not result.ok:
        _print_errors(result.failures)
        console.print(f"⚠️ Build concluído com {len(result.failures)} falha(s).")
        raise typer.Exit(1)

    console.print(f"✅ Site gerado em {escape(str(config['site']['output_dir']))}")
