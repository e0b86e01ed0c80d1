"""
Aplicación CLI de converge.

Solo compone comandos; la lógica vive en core y providers.
"""

from pathlib import Path
from typing import List, NoReturn, Optional, Tuple

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from converge import __version__
from converge.core.errors import ConvergeError
from converge.core.infra.base import BaseProvider
from converge.core.infra.requirements import Requirement
from converge.core.manifest.loader import load_manifest
from converge.core.manifest.planner import merge_diffs, plan_from_diffs
from converge.core.runtime.resolver import file_cache_root, env_store_path, state_root
from converge.core.runtime.state import StateDiff
from converge.providers.registry import ProviderFactory
from converge.providers.remote_file.cache_control import (
    legacy_cache_key,
    sanitize_uri,
    sanitized_cache_key,
)

app = typer.Typer(
    name="converge",
    help="converge - convergencia idempotente de archivos, variables de entorno y cache HTTP",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


@app.callback()
def _bootstrap(
    env_file: Optional[Path] = typer.Option(None, "--env-file", help="Archivo .env a cargar (default: ./.env)")
):
    """Carga el .env del proyecto antes de resolver rutas de estado."""
    env = env_file or Path.cwd() / ".env"
    if env.exists():
        load_dotenv(env)


def _providers(manifest: Path, verbose: bool = False) -> List[BaseProvider]:
    loaded = load_manifest(manifest)
    factory = ProviderFactory(console=console if verbose else None)
    return [factory.build(r) for r in loaded.resources]


def _validate_all(providers: List[BaseProvider]) -> List[Tuple[BaseProvider, Requirement]]:
    """Carga estado y valida todos los recursos antes de tocar nada."""
    failed: List[Tuple[BaseProvider, Requirement]] = []
    for p in providers:
        p.load_current_state()
        p.validate()
        failed.extend((p, r) for r in p.requirements.failed)
    return failed


def _label(p: BaseProvider) -> str:
    return escape(f"{p.name}[{p.state.identity}]")


def _fail(message: str) -> NoReturn:
    console.print(f"[red]✘ {escape(message)}[/red]")
    raise typer.Exit(1)


@app.command()
def plan(
    manifest: Path = typer.Argument(..., help="Manifiesto YAML de recursos"),
):
    """
    Muestra qué cambios se aplicarían, sin ejecutar.

    Ejemplo:
        converge plan resources.yaml
    """
    try:
        providers = _providers(manifest)
        results = [(p, p.plan()) for p in providers]
    except ConvergeError as e:
        _fail(str(e))

    table = Table(title="Plan", show_header=True, header_style="bold cyan")
    table.add_column("Recurso", style="cyan")
    table.add_column("Cambios", style="green")
    table.add_column("Problemas", style="red")
    for p, result in results:
        table.add_row(
            _label(p),
            escape("\n".join(result.actions)) if result.changed else "[dim]sin cambios[/dim]",
            escape("\n".join(str(e) for e in result.errors)),
        )
    console.print(table)


@app.command()
def drift(
    manifest: Path = typer.Argument(..., help="Manifiesto YAML de recursos"),
):
    """Detecta diferencias entre el estado deseado y el real."""
    try:
        providers = _providers(manifest)
        for p in providers:
            p.load_current_state()
        diffs = merge_diffs([p.detect_drift() for p in providers])
    except ConvergeError as e:
        _fail(str(e))
    _display_drift(diffs)


def _display_drift(diffs: List[StateDiff]) -> None:
    if not diffs:
        console.print("[green]✅ No se detectó drift. Estado deseado y real coinciden.[/green]")
        return
    table = Table(title="Drift detectado", show_header=True, header_style="bold")
    table.add_column("Recurso", style="cyan")
    table.add_column("Campo", style="cyan")
    table.add_column("Deseado", style="green")
    table.add_column("Real", style="yellow")
    for d in diffs:
        table.add_row(
            escape(d.resource_id), d.field, escape(str(d.desired)), "" if d.actual is None else escape(str(d.actual))
        )
    console.print(table)
    for action in plan_from_diffs(diffs):
        console.print(f"  [dim]→ {escape(action)}[/dim]")


@app.command()
def apply(
    manifest: Path = typer.Argument(..., help="Manifiesto YAML de recursos"),
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Solo validar y mostrar cambios"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Mostrar cada llamada al sistema"),
):
    """
    Valida todos los recursos y aplica los que no han convergido.

    Ejemplos:
        converge apply resources.yaml
        converge apply resources.yaml --dry-run
    """
    try:
        providers = _providers(manifest, verbose=verbose)
        failed = _validate_all(providers)
    except ConvergeError as e:
        _fail(str(e))

    if failed:
        lines = [f"• {_label(p)}: {escape(str(r.error))}" for p, r in failed]
        if dry_run:
            lines += [f"  [dim]{escape(r.whyrun)}[/dim]" for _, r in failed if r.whyrun]
        console.print(Panel("\n".join(lines), title="Requisitos incumplidos", border_style="red"))
        if not dry_run:
            raise typer.Exit(1)

    table = Table(title="Dry-run" if dry_run else "Convergencia", show_header=True, header_style="bold cyan")
    table.add_column("Recurso", style="cyan")
    table.add_column("Cambios", style="green")
    table.add_column("Estado", style="yellow")

    updated = 0
    for p in providers:
        changes = p.describe_changes()
        if dry_run:
            table.add_row(_label(p), escape("\n".join(changes)) or "-", "pendiente" if changes else "ok")
            continue
        try:
            p.apply()
        except (ConvergeError, OSError) as e:
            console.print(table)
            _fail(f"{p.name}[{p.state.identity}]: {e}")
        if p.state.updated:
            updated += 1
        table.add_row(_label(p), escape("\n".join(changes)) or "-", "actualizado" if p.state.updated else "ok")

    console.print(table)
    if not dry_run:
        console.print(f"[bold]{updated}/{len(providers)}[/bold] recurso(s) actualizados")


@app.command("cache-key")
def cache_key(
    uri: str = typer.Argument(..., help="URI del recurso remoto"),
):
    """Muestra las claves de cache (actual y antigua) derivadas de una URI."""
    table = Table(show_header=False)
    table.add_column("", style="cyan")
    table.add_column("", style="green")
    table.add_row("URI saneada", sanitize_uri(uri))
    table.add_row("Clave", sanitized_cache_key(uri))
    table.add_row("Clave antigua", legacy_cache_key(uri))
    console.print(table)


@app.command()
def version():
    """Muestra la versión y las rutas de estado"""
    console.print(Panel.fit(
        "[bold cyan]converge[/bold cyan]\n"
        "[dim]Convergencia idempotente de recursos del sistema[/dim]\n\n"
        f"[bold]Versión:[/bold] {__version__}\n"
        f"[bold]Estado:[/bold] {state_root()}\n"
        f"[bold]Cache:[/bold] {file_cache_root()}\n"
        f"[bold]Entorno:[/bold] {env_store_path()}",
        border_style="cyan"
    ))


def main():
    app()
