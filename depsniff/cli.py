"""CLI entry point for Depsniff."""

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from depsniff.core.detector import detect_module_system
from depsniff.core.dispatcher import Dispatcher
from depsniff.core.exceptions import DepsniffError
from depsniff.core.paperwork import LocalFileSystem
from depsniff.core.resolver import dialect_for_path
from depsniff.core.scanner import Scanner

app = typer.Typer(
    name="depsniff",
    help="List the module dependencies of JavaScript, TypeScript and stylesheet files.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def build_options(
    dialect: str | None = None,
    es6_mixed_imports: bool = False,
    amd_skip_lazy_loaded: bool = False,
    include_core: bool = True,
) -> dict[str, Any]:
    """Map CLI flags onto the configuration mapping paperwork accepts."""
    options: dict[str, Any] = {"includeCore": include_core}
    if dialect:
        options["type"] = dialect
    if es6_mixed_imports:
        options["es6"] = {"mixedImports": True}
    if amd_skip_lazy_loaded:
        options["amd"] = {"skipLazyLoaded": True}
    return options


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """List the module dependencies of source files."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


@app.command()
def deps(
    file: Annotated[Path, typer.Argument(help="File to read")],
    dialect: Annotated[
        str | None,
        typer.Option("--type", "-t", help="Dialect override: commonjs, amd, es6, ts, tsx, css, ..."),
    ] = None,
    es6_mixed_imports: Annotated[
        bool, typer.Option("--es6-mixed-imports", help="Also report CommonJS requires in ES modules")
    ] = False,
    amd_skip_lazy_loaded: Annotated[
        bool, typer.Option("--amd-skip-lazy-loaded", help="Ignore lazily loaded AMD requires")
    ] = False,
    no_core: Annotated[bool, typer.Option("--no-core", help="Leave out built-in modules")] = False,
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Print the dependencies of a file, one per line."""
    options = build_options(dialect, es6_mixed_imports, amd_skip_lazy_loaded, not no_core)

    try:
        dependencies = Dispatcher().paperwork(file, options)
    except OSError as e:
        err_console.print(f"[red]Cannot read {file}: {e.strerror or e}[/red]")
        raise typer.Exit(code=1) from e
    except DepsniffError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2) from e

    if output_json:
        print(json.dumps(dependencies))
    else:
        for dependency in dependencies:
            print(dependency)


@app.command("dialect")
def show_dialect(
    file: Annotated[Path, typer.Argument(help="File to inspect")],
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show the dialect a file resolves to."""
    resolved = dialect_for_path(file)
    detected = resolved is None

    if detected:
        try:
            content = LocalFileSystem().read_text(str(file))
        except OSError as e:
            err_console.print(f"[red]Cannot read {file}: {e.strerror or e}[/red]")
            raise typer.Exit(code=1) from e
        resolved = detect_module_system(content)

    if output_json:
        print(json.dumps({"file": str(file), "dialect": resolved.value, "detected": detected}))
    else:
        source = "detected" if detected else "from extension"
        console.print(f"[cyan]{resolved.value}[/cyan] [dim]({source})[/]")


@app.command()
def scan(
    path: Annotated[Path, typer.Argument(help="Directory to scan")] = Path("."),
    exclude: Annotated[
        list[str] | None, typer.Option("--exclude", "-e", help="Patterns to exclude")
    ] = None,
    no_core: Annotated[bool, typer.Option("--no-core", help="Leave out built-in modules")] = False,
    es6_mixed_imports: Annotated[
        bool, typer.Option("--es6-mixed-imports", help="Also report CommonJS requires in ES modules")
    ] = False,
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Scan a directory and list the dependencies of every supported file."""
    path = path.resolve()
    options = build_options(es6_mixed_imports=es6_mixed_imports, include_core=not no_core)
    scanner = Scanner(Dispatcher(), options)

    if output_json:
        report = scanner.scan_directory(path, exclude_patterns=exclude or [])
        print(
            json.dumps(
                {
                    "files": report.dependencies,
                    "skipped": report.skipped,
                    "errors": report.errors,
                }
            )
        )
        return

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(f"Scanning [cyan]{path.name}[/]", total=None)

        def on_progress(file: Path, current: int, total: int) -> None:
            progress.update(task, total=total, completed=current)
            try:
                rel_path: Path | str = file.relative_to(path)
            except ValueError:
                rel_path = file.name
            progress.update(task, description=f"[cyan]{rel_path}[/]")

        report = scanner.scan_directory(
            path, exclude_patterns=exclude or [], on_progress=on_progress
        )

    for file, dependencies in report.dependencies.items():
        console.print(f"[bold cyan]{file}[/]")
        if not dependencies:
            console.print("  [dim]No dependencies[/]")
        for dependency in dependencies:
            console.print(f"  {dependency}")

    console.print("[green]Done![/green]")
    console.print(f"  Files scanned: {report.files}")
    if report.skipped:
        console.print(f"  [dim]Skipped: {report.skipped}[/]")
    if report.errors:
        console.print(f"  [red]Errors: {len(report.errors)}[/red]")
        for error in report.errors:
            console.print(f"    {error}")


if __name__ == "__main__":
    app()
