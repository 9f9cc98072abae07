"""depsweep CLI - find unreferenced source files and unused dependencies."""
import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from .analyzer import (
    DependencyUsageAnalyzer,
    FileCollector,
    SpecifierIndex,
    UsageResolver,
)
from .config import AuditConfig, __version__, load_config
from .errors import ReportWriteError, RootNotFound
from .models import Report
from .reporter import ReportGenerator
from .utils.logger import configure_logging
from .utils.safe_console import SafeConsole


app = typer.Typer(
    name="depsweep",
    help="Find source files nothing imports and dependencies nothing uses",
    add_completion=False
)
console = SafeConsole()


def analyze_project(config: AuditConfig, console: Optional[Console] = None) -> Report:
    """Run both analyses and assemble the report.

    Each file is read and scanned once; the resulting specifier sets feed
    both the unused-file and the unused-dependency analysis.

    Args:
        config: Audit settings
        console: Console for progress output (silent if None)

    Returns:
        Report (not yet written)

    Raises:
        RootNotFound: If the source root doesn't exist
    """
    records = FileCollector(config).collect()
    if console is not None:
        console.print(f"Found {len(records)} source files to analyze.")

    index = SpecifierIndex.build(records)

    unused_files = UsageResolver(config).find_unused(records, index)
    unused_dependencies = DependencyUsageAnalyzer(config).find_unused_from_manifest(index.all_specifiers())

    return ReportGenerator(config).build(unused_files, unused_dependencies)


def _version_callback(value: bool):
    if value:
        console.print(f"depsweep {__version__}")
        raise typer.Exit()


@app.command()
def audit(
    project_path: str = typer.Argument(".", help="Project root containing the source directory and package.json"),
    source_dir: Optional[str] = typer.Option(None, "--source-dir", "-s", help="Source directory to scan, relative to the project root"),
    manifest: Optional[str] = typer.Option(None, "--manifest", "-m", help="Dependency manifest, relative to the project root"),
    report: Optional[str] = typer.Option(None, "--report", "-o", help="Report file, relative to the project root"),
    reachability: bool = typer.Option(False, "--reachability", help="Report files not reachable from entry points (stricter than direct references)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Scan the project and write the unused code report."""
    configure_logging(verbose)

    project_root = Path(project_path).resolve()
    config = load_config(
        project_root,
        source_dir=source_dir,
        manifest_file=manifest,
        report_file=report,
        reachability=reachability or None,
    )

    console.print(f"[bold blue]Analyzing project:[/bold blue] {escape(str(project_root))}")
    if config.reachability:
        console.print("[yellow]⚠ Reachability mode: files must be reachable from an entry point to count as used.[/yellow]")

    start_time = time.time()
    try:
        result = analyze_project(config, console)
    except RootNotFound as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    try:
        generator = ReportGenerator(config)
        generator.write(result)
    except ReportWriteError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    generator.print_summary(result, console)
    console.print(f"[dim]Finished in {time.time() - start_time:.2f}s[/dim]")


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
):
    """depsweep - static dependency-usage analyzer for JavaScript/TypeScript projects."""


if __name__ == "__main__":
    app()
