"""CLI entrypoint for the pod usage collector."""

import logging
from dataclasses import replace
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from podusage.application import execute_collection, render_collection
from podusage.config import load_config

app = typer.Typer(
    name="podusage",
    help="Collect per-pod and per-container CPU/memory usage via kubectl.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


def _resolve_version() -> str:
    """Return installed package version or local fallback."""
    try:
        return package_version("podusage")
    except PackageNotFoundError:
        return "0.1.0"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _handle_error(exc: Exception) -> None:
    """Convert domain exceptions to CLI exit codes."""
    if isinstance(exc, ValueError):
        console.print(f"[red]ERROR:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    if isinstance(exc, RuntimeError):
        console.print(f"[red]ERROR:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    raise exc


@app.command()
def collect(
    report_format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Report format: csv or text. Defaults to PODUSAGE_FORMAT or csv.",
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for report artifacts. Defaults to PODUSAGE_OUTPUT_DIR or .",
    ),
    max_concurrency: int | None = typer.Option(
        None,
        "--max-concurrency",
        "-c",
        help="Maximum concurrent kubectl processes.",
    ),
    exclude_system: bool | None = typer.Option(
        None,
        "--exclude-system/--include-system",
        help="Skip kube-* and openshift-* namespaces.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
    ),
) -> None:
    """Collect pod CPU/memory usage across all namespaces and write a report."""
    if version:
        console.print(f"podusage {_resolve_version()}")
        raise typer.Exit(code=0)
    try:
        config = load_config()
        overrides = {
            "report_format": report_format.lower() if report_format else None,
            "output_dir": output_dir,
            "max_concurrency": max_concurrency,
            "exclude_system": exclude_system,
        }
        config = replace(
            config, **{key: val for key, val in overrides.items() if val is not None}
        )
        _configure_logging(config.log_level)

        report = execute_collection(config)
        render_collection(report.result, console)
        console.print(f"[green]Report:[/green] {report.report_path}")
        console.print(f"[green]Summary:[/green] {report.summary_path}")
    except (ValueError, RuntimeError) as exc:
        _handle_error(exc)


def main() -> None:
    """Project entrypoint for `podusage` script."""
    app()


if __name__ == "__main__":
    main()
