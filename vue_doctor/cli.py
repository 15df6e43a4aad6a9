"""CLI entrypoint for vue-doctor."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from vue_doctor import __version__
from vue_doctor.config import DoctorConfig, default_config_template, load_config
from vue_doctor.doctor import diagnose
from vue_doctor.git import DEFAULT_DIFF_BASE, get_changed_files
from vue_doctor.output import (
    render_fix,
    render_json,
    render_project_info,
    render_score,
    render_score_only,
    render_summary,
    render_verbose,
)
from vue_doctor.project import ProjectError
from vue_doctor.rules import list_rule_info

app = typer.Typer(
    name="vue-doctor",
    no_args_is_help=True,
    help="Diagnose and fix issues in your Vue.js app.",
)


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit.", callback=version_callback),
    ] = False,
) -> None:
    """Root command callback."""
    _ = version


@app.command("scan")
def scan_command(
    directory: Annotated[Path, typer.Argument(help="Project directory to scan.")] = Path("."),
    lint: Annotated[
        bool | None,
        typer.Option("--lint/--no-lint", help="Run lint checks.", show_default=False),
    ] = None,
    dead_code: Annotated[
        bool | None,
        typer.Option(
            "--dead-code/--no-dead-code", help="Run dead code detection.", show_default=False
        ),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Show file details per rule.")] = False,
    score_only: Annotated[bool, typer.Option("--score", help="Output only the score.")] = False,
    diff: Annotated[
        bool, typer.Option("--diff", help="Scan only files changed versus --base.")
    ] = False,
    base: Annotated[str, typer.Option(help="Base branch for --diff.")] = DEFAULT_DIFF_BASE,
    fix: Annotated[
        bool, typer.Option("--fix", help="Output diagnostics in a structured auto-fix format.")
    ] = False,
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config file."),
    ] = None,
) -> None:
    """Scan a Vue project and print diagnostics with a health score."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    _configure_logging(verbose)

    include_paths: list[Path] | None = None
    diff_base: str | None = None
    if diff:
        diff_info = get_changed_files(directory, base)
        if not diff_info.changed_files:
            typer.echo("No changed files found — nothing to scan")
            return
        include_paths = diff_info.changed_files
        diff_base = diff_info.base

    try:
        result = diagnose(
            directory,
            lint=lint,
            dead_code=dead_code,
            include_paths=include_paths,
            config_path=config_file,
        )
    except ProjectError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if score_only:
        typer.echo(render_score_only(result.score))
        return

    if output_format == "json":
        typer.echo(render_json(result, diff_base=diff_base))
        return

    show_details = verbose or bool(result.config and result.config.verbose)
    typer.echo(render_project_info(result.project))
    if include_paths:
        typer.echo(
            typer.style(f"  Mode: diff ({len(include_paths)} changed files)\n", dim=True)
        )
    if fix:
        typer.echo(render_fix(result.diagnostics))
    elif show_details:
        typer.echo(render_verbose(result.diagnostics))
    else:
        typer.echo(render_summary(result.diagnostics))
    typer.echo(render_score(result))


@app.command("rules")
def rules_command(
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
) -> None:
    """List the built-in Vue rules."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    rule_info = list_rule_info()
    if output_format == "json":
        payload = {
            "rules": [
                {
                    "rule_id": item.rule_id,
                    "severity": item.severity,
                    "category": item.category,
                    "kind": item.kind,
                    "frameworks": list(item.frameworks) if item.frameworks else None,
                    "message": item.message,
                    "help": item.help,
                }
                for item in rule_info
            ]
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Available rules:"]
    for item in rule_info:
        scope = f" ({', '.join(item.frameworks)} only)" if item.frameworks else ""
        lines.append(f"- {item.rule_id} [{item.severity}, {item.category}]{scope} - {item.message}")
    typer.echo("\n".join(lines))


@app.command("config")
def config_command(
    directory: Annotated[Path, typer.Option(help="Project directory.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config file."),
    ] = None,
) -> None:
    """Show resolved configuration."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    app_config = _load_config_or_raise(directory, config_file) or DoctorConfig()
    payload = app_config.to_dict()

    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- ignore.rules: {payload['ignore']['rules']}",
        f"- ignore.files: {payload['ignore']['files']}",
        f"- rules.enable: {payload['rules']['enable']}",
        f"- rules.disable: {payload['rules']['disable']}",
        f"- lint: {payload['lint']}",
        f"- dead_code: {payload['dead_code']}",
        f"- verbose: {payload['verbose']}",
    ]
    typer.echo("\n".join(lines))


@app.command("config-init")
def config_init_command(
    out: Annotated[Path, typer.Option(help="Output path for starter config TOML.")] = Path(
        ".vue-doctor.toml"
    ),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite if file already exists."),
    ] = False,
) -> None:
    """Create a starter project config file."""
    out_path = out.resolve()
    if out_path.exists() and not force:
        raise typer.BadParameter(
            f"Refusing to overwrite existing file: {out_path}. Use --force to overwrite."
        )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")


def main() -> None:
    """Console script entrypoint."""
    app()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=verbose)],
        force=True,
    )


def _load_config_or_raise(directory: Path, config_file: Path | None) -> DoctorConfig | None:
    try:
        return load_config(directory, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc
