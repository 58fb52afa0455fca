"""
CLI entry point: ties together collector → analyzer → payload parser → reporter.

Usage:
  # Scan the current directory (needs ANTHROPIC_API_KEY):
  codeguard scan

  # Scan a directory and include low severity findings:
  codeguard scan ./src --all

  # SARIF for GitHub Code Scanning:
  codeguard scan . --format sarif --output results.sarif

  # List the files that would be sent, without calling the analyzer:
  codeguard scan . --dry-run

  # Render a saved analyzer payload:
  codeguard report payload.json --format json

Exit codes:
  0: no findings
  1: findings reported
  2: error (bad path, invalid payload, missing API key, etc.)
"""

import logging
import os
import sys
from typing import Optional

import click
import yaml
from anthropic import APIError

from codeguard.analyzer import AnalysisError, analyze_files
from codeguard.collector import collect_files
from codeguard.config import load_config
from codeguard.findings import ScanResult, load_payload_file, parse_payload
from codeguard.reporter import ANSI, PLAIN, report_console, report_json, report_sarif

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2

OUTPUT_FORMATS = ["pretty", "json", "sarif"]


def _setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(EXIT_ERROR)


def _render(result: ScanResult, output_format: str, show_all: bool, color: bool) -> str:
    if output_format == "json":
        return report_json(result)
    if output_format == "sarif":
        return report_sarif(result.findings)
    return report_console(result, show_all=show_all, style=ANSI if color else PLAIN)


def _emit_report(
    result: ScanResult,
    output_format: str,
    show_all: bool,
    output_path: Optional[str],
) -> None:
    """Write the report to stdout or a file, then exit with the findings status."""
    output = _render(result, output_format, show_all, color=output_path is None)

    if output_path:
        try:
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(output + "\n")
        except OSError as e:
            _fail(f"could not write report to {output_path}: {e}")
        click.echo(f"Report written to {output_path}", err=True)
    else:
        click.echo(output)

    sys.exit(EXIT_FINDINGS if result.findings else EXIT_OK)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging.")
def cli(verbose: bool):
    """CodeGuard AI: AI-powered security review for your source tree."""
    _setup_logging(verbose)


@cli.command()
@click.argument("path", default=".")
@click.option("-f", "--format", "output_format", type=click.Choice(OUTPUT_FORMATS), default="pretty", help="Output format.")
@click.option("-a", "--all", "show_all", is_flag=True, help="Show all issues including low severity.")
@click.option("-o", "--output", "output_path", default=None, help="Write the report to a file instead of stdout.")
@click.option("--config", "config_path", default=None, help="Path to .codeguard.yml config file.")
@click.option("--model", default=None, help="Claude model to use (overrides config file).")
@click.option("--dry-run", is_flag=True, help="List the files that would be analyzed and exit.")
def scan(
    path: str,
    output_format: str,
    show_all: bool,
    output_path: Optional[str],
    config_path: Optional[str],
    model: Optional[str],
    dry_run: bool,
):
    """Scan a directory for security issues.

    Exits with code 0 if no issues found, 1 if issues found, 2 on error.
    """
    path = os.path.abspath(path)

    # Load config file (CLI flags override config values)
    try:
        config = load_config(config_path=config_path, scan_path=path)
    except (yaml.YAMLError, ValueError) as e:
        _fail(f"invalid config file: {e}")

    try:
        collection = collect_files(path, config.collect_options())
    except (FileNotFoundError, NotADirectoryError) as e:
        _fail(str(e))

    if collection.skipped_files:
        click.echo(f"Warning: skipped {collection.skipped_files} file(s) (too large)", err=True)

    if not collection.files:
        click.echo("No source files found to scan.")
        sys.exit(EXIT_OK)

    if dry_run:
        for cf in collection.files:
            click.echo(cf.path)
        click.echo(
            f"\n{len(collection.files)} file(s) would be analyzed, "
            f"{collection.skipped_files} skipped (too large).",
            err=True,
        )
        sys.exit(EXIT_OK)

    if not os.environ.get("ANTHROPIC_API_KEY"):
        _fail("scan requires ANTHROPIC_API_KEY environment variable.")

    click.echo(f"Analyzing {len(collection.files)} file(s) with Claude AI...", err=True)
    try:
        payload = analyze_files(collection.files, model=model or config.model)
    except (AnalysisError, APIError) as e:
        logger.error("Analysis failed: %s", e)
        _fail(f"analysis failed: {e}")

    try:
        result = parse_payload(payload, files_scanned=len(collection.files))
    except ValueError as e:
        _fail(f"invalid analyzer response: {e}")

    _emit_report(result, output_format, show_all or config.show_all, output_path)


@cli.command()
@click.argument("payload_path")
@click.option("-f", "--format", "output_format", type=click.Choice(OUTPUT_FORMATS), default="pretty", help="Output format.")
@click.option("-a", "--all", "show_all", is_flag=True, help="Show all issues including low severity.")
@click.option("-o", "--output", "output_path", default=None, help="Write the report to a file instead of stdout.")
@click.option("--files-scanned", type=int, default=None, help="Override the payload's files-scanned count.")
def report(
    payload_path: str,
    output_format: str,
    show_all: bool,
    output_path: Optional[str],
    files_scanned: Optional[int],
):
    """Render a saved analyzer payload (JSON) as a report.

    Exits with code 0 if no issues found, 1 if issues found, 2 on error.
    """
    try:
        result = load_payload_file(payload_path, files_scanned=files_scanned)
    except FileNotFoundError as e:
        _fail(str(e))
    except ValueError as e:
        _fail(f"invalid payload: {e}")

    _emit_report(result, output_format, show_all, output_path)


if __name__ == "__main__":
    cli()
