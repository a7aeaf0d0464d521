"""Command-line interface for diffbib.

Provides CLI commands for comparing and parsing BibTeX files.
"""

import importlib.metadata
import json
import sys
from pathlib import Path

import click

from diffbib.matching import DEFAULT_FIELDS_CSV, SIMILARITY_THRESHOLD
from diffbib.matching.strategies import strategy_options

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("diffbib")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development

EXIT_LOAD_ERROR = 1
EXIT_CONFIG_ERROR = 2


@click.group()
@click.version_option(version=__version__, prog_name="diffbib")
def cli() -> None:
    """Detect drift between two BibTeX bibliographies.

    Use 'diffbib COMMAND --help' for command-specific help.
    """


@cli.command()
@click.option("--origin", "-o", type=click.Path(), required=True, help="Origin .bib file")
@click.option("--destiny", "-d", type=click.Path(), required=True, help="Destiny .bib file")
@click.option(
    "--field",
    "-f",
    "fields",
    type=str,
    default=DEFAULT_FIELDS_CSV,
    show_default=True,
    help="Comma separated list of fields to compare in diff check.",
)
@click.option(
    "--strategy",
    "-s",
    type=str,
    default="hash",
    show_default=True,
    help=f"Diff strategy, options: [{strategy_options()}].",
)
@click.option(
    "--threshold",
    "-t",
    type=float,
    default=SIMILARITY_THRESHOLD,
    show_default=True,
    help="Similarity threshold for the bruteforce strategy.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Report format written to stdout.",
)
@click.option("--output", type=click.Path(), default=None, help="Also write the JSON report here.")
@click.option("--log-file", type=click.Path(), default=None, help="Append JSONL audit events here.")
@click.option("--lenient", is_flag=True, help="Keep parsable entries when a file has errors.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def compare(
    origin: str,
    destiny: str,
    fields: str,
    strategy: str,
    threshold: float,
    output_format: str,
    output: str | None,
    log_file: str | None,
    lenient: bool,
    verbose: bool,
) -> None:
    """Compare the ORIGIN and DESTINY bibliographies.

    Every origin entry is reported as common or only-in-origin, and every
    destiny entry without an origin counterpart as only-in-destiny.

    Examples
    --------
        diffbib compare -o before.bib -d after.bib
        diffbib compare -o mine.bib -d theirs.bib -s bruteforce -f title
        diffbib compare -o a.bib -d b.bib --format json --log-file events.jsonl
    """
    from diffbib.audit import AuditLogger
    from diffbib.engine import DiffConfig, run_diff
    from diffbib.errors import ComparisonCancelledError, ConfigurationError, SourceLoadError
    from diffbib.report import write_report_json

    try:
        config = DiffConfig(strategy=strategy, fields=fields, threshold=threshold, strict=not lenient)
    except ConfigurationError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    if verbose:
        click.echo("Comparing bibliographies...", err=True)
        click.echo(f"  Origin: {origin}", err=True)
        click.echo(f"  Destiny: {destiny}", err=True)
        click.echo(f"  Strategy: {config.strategy}", err=True)
        click.echo(f"  Fields: {', '.join(config.fields)}", err=True)

    try:
        logger = AuditLogger(Path(log_file)) if log_file else None
    except OSError as e:
        click.secho(f"Error: cannot open log file {log_file}: {e}", fg="red", err=True)
        sys.exit(EXIT_LOAD_ERROR)

    try:
        report = run_diff(origin, destiny, config=config, logger=logger)
    except SourceLoadError as e:
        click.secho(f"Error ({e.side}, {e.reason}): {e}", fg="red", err=True)
        sys.exit(EXIT_LOAD_ERROR)
    except ComparisonCancelledError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(EXIT_LOAD_ERROR)
    finally:
        if logger:
            logger.close()

    if output:
        try:
            write_report_json(report, output)
        except OSError as e:
            click.secho(f"Error: cannot write report to {output}: {e}", fg="red", err=True)
            sys.exit(EXIT_LOAD_ERROR)
        if verbose:
            click.echo(f"Wrote JSON report to: {output}", err=True)

    if output_format == "json":
        click.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False, sort_keys=True))
    else:
        click.echo(report.render_text())


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    required=True,
    help="Output JSONL file path",
)
@click.option("--lenient", is_flag=True, help="Keep parsable entries when the file has errors.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def parse(input_path: str, output: str, lenient: bool, verbose: bool) -> None:
    """Parse a BibTeX file to flat JSONL records.

    Examples
    --------
        diffbib parse references.bib -o records.jsonl
    """
    from diffbib import write_jsonl
    from diffbib.errors import SourceLoadError
    from diffbib.parse import load_source

    if verbose:
        click.echo(f"Parsing file: {input_path}", err=True)

    try:
        source = load_source(input_path, "origin", strict=not lenient)
    except SourceLoadError as e:
        click.secho(f"Error ({e.reason}): {e}", fg="red", err=True)
        sys.exit(EXIT_LOAD_ERROR)

    if verbose:
        for warning in source.warnings:
            click.echo(f"  warning: {warning}", err=True)
        click.echo(f"Found {len(source.records)} records", err=True)

    for error in source.errors:
        click.secho(f"Warning: skipped unparsable content: {error}", fg="yellow", err=True)

    try:
        write_jsonl(source.records, output)
    except OSError as e:
        click.secho(f"Error: cannot write records to {output}: {e}", fg="red", err=True)
        sys.exit(EXIT_LOAD_ERROR)

    click.secho(f"✓ Successfully wrote {len(source.records)} records to {output}", fg="green")


if __name__ == "__main__":
    cli()
