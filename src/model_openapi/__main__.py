"""CLI entry point for model-openapi."""

import json
import sys
from pathlib import Path
from typing import Optional

import click

from .config import Config
from .exceptions import ModelDocumentError
from .logging_setup import configure_logging
from .models.document import ModelDocument
from .schema_gen.schema_converter_service import SchemaConverterService


@click.group()
@click.option(
    "--config-file", "-c",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="Path to a JSON configuration file.",
    envvar="MODEL_OPENAPI_CONFIG_FILE"
)
@click.option(
    "--log-level", "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None, # Falls back to the Config value
    help="Override the logging level (e.g., DEBUG, INFO).",
    envvar="MODEL_OPENAPI_LOGGING__LEVEL"
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"], case_sensitive=False),
    default=None,
    help="Override logging format.",
    envvar="MODEL_OPENAPI_LOGGING__FORMAT"
)
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[str], log_level: Optional[str], log_format: Optional[str]) -> None:
    """model-openapi - Converts data-model validation schemas to OpenAPI schema objects."""
    try:
        if config_file:
            cfg = Config.from_file(Path(config_file))
        else:
            # Environment variables (and .env if present)
            cfg = Config()
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    if log_level:
        cfg.logging.level = log_level.upper()
    if log_format:
        cfg.logging.format = log_format.lower()

    configure_logging(cfg.logging)
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@cli.command()
@click.argument("model_file", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option(
    "--output-file", "-o",
    type=click.Path(dir_okay=False, writable=True, resolve_path=True),
    help="Write the OpenAPI schema to this file instead of stdout."
)
@click.option("--indent", type=click.IntRange(0, 8), default=None, help="JSON indentation (defaults to the configured output indent).")
@click.option("--report", is_flag=True, default=False, help="Print conversion issues to stderr.")
@click.pass_context
def convert(ctx: click.Context, model_file: str, output_file: Optional[str], indent: Optional[int], report: bool) -> None:
    """Converts a JSON model document to an OpenAPI schema object."""
    config: Config = ctx.obj["config"]
    try:
        document = ModelDocument.from_file(Path(model_file))
    except ModelDocumentError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    result = SchemaConverterService(app_config=config).convert_model(document, model_name=document.name)
    if result.error_message:
        click.echo(f"Error: {result.error_message}", err=True)
        sys.exit(1)

    rendered = json.dumps(result.openapi_schema, indent=config.conversion.output_indent if indent is None else indent)
    if output_file:
        try:
            with open(output_file, "w", encoding="utf-8") as f:
                f.write(rendered + "\n")
        except IOError as e:
            click.echo(f"Error writing output file {output_file}: {e}", err=True)
            sys.exit(1)
        click.echo(f"OpenAPI schema written to {output_file}", err=True)
    else:
        click.echo(rendered)

    if report:
        for issue in result.validation_issues:
            click.echo(f"[{issue.severity}] {issue.path or '/'}: {issue.message}", err=True)


@cli.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from . import __version__
    click.echo(f"model-openapi v{__version__}")


@cli.command()
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show current configuration."""
    config: Config = ctx.obj["config"]
    click.echo(json.dumps(config.model_dump(mode="json"), indent=2))


if __name__ == "__main__":
    cli()
