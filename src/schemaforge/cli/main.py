"""SchemaForge CLI entry point."""

import logging

import click

from schemaforge.config import SchemaForgeConfig


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """SchemaForge: validate data files against field DSL schemas."""
    try:
        config = SchemaForgeConfig.from_env()
    except ValueError as e:
        raise click.UsageError(str(e))

    logging.basicConfig(
        level=logging.DEBUG if verbose else config.logging_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = config


# Register subcommands
from schemaforge.cli.schema_cmd import check, parse, schemas, tokens  # noqa: E402

cli.add_command(tokens)
cli.add_command(parse)
cli.add_command(check)
cli.add_command(schemas)
