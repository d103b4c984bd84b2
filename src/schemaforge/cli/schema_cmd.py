"""Schema CLI commands: tokens, parse, check and schemas."""

import json
from pathlib import Path

import click
import yaml

from schemaforge.config import SchemaForgeConfig
from schemaforge.core.errors import DataError, LexerError, SchemaFileError, ValidationError
from schemaforge.dsl.lexer import TokenType, tokenize
from schemaforge.loader import SchemaLoader, dump_data_file, load_data_file, load_schema_file
from schemaforge.validation.validator import validate_object


def _load_rules_or_exit(schema_file: Path):
    try:
        return load_schema_file(schema_file)
    except SchemaFileError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)


@click.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def tokens(schema_file: Path):
    """Print the token stream of a schema file."""
    try:
        token_list = tokenize(schema_file.read_text(encoding="utf-8"))
    except LexerError as e:
        click.echo(click.style(f"Error: {schema_file}: {e}", fg="red"), err=True)
        raise SystemExit(1)
    except UnicodeDecodeError as e:
        click.echo(click.style(f"Error: {schema_file}: cannot decode schema: {e.reason}", fg="red"), err=True)
        raise SystemExit(1)

    for token in token_list:
        if token.type == TokenType.EOF:
            break
        value = "" if token.type not in (TokenType.IDENT, TokenType.NUMBER) else f" {token.value!r}"
        click.echo(f"{token.line}:{token.column}\t{token.type.name}{value}")


@click.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    show_default=True,
    help="Output format for the rule tree.",
)
def parse(schema_file: Path, output_format: str):
    """Parse a schema file and print its rule tree."""
    rules = _load_rules_or_exit(schema_file)
    tree = [rule.to_dict() for rule in rules]

    if output_format == "yaml":
        click.echo(yaml.safe_dump(tree, sort_keys=False, allow_unicode=True), nl=False)
    else:
        click.echo(json.dumps(tree, indent=2, ensure_ascii=False))


@click.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument(
    "data_files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--write",
    is_flag=True,
    default=False,
    help="Write valid data back with defaults filled in.",
)
@click.pass_obj
def check(config: SchemaForgeConfig, schema_file: Path, data_files: tuple[Path, ...], write: bool):
    """Validate data files (JSON or YAML) against a schema file."""
    rules = _load_rules_or_exit(schema_file)
    options = config.validation_options()

    failures = 0
    for data_file in data_files:
        try:
            value = load_data_file(data_file)
            validate_object(value, rules, options)
        except (DataError, ValidationError) as e:
            failures += 1
            click.echo(click.style(f"  ✗ {data_file}: {e}", fg="red"))
            continue

        click.echo(click.style(f"  ✓ {data_file}", fg="green"))
        if write:
            dump_data_file(data_file, value)

    if failures:
        click.echo(
            click.style(
                f"\n{failures} of {len(data_files)} file(s) failed validation",
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    click.echo(click.style(f"\nAll {len(data_files)} file(s) are valid.", fg="green", bold=True))


@click.command()
@click.option(
    "--dir",
    "schema_dir",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Schema directory (defaults to SCHEMAFORGE_SCHEMA_DIR or ./schemas).",
)
@click.pass_obj
def schemas(config: SchemaForgeConfig, schema_dir: Path | None):
    """List the schemas in a directory."""
    loader = SchemaLoader(schema_dir or config.schema_dir)
    try:
        loader.load_all()
    except SchemaFileError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)

    names = loader.list_schemas()
    click.echo(f"Loaded {len(names)} schema(s):")
    for name in names:
        rules = loader.get(name) or []
        click.echo(f"  ✓ {name} ({len(rules)} fields)")
