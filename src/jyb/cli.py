import click
import json
import logging
import sys
from pathlib import Path
from functools import wraps
from typing import Optional
from jyb.config import Configuration
from jyb.convert import (
    ConversionError,
    convert_file,
    json_to_yaml,
    jsonl_to_yaml,
    minify_json,
    output_path_for,
    pretty_json,
    yaml_to_json,
)
from jyb.utils import load_config, LogFormatter

log = logging.getLogger(__name__)


def setup_command(func):
    """Decorator to handle common CLI setup (logging, config loading)."""

    @wraps(func)
    def wrapper(config, debug, **kwargs):
        # Setup logging
        log_handler = logging.StreamHandler()
        log_handler.setFormatter(LogFormatter())
        logging.basicConfig(level=logging.DEBUG if debug else logging.WARNING, handlers=[log_handler])

        # Load config
        config_obj = load_config(config)
        if debug:
            log.debug(json.dumps(config_obj.model_dump(), indent=4))

        return func(config_obj=config_obj, **kwargs)

    return wrapper


def read_input(input_file: str) -> str:
    if input_file == "-":
        return click.get_text_stream("stdin").read()
    with open(input_file, encoding="UTF-8") as f:
        return f.read()


def target_path(input_file: str, output: Optional[str], save: bool, suffix: str) -> Optional[Path]:
    """Where to write the result, None means stdout."""
    if output:
        return Path(output)
    if save:
        if input_file == "-":
            raise click.UsageError("--save needs an input file, not stdin.")
        return output_path_for(input_file, suffix)
    return None


def write_output(content: str, output: Optional[Path], message: str) -> None:
    if output:
        with open(output, "w", encoding="UTF-8") as f:
            f.write(content)
        click.echo(f"{message}: {output}")
    else:
        click.echo(content)


@click.group()
@click.version_option(package_name="json-yaml-bridge")
def cli():
    """Convert between JSON, JSON Lines and YAML."""
    pass


@click.command("to-yaml")
@click.argument("input_file", default="-", type=click.Path(allow_dash=True, dir_okay=False))
@click.option("--config", default=None, help="Configuration file.")
@click.option("--debug", default=False, is_flag=True, help="Enable debug.")
@click.option("--output", default=None, help="Output file path (default: stdout).")
@click.option("--save", is_flag=True, help="Save next to the input file as <name>.jyb.yaml.")
@setup_command
def to_yaml(config_obj: Configuration, input_file, output, save):
    """Convert single JSON document to YAML."""
    text = read_input(input_file).strip()
    if not text:
        click.echo("No content to convert.", err=True)
        return
    try:
        yaml_text = json_to_yaml(text, config_obj)
    except ConversionError as error:
        raise click.ClickException(f"Failed to convert JSON to YAML: {error}") from error
    write_output(
        yaml_text, target_path(input_file, output, save, config_obj.yaml_suffix), "JSON converted to YAML and saved"
    )


@click.command("jsonl-to-yaml")
@click.argument("input_file", default="-", type=click.Path(allow_dash=True, dir_okay=False))
@click.option("--config", default=None, help="Configuration file.")
@click.option("--debug", default=False, is_flag=True, help="Enable debug.")
@click.option("--output", default=None, help="Output file path (default: stdout).")
@click.option("--save", is_flag=True, help="Save next to the input file as <name>.jyb.yaml.")
@setup_command
def jsonl_to_yaml_command(config_obj: Configuration, input_file, output, save):
    """Convert JSON Lines to YAML, one block per record.

    Lines that are not valid JSON are kept as YAML comments.
    """
    yaml_text = jsonl_to_yaml(read_input(input_file), config_obj)
    write_output(
        yaml_text, target_path(input_file, output, save, config_obj.yaml_suffix), "JSONL converted to YAML and saved"
    )


@click.command("to-json")
@click.argument("input_file", default="-", type=click.Path(allow_dash=True, dir_okay=False))
@click.option("--config", default=None, help="Configuration file.")
@click.option("--debug", default=False, is_flag=True, help="Enable debug.")
@click.option("--output", default=None, help="Output file path (default: stdout).")
@click.option("--save", is_flag=True, help="Save next to the input file as <name>.jyb.json.")
@setup_command
def to_json(config_obj: Configuration, input_file, output, save):
    """Convert YAML document to JSON."""
    text = read_input(input_file).strip()
    if not text:
        click.echo("No content to convert.", err=True)
        return
    try:
        json_text = yaml_to_json(text, indent=config_obj.json_indent)
    except ConversionError as error:
        raise click.ClickException(f"Failed to convert YAML to JSON: {error}") from error
    write_output(
        json_text, target_path(input_file, output, save, config_obj.json_suffix), "YAML converted to JSON and saved"
    )


@click.command()
@click.argument("input_file", default="-", type=click.Path(allow_dash=True, dir_okay=False))
@click.option("--config", default=None, help="Configuration file.")
@click.option("--debug", default=False, is_flag=True, help="Enable debug.")
@click.option("--output", default=None, help="Output file path (default: stdout).")
@click.option("--indent", default=None, type=click.IntRange(min=0), help="Indentation (default: from config).")
@setup_command
def pretty(config_obj: Configuration, input_file, output, indent):
    """Pretty print JSON document."""
    text = read_input(input_file).strip()
    if not text:
        click.echo("No content to format.", err=True)
        return
    try:
        json_text = pretty_json(text, indent=config_obj.json_indent if indent is None else indent)
    except ConversionError as error:
        raise click.ClickException(f"Failed to pretty print JSON: {error}") from error
    write_output(json_text, Path(output) if output else None, "Pretty JSON saved")


@click.command()
@click.argument("input_file", default="-", type=click.Path(allow_dash=True, dir_okay=False))
@click.option("--config", default=None, help="Configuration file.")
@click.option("--debug", default=False, is_flag=True, help="Enable debug.")
@click.option("--output", default=None, help="Output file path (default: stdout).")
@setup_command
def minify(config_obj: Configuration, input_file, output):
    """Minify JSON document."""
    text = read_input(input_file).strip()
    if not text:
        click.echo("No content to minify.", err=True)
        return
    try:
        json_text = minify_json(text)
    except ConversionError as error:
        raise click.ClickException(f"Failed to minify JSON: {error}") from error
    write_output(json_text, Path(output) if output else None, "Minified JSON saved")


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option("--config", default=None, help="Configuration file.")
@click.option("--debug", default=False, is_flag=True, help="Enable debug.")
@click.option(
    "--sanitize/--no-sanitize", default=True, help="Replace control characters in multi-line strings with spaces."
)
@setup_command
def files(config_obj: Configuration, files, sanitize):
    """Convert JSON files to <name>.jyb.yaml files next to them."""
    config_obj.sanitize_control_chars = sanitize
    failed = 0
    for file_path in files:
        if not Path(file_path).is_file():
            click.echo(f"File not found: {file_path}", err=True)
            failed += 1
            continue
        click.echo(f"Converting {file_path}...")
        try:
            output = convert_file(file_path, config_obj)
        except (ConversionError, OSError) as error:
            click.echo(f"Error converting {file_path}: {error}", err=True)
            failed += 1
            continue
        if output is None:
            click.echo(f"Skipping empty file: {file_path}", err=True)
        else:
            click.echo(f"Saved to {output}")
    if failed:
        sys.exit(1)


cli.add_command(to_yaml)
cli.add_command(jsonl_to_yaml_command)
cli.add_command(to_json)
cli.add_command(pretty)
cli.add_command(minify)
cli.add_command(files)

if __name__ == "__main__":
    cli()
