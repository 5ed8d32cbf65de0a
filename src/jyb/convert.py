"""Conversions between JSON, JSON Lines and YAML text."""

import datetime
import json
import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from jyb.config import Configuration, JSON
from jyb.emitter import value_to_yaml
from jyb.models import ConversionSummary, RecordResult, RecordStatus

log = logging.getLogger(__name__)


class ConversionError(ValueError):
    """Exception raised when input text can't be parsed."""

    pass


def _emitter_options(config: Optional[Configuration]) -> dict:
    config = config or Configuration()
    return {"ensure_ascii": config.ensure_ascii, "sanitize_control_chars": config.sanitize_control_chars}


def _load_json(text: str) -> JSON:
    try:
        return json.loads(text)
    except ValueError as error:
        # JSONDecodeError, or integer longer than the int max str digits limit
        raise ConversionError(f"Failed to parse JSON: {error}") from error


def json_to_yaml(json_text: str, config: Optional[Configuration] = None) -> str:
    """Convert single JSON document to YAML.

    :param json_text: JSON document
    :param config: converter settings, defaults if None
    :return: YAML text
    :raises ConversionError: if text is not valid JSON
    """
    return value_to_yaml(_load_json(json_text), 0, **_emitter_options(config))


def collect_records(jsonl_text: str, config: Optional[Configuration] = None) -> ConversionSummary:
    """
    Convert every non blank line of JSON Lines text independently.

    Malformed line does not stop conversion, it is recorded as error result
    and the next line is processed.

    :param jsonl_text: one JSON document per line
    :param config: converter settings, defaults if None
    :return: results in input order
    """
    records = []
    for index, raw_line in enumerate(jsonl_text.split("\n")):
        line = raw_line.strip()
        if line == "":
            continue
        try:
            records.append(
                RecordResult(
                    line_number=index + 1,
                    source=line,
                    status=RecordStatus.SUCCESS,
                    yaml=json_to_yaml(line, config),
                )
            )
        except ConversionError as error:
            log.warning(f"Error converting line {index + 1}: {error}")
            records.append(
                RecordResult(line_number=index + 1, source=line, status=RecordStatus.ERROR, message=str(error))
            )
    return ConversionSummary(records=records)


def jsonl_to_yaml(jsonl_text: str, config: Optional[Configuration] = None) -> str:
    """Convert JSON Lines text to YAML, failed lines become comments."""
    summary = collect_records(jsonl_text, config)
    log.debug(f"Converted {summary.succeeded} records, {summary.failed} failed")
    return summary.to_yaml()


def _json_default(value: Any) -> Any:
    # safe_load gives date/datetime for YAML timestamps
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value)


def _json_keys(value: Any) -> Any:
    """Turn mapping keys json.dumps can't write (dates, tuples) into strings."""
    if isinstance(value, dict):
        result = {}
        for key, item in value.items():
            if not (key is None or isinstance(key, (str, int, float, bool))):
                key = _json_default(key)
            result[key] = _json_keys(item)
        return result
    if isinstance(value, list):
        return [_json_keys(item) for item in value]
    return value


def yaml_to_json(yaml_text: str, indent: int = 2) -> str:
    """Convert YAML document to pretty printed JSON.

    :param yaml_text: single YAML document
    :param indent: JSON indentation
    :return: JSON text
    :raises ConversionError: if text is not valid YAML
    """
    try:
        data = yaml.safe_load(yaml_text)
    except yaml.YAMLError as error:
        raise ConversionError(f"Failed to parse YAML: {error}") from error
    return json.dumps(_json_keys(data), indent=indent, ensure_ascii=False, default=_json_default)


def pretty_json(json_text: str, indent: int = 2) -> str:
    return json.dumps(_load_json(json_text), indent=indent, ensure_ascii=False)


def minify_json(json_text: str) -> str:
    return json.dumps(_load_json(json_text), ensure_ascii=False, separators=(",", ":"))


def output_path_for(source: str | Path, suffix: str) -> Path:
    """Path of converted file, placed next to the source.

    Example:
        >>> output_path_for("data/users.json", ".jyb.yaml")
        PosixPath('data/users.jyb.yaml')

    :param source: source file path
    :param suffix: suffix replacing the last extension of the source
    :return: output path
    """
    source = Path(source)
    return source.with_name(f"{source.stem}{suffix}")


def convert_file(path: str | Path, config: Optional[Configuration] = None) -> Optional[Path]:
    """Convert JSON file to YAML file written next to it.

    :param path: JSON file
    :param config: converter settings, defaults if None
    :return: path of written YAML file, None if the file was empty
    :raises ConversionError: if file is not UTF-8 encoded JSON
    """
    config = config or Configuration()
    path = Path(path)
    try:
        with open(path, encoding="UTF-8") as file:
            text = file.read().strip()
    except UnicodeDecodeError as error:
        raise ConversionError(f"Failed to read {path} as UTF-8: {error}") from error
    if not text:
        log.warning(f"Skipping empty file: {path}")
        return None
    yaml_text = json_to_yaml(text, config)
    output = output_path_for(path, config.yaml_suffix)
    with open(output, "w", encoding="UTF-8") as file:
        file.write(yaml_text)
    log.info(f"Saved {path} as {output}")
    return output
