"""
Hand written JSON value to YAML text emitter.

YAML is produced directly from the parsed JSON tree instead of going through
a YAML library, so that multi-line strings always come out as block literals
with an explicit chomping indicator and strings are quoted only when a YAML
loader would otherwise misread them.

Example:
    >>> print(value_to_yaml({"name": "John", "note": "line 1\\nline 2"}))
    name: John
    note: |-
      line 1
      line 2
"""

import json
import math
import re
from typing import Any, List

from jyb.config import JSON

#: Leading characters YAML reads as syntax at the start of a plain scalar.
SPECIAL_START_RE = re.compile(r"^[\s\-:{}\[\],&*#?|<>=!%@`]")
#: Looks like the start of a number.
NUMBER_START_RE = re.compile(r"^[0-9\-]")
#: Words YAML 1.1 loaders turn into booleans or null.
RESERVED_WORD_RE = re.compile(r"true|false|null|yes|no|on|off", re.IGNORECASE)
#: Bare numbers and versions like 1.2.3
BARE_NUMBER_RE = re.compile(r"[0-9.]+")
#: First line of a rendered block literal.
BLOCK_MARKER_RE = re.compile(r"\|[+\-]?")
#: Control characters that are not allowed inside a block literal.
CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


def needs_quotes(text: str) -> bool:
    """Check if plain scalar would be misread by YAML loader.

    :param text: candidate scalar (value or mapping key)
    :return: True if it has to be double quoted
    """
    return bool(
        SPECIAL_START_RE.match(text)
        or NUMBER_START_RE.match(text)
        or RESERVED_WORD_RE.fullmatch(text)
        or BARE_NUMBER_RE.fullmatch(text)
    )


def escape_string(text: str, ensure_ascii: bool = False) -> str:
    """Body of double quoted scalar, escaped like JSON string literal.

    :param text: raw string
    :param ensure_ascii: escape non-ASCII characters as \\uXXXX
    :return: escaped string without surrounding quotes
    """
    return json.dumps(text, ensure_ascii=ensure_ascii)[1:-1]


def format_string(value: str, ensure_ascii: bool = False, sanitize_control_chars: bool = False) -> str:
    """
    Format string value as block literal, quoted or plain scalar.

    Strings with newlines or ": " become block literals. Block content is
    returned unindented, the caller indents it to the right depth.

    :param value: string to format
    :param ensure_ascii: escape non-ASCII characters in quoted scalars
    :param sanitize_control_chars: replace control characters in block lines with spaces
    :return: YAML scalar text
    """
    if "\n" in value or ": " in value:
        lines = value.split("\n")
        if sanitize_control_chars:
            lines = [CONTROL_CHARS_RE.sub(" ", line) for line in lines]
        if value.endswith("\n\n"):
            chomping = "+"
        elif value.endswith("\n"):
            chomping = ""
        else:
            chomping = "-"
        # Splitting "a\n" gives a trailing empty element, chomping restores it
        if lines[-1] == "":
            lines.pop()
        return "\n".join([f"|{chomping}"] + lines)

    escaped = escape_string(value, ensure_ascii)
    if value == "" or needs_quotes(value) or escaped != value:
        return f'"{escaped}"'
    return value


def format_key(key: str, ensure_ascii: bool = False) -> str:
    """Format mapping key, quoting it when plain key would be invalid."""
    escaped = escape_string(key, ensure_ascii)
    if key == "" or needs_quotes(key) or escaped != key or ": " in key:
        return f'"{escaped}"'
    return key


def format_multiline_yaml(yaml_value: str, prefix: str, indent_str: str) -> List[str]:
    """
    Attach prefix to already rendered nested value.

    Block literal keeps its marker on the prefix line and the content is
    indented two spaces more. Nested mappings and sequences were rendered
    with their own indentation, so they go below the prefix line unchanged.

    :param yaml_value: rendered value
    :param prefix: "- " for sequence items, "key: " for mapping entries
    :param indent_str: indentation of the parent level
    :return: output lines
    """
    lines = yaml_value.split("\n")
    if BLOCK_MARKER_RE.fullmatch(lines[0]):
        result = [f"{indent_str}{prefix}{lines[0]}"]
        result.extend(f"{indent_str}  {line}" for line in lines[1:])
        return result
    return [f"{indent_str}{prefix}"] + lines


def format_number(value: int | float) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return ".nan"
    if math.isinf(value):
        return ".inf" if value > 0 else "-.inf"
    text = repr(value)
    # YAML 1.1 floats need a dot in the mantissa, 1e+21 would load as string
    if "e" in text and "." not in text:
        mantissa, exponent = text.split("e")
        text = f"{mantissa}.0e{exponent}"
    return text


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Not a JSON value: {name}")


def decode_embedded_json(value: str) -> JSON:
    """Parse string holding JSON document, return string itself if it does not."""
    try:
        return json.loads(value, parse_constant=_reject_constant)
    except ValueError:
        return value


def _append_entry(items: List[str], prefix: str, rendered: str, indent_str: str) -> None:
    if "\n" in rendered or rendered.startswith(" "):
        items.extend(format_multiline_yaml(rendered, prefix, indent_str))
    else:
        items.append(f"{indent_str}{prefix}{rendered}")


def value_to_yaml(
    value: JSON, indent: int = 0, *, ensure_ascii: bool = False, sanitize_control_chars: bool = False
) -> str:
    """
    Convert JSON value to YAML text.

    Strings which contain JSON document (other than plain string) are
    expanded, so '{"a": 1}' given as string renders as nested mapping.

    :param value: parsed JSON value
    :param indent: indentation (in spaces) of this value's block lines
    :param ensure_ascii: escape non-ASCII characters in quoted scalars
    :param sanitize_control_chars: replace control characters in block literals with spaces
    :return: YAML text, without trailing newline
    """
    options = {"ensure_ascii": ensure_ascii, "sanitize_control_chars": sanitize_control_chars}
    indent_str = " " * indent

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        parsed = decode_embedded_json(value)
        if not isinstance(parsed, str):
            return value_to_yaml(parsed, indent, **options)
        return format_string(value, **options)
    if isinstance(value, (list, tuple)):
        if len(value) == 0:
            return "[]"
        items: List[str] = []
        for item in value:
            _append_entry(items, "- ", value_to_yaml(item, indent + 2, **options), indent_str)
        return "\n".join(items)
    if isinstance(value, dict):
        if len(value) == 0:
            return "{}"
        items = []
        for key, key_value in value.items():
            prefix = f"{format_key(str(key), ensure_ascii)}: "
            _append_entry(items, prefix, value_to_yaml(key_value, indent + 2, **options), indent_str)
        return "\n".join(items)
    return str(value)
