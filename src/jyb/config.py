"""Stuff related to application configuration."""

from pydantic import BaseModel, ConfigDict, Field
from typing import TypeAlias

#: General JSON type
JSON: TypeAlias = dict[str, "JSON"] | list["JSON"] | str | int | float | bool | None


class Configuration(BaseModel):
    """Converter settings.

    Everything has a default, so running without a configuration file gives
    the same output as the editor extension did.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)
    #: Suffix of YAML files written next to the converted source file.
    yaml_suffix: str = Field(".jyb.yaml", min_length=1)
    #: Suffix of JSON files written next to the converted source file.
    json_suffix: str = Field(".jyb.json", min_length=1)
    #: Indentation used for pretty printed JSON (YAML to JSON, pretty).
    json_indent: int = Field(2, ge=0)
    #: Escape non-ASCII characters in double quoted scalars as \uXXXX.
    ensure_ascii: bool = False
    #: Replace control characters in block literal lines with spaces.
    sanitize_control_chars: bool = False
