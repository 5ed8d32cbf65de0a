import json
import yaml
import logging
from pydantic import ValidationError
from pathlib import Path
from typing import Optional
from jyb.config import Configuration, JSON


def load_config_file(path: str | Path) -> JSON:
    if isinstance(path, str):
        path = Path(path)
    with open(path, encoding="UTF-8") as file:
        if path.suffix in [".yaml", ".yml"]:
            loaded = yaml.safe_load(file)
        else:
            loaded = json.load(file)
    return loaded


def load_config(file_name: Optional[str | Path] = None) -> Configuration:
    """Load converter configuration.

    :param file_name: YAML or JSON file, None for defaults
    :return: validated configuration
    :raises ValueError: if file content is not valid configuration
    :raises FileNotFoundError: if file does not exist
    """
    if file_name is None:
        return Configuration()
    loaded = load_config_file(file_name)
    try:
        # Empty YAML file loads as None
        return Configuration.model_validate(loaded or {})
    except ValidationError as error:
        raise ValueError("Error parsing configuration file") from error


class LogFormatter(logging.Formatter):
    """Colour log records by level, for terminal output on stderr."""

    _grey = "\x1b[38;21m"
    _green = "\x1b[32m"
    _yellow = "\x1b[33m"
    _red = "\x1b[31;21m"
    _bold_red = "\x1b[31;1m"
    _blue = "\x1b[34m"
    _white = "\x1b[37m"
    _bold = "\x1b[1m"
    _reset = "\x1b[0m"
    _prefix = (
        _green
        + "%(asctime)s  "
        + _reset
        + _blue
        + "%(name)s "
        + _reset
        + _bold
        + "%(levelname)s "
        + _reset
    )
    _level_colours = {
        logging.DEBUG: _grey,
        logging.INFO: _white,
        logging.WARNING: _yellow,
        logging.ERROR: _red,
        logging.CRITICAL: _bold_red,
    }

    def format(self, record):
        colour = self._level_colours.get(record.levelno, self._white)
        formatter = logging.Formatter(self._prefix + colour + "%(message)s" + self._reset)
        return formatter.format(record)
