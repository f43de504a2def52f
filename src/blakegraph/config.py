import os
from pathlib import Path

import yaml

from .errors import GraphError
from .logger import get_logger
from .xml_stream import DEFAULT_ENCODING

logger = get_logger("config")


CONFIG_ENV_VAR = "BLAKEGRAPH_CONFIG"
DEFAULT_CONFIG_PATH = Path("./config/blakegraph.yml")

DEFAULTS = {
    "encoding": DEFAULT_ENCODING,
    "indent": False,
    "read_only": False,
    "log_level": "INFO",
    "log_file": None,
}


class StorageConfig:
    """Settings for graph files, loaded from a YAML mapping.

    Recognised keys are ``encoding`` (document encoding, default UTF-8),
    ``indent`` (``false``, ``true`` for two spaces, a number of spaces or
    a literal string), ``read_only`` (never write the file back),
    ``log_level`` and ``log_file``. Missing keys take their defaults.
    """

    def __init__(self, data=None, path=None):
        self._data = dict(DEFAULTS)
        if data:
            self._data.update(data)
        self.path = path

    @classmethod
    def load(cls, path=None):
        """Load settings from ``path``, ``$BLAKEGRAPH_CONFIG`` or the default file.

        A missing file gives the defaults; a file that is not valid YAML, or
        does not hold a mapping, raises GraphError.
        """
        if path is None:
            path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            logger.warning("[CONFIG] Config file %s not found, using defaults.", path)
            return cls(path=path)
        except yaml.YAMLError as exc:
            raise GraphError(f"Malformed configuration file {path}: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise GraphError(f"Configuration file {path} must contain a mapping.")
        logger.debug("[CONFIG] Loaded configuration from %s", path)
        return cls(data, path)

    @property
    def data(self):
        return self._data

    def get(self, key, default=None):
        return self._data.get(key, default)

    @property
    def encoding(self):
        return str(self._data.get("encoding") or DEFAULT_ENCODING)

    @property
    def indent(self):
        """Indentation string for written documents, or None for compact output."""
        value = self._data.get("indent")
        if value is None or value is False:
            return None
        if value is True:
            return "  "
        if isinstance(value, int):
            return " " * value
        return str(value)

    @property
    def read_only(self):
        return bool(self._data.get("read_only"))

    @property
    def log_level(self):
        return str(self._data.get("log_level") or "INFO").upper()

    @property
    def log_file(self):
        value = self._data.get("log_file")
        return Path(value) if value else None
