# specifications/files.py
import logging

import yaml

from pathtracer.core.errors import FileParseError, FileReadError

logger = logging.getLogger(__name__)


def load_yaml(path, what: str):
    """
    Reads and parses a YAML file, returning the plain Python data in it.

    `what` names the kind of file ("scene", "features", ...) for error messages.
    """
    logger.debug("Loading %s file '%s'", what, path)
    try:
        with open(path, "r", encoding="utf-8") as handle:
            raw = handle.read()
    except OSError as err:
        raise FileReadError(path, what) from err
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as err:
        raise FileParseError(path, what) from err
