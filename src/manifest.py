"""Read the input configuration and write the generated Satis manifest."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, Dict, List

from repository.errors import ConfigurationError
from repository.models import RepositoryRecord

logger = logging.getLogger(__name__)


def load_input(path: str) -> Dict[str, Any]:
    """Load and validate the top-level shape of the input file.

    Missing or blank `name`/`homepage` only produce warnings.

    Raises:
        OSError: If the file cannot be read.
        ConfigurationError: If the content is not a JSON object.
    """
    with open(path, encoding="utf-8") as file:
        try:
            config = json.load(file)
        except ValueError as e:  # JSONDecodeError, UnicodeDecodeError
            raise ConfigurationError(f"input file {path} is not valid JSON: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"input file {path} must contain a JSON object")

    for key in ("name", "homepage"):
        value = config.get(key)
        if not isinstance(value, str) or not value.strip():
            logger.warning("Input file does not contain `%s` attribute", key)
    return config


def build_manifest(config: Dict[str, Any], repositories: List[RepositoryRecord]) -> Dict[str, Any]:
    """Return the output manifest for an input configuration.

    Every top-level key other than `sources` and `repositories` is carried
    over as parsed, in its original position. `repositories` is null when
    nothing was collected.
    """
    manifest = {key: value for key, value in config.items() if key != "sources"}
    manifest["repositories"] = [repo.to_dict() for repo in repositories] or None
    return manifest


def write_manifest(manifest: Dict[str, Any], path: str) -> None:
    """Write the manifest as two-space indented JSON, replacing `path` atomically.

    Raises:
        OSError: If the file cannot be written.
    """
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(prefix=".satis-", suffix=".json", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as file:
            json.dump(manifest, file, indent=2, ensure_ascii=False)
            file.write("\n")
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            logger.debug("Failed to remove temp file: %s", tmp_path)
        raise
    logger.info("Manifest has been successfully written to: %s", path)
