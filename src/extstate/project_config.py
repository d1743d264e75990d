from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

# for parsing firebase.json (if it includes comments etc.)
import json5

from extstate.exceptions import ProjectConfigError
from extstate.internal_config import DEFAULT_CONFIG_NAME

logger: logging.Logger = logging.getLogger(__name__)

_INSTANCE_ID_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")


def config_path(
    project_dir: str | Path, config_name: str = DEFAULT_CONFIG_NAME
) -> Path:
    return (
        Path(config_name)
        if Path(config_name).is_absolute()
        else Path(project_dir).joinpath(config_name)
    )


def validate_extensions(
    extensions: Any, source: str = DEFAULT_CONFIG_NAME
) -> dict[str, str]:
    """Check that *extensions* maps instance ids to reference strings."""
    if not isinstance(extensions, dict):
        raise ProjectConfigError(f"'extensions' in {source} must be an object")

    validated: dict[str, str] = {}
    for instance_id, ref_string in extensions.items():
        if not isinstance(instance_id, str) or not _INSTANCE_ID_PATTERN.match(
            instance_id
        ):
            raise ProjectConfigError(
                f"Invalid instance id {instance_id!r} in {source}: must start with"
                " a lowercase letter and contain only lowercase letters, digits"
                " and hyphens"
            )
        if not isinstance(ref_string, str) or not ref_string.strip():
            raise ProjectConfigError(
                f"Extension reference for {instance_id} in {source} must be a"
                " non-empty string"
            )
        validated[instance_id] = ref_string
    return validated


def load_extensions(
    project_dir: str | Path, config_name: str = DEFAULT_CONFIG_NAME
) -> dict[str, str]:
    """Return the desired ``instance id -> extension ref`` mapping of a project."""
    path = config_path(project_dir, config_name)
    try:
        # use json5 for parsing json files that may contain comments
        config = json5.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ProjectConfigError(f"Project configuration {path} not found") from e
    except ValueError as e:
        raise ProjectConfigError(f"Unable to parse {path}: {e}") from e

    if not isinstance(config, dict):
        raise ProjectConfigError(f"{path} must contain a JSON object")

    extensions = validate_extensions(config.get("extensions", {}), source=path.name)
    logger.debug(f"Found {len(extensions)} desired extension(s) in {path}")
    return extensions
