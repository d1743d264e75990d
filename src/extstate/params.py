from __future__ import annotations

import asyncio
import io
import logging
from pathlib import Path

from dotenv.parser import parse_stream

from extstate.exceptions import ParamLoadError
from extstate.internal_config import ENV_DIRECTORY

logger: logging.Logger = logging.getLogger(__name__)


def params_path(project_dir: str | Path, instance_id: str) -> Path:
    return Path(project_dir).joinpath(ENV_DIRECTORY, f"{instance_id}.env")


def parse_env(content: str, source: str = "<string>") -> dict[str, str]:
    """Parse env-file content into a flat parameter mapping."""
    params: dict[str, str] = {}
    for binding in parse_stream(io.StringIO(content)):
        if binding.error:
            raise ParamLoadError(
                f"Unable to parse line {binding.original.line} of {source}:"
                f" {binding.original.string.strip()!r}",
                source,
            )
        if binding.key is None:
            # blank line or comment
            continue
        if binding.value is None:
            raise ParamLoadError(
                f"Missing value for {binding.key} on line"
                f" {binding.original.line} of {source}",
                source,
            )
        params[binding.key] = binding.value
    return params


def read_env_file(path: str | Path) -> dict[str, str]:
    env_path = Path(path)
    try:
        content = env_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ParamLoadError(
            f"Unable to read parameter file {env_path}: file does not exist",
            str(env_path),
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ParamLoadError(
            f"Unable to read parameter file {env_path}: {e}", str(env_path)
        ) from e
    return parse_env(content, source=str(env_path))


async def read_params(project_dir: str | Path, instance_id: str) -> dict[str, str]:
    """Load the parameter overrides of one instance from its .env file."""
    env_path = params_path(project_dir, instance_id)
    logger.debug(f"Reading parameters for {instance_id} from {env_path}")
    return await asyncio.to_thread(read_env_file, env_path)
