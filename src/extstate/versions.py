from __future__ import annotations

import logging
from typing import Iterable, Protocol

import nodesemver

from extstate import refs
from extstate.exceptions import VersionResolutionError
from extstate.models import ExtensionVersion, Ref

logger: logging.Logger = logging.getLogger(__name__)


class VersionCatalog(Protocol):
    async def list_extension_versions(
        self, extension_ref: str
    ) -> list[ExtensionVersion]: ...


def _is_semver(version: str) -> bool:
    try:
        nodesemver.make_semver(version, loose=False)
    except ValueError:
        return False
    return True


def max_satisfying(versions: Iterable[str], requested: str) -> str | None:
    """Return the highest of *versions* inside the range *requested*."""
    candidates = [version for version in versions if _is_semver(version)]
    return nodesemver.max_satisfying(candidates, requested, loose=False)


async def resolve_version(ref: Ref, client: VersionCatalog) -> str:
    """Resolve ``ref.version`` to an exact published version.

    An absent version or "latest" is passed through as "latest"; the
    installer picks the newest release itself, so the catalog is not queried.
    """
    if not ref.version or ref.version == refs.LATEST:
        return refs.LATEST

    extension_ref = refs.to_extension_ref(ref)
    extension_versions = await client.list_extension_versions(extension_ref)
    resolved = max_satisfying(
        (extension_version.version for extension_version in extension_versions),
        ref.version,
    )
    if not resolved:
        raise VersionResolutionError(extension_ref, ref.version)

    logger.debug(f"Resolved {extension_ref}@{ref.version} to {resolved}")
    return resolved
