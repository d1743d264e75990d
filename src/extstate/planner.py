from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Protocol

import requests

from extstate import refs
from extstate.exceptions import DesiredStateError, ExtstateError
from extstate.models import (
    Deployable,
    EntryFailure,
    ExtensionInstance,
    ExtensionVersion,
    WantResult,
)
from extstate.params import read_params
from extstate.versions import resolve_version

logger: logging.Logger = logging.getLogger(__name__)


class ExtensionsAPI(Protocol):
    async def list_instances(self, project_id: str) -> list[ExtensionInstance]: ...

    async def list_extension_versions(
        self, extension_ref: str
    ) -> list[ExtensionVersion]: ...


async def have(project_id: str, client: ExtensionsAPI) -> list[Deployable]:
    """Return the instances currently installed in *project_id*."""
    instances = await client.list_instances(project_id)
    deployables: list[Deployable] = []
    for instance in instances:
        deployable = Deployable(
            instance_id=instance.instance_id,
            params=dict(instance.config.params),
        )
        if instance.config.extension_ref:
            ref = refs.parse(instance.config.extension_ref)
            # the installed version wins over whatever the ref string says
            ref.version = instance.config.extension_version
            deployable.ref = ref
        deployables.append(deployable)
    return deployables


async def _read_desired(
    instance_id: str,
    ref_string: str,
    project_dir: str | Path,
    client: ExtensionsAPI,
) -> Deployable:
    ref = refs.parse(ref_string)
    ref.version = await resolve_version(ref, client)
    params = await read_params(project_dir, instance_id)
    return Deployable(instance_id=instance_id, params=params, ref=ref)


async def collect_want(
    extensions: Mapping[str, str],
    project_dir: str | Path,
    client: ExtensionsAPI,
) -> WantResult:
    """Read every desired instance, keeping going past failing entries.

    Entries are processed one at a time in mapping order. The result holds
    the entries that could be read and one :class:`EntryFailure` per entry
    that could not.
    """
    result = WantResult()
    for instance_id, ref_string in extensions.items():
        try:
            deployable = await _read_desired(
                instance_id, ref_string, project_dir, client
            )
        except (ExtstateError, requests.RequestException, OSError) as e:
            logger.debug(f"Failed to read {instance_id} ({ref_string}): {e}")
            result.failures.append(
                EntryFailure(instance_id=instance_id, ref_string=ref_string, error=e)
            )
            continue
        result.deployables.append(deployable)
    return result


async def want(
    extensions: Mapping[str, str],
    project_dir: str | Path,
    client: ExtensionsAPI,
) -> list[Deployable]:
    """Return the desired instances or raise one error listing every failure."""
    result = await collect_want(extensions, project_dir, client)
    if not result.ok:
        raise DesiredStateError(result.failures, result.deployables)
    return result.deployables
