from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterator

import requests
from requests.adapters import HTTPAdapter, Retry

from extstate import refs
from extstate.exceptions import RemoteCallError
from extstate.internal_config import (
    API_ORIGIN,
    API_PAGE_SIZE,
    API_VERSION,
    DEFAULT_USER_AGENT,
    HTTP_REQUEST_TIMEOUT_SECONDS,
    HTTP_RETRY_ALLOWED_METHODS,
    HTTP_RETRY_BACKOFF_FACTOR,
    HTTP_RETRY_STATUS_FORCELIST,
    HTTP_RETRY_TOTAL,
)
from extstate.models import ExtensionInstance, ExtensionVersion

logger: logging.Logger = logging.getLogger(__name__)


class ExtensionsAPIClient(object):
    """Read instances and published versions from the Firebase Extensions API."""

    session: requests.Session
    api_origin: str = API_ORIGIN
    access_token: str = ""

    def __init__(self, access_token: str = "", api_origin: str = "") -> None:
        retry_strategy = Retry(
            total=HTTP_RETRY_TOTAL,
            backoff_factor=HTTP_RETRY_BACKOFF_FACTOR,
            status_forcelist=HTTP_RETRY_STATUS_FORCELIST,
            allowed_methods=HTTP_RETRY_ALLOWED_METHODS,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session = requests.Session()
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.session.headers["User-Agent"] = DEFAULT_USER_AGENT
        self.access_token = access_token
        self.api_origin = (api_origin or API_ORIGIN).rstrip("/")

    def _url(self, resource: str) -> str:
        return f"{self.api_origin}/{API_VERSION}/{resource}"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _list_paged_sync(
        self, resource: str, items_key: str
    ) -> Iterator[dict[str, Any]]:
        page_token = ""
        while True:
            query: dict[str, Any] = {"pageSize": API_PAGE_SIZE}
            if page_token:
                query["pageToken"] = page_token

            try:
                r = self.session.get(
                    self._url(resource),
                    params=query,
                    headers=self._headers(),
                    timeout=HTTP_REQUEST_TIMEOUT_SECONDS,
                )
                r.raise_for_status()
                response = r.json()
            except requests.RequestException as e:
                raise RemoteCallError(f"Failed to list {resource}: {e}") from e
            except ValueError as e:
                raise RemoteCallError(
                    f"Failed to list {resource}: invalid JSON response"
                ) from e

            if not isinstance(response, dict):
                raise RemoteCallError(
                    f"Failed to list {resource}: unexpected response shape"
                )

            yield from response.get(items_key, [])

            page_token = str(response.get("nextPageToken", ""))
            if not page_token:
                break

    def _list_instances_sync(self, project_id: str) -> list[ExtensionInstance]:
        logger.info(f"Listing extension instances of project {project_id}")
        try:
            return [
                ExtensionInstance.from_api(item)
                for item in self._list_paged_sync(
                    f"projects/{project_id}/instances", "instances"
                )
            ]
        except (KeyError, TypeError, AttributeError) as e:
            raise RemoteCallError(
                f"Malformed instance record for project {project_id}: {e}"
            ) from e

    def _list_extension_versions_sync(
        self, extension_ref: str
    ) -> list[ExtensionVersion]:
        ref = refs.parse(extension_ref)
        resource = (
            f"publishers/{ref.publisher_id}/extensions/{ref.extension_id}/versions"
        )
        logger.info(f"Obtaining published versions of {extension_ref}")
        try:
            return [
                ExtensionVersion.from_api(item)
                for item in self._list_paged_sync(resource, "extensionVersions")
            ]
        except (TypeError, AttributeError) as e:
            raise RemoteCallError(
                f"Malformed version record for {extension_ref}: {e}"
            ) from e

    async def list_instances(self, project_id: str) -> list[ExtensionInstance]:
        """Asynchronously list every instance installed in a project."""
        return await asyncio.to_thread(self._list_instances_sync, project_id)

    async def list_extension_versions(
        self, extension_ref: str
    ) -> list[ExtensionVersion]:
        """Asynchronously list every published version of one extension."""
        return await asyncio.to_thread(
            self._list_extension_versions_sync, extension_ref
        )
