from __future__ import annotations

from pathlib import Path

import pytest

from extstate.models import ExtensionInstance, ExtensionVersion


class FakeExtensionsAPI:
    """In-memory stand-in for the Extensions API client."""

    def __init__(
        self,
        instances: list[dict] | None = None,
        versions: dict[str, list[str]] | None = None,
    ) -> None:
        self.instances = [ExtensionInstance.from_api(i) for i in instances or []]
        self.versions = versions or {}
        self.version_calls: list[str] = []
        self.instance_calls: list[str] = []

    async def list_instances(self, project_id: str) -> list[ExtensionInstance]:
        self.instance_calls.append(project_id)
        return list(self.instances)

    async def list_extension_versions(
        self, extension_ref: str
    ) -> list[ExtensionVersion]:
        self.version_calls.append(extension_ref)
        return [
            ExtensionVersion(ref=f"{extension_ref}@{version}", version=version)
            for version in self.versions.get(extension_ref, [])
        ]


@pytest.fixture
def fake_api() -> FakeExtensionsAPI:
    return FakeExtensionsAPI()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    tmp_path.joinpath("extensions").mkdir()
    return tmp_path


def write_params(project_dir: Path, instance_id: str, content: str) -> Path:
    path = project_dir.joinpath("extensions", f"{instance_id}.env")
    path.write_text(content, encoding="utf-8")
    return path
