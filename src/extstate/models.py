from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Ref:
    publisher_id: str
    extension_id: str
    # None when the reference string carried no "@version" part
    version: str | None = None


@dataclass
class Deployable:
    """One extension instance as seen by either the project or the remote."""

    instance_id: str
    params: dict[str, str] = field(default_factory=dict)
    ref: Ref | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "instanceId": self.instance_id,
            "params": dict(self.params),
        }
        if self.ref is not None:
            data["ref"] = {
                "publisherId": self.ref.publisher_id,
                "extensionId": self.ref.extension_id,
                "version": self.ref.version,
            }
        return data


@dataclass(frozen=True)
class ExtensionVersion:
    ref: str
    version: str

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> ExtensionVersion:
        return cls(
            ref=str(payload.get("ref", "")),
            version=str(payload.get("spec", {}).get("version", "")),
        )


@dataclass(frozen=True)
class InstanceConfig:
    params: dict[str, str]
    extension_ref: str | None = None
    extension_version: str | None = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> InstanceConfig:
        return cls(
            params=dict(payload.get("params", {})),
            extension_ref=payload.get("extensionRef") or None,
            extension_version=payload.get("extensionVersion") or None,
        )


@dataclass(frozen=True)
class ExtensionInstance:
    name: str
    config: InstanceConfig

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> ExtensionInstance:
        return cls(
            name=str(payload["name"]),
            config=InstanceConfig.from_api(dict(payload.get("config", {}))),
        )

    @property
    def instance_id(self) -> str:
        return self.name.split("/")[-1]


@dataclass(frozen=True)
class EntryFailure:
    """Context for one desired-state entry that could not be read."""

    instance_id: str
    ref_string: str
    error: Exception

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass
class WantResult:
    deployables: list[Deployable] = field(default_factory=list)
    failures: list[EntryFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
