from __future__ import annotations

import re

import nodesemver

from extstate.exceptions import RefParseError
from extstate.models import Ref

LATEST = "latest"

_REF_PATTERN = re.compile(
    r"^(?P<publisher_id>[^/@\s]+)/(?P<extension_id>[^/@\s]+)(?:@(?P<version>.+))?$"
)


def is_valid_version_token(token: str) -> bool:
    """Return True for "latest", an exact semver, or a semver range."""
    if token == LATEST:
        return True
    # an exact version is also a valid range
    return nodesemver.valid_range(token, loose=False) is not None


def parse(ref_string: str) -> Ref:
    """Parse ``publisherId/extensionId[@version]`` into a :class:`Ref`."""
    match = _REF_PATTERN.match(ref_string.strip())
    if match is None:
        raise RefParseError(
            f"Unable to parse {ref_string} as an extension ref.\n"
            "Expected format is either publisherId/extensionId@version"
            " or publisherId/extensionId."
        )

    version = match.group("version")
    if version is not None and not is_valid_version_token(version):
        raise RefParseError(
            f"Extension reference {ref_string} contains an invalid version {version}."
        )
    return Ref(
        publisher_id=match.group("publisher_id"),
        extension_id=match.group("extension_id"),
        version=version,
    )


def to_extension_ref(ref: Ref) -> str:
    return f"{ref.publisher_id}/{ref.extension_id}"


def to_extension_version_ref(ref: Ref) -> str:
    if not ref.version:
        return to_extension_ref(ref)
    return f"{to_extension_ref(ref)}@{ref.version}"
