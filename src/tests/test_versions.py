from __future__ import annotations

import asyncio

import pytest

from extstate.exceptions import VersionResolutionError
from extstate.models import Ref
from extstate.versions import max_satisfying, resolve_version


@pytest.mark.parametrize("version", [None, "", "latest"])
def test_latest_short_circuits_catalog(fake_api, version: str | None) -> None:
    fake_api.versions["pub/ext"] = ["1.0.0"]

    resolved = asyncio.run(resolve_version(Ref("pub", "ext", version), fake_api))

    assert resolved == "latest"
    assert fake_api.version_calls == []


def test_caret_range_picks_highest_match(fake_api) -> None:
    fake_api.versions["pub/ext"] = ["1.0.0", "1.2.0", "2.0.0"]

    resolved = asyncio.run(resolve_version(Ref("pub", "ext", "^1.0.0"), fake_api))

    assert resolved == "1.2.0"
    assert fake_api.version_calls == ["pub/ext"]


def test_exact_version_resolves_to_itself(fake_api) -> None:
    fake_api.versions["pub/ext"] = ["1.0.0", "1.2.0", "2.0.0"]

    assert asyncio.run(resolve_version(Ref("pub", "ext", "1.0.0"), fake_api)) == (
        "1.0.0"
    )


def test_unsatisfiable_range_names_extension_and_range(fake_api) -> None:
    fake_api.versions["pub/ext"] = ["1.0.0"]

    with pytest.raises(VersionResolutionError) as excinfo:
        asyncio.run(resolve_version(Ref("pub", "ext", "^9.0.0"), fake_api))

    assert str(excinfo.value) == (
        "No version of pub/ext matches requested version ^9.0.0"
    )
    assert excinfo.value.extension_ref == "pub/ext"
    assert excinfo.value.requested == "^9.0.0"


def test_empty_catalog_fails(fake_api) -> None:
    with pytest.raises(VersionResolutionError):
        asyncio.run(resolve_version(Ref("pub", "ext", "1.0.0"), fake_api))


def test_max_satisfying_orders_numerically() -> None:
    assert max_satisfying(["1.2.0", "1.10.0", "1.9.3"], "^1.0.0") == "1.10.0"


def test_max_satisfying_tilde_and_comparators() -> None:
    versions = ["0.1.0", "0.1.5", "0.2.0", "1.0.0"]

    assert max_satisfying(versions, "~0.1.0") == "0.1.5"
    assert max_satisfying(versions, ">=0.1.0 <1.0.0") == "0.2.0"
    assert max_satisfying(versions, "*") == "1.0.0"


def test_max_satisfying_ignores_prereleases_and_garbage() -> None:
    versions = ["1.0.0", "1.1.0-beta.1", "not-a-version"]

    assert max_satisfying(versions, "^1.0.0") == "1.0.0"
    assert max_satisfying(versions, "^2.0.0") is None
