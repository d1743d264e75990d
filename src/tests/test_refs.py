from __future__ import annotations

import pytest

from extstate import refs
from extstate.exceptions import RefParseError
from extstate.models import Ref


def test_parse_without_version() -> None:
    assert refs.parse("firebase/storage-resize-images") == Ref(
        "firebase", "storage-resize-images", None
    )


@pytest.mark.parametrize(
    "version", ["0.1.2", "latest", "^1.0.0", "~2.3", ">=1.0.0 <2.0.0", "1.x"]
)
def test_parse_keeps_version_token(version: str) -> None:
    ref = refs.parse(f"firebase/firestore-bigquery-export@{version}")

    assert ref.publisher_id == "firebase"
    assert ref.extension_id == "firestore-bigquery-export"
    assert ref.version == version


def test_parse_strips_surrounding_whitespace() -> None:
    assert refs.parse("  pub/ext@1.0.0\n") == Ref("pub", "ext", "1.0.0")


@pytest.mark.parametrize(
    "ref_string", ["", "firebase", "firebase/", "/ext", "a/b/c", "a/b@", "a@b/c"]
)
def test_parse_rejects_malformed_refs(ref_string: str) -> None:
    with pytest.raises(RefParseError, match="Unable to parse"):
        refs.parse(ref_string)


def test_parse_rejects_invalid_version() -> None:
    with pytest.raises(RefParseError, match="invalid version not-a-version"):
        refs.parse("pub/ext@not-a-version")


def test_serializers() -> None:
    ref = Ref("pub", "ext", "1.2.3")

    assert refs.to_extension_ref(ref) == "pub/ext"
    assert refs.to_extension_version_ref(ref) == "pub/ext@1.2.3"
    assert refs.to_extension_version_ref(Ref("pub", "ext")) == "pub/ext"
