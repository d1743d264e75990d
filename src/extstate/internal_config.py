from __future__ import annotations

import os
import platform
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version


def _get_package_version(name: str) -> str:
    """Return the installed version of *name*, or ``"0"`` if not found."""
    try:
        return _pkg_version(name)
    except PackageNotFoundError:
        return "0"


_extstate_version = _get_package_version("extstate")

DEFAULT_USER_AGENT = (
    f"extstate/{_extstate_version}"
    f" ({platform.system()}; {platform.machine()})"
)

API_ORIGIN = os.environ.get(
    "EXTSTATE_API_ORIGIN", "https://firebaseextensions.googleapis.com"
).rstrip("/")
API_VERSION = "v1beta"
API_PAGE_SIZE = 100

HTTP_REQUEST_TIMEOUT_SECONDS = 30

HTTP_RETRY_TOTAL = 3
HTTP_RETRY_BACKOFF_FACTOR = 1
HTTP_RETRY_STATUS_FORCELIST = [429, 500, 502, 503, 504]
HTTP_RETRY_ALLOWED_METHODS = ["HEAD", "GET", "OPTIONS"]

# project layout
DEFAULT_CONFIG_NAME = "firebase.json"
ENV_DIRECTORY = "extensions"
