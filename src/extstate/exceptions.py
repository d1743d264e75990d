from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from extstate.models import Deployable, EntryFailure


class ExtstateError(Exception):
    """Base class for all extstate domain errors."""


class RefParseError(ValueError, ExtstateError):
    """Raised when an extension reference string cannot be parsed."""


class VersionResolutionError(LookupError, ExtstateError):
    """Raised when no published version satisfies a requested range."""

    def __init__(self, extension_ref: str, requested: str) -> None:
        super().__init__(
            f"No version of {extension_ref} matches requested version {requested}"
        )
        self.extension_ref = extension_ref
        self.requested = requested


class ParamLoadError(OSError, ExtstateError):
    """Raised when a parameter file is missing or malformed."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class RemoteCallError(RuntimeError, ExtstateError):
    """Raised when the Extensions API call fails or returns garbage."""


class ProjectConfigError(ValueError, ExtstateError):
    """Raised when the project configuration file is invalid."""


class DesiredStateError(ValueError, ExtstateError):
    """Raised once after every desired entry was tried and some failed.

    Carries the failures and the entries that did resolve, so a caller can
    decide to continue with a partial list.
    """

    header = "Errors while reading 'extensions' in 'firebase.json'"

    def __init__(
        self,
        failures: list[EntryFailure],
        deployables: list[Deployable] | None = None,
    ) -> None:
        messages = "\n".join(failure.message for failure in failures)
        super().__init__(f"{self.header}\n{messages}")
        self.failures = list(failures)
        self.deployables = list(deployables or [])
