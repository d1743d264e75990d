from __future__ import annotations

from extstate.exceptions import (
    DesiredStateError,
    ExtstateError,
    ParamLoadError,
    ProjectConfigError,
    RefParseError,
    RemoteCallError,
    VersionResolutionError,
)
from extstate.models import Deployable, EntryFailure, Ref, WantResult
from extstate.planner import collect_want, have, want

__all__ = [
    "Deployable",
    "DesiredStateError",
    "EntryFailure",
    "ExtstateError",
    "ParamLoadError",
    "ProjectConfigError",
    "Ref",
    "RefParseError",
    "RemoteCallError",
    "VersionResolutionError",
    "WantResult",
    "collect_want",
    "have",
    "want",
]
