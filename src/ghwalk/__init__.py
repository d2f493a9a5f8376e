from __future__ import annotations

"""
ghwalk: filesystem-style walking of GitHub repository trees.

Public API facade.
"""

from ghwalk.core.context import CallContext
from ghwalk.core.filters import build_path_filter
from ghwalk.core.walker import Walker, walk
from ghwalk.domain.constants import CURRENT_VERSION
from ghwalk.domain.entry_models import Entry, FileDetail, FileType, Locators
from ghwalk.domain.errors import (
    DecodeError,
    GhWalkError,
    MissingDetailError,
    NotFoundError,
    TransportError,
    WalkCancelledError,
)
from ghwalk.domain.walk_models import (
    SKIP,
    Abort,
    PathFilterFunc,
    Signal,
    VisitFunc,
    VisitResult,
    WalkOptions,
)
from ghwalk.infra.network import ContentsProvider, GitHubContentsClient

__version__ = CURRENT_VERSION

__all__ = [
    "Abort",
    "CallContext",
    "ContentsProvider",
    "DecodeError",
    "Entry",
    "FileDetail",
    "FileType",
    "GhWalkError",
    "GitHubContentsClient",
    "Locators",
    "MissingDetailError",
    "NotFoundError",
    "PathFilterFunc",
    "SKIP",
    "Signal",
    "TransportError",
    "VisitFunc",
    "VisitResult",
    "WalkCancelledError",
    "WalkOptions",
    "Walker",
    "build_path_filter",
    "walk",
]
