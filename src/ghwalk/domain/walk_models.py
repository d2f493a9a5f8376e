from __future__ import annotations

"""
Walk Control Models.

Per-walk options and the explicit three-way visitor outcome:
continue (None or Signal.CONTINUE), prune (Signal.SKIP) or abort (Abort).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from ghwalk.domain.entry_models import Entry

# -----------------------------------------------------------------------------
# OPTIONS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class WalkOptions:
    """
    Read-only configuration for a single walk.

    Attributes:
        token: OAuth access token; None walks unauthenticated.
        ref: Commit SHA, branch or tag; None uses the default branch.
        enable_file_detail: Fetch the FileDetail payload of every non-directory entry.
        reverse: Visit siblings in descending name order.
    """
    token: Optional[str] = None
    ref: Optional[str] = None
    enable_file_detail: bool = False
    reverse: bool = False

# -----------------------------------------------------------------------------
# VISITOR OUTCOMES
# -----------------------------------------------------------------------------

class Signal(Enum):
    """Non-error visitor outcomes."""
    CONTINUE = "continue"
    # Prune the directory, or the remaining siblings when returned for a leaf
    SKIP = "skip"


SKIP = Signal.SKIP


@dataclass(frozen=True)
class Abort:
    """
    Visitor outcome terminating the whole walk.

    Attributes:
        cause: Exception raised by walk() once the recursion unwinds.
    """
    cause: BaseException


VisitResult = Union[None, Signal, Abort]

VisitFunc = Callable[[str, Optional[Entry], Optional[BaseException]], VisitResult]

PathFilterFunc = Callable[[str, Optional[Entry]], bool]
