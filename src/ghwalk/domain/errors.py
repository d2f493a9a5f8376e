from __future__ import annotations

"""
Walk Error Hierarchy.

Defines the failure types raised while resolving remote metadata. Every
subclass of GhWalkError is routed to the visitor by the traversal engine;
MissingDetailError signals caller misuse and is never routed.
"""

from typing import Optional

# -----------------------------------------------------------------------------
# ROUTABLE ERRORS
# -----------------------------------------------------------------------------

class GhWalkError(Exception):
    """Base class for errors raised while resolving remote metadata."""


class NotFoundError(GhWalkError):
    """
    The requested path has no matching child in its parent listing.

    Attributes:
        path: Repository path that was queried.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"no such path found: {path}")
        self.path = path


class TransportError(GhWalkError):
    """
    A call to the remote-content collaborator failed.

    Attributes:
        status_code: HTTP status reported by the remote, if any.
        url: Request URL that failed, if known.
    """

    def __init__(
            self,
            message: str,
            status_code: Optional[int] = None,
            url: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class WalkCancelledError(TransportError):
    """The call context was cancelled or its deadline expired."""


class DecodeError(GhWalkError):
    """Detail content could not be decoded per its declared encoding."""

# -----------------------------------------------------------------------------
# CONTRACT VIOLATIONS
# -----------------------------------------------------------------------------

class MissingDetailError(ValueError):
    """Content was requested from an entry that carries no detail payload."""
