from __future__ import annotations

"""
Remote-Content Collaborator Interface.

The traversal engine depends only on this contract; the GitHub HTTP
client is its default implementation.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from ghwalk.core.context import CallContext

ContentsPayload = Union[Dict[str, Any], List[Dict[str, Any]]]


class ContentsProvider(ABC):
    """
    Abstract source of repository contents.
    """

    @abstractmethod
    def get_contents(
            self,
            owner: str,
            repo: str,
            path: str,
            ref: Optional[str] = None,
            context: Optional[CallContext] = None,
    ) -> ContentsPayload:
        """
        Fetch the contents of a repository path.

        Args:
            owner: Repository owner (user or organization).
            repo: Repository name.
            path: Path relative to the repository root; "" for the root.
            ref: Commit SHA, branch or tag; None for the default branch.
            context: Cancellation context checked before the call.

        Returns:
            A list of child objects when path is a directory, otherwise a
            single object carrying the file-only fields.

        Raises:
            TransportError: The call failed for any reason.
        """
        pass
