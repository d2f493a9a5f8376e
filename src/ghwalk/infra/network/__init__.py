from __future__ import annotations

"""
Network Communication Infrastructure.

Exposes the remote-content collaborator contract and its GitHub
implementation.
"""

from ghwalk.infra.network.base import ContentsPayload, ContentsProvider
from ghwalk.infra.network.contents_client import GitHubContentsClient

__all__ = [
    "ContentsPayload",
    "ContentsProvider",
    "GitHubContentsClient",
]
