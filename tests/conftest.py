from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. An in-memory ContentsProvider serving a small repository tree, which
   records every remote call so tests can assert on API usage.
"""

import base64
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from ghwalk.core.context import CallContext  # noqa: E402
from ghwalk.domain.errors import GhWalkError, TransportError  # noqa: E402
from ghwalk.infra.network.base import ContentsPayload, ContentsProvider  # noqa: E402

# -----------------------------------------------------------------------------
# In-Memory Remote
# -----------------------------------------------------------------------------
API = "https://api.github.com/repos/magodo/ghwalk/contents"

# path -> (type, content-or-target)
TESTDATA_TREE: Dict[str, Tuple[str, Optional[str]]] = {
    "testdata": ("dir", None),
    "testdata/a": ("file", "content of a\n"),
    "testdata/b": ("file", "content of b\n"),
    "testdata/dir": ("dir", None),
    "testdata/dir/c": ("file", "content of c\n"),
    "testdata/link_dir": ("symlink", "dir"),
    "zzz.md": ("file", "# trailing root file\n"),
}


class FakeContentsProvider(ContentsProvider):
    """
    Serve a repository tree from memory.

    Listings are returned in reverse name order so that tests notice when
    the walker forgets to sort.

    Args:
        tree: Mapping of repository path to (type, content-or-target).
        failures: Paths whose fetch raises the given error.
    """

    def __init__(
            self,
            tree: Dict[str, Tuple[str, Optional[str]]],
            failures: Optional[Dict[str, GhWalkError]] = None,
    ) -> None:
        self.tree = dict(tree)
        self.failures = dict(failures or {})
        self.calls: List[Tuple[str, Optional[str]]] = []

    @property
    def called_paths(self) -> List[str]:
        return [path for path, _ in self.calls]

    def get_contents(
            self,
            owner: str,
            repo: str,
            path: str,
            ref: Optional[str] = None,
            context: Optional[CallContext] = None,
    ) -> ContentsPayload:
        if context is not None:
            context.check()
        self.calls.append((path, ref))

        if path in self.failures:
            raise self.failures[path]
        if path and path not in self.tree:
            raise TransportError(f"GET {API}/{path}: 404 Not Found", status_code=404)

        if path == "" or self.tree[path][0] == "dir":
            prefix = f"{path}/" if path else ""
            children = [
                p for p in self.tree
                if p.startswith(prefix) and "/" not in p[len(prefix):]
            ]
            return [self._payload(p, detail=False) for p in sorted(children, reverse=True)]

        return self._payload(path, detail=True)

    def _payload(self, path: str, detail: bool) -> Dict[str, Any]:
        kind, value = self.tree[path]
        name = path.rsplit("/", 1)[-1]
        payload: Dict[str, Any] = {
            "type": kind,
            "name": name,
            "path": path,
            "size": len(value or "") if kind == "file" else 0,
            "sha": f"sha-{path}",
            "url": f"{API}/{path}",
            "git_url": f"https://api.github.com/repos/magodo/ghwalk/git/blobs/sha-{path}",
            "html_url": f"https://github.com/magodo/ghwalk/blob/main/{path}",
            "download_url": None if kind == "dir" else f"https://raw.githubusercontent.com/magodo/ghwalk/main/{path}",
        }
        if detail and kind == "file":
            encoded = base64.b64encode((value or "").encode("utf-8")).decode("ascii")
            # The API wraps base64 content every 60 characters
            payload["encoding"] = "base64"
            payload["content"] = "\n".join(encoded[i:i + 60] for i in range(0, len(encoded), 60)) + "\n"
        if detail and kind == "symlink":
            payload["target"] = value
        return payload


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def provider() -> FakeContentsProvider:
    """Fake remote serving the testdata tree."""
    return FakeContentsProvider(TESTDATA_TREE)


@pytest.fixture
def make_provider():
    """Factory for fakes with injected failures."""
    def _make(
            failures: Optional[Dict[str, GhWalkError]] = None,
            tree: Optional[Dict[str, Tuple[str, Optional[str]]]] = None,
    ) -> FakeContentsProvider:
        return FakeContentsProvider(tree if tree is not None else TESTDATA_TREE, failures)
    return _make


@pytest.fixture
def file_payload() -> Dict[str, Any]:
    """A contents API object for a single file, as returned by a detail fetch."""
    return {
        "type": "file",
        "encoding": "base64",
        "size": 12,
        "name": "a",
        "path": "testdata/a",
        "content": "aGVsbG8gd29y\nbGQK\n",
        "sha": "3d21ec53a331a6f037a91c368710b99387d012c1",
        "url": f"{API}/testdata/a",
        "git_url": "https://api.github.com/repos/magodo/ghwalk/git/blobs/3d21ec53",
        "html_url": "https://github.com/magodo/ghwalk/blob/main/testdata/a",
        "download_url": "https://raw.githubusercontent.com/magodo/ghwalk/main/testdata/a",
    }
