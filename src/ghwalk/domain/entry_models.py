from __future__ import annotations

"""
Remote Tree Entry Data Models.

Immutable value types describing one node of a repository file tree as
reported by the contents API. The cheap listing metadata lives on Entry;
the expensive per-file payload (content, encoding, symlink target) lives
on the optional FileDetail and is only populated on request.
"""

import base64
import binascii
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ghwalk.domain.errors import DecodeError, MissingDetailError

# -----------------------------------------------------------------------------
# ENTRY KINDS
# -----------------------------------------------------------------------------

class FileType(str, Enum):
    """Entry kinds reported by the contents API."""
    FILE = "file"
    DIR = "dir"
    SYMLINK = "symlink"
    SUBMODULE = "submodule"

# -----------------------------------------------------------------------------
# VALUE OBJECTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Locators:
    """
    URIs addressing the representations of an entry.

    Attributes:
        api_url: Contents API URL of the entry.
        git_url: Git object (blob/tree) API URL.
        html_url: Browser URL on the hosting web UI.
    """
    api_url: Optional[str] = None
    git_url: Optional[str] = None
    html_url: Optional[str] = None


@dataclass(frozen=True)
class FileDetail:
    """
    Secondary payload fetched for non-directory entries on demand.

    Attributes:
        target: Link target, only set for symlinks whose target is not a regular file.
        encoding: Transport encoding of content, only set for files.
        content: Raw (possibly encoded) content, only set for files.
        download_url: Direct raw-content download URL.
    """
    target: Optional[str] = None
    encoding: Optional[str] = None
    content: Optional[str] = None
    download_url: Optional[str] = None


@dataclass(frozen=True)
class Entry:
    """
    One node (file, directory or symlink) in the remote tree.

    Attributes:
        kind: Entry type.
        name: Leaf path component, unique among siblings.
        path: Full slash-separated path from the repository root.
        size: Byte size as reported by the remote.
        sha: Content-addressed identifier of the underlying git object.
        locators: Where to fetch the entry's representations.
        detail: File-only payload; None unless detail fetch was requested.
    """
    kind: FileType
    name: str
    path: str
    size: int = 0
    sha: str = ""
    locators: Locators = Locators()
    detail: Optional[FileDetail] = None

    def is_dir(self) -> bool:
        return self.kind is FileType.DIR

    @classmethod
    def from_api(cls, payload: Dict[str, Any], include_detail: bool = False) -> "Entry":
        """
        Build an Entry from one contents API object.

        Args:
            payload: Decoded JSON object describing a single entry.
            include_detail: Attach a FileDetail (ignored for directories).

        Returns:
            Entry: The immutable entry.
        """
        kind = FileType(payload.get("type", FileType.FILE.value))
        detail: Optional[FileDetail] = None

        if include_detail and kind is not FileType.DIR:
            is_file = kind is FileType.FILE
            detail = FileDetail(
                target=payload.get("target") if kind is FileType.SYMLINK else None,
                encoding=payload.get("encoding") if is_file else None,
                content=payload.get("content") if is_file else None,
                download_url=payload.get("download_url"),
            )

        return cls(
            kind=kind,
            name=payload.get("name", ""),
            path=payload.get("path", ""),
            size=int(payload.get("size") or 0),
            sha=payload.get("sha") or "",
            locators=Locators(
                api_url=payload.get("url"),
                git_url=payload.get("git_url"),
                html_url=payload.get("html_url"),
            ),
            detail=detail,
        )

    def get_content(self) -> str:
        """
        Decode the detail content according to its declared encoding.

        Returns:
            str: Decoded text.

        Raises:
            MissingDetailError: The entry was produced without a detail payload.
            DecodeError: The encoding is unsupported or the content is malformed.
        """
        if self.detail is None:
            raise MissingDetailError(f"entry has no detail payload: {self.path}")

        encoding = self.detail.encoding or ""
        content = self.detail.content

        if encoding == "base64":
            if content is None:
                raise DecodeError("malformed response: base64 encoding of null content")
            try:
                return base64.b64decode(content).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError) as e:
                raise DecodeError(f"failed to decode content of {self.path}: {e}") from e

        if encoding == "":
            return content or ""

        if encoding == "none":
            # The API omits inline content for files above 1 MB
            raise DecodeError(
                "unsupported content encoding: none, this may occur when file size > 1 MB; "
                f"download it from {self.detail.download_url} instead"
            )

        raise DecodeError(f"unsupported content encoding: {encoding}")
