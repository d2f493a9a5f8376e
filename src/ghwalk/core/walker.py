from __future__ import annotations

"""
Repository Tree Traversal Engine.

Walks a remote repository tree depth-first in lexical order, calling a
visitor for every path the way a local filesystem walker would. Every
metadata-resolution failure is offered to the visitor first; only the
visitor decides whether the walk continues, prunes or aborts.

Walk does not follow symbolic links.
"""

import logging
import posixpath
from typing import Any, Dict, List, Optional

from ghwalk.core.context import CallContext
from ghwalk.domain.entry_models import Entry
from ghwalk.domain.errors import GhWalkError, NotFoundError, TransportError
from ghwalk.domain.walk_models import Abort, PathFilterFunc, Signal, VisitFunc, VisitResult, WalkOptions
from ghwalk.infra.network.base import ContentsPayload, ContentsProvider
from ghwalk.infra.network.contents_client import GitHubContentsClient

logger = logging.getLogger(__name__)


class Walker:
    """
    Stat, list and walk operations bound to one repository and one set of options.

    Args:
        provider: Remote-content collaborator.
        owner: Repository owner.
        repo: Repository name.
        options: Walk options; defaults apply when None.
        context: Cancellation context threaded through every remote call.
    """

    def __init__(
            self,
            provider: ContentsProvider,
            owner: str,
            repo: str,
            options: Optional[WalkOptions] = None,
            context: Optional[CallContext] = None,
    ) -> None:
        self.provider = provider
        self.owner = owner
        self.repo = repo
        self.options = options or WalkOptions()
        self.context = context or CallContext.background()

    # -------------------------------------------------------------------------
    # METADATA RESOLUTION
    # -------------------------------------------------------------------------

    def stat(self, path: str) -> Optional[Entry]:
        """
        Resolve the metadata of exactly one path.

        The repository root has no metadata of its own, so stat("") is None.

        Raises:
            NotFoundError: The parent listing has no child with this name,
                or the parent is not a directory.
            TransportError: The remote call failed or returned a malformed payload.
        """
        if path == "":
            return None

        parent = posixpath.dirname(path)
        name = posixpath.basename(path)

        listing = self._get(parent)
        # A file parent has no children
        if not isinstance(listing, list):
            raise NotFoundError(path)

        for payload in _listing_items(listing, parent):
            if payload.get("name") == name:
                return self._resolve(path, _to_entry(payload, path))

        raise NotFoundError(path)

    def list_children(self, path: str) -> List[Entry]:
        """
        List the immediate children of a directory, ordered by name.

        Children never carry a detail payload.

        Raises:
            TransportError: The remote call failed, returned a malformed
                payload, or path is not a directory.
        """
        listing = self._get(path)
        if not isinstance(listing, list):
            raise TransportError(f"not a directory: {path or '/'}")

        entries = [
            _to_entry(payload, posixpath.join(path, str(payload.get("name", ""))))
            for payload in _listing_items(listing, path)
        ]
        entries.sort(key=lambda e: e.name, reverse=self.options.reverse)
        logger.debug(f"Listed {len(entries)} entries under '{path or '/'}'")
        return entries

    # -------------------------------------------------------------------------
    # TRAVERSAL
    # -------------------------------------------------------------------------

    def walk(self, path: str, visit: VisitFunc, path_filter: Optional[PathFilterFunc] = None) -> None:
        """
        Walk the tree rooted at path, calling visit for each file or directory.

        visit(path, entry, error) is called with entry None when error is set,
        and for the repository root. Its result steers the walk: None or
        Signal.CONTINUE keeps going; Signal.SKIP on a directory skips its
        contents, on a non-directory skips the remaining files of the
        containing directory; Abort(cause) stops the walk and raises cause.

        path_filter(path, entry) returning True excludes that path before
        any remote call is spent on it.

        Raises:
            BaseException: The cause of an Abort returned by visit, or
                anything raised by visit or path_filter themselves.
        """
        try:
            info = self.stat(path)
        except GhWalkError as e:
            logger.debug(f"Stat of '{path}' failed: {e}")
            result = _check_result(visit(path, None, e))
        else:
            if path_filter is not None and path_filter(path, info):
                return
            result = self._walk(path, info, visit, path_filter)

        if isinstance(result, Abort):
            raise result.cause

    def _walk(
            self,
            path: str,
            info: Optional[Entry],
            visit: VisitFunc,
            path_filter: Optional[PathFilterFunc],
    ) -> VisitResult:
        # info is None for the repository root, which is a directory
        if info is not None and not info.is_dir():
            return _check_result(visit(path, info, None))

        entries: List[Entry] = []
        list_error: Optional[GhWalkError] = None
        try:
            entries = self.list_children(path)
        except GhWalkError as e:
            logger.debug(f"Listing of '{path or '/'}' failed: {e}")
            list_error = e

        result = _check_result(visit(path, info, list_error))
        # A failed listing leaves nothing to descend into; the visitor's
        # answer decides how the caller proceeds.
        if list_error is not None or result is not None:
            return result

        for entry in entries:
            child_path = posixpath.join(path, entry.name)

            if path_filter is not None and path_filter(child_path, entry):
                continue

            try:
                child = self._resolve(child_path, entry)
            except GhWalkError as e:
                logger.debug(f"Resolving '{child_path}' failed: {e}")
                child_result = _check_result(visit(child_path, None, e))
                if isinstance(child_result, Abort):
                    return child_result
                continue

            child_result = self._walk(child_path, child, visit, path_filter)
            if child_result is None:
                continue
            if child_result is Signal.SKIP and child.is_dir():
                continue
            return child_result

        return None

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _get(self, path: str) -> ContentsPayload:
        return self.provider.get_contents(
            self.owner, self.repo, path, ref=self.options.ref, context=self.context
        )

    def _resolve(self, path: str, entry: Entry) -> Entry:
        """Swap a listing-derived entry for its detail-bearing form when requested."""
        if entry.is_dir() or not self.options.enable_file_detail:
            return entry

        payload = self._get(path)
        if not isinstance(payload, dict):
            raise TransportError(f"expected a single entry at {path}, got {type(payload).__name__}")
        return _to_entry(payload, path, include_detail=True)


def walk(
        owner: str,
        repo: str,
        path: str,
        visit: VisitFunc,
        options: Optional[WalkOptions] = None,
        path_filter: Optional[PathFilterFunc] = None,
        *,
        provider: Optional[ContentsProvider] = None,
        context: Optional[CallContext] = None,
) -> None:
    """
    Walk a GitHub repository tree starting at path ("" for the repository root).

    See Walker.walk for the visitor and filter contract. Files are walked in
    lexical order, which makes the output deterministic but means one API
    call per directory (and one more per file with detail fetch enabled).
    """
    if provider is not None:
        Walker(provider, owner, repo, options, context).walk(path, visit, path_filter)
        return

    client = GitHubContentsClient(token=options.token if options else None)
    try:
        Walker(client, owner, repo, options, context).walk(path, visit, path_filter)
    finally:
        client.close()


def _listing_items(listing: List[Any], path: str) -> List[Dict[str, Any]]:
    """Drop empty slots of a listing, rejecting anything that is not an object."""
    items = [p for p in listing if p]
    for p in items:
        if not isinstance(p, dict):
            raise TransportError(
                f"malformed contents payload under {path or '/'}: "
                f"expected an object, got {type(p).__name__}"
            )
    return items


def _to_entry(payload: Dict[str, Any], path: str, include_detail: bool = False) -> Entry:
    """Entry.from_api, with unexpected remote values reported as TransportError."""
    try:
        return Entry.from_api(payload, include_detail=include_detail)
    except (TypeError, ValueError) as e:
        raise TransportError(f"malformed contents payload for {path}: {e}") from e


def _check_result(result: VisitResult) -> VisitResult:
    """Normalize a visitor result, treating Signal.CONTINUE as None."""
    if result is None or result is Signal.CONTINUE:
        return None
    if result is Signal.SKIP or isinstance(result, Abort):
        return result
    raise TypeError(
        f"visitor must return None, a Signal or an Abort, not {type(result).__name__}"
    )
