from __future__ import annotations

"""
GitHub Repository Contents Client.

Implements the ContentsProvider contract over the REST contents endpoint
using a requests Session. Every failure is surfaced as TransportError with
the remote message preserved.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from ghwalk.core.context import CallContext
from ghwalk.domain.constants import DEFAULT_API_URL, DEFAULT_TIMEOUT, GITHUB_ACCEPT_HEADER, USER_AGENT
from ghwalk.domain.errors import TransportError
from ghwalk.infra.network.base import ContentsPayload, ContentsProvider

logger = logging.getLogger(__name__)


class GitHubContentsClient(ContentsProvider):
    """
    HTTP client for GET /repos/{owner}/{repo}/contents/{path}.

    Args:
        token: OAuth access token; None issues unauthenticated requests.
        api_url: Base URL of the REST API.
        timeout: Per-request timeout in seconds.
        session: Pre-built session, mostly for tests.
    """

    def __init__(
            self,
            token: Optional[str] = None,
            api_url: str = DEFAULT_API_URL,
            timeout: float = DEFAULT_TIMEOUT,
            session: Optional[requests.Session] = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.headers.update({
            "Accept": GITHUB_ACCEPT_HEADER,
            "User-Agent": USER_AGENT,
        })
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def contents_url(self, owner: str, repo: str, path: str) -> str:
        """Build the endpoint URL, quoting each path segment."""
        url = f"{self.api_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}/contents"
        path = path.strip("/")
        if path:
            url += "/" + quote(path, safe="/")
        return url

    def get_contents(
            self,
            owner: str,
            repo: str,
            path: str,
            ref: Optional[str] = None,
            context: Optional[CallContext] = None,
    ) -> ContentsPayload:
        ctx = context or CallContext.background()
        url: Optional[str] = self.contents_url(owner, repo, path)
        params: Optional[Dict[str, str]] = {"ref": ref} if ref else None

        pages: List[Dict[str, Any]] = []
        while url:
            ctx.check()
            response = self._request(url, params, ctx)
            data = self._decode(response, url)

            if not isinstance(data, list):
                return data

            pages.extend(data)
            # The next link already carries the query string
            url = response.links.get("next", {}).get("url")
            params = None

        return pages

    def close(self) -> None:
        self._session.close()

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _request(self, url: str, params: Optional[Dict[str, str]], ctx: CallContext) -> requests.Response:
        """Issue one GET and map transport failures and non-2xx replies."""
        logger.debug(f"GET {url} params={params}")
        try:
            response = self._session.get(url, params=params, timeout=ctx.request_timeout(self.timeout))
        except requests.exceptions.RequestException as e:
            logger.warning(f"Contents API communication failure for {url}: {e}")
            raise TransportError(str(e), url=url) from e

        if not 200 <= response.status_code < 300:
            message = _error_message(response)
            logger.warning(f"Contents API returned {response.status_code} for {url}: {message}")
            raise TransportError(
                f"GET {url}: {response.status_code} {message}",
                status_code=response.status_code,
                url=url,
            )
        return response

    @staticmethod
    def _decode(response: requests.Response, url: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"GET {url}: invalid JSON response: {e}", url=url) from e


def _error_message(response: requests.Response) -> str:
    """Extract the API error message, falling back to the reason phrase."""
    try:
        body = response.json()
    except ValueError:
        return response.reason or ""
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason or ""
