from __future__ import annotations

"""
Global Constants.

Remote API endpoints, environment variable names and network defaults
shared across the walker, the HTTP client and the CLI.
"""

from typing import Final

# -----------------------------------------------------------------------------
# APPLICATION METADATA
# -----------------------------------------------------------------------------
CURRENT_VERSION: Final[str] = "0.2.0"
USER_AGENT: Final[str] = f"ghwalk/{CURRENT_VERSION}"

# -----------------------------------------------------------------------------
# REMOTE API
# -----------------------------------------------------------------------------
DEFAULT_API_URL: Final[str] = "https://api.github.com"
GITHUB_ACCEPT_HEADER: Final[str] = "application/vnd.github+json"
DEFAULT_TIMEOUT: Final[float] = 20.0

# -----------------------------------------------------------------------------
# ENVIRONMENT
# -----------------------------------------------------------------------------
ENV_TOKEN: Final[str] = "GHWALK_GITHUB_TOKEN"
ENV_TOKEN_FALLBACK: Final[str] = "GITHUB_TOKEN"
ENV_REF: Final[str] = "GHWALK_REF"
ENV_API_URL: Final[str] = "GHWALK_API_URL"
