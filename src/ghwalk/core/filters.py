from __future__ import annotations

"""
Path Filter Builders.

Regex-based filter hooks that veto repository paths before the walker
spends any remote call on them.
"""

import logging
import re
from typing import List, Optional

from ghwalk.domain.entry_models import Entry
from ghwalk.domain.walk_models import PathFilterFunc

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_patterns(patterns: List[str]) -> List[re.Pattern]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Malformed patterns are discarded with a warning.

    Args:
        patterns: List of raw regex strings.

    Returns:
        List[re.Pattern]: Compiled regex objects.
    """
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(p))
        except re.error as e:
            logger.warning(f"Discarding invalid pattern '{p}': {e}")
    return compiled


def matches_any(path: str, compiled_patterns: List[re.Pattern]) -> bool:
    """True if at least one pattern is found anywhere in path."""
    return any(rx.search(path) for rx in compiled_patterns)

# -----------------------------------------------------------------------------
# FILTER HOOKS
# -----------------------------------------------------------------------------

def build_path_filter(exclude_patterns: Optional[List[str]]) -> Optional[PathFilterFunc]:
    """
    Build a filter hook vetoing every path matched by an exclusion pattern.

    Args:
        exclude_patterns: Raw regex strings searched against the full path.

    Returns:
        Optional[PathFilterFunc]: The hook, or None if no usable pattern was given.
    """
    compiled = compile_patterns(exclude_patterns or [])
    if not compiled:
        return None

    def _filter(path: str, entry: Optional[Entry]) -> bool:
        return matches_any(path, compiled)

    return _filter
