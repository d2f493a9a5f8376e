from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace
into configuration overrides understood by ghwalk.domain.config.
"""

import argparse
from typing import Any, Dict, List, Optional

from ghwalk.domain.constants import CURRENT_VERSION, ENV_TOKEN

DEFAULT_CONTENT_PREVIEW = 50

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the ghwalk CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="ghwalk",
        description="Walk a GitHub repository tree and print every visited path.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {CURRENT_VERSION}")

    # --- Repository Addressing ---
    p.add_argument("owner", help="Repository owner (user or organization).")
    p.add_argument("repo", help="Repository name.")
    p.add_argument(
        "path",
        nargs="?",
        default="",
        help="Starting path relative to the repository root (default: the root).",
    )
    p.add_argument(
        "--ref",
        default=None,
        help="Commit SHA, branch or tag (default: the repository's default branch).",
    )
    p.add_argument(
        "--token",
        default=None,
        help=f"OAuth access token (default: ${ENV_TOKEN}).",
    )

    # --- Traversal ---
    p.add_argument(
        "--detail",
        action="store_true",
        help="Fetch file content and symlink targets (one extra API call per file).",
    )
    p.add_argument(
        "--reverse",
        action="store_true",
        help="Visit siblings in descending name order.",
    )
    p.add_argument(
        "--exclude",
        dest="exclude_patterns",
        default=None,
        help="Comma-separated regexes; matching paths are pruned without any API call.",
    )
    p.add_argument(
        "--skip-errors",
        action="store_true",
        help="Report failed paths and keep walking instead of aborting.",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Deadline in seconds for the whole walk.",
    )

    # --- Output ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Emit one JSON object per visited entry.",
    )
    p.add_argument(
        "--show-content",
        type=int,
        default=DEFAULT_CONTENT_PREVIEW,
        metavar="N",
        help="With --detail, print the first N characters of each file (0 disables).",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON file with configuration defaults.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration and exit.",
    )
    p.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this rotating file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Flags that were not given map to None so they never mask values
    coming from the environment or a config file.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides.
    """
    return {
        "token": args.token,
        "ref": args.ref,
        "enable_file_detail": True if args.detail else None,
        "reverse": True if args.reverse else None,
        "timeout": args.timeout,
    }


def split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of non-empty items."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
