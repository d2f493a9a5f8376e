from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration
resolution (defaults, config file, environment, CLI overrides), the walk
itself and rendering of every visited entry.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional, TextIO

from ghwalk.core.context import CallContext
from ghwalk.core.filters import build_path_filter
from ghwalk.core.walker import Walker
from ghwalk.domain.config import (
    build_walk_options,
    get_default_config,
    load_config_file,
    load_env_config,
    merge_config,
    validate_config,
)
from ghwalk.domain.entry_models import Entry, FileType
from ghwalk.domain.errors import DecodeError, GhWalkError
from ghwalk.domain.walk_models import SKIP, Abort, VisitResult
from ghwalk.infra.logging import LoggingConfig, configure_logging, get_logger
from ghwalk.infra.network import GitHubContentsClient
from ghwalk.interface.cli import args as cli_args

logger = get_logger(__name__)

_SEP = "=" * 20

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv.

    Returns:
        int: Exit code (0 success, 1 walk failure, 2 configuration error, 130 interrupted).
    """
    # 1. Argument parsing
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (stderr, stdout stays clean for the walk output)
    configure_logging(LoggingConfig.for_cli(args.debug, args.log_file))

    # 3. Configuration hierarchy: defaults < file < environment < CLI
    raw_conf = get_default_config()
    if args.config_file:
        if not os.path.isfile(args.config_file):
            msg = f"Config file does not exist: {args.config_file}"
            logger.error(msg)
            print(f"ERROR: {msg}", file=sys.stderr)
            return 2
        raw_conf = merge_config(raw_conf, load_config_file(args.config_file))
    raw_conf = merge_config(raw_conf, load_env_config())
    raw_conf = merge_config(raw_conf, cli_args.args_to_overrides(args))

    conf, warnings = validate_config(raw_conf, strict=False)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(_redact(conf), ensure_ascii=False, indent=2))
        return 0

    # 4. Walk execution
    options = build_walk_options(conf)
    client = GitHubContentsClient(token=options.token, api_url=conf["api_url"])
    walker = Walker(client, args.owner, args.repo, options, CallContext(timeout=conf["timeout"]))
    reporter = WalkReporter(
        json_output=args.json_output,
        show_content=args.show_content,
        skip_errors=args.skip_errors,
    )

    target = f"{args.owner}/{args.repo}:{args.path or '/'}"
    logger.debug(f"Walking {target} (ref={options.ref or 'default branch'})")

    try:
        walker.walk(args.path, reporter.visit, build_path_filter(cli_args.split_csv(args.exclude_patterns)))
    except KeyboardInterrupt:
        logger.warning("Walk interrupted by user.")
        return 130
    except GhWalkError as e:
        logger.error(f"Walk of {target} failed: {e}")
        return 1
    finally:
        client.close()

    logger.debug(f"Visited {reporter.visited} entries, {reporter.errors} errors.")
    return 0

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

class WalkReporter:
    """
    Visitor printing each visited entry to a stream.

    Args:
        json_output: Emit JSON lines instead of human-readable text.
        show_content: Characters of decoded file content to print (detail mode only).
        skip_errors: Turn failed paths into skips instead of aborting the walk.
        stream: Output stream. Defaults to sys.stdout.
    """

    def __init__(
            self,
            json_output: bool = False,
            show_content: int = cli_args.DEFAULT_CONTENT_PREVIEW,
            skip_errors: bool = False,
            stream: Optional[TextIO] = None,
    ) -> None:
        self.json_output = json_output
        self.show_content = show_content
        self.skip_errors = skip_errors
        self.stream = stream
        self.visited = 0
        self.errors = 0

    def visit(self, path: str, info: Optional[Entry], err: Optional[BaseException]) -> VisitResult:
        if err is not None:
            self.errors += 1
            if self.skip_errors:
                logger.warning(f"Skipping '{path}': {err}")
                return SKIP
            return Abort(err)

        # The repository root carries no metadata
        if info is None:
            return None

        self.visited += 1
        if self.json_output:
            self._write(json.dumps(_entry_to_dict(info, self.show_content), ensure_ascii=False))
        else:
            self._write(self._render(info))
        return None

    def _render(self, info: Entry) -> str:
        if info.detail is None:
            return info.path

        if info.kind is FileType.SYMLINK:
            return f"{_SEP}\n{info.path} -> {info.detail.target} ({info.kind.value})\n{_SEP}"

        header = f"{_SEP}\n{info.path} ({info.kind.value})\n{_SEP}"
        if info.kind is not FileType.FILE or self.show_content <= 0:
            return header
        return f"{header}\n{_preview(info, self.show_content)}"

    def _write(self, text: str) -> None:
        print(text, file=self.stream or sys.stdout)

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _preview(info: Entry, limit: int) -> str:
    try:
        content = info.get_content()
    except DecodeError as e:
        logger.warning(f"Cannot decode content of '{info.path}': {e}")
        return "<undecodable content>"
    if len(content) > limit:
        return content[:limit] + "\n..."
    return content


def _entry_to_dict(info: Entry, limit: int) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "path": info.path,
        "type": info.kind.value,
        "size": info.size,
        "sha": info.sha,
        "html_url": info.locators.html_url,
    }
    if info.detail is not None:
        out["download_url"] = info.detail.download_url
        if info.kind is FileType.SYMLINK:
            out["target"] = info.detail.target
        elif info.kind is FileType.FILE and limit > 0:
            out["content"] = _preview(info, limit)
    return out


def _redact(conf: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(conf)
    if out.get("token"):
        out["token"] = "***"
    return out

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
