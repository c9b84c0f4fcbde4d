"""CLI entrypoints for repodoc commands."""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

from .config import ConfigError, load_config
from .errors import RepoDocError
from .logging import configure_logging, get_logger
from .orchestrator import Orchestrator
from .render import render_result
from .service import run_service
from .vcs import parse_repo_url


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repodoc",
        description="Generate structured documentation for a GitHub repository from its file tree.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to repodoc.yml or the directory containing it (defaults to the current directory).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate documentation for a repository URL.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument("repo_url", help="Repository URL, e.g. https://github.com/owner/name")
    generate_parser.add_argument(
        "--format",
        choices=("markdown", "json"),
        default="markdown",
        help="Output format (defaults to markdown).",
    )
    generate_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Overall deadline in seconds for fetching and generation.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default=None, help="Bind address (defaults to config).")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port (defaults to config).")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for repodoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))
    logger = get_logger("cli")

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "generate":
        orchestrator = Orchestrator.from_config(config)
        deadline = time.monotonic() + args.timeout if args.timeout else None
        try:
            result = orchestrator.generate(args.repo_url, deadline=deadline)
        except RepoDocError as exc:
            logger.debug("Generation failed [%s]: %s", exc.kind, exc)
            parser.exit(
                1,
                f"repodoc generate failed: {exc.public_message}\nRun with --verbose for more details.\n",
            )
        except Exception as exc:  # pragma: no cover
            logger.debug("Unexpected failure: %s", exc, exc_info=True)
            parser.exit(1, "repodoc generate failed: Unknown server error\nRun with --verbose for more details.\n")

        if args.format == "json":
            print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        else:
            owner, name = parse_repo_url(args.repo_url)
            print(render_result(result, title=f"{owner}/{name}"), end="")
    elif args.command == "serve":
        run_service(args.host, args.port, config=config)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
