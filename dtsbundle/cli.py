"""CLI entrypoints for dtsbundle commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .collaborators import FetchError, MetadataError
from .config import ConfigError, load_config
from .logging import configure_logging
from .orchestrator import BundleError, Orchestrator
from .stores import ArtifactWriteError

_FATAL_ERRORS = (BundleError, ConfigError, MetadataError, FetchError, ArtifactWriteError)


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dtsbundle",
        description="Bundle TypeScript declaration trees and generate API documentation.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-c",
        "--config",
        default=".",
        help="Path to .dtsbundle.yml or the directory holding it (defaults to current directory).",
    )
    parser.add_argument(
        "--log-file",
        help="Also write DEBUG-level logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Run the types, modules, and docs stages in order.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    build_parser.add_argument(
        "--skip-types",
        action="store_true",
        help="Skip bundling the declaration files.",
    )
    build_parser.add_argument(
        "--skip-modules",
        action="store_true",
        help="Skip fetching module assets from the latest upstream release.",
    )
    build_parser.add_argument(
        "--skip-docs",
        action="store_true",
        help="Skip documentation generation.",
    )

    bundle_parser = subparsers.add_parser(
        "bundle",
        help="Inline reference directives into a single declaration file.",
    )
    _add_verbose_option(bundle_parser, suppress_default=True)

    docs_parser = subparsers.add_parser(
        "docs",
        help="Generate Markdown and help pages from the bundled declarations.",
    )
    _add_verbose_option(docs_parser, suppress_default=True)

    fetch_parser = subparsers.add_parser(
        "fetch-modules",
        help="Copy library files from the latest upstream release.",
    )
    _add_verbose_option(fetch_parser, suppress_default=True)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for dtsbundle commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    try:
        config = load_config(Path(args.config))
        orchestrator = Orchestrator(config)
        if args.command == "build":
            summary = orchestrator.run(
                skip_types=bool(args.skip_types),
                skip_modules=bool(args.skip_modules),
                skip_docs=bool(args.skip_docs),
            )
            print(f"Completed stages: {', '.join(summary.completed) or 'none'}")
        elif args.command == "bundle":
            output = orchestrator.run_bundle()
            print(f"Bundled declarations written to {_relativize(output)}")
        elif args.command == "docs":
            outcome = orchestrator.run_docs()
            print(
                f"Documentation for {len(outcome.registry)} modules written to "
                f"{_relativize(config.docs.output_dir)}"
            )
        elif args.command == "fetch-modules":
            fetched = orchestrator.run_modules()
            print(f"Fetched {len(fetched.copied)} module files from {fetched.tag}")
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except _FATAL_ERRORS as exc:
        parser.exit(1, f"dtsbundle {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
