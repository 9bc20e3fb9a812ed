"""Command line entry point.

Usage::

    polymd paper-badge --description "A badge" --tests --demo
    python -m polymd arc-request-panel --arc --deps
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.markup import escape

from polymd import __version__
from polymd.config import ScaffoldError, ScaffoldRequest
from polymd.scaffolder import ComponentGenerator
from polymd.utils import print_error, print_summary_table


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for ``polymd``.

    ``--version`` is the generated component's initial version.  polymd
    reports its own version through ``--polymd-version``.
    """
    parser = argparse.ArgumentParser(
        prog="polymd",
        description="Create a web component project from a template",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  polymd paper-badge\n"
            "  polymd paper-badge --description 'A badge' --tests --demo\n"
            "  polymd paper-badge --path ./elements/paper-badge --deps\n"
        ),
    )

    parser.add_argument("name", help="Name of the web component; must contain a '-'")
    parser.add_argument("--description", "-d", default=None, help="Component description")
    parser.add_argument(
        "--author", "-a", default=None, help="Author (default: $POLYMD_AUTHOR or $USER)"
    )
    parser.add_argument(
        "--version",
        "-v",
        default=None,
        help="Initial version of the component, not of polymd (default: 0.0.1)",
    )
    parser.add_argument(
        "--repository",
        "-r",
        default=None,
        help="Repository owner; the component name is appended (default: $POLYMD_REPO)",
    )
    parser.add_argument(
        "--path", "-p", default=None, help="Target directory (default: ./<name>)"
    )
    parser.add_argument(
        "--arc", action="store_true", help="Generate an Advanced REST Client component"
    )
    parser.add_argument("--tests", action="store_true", help="Include the test suite")
    parser.add_argument("--demo", action="store_true", help="Include the demo page")
    parser.add_argument(
        "--deps", action="store_true", help="Install dependencies when done"
    )
    parser.add_argument(
        "--travis", action="store_true", help="Include the Travis CI configuration"
    )
    parser.add_argument(
        "--polymd-version",
        action="version",
        version=f"polymd {__version__}",
        help="Show polymd's version and exit",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``polymd``."""
    args = build_parser().parse_args(argv)

    try:
        request = ScaffoldRequest(
            name=args.name,
            description=args.description,
            author=args.author,
            version=args.version,
            repository=args.repository,
            path=Path(args.path) if args.path else None,
            branded=args.arc,
            tests=args.tests,
            demo=args.demo,
            deps=args.deps,
            ci=args.travis,
        )
        generator = ComponentGenerator(request, environ=os.environ)
        opts = generator.options
        print_summary_table(
            {
                "Component": opts.name,
                "Author": opts.author,
                "Version": opts.version,
                "Repository": opts.repository,
                "Target": str(opts.target),
            },
            title="polymd",
        )
        asyncio.run(generator.run())
    except (ScaffoldError, OSError, ValueError) as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
