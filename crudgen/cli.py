# File: crudgen/cli.py
"""
crudgen - Command-Line Interface
==================================

argparse front end for the generator.

Usage examples::

    # Model, request, service, controller, resource, migration, seeder + route
    crudgen make:crud Blog

    # Namespaced resource backed by a differently named model
    crudgen make:crud Admin/Team --model=Member

    # Regenerate over existing files
    crudgen make:crud Blog --force

    # Copy the bundled stubs into stubs/crud-generator for customisation
    crudgen stub:publish

    # Run against another project directory with debug logging
    crudgen -vv --root ../shop-api make:crud Product

Exit codes:
    0 - success
    1 - invalid input, missing stub, missing routes file, bad config,
        or filesystem error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional, Sequence

from crudgen.errors import CrudGenError
from crudgen.exporters import publish_stubs
from crudgen.generator import CrudGenerator, GenerationReport, load_layout
from crudgen.models import ProjectLayout

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_FAILURE: int = 1


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """
    Configure the root crudgen logger based on verbosity level.

    Args:
        verbosity: 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    fmt: str = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
    datefmt: str = "%H:%M:%S"
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root_logger: logging.Logger = logging.getLogger("crudgen")
    root_logger.setLevel(level)

    # Remove existing handlers to prevent duplication
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from crudgen import __version__

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="crudgen",
        description=(
            "Generate API CRUD scaffolding (Model, Request, Service, Controller, "
            "Resource, Migration, Seeder, Route) for a Laravel-style project."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s make:crud Blog\n"
            "  %(prog)s make:crud Admin/Team --model=Member\n"
            "  %(prog)s stub:publish --force\n"
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"crudgen v{__version__}",
    )

    # --- Project ---
    project_group = parser.add_argument_group("project")
    project_group.add_argument(
        "--root",
        type=str,
        default=".",
        metavar="DIR",
        help="Host project root (default: current directory).",
    )
    project_group.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="FILE",
        help="Config file (default: crudgen.yaml / .yml / .json in the project root).",
    )

    # --- Verbosity ---
    verbosity_group = parser.add_argument_group("verbosity")
    verbosity_group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG).",
    )
    verbosity_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Suppress all output except the exit code.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    # --- make:crud ---
    make_crud = subparsers.add_parser(
        "make:crud",
        help="Generate the CRUD artifact set for a resource.",
        description="Generate API CRUD (Model, Request, Service, Controller, Migration, Seeder).",
    )
    make_crud.add_argument(
        "name",
        help="Resource name, e.g. Blog or Admin/Blog.",
    )
    make_crud.add_argument(
        "--model",
        type=str,
        default=None,
        metavar="NAME",
        help="Explicit model class name (default: the resource name).",
    )
    make_crud.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="Overwrite existing files.",
    )
    make_crud.add_argument(
        "--no-resource",
        action="store_true",
        default=False,
        help="Skip the API resource transformer; the controller returns plain JSON.",
    )
    make_crud.add_argument(
        "--no-routes",
        action="store_true",
        default=False,
        help="Do not register the resource in the routes file.",
    )

    # --- stub:publish ---
    stub_publish = subparsers.add_parser(
        "stub:publish",
        help="Copy the bundled stubs into the project for customisation.",
    )
    stub_publish.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="Overwrite stubs that were already published.",
    )

    return parser


# ---------------------------------------------------------------------------
# Layout override builder
# ---------------------------------------------------------------------------


def _build_layout_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Build a layout override dictionary from CLI arguments."""
    overrides: Dict[str, Any] = {}

    if getattr(args, "no_resource", False):
        overrides["generate_resource"] = False

    if getattr(args, "no_routes", False):
        overrides["register_routes"] = False

    return overrides


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _run_make_crud(layout: ProjectLayout, args: argparse.Namespace) -> int:
    """Run ``make:crud`` and print the report.  Returns the exit code."""
    generator: CrudGenerator = CrudGenerator(layout, force=args.force)
    report: GenerationReport = generator.generate(args.name, args.model)

    if not args.quiet:
        print(report.summary())

    return EXIT_SUCCESS if report.success else EXIT_FAILURE


def _run_stub_publish(layout: ProjectLayout, args: argparse.Namespace) -> int:
    """Run ``stub:publish``.  Returns the exit code."""
    results = publish_stubs(layout, force=args.force)

    if not args.quiet:
        for result in results:
            icon: str = "⊘" if result.skipped else "✓"
            print(f"  {icon} {result.describe(layout.root)}")

    return EXIT_SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def cli_main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main CLI entry point.

    Can be called from ``__main__.py`` or directly for testing.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:]).
    """
    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    if args.quiet:
        verbosity: int = -1
    else:
        verbosity = args.verbose
    _setup_logging(verbosity)
    if args.quiet:
        logging.getLogger("crudgen").setLevel(logging.CRITICAL + 1)

    root: Path = Path(args.root).resolve()
    if not root.is_dir():
        logger.error("Project root is not a directory: %s", root)
        sys.exit(EXIT_FAILURE)

    config_path: Optional[Path] = Path(args.config).resolve() if args.config else None

    try:
        layout: ProjectLayout = load_layout(
            root, config_path, _build_layout_overrides(args)
        )
        if args.command == "make:crud":
            exit_code: int = _run_make_crud(layout, args)
        else:
            exit_code = _run_stub_publish(layout, args)
    except CrudGenError as exc:
        logger.error("%s", exc)
        sys.exit(EXIT_FAILURE)
    except OSError as exc:
        logger.error("Filesystem error: %s", exc)
        sys.exit(EXIT_FAILURE)

    sys.exit(exit_code)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "cli_main",
    "EXIT_SUCCESS",
    "EXIT_FAILURE",
]
