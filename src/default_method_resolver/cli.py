"""CLI entry point for default method resolver."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from .analyzer import analyze_hierarchy, load_hierarchy_file
from .diagnostics import print_hierarchy
from .output import display_results
from .type_model import DEFAULT_ROOT_TYPE_NAME, HierarchyDefinitionError, UnknownTypeError

logger = logging.getLogger(__name__)

CONFLICT_EXIT_CODE = 2


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Resolve which default method each call on a type binds to"
    )
    parser.add_argument(
        "target",
        help="Hierarchy file (Python stub syntax) to analyze",
        type=Path,
    )
    parser.add_argument(
        "root",
        help="Name of the type calls are dispatched on",
    )
    parser.add_argument(
        "--method",
        help="Only resolve methods with this name",
    )
    parser.add_argument(
        "--signature",
        help='Only resolve this erased signature, e.g. "(int)str" (requires --method)',
    )
    parser.add_argument(
        "--print-hierarchy",
        action="store_true",
        help="Print the hierarchy walk before resolving",
    )
    parser.add_argument(
        "--root-type-name",
        default=DEFAULT_ROOT_TYPE_NAME,
        help=f"Name of the universal root class (default: {DEFAULT_ROOT_TYPE_NAME})",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help=f"Exit with status {CONFLICT_EXIT_CODE} if any method has a conflict",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging output",
    )
    args = parser.parse_args()
    if args.signature is not None and args.method is None:
        parser.error("--signature requires --method")
    return args


def main() -> None:
    """Run the CLI application."""
    console = Console()
    args = parse_args()

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        logger.debug("Debug logging enabled")

    if not args.target.exists():
        console.print(f"[red]Error: File {args.target} does not exist[/red]")
        sys.exit(1)

    if not args.target.is_file():
        console.print(f"[red]Error: {args.target} is not a file[/red]")
        sys.exit(1)

    if args.target.suffix != ".py":
        console.print(f"[red]Error: {args.target} is not a Python file[/red]")
        sys.exit(1)

    try:
        registry = load_hierarchy_file(args.target, root_type_name=args.root_type_name)
        if registry is None:
            console.print(f"[red]Error: Could not parse {args.target}[/red]")
            sys.exit(1)

        if args.print_hierarchy:
            print_hierarchy(console, registry, registry.get(args.root))
            console.print()

        result = analyze_hierarchy(registry, args.root, method_name=args.method, signature=args.signature)
        display_results(console, registry, result)

        if args.strict and result.conflicts:
            sys.exit(CONFLICT_EXIT_CODE)

    except (HierarchyDefinitionError, UnknownTypeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    except Exception as e:  # noqa: BLE001
        console.print(f"[red]Error analyzing hierarchy: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
