"""
Command Line Interface for Cubby Remote Template Builder
========================================================

Browse .reabank bank definitions and build REAPER template projects with
Reaticulate banks already assigned.

Usage Examples:
    # How many banks, and which lines failed to parse
    cubby-template parse Reaticulate.reabank

    # Dump parsed banks as JSON
    cubby-template parse Reaticulate.reabank --json

    # Show the library / instrument folder tree
    cubby-template tree *.reabank

    # Find banks whose names contain every word
    cubby-template search *.reabank --query "violin long"

    # Build a template from a folder, grouped in folder tracks by library
    cubby-template generate *.reabank --folder "Spitfire Audio" --group -o strings.RPP

    # Use the reabank directory from the config file instead of FILE arguments
    cubby-template tree
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from cubby.app.config import Settings, load_settings
from cubby.data.loader import load_reabank_dir, load_reabank_files
from cubby.data.reabank_parser import ParsedReabank
from cubby.errors import CubbyError
from cubby.index.selection import BankIndex
from cubby.project.requests import build_project
from cubby.project.rpp_generator import generate_rpp
from cubby.rules.classifier import FolderNode, display_name

logger = logging.getLogger(__name__)


# =============================================================================
# PART 1: ARGUMENT PARSER SETUP
# =============================================================================

def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help=".reabank files (default: every file in the configured reabank directory)"
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser object with parse/tree/search/generate
    """
    parser = argparse.ArgumentParser(
        prog="cubby-template",
        description="Browse Reaticulate banks and build REAPER template projects.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file (default: ~/.config/cubby/config.yaml)"
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar while parsing files"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # ─────────────────────────────────────────────────────────────────────────
    # parse
    # ─────────────────────────────────────────────────────────────────────────
    parse_cmd = subparsers.add_parser("parse", help="Parse files and report banks and errors")
    _add_input_arguments(parse_cmd)
    parse_cmd.add_argument(
        "--json",
        action="store_true",
        help="Print parsed banks as JSON"
    )

    # ─────────────────────────────────────────────────────────────────────────
    # tree
    # ─────────────────────────────────────────────────────────────────────────
    tree_cmd = subparsers.add_parser("tree", help="Print the classified folder tree")
    _add_input_arguments(tree_cmd)

    # ─────────────────────────────────────────────────────────────────────────
    # search
    # ─────────────────────────────────────────────────────────────────────────
    search_cmd = subparsers.add_parser("search", help="List banks matching every query word")
    _add_input_arguments(search_cmd)
    search_cmd.add_argument("-q", "--query", required=True, help="Words to search for")

    # ─────────────────────────────────────────────────────────────────────────
    # generate
    # ─────────────────────────────────────────────────────────────────────────
    generate_cmd = subparsers.add_parser("generate", help="Write a .RPP template for the chosen banks")
    _add_input_arguments(generate_cmd)
    generate_cmd.add_argument(
        "--select",
        action="append",
        default=[],
        metavar="KEY",
        help="Select a bank by MSB-LSB key, e.g. 42-1 (repeatable)"
    )
    generate_cmd.add_argument(
        "-q", "--query",
        action="append",
        default=[],
        help="Select every bank matching a search (repeatable)"
    )
    generate_cmd.add_argument(
        "--folder",
        action="append",
        default=[],
        metavar="PATH",
        help="Select every bank under a tree folder, e.g. 'Spitfire Audio/Violins' (repeatable)"
    )
    generate_cmd.add_argument(
        "--group",
        action="store_true",
        help="Put tracks into one folder track per library"
    )
    generate_cmd.add_argument("--name", default=None, help="Project name")
    generate_cmd.add_argument("--tempo", type=float, default=None, help="Project tempo in BPM")
    generate_cmd.add_argument("-o", "--output", type=Path, default=None, help="Output .RPP path")

    return parser


# =============================================================================
# PART 2: LOADING
# =============================================================================

def load_banks(files: List[str], settings: Settings, show_progress: bool = False) -> ParsedReabank:
    """
    Parse the given files, or the configured directory when none are given.

    Raises:
        CubbyError: Nothing to load, or a file/directory cannot be read
    """
    if files:
        return load_reabank_files(files, show_progress=show_progress)
    if settings.reabank.directory:
        directory = Path(settings.reabank.directory).expanduser()
        return load_reabank_dir(directory, settings.reabank.pattern, show_progress=show_progress)
    raise CubbyError("No .reabank files given and no reabank.directory configured")


def print_errors(errors: List[str]) -> None:
    for error in errors:
        print(f"  ! {error}", file=sys.stderr)


# =============================================================================
# PART 3: OUTPUT FORMATTING
# =============================================================================

def format_tree(node: FolderNode, depth: int = 0) -> List[str]:
    """Indented folder listing with bank counts; banks shown as leaves."""
    lines = []
    indent = "  " * depth
    for child in node.sorted_children():
        lines.append(f"{indent}{child.name}/ ({child.count()})")
        lines.extend(format_tree(child, depth + 1))
    for bank in node.banks:
        lines.append(f"{indent}{display_name(bank)}  [{bank.key}]")
    return lines


def format_bank_line(bank) -> str:
    return f"{bank.key:>9}  {bank.name}  ({len(bank.articulations)} articulations)"


# =============================================================================
# PART 4: COMMANDS
# =============================================================================

def run_parse(args, settings: Settings) -> int:
    result = load_banks(args.files, settings, args.progress)
    if args.json:
        print("[" + ",\n".join(bank.model_dump_json() for bank in result.banks) + "]")
    else:
        print(f"{len(result.banks)} banks, {len(result.errors)} errors ({result.parse_time:.1f} ms)")
    print_errors(result.errors)
    return 0


def run_tree(args, settings: Settings) -> int:
    result = load_banks(args.files, settings, args.progress)
    index = BankIndex(result.banks)
    print("\n".join(format_tree(index.tree)))
    print_errors(result.errors)
    return 0


def run_search(args, settings: Settings) -> int:
    result = load_banks(args.files, settings, args.progress)
    matches = BankIndex(result.banks).search(args.query)
    for bank in matches:
        print(format_bank_line(bank))
    print(f"{len(matches)} of {len(result.banks)} banks match '{args.query}'")
    return 0


def run_generate(args, settings: Settings) -> int:
    result = load_banks(args.files, settings, args.progress)
    print_errors(result.errors)
    index = BankIndex(result.banks)

    for key in args.select:
        if index.get(key) is None:
            raise CubbyError(f"No bank with key '{key}'")
        index.select_keys([key])
    for query in args.query:
        index.select_keys(bank.key for bank in index.search(query))
    for path in args.folder:
        if index.folder(path) is None:
            raise CubbyError(f"No folder '{path}'")
        if index.folder_state(path) != "all":
            index.toggle_folder(path)

    selected = index.selected()
    if not selected:
        raise CubbyError("No banks selected; use --select, --query or --folder")

    project = settings.project
    config = build_project(
        selected,
        name=args.name or project.name,
        tempo=args.tempo if args.tempo is not None else project.tempo,
        sample_rate=project.sample_rate,
        group=args.group,
    )
    output = args.output or Path(project.output)
    output.write_text(generate_rpp(config), encoding="utf-8")
    print(f"Wrote {output} with {len(selected)} tracks")
    return 0


COMMANDS = {
    "parse": run_parse,
    "tree": run_tree,
    "search": run_search,
    "generate": run_generate,
}


# =============================================================================
# PART 5: MAIN ENTRY POINT
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Loads settings, configures logging and dispatches to the subcommand.
    Package errors are printed as one line and exit with status 1.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
        level = logging.DEBUG if args.verbose else getattr(logging, settings.logging.level)
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
        return COMMANDS[args.command](args, settings)
    except CubbyError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
