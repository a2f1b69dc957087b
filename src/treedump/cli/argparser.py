"""Command-line argument parsing for treedump.

This module defines the command-line interface for treedump, handling argument parsing
and validation.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from treedump import __version__
from treedump.exclusion_rules.base_rules import BaseExclusionRules


def create_exclusion_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create a custom action class for handling exclusion rules.

    The returned action updates the provided exclusion rules object as arguments are
    processed, preserving the order of -e and -i options on the command line.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        """Action adding exclusion files and patterns in command-line order."""

        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return

            if option_string in ("-e", "--exclude"):
                try:
                    exclusion_rules.load_rules(Path(str(values)))
                except FileNotFoundError as e:
                    parser.error(str(e))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

            collected = getattr(namespace, self.dest, None) or []
            setattr(namespace, self.dest, collected + [values])

    return ExclusionRulesAction


def create_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        An ArgumentParser instance configured with treedump's options.
    """
    description = """
    treedump: flatten a directory into one text artifact.

    The output starts with a compact tree diagram of the directory, in which chains of
    directories that each contain a single subdirectory are collapsed into one line.
    It is followed by every file's content, line-numbered, in path order. Files that
    are binary or unreadable are replaced by a short placeholder.
    """

    epilog = """
    Examples:
      # Flatten the current directory to stdout
      treedump

      # Flatten a project into a file (the file itself is never included)
      treedump /path/to/project -o project.txt

      # Exclude patterns from files and individually, in order
      treedump -e .dockerignore -i "*.lock" -i "!poetry.lock" /path/to/project

      # Skip files larger than 100 kB and print raw content without line numbers
      treedump -M 100KB -R /path/to/project

      # Include hidden files and ignore .gitignore files
      treedump -H --no-gitignore /path/to/project

      # Print directory and file counts to stderr
      treedump -s stderr /path/to/project
    """

    parser = argparse.ArgumentParser(
        prog="treedump",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"treedump {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument(
        "target",
        type=Path,
        nargs="?",
        default=Path("."),
        help="The directory (or single file) to flatten. Defaults to the current directory.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        metavar="FILE",
        action=ExclusionAction,
        help="Path to a gitignore-style exclusion file (can be specified multiple times).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        metavar="PATTERN",
        action=ExclusionAction,
        help=(
            "Individual gitignore-style pattern to exclude. Can be specified multiple times; patterns "
            "are applied in the order they appear, mixed with -e/--exclude options."
        ),
    )
    parser.add_argument(
        "-M",
        "--max-file-size",
        metavar="SIZE",
        help="Exclude files larger than SIZE (e.g. 1048576, 500KB, 1MiB).",
    )
    parser.add_argument(
        "-H",
        "--hidden",
        action="store_true",
        help="Include hidden files and directories (names starting with '.').",
    )
    parser.add_argument(
        "--no-gitignore",
        action="store_true",
        help="Do not honor .gitignore files found in the directory tree.",
    )
    parser.add_argument(
        "-R",
        "--raw",
        action="store_true",
        help="Print file contents verbatim instead of with line numbers.",
    )
    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="Encoding used to decode files (default: utf-8).",
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout"],
        help="Print directory and file counts. Valid destinations: stderr, stdout.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debugging information to stderr.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if not args.target.exists():
        raise ValueError(f"Target does not exist: {args.target}")
    if args.output is not None and args.output.is_dir():
        raise ValueError(f"Output path is a directory: {args.output}")
