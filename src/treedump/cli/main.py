"""Command-line interface for treedump.

This module provides the command-line entry point, which flattens a directory into a
tree diagram followed by line-numbered file contents. It handles argument parsing,
logging setup, output selection, and signal management.

Error Handling Notes:
    - A failure while walking the directory (for example a directory that cannot be
      listed) is fatal and reported on stderr.
    - Files whose content cannot be read are replaced by a placeholder in the output
      and never stop the run.
    - When the consumer of the output goes away (for example when piping into
      `head`), output stops silently and the run counts as successful.

Exit Codes:
    0: Successful completion, including a consumer closing the output early
    1: Runtime error during execution
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)

Example:
    # Flatten a directory to stdout
    $ treedump /path/to/dir

    # Write to a file, excluding build output
    $ treedump /path/to/dir -i "build/" -o dump.txt
"""

import logging
import sys
from collections.abc import Mapping

from treedump.cli.argparser import create_parser, validate_args
from treedump.cli.safe_writer import SafeWriter
from treedump.cli.signal_handler import setup_signal_handling, signal_handler
from treedump.exclusion_rules.base_rules import BaseExclusionRules
from treedump.exclusion_rules.composite_rules import CompositeExclusionRules
from treedump.exclusion_rules.git_rules import GitIgnoreExclusionRules
from treedump.exclusion_rules.size_rules import SizeExclusionRules
from treedump.file_tree.content_mode import ContentMode
from treedump.treedump import TreeDump

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Send log records from the treedump package to stderr.

    Args:
        verbose: Log at DEBUG level instead of WARNING.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))

    package_logger = logging.getLogger("treedump")
    package_logger.handlers = [handler]
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


def format_counts(counts: Mapping[str, int]) -> str:
    """Format the counts into a human-readable string.

    Args:
        counts: Mapping with "directories" and "files" counts.

    Returns:
        A formatted string showing all counts with appropriate labels.
    """
    return "\n".join([f"Directories: {counts['directories']}", f"Files: {counts['files']}"])


def main() -> None:
    """Main entry point for the treedump command-line interface.

    Exit codes:
        0: Successful completion, including a consumer closing the output early
        1: Runtime error during execution
        2: Command-line syntax error
        130: Interrupted by SIGINT (Ctrl+C)
    """
    setup_signal_handling()

    try:
        # Populated in command-line order while parsing -e/-i
        gitignore_rules = GitIgnoreExclusionRules()

        parser = create_parser(gitignore_rules)
        args = parser.parse_args()

        configure_logging(args.verbose)
        validate_args(args)

        exclusion_rules: BaseExclusionRules = gitignore_rules
        if args.max_file_size:
            root = args.target if args.target.is_dir() else args.target.parent
            exclusion_rules = CompositeExclusionRules(
                [gitignore_rules, SizeExclusionRules(args.max_file_size, root_path=root)]
            )

        exclude_paths = [args.output] if args.output is not None else []

        # The whole tree is built before the output is opened
        dump = TreeDump(
            args.target,
            exclusion_rules=exclusion_rules,
            exclude_paths=exclude_paths,
            include_hidden=args.hidden,
            respect_gitignore=not args.no_gitignore,
            content_mode=ContentMode.RAW if args.raw else ContentMode.NUMBERED,
            encoding=args.encoding,
        )
        logger.debug("Built tree with %d directories and %d files", dump.directory_count, dump.file_count)

        output_file = args.output if args.output is not None else sys.stdout.fileno()

        with SafeWriter(output_file) as safe_writer:
            try:
                for chunk in dump.stream():
                    safe_writer.write(chunk)

                if args.summary:
                    count_output_str = format_counts(
                        {"directories": dump.directory_count, "files": dump.file_count}
                    )
                    if args.summary == "stdout":
                        safe_writer.write("\n" + count_output_str + "\n")
                    else:
                        print(count_output_str, file=sys.stderr)

            except BrokenPipeError:
                logger.debug("Output closed by consumer, stopping")

    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    if signal_handler.sigint_received.is_set():
        sys.exit(130)


if __name__ == "__main__":
    main()
