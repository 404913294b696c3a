"""Command-line argument parsing for buildfs.

This module defines the ``buildfs`` command and its subcommands, and the
validation that argparse cannot express directly.
"""

import argparse
import os
import re
from pathlib import Path
from typing import Any, List, Optional, Pattern, Sequence, Type, Union

from buildfs import __version__
from buildfs.exclusion_rules.git_rules import GitIgnoreExclusionRules


def regex_type(value: str) -> Pattern[str]:
    """Compile a regular expression given on the command line.

    Raises:
        argparse.ArgumentTypeError: If the expression is invalid.
    """
    try:
        return re.compile(value)
    except re.error as e:
        raise argparse.ArgumentTypeError(f"invalid regular expression {value!r}: {e}")


def create_ignore_action(ignore_rules: GitIgnoreExclusionRules) -> Type[argparse.Action]:
    """Create an action class that feeds ignore patterns into ignore_rules.

    Patterns given with -i/--ignore and files given with --ignore-file are applied
    in the exact order they appear on the command line, which matters for
    negated patterns.

    Args:
        ignore_rules: The rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class IgnoreRulesAction(argparse.Action):
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

            if option_string == "--ignore-file":
                ignore_rules.load_rules(values if isinstance(values, os.PathLike) else Path(str(values)))
            else:
                ignore_rules.add_rule(str(values))

            collected = getattr(namespace, self.dest, None) or []
            setattr(namespace, self.dest, collected + [values])

    return IgnoreRulesAction


def _create_common_parser(ignore_rules: GitIgnoreExclusionRules) -> argparse.ArgumentParser:
    """Options shared by every subcommand that walks a directory tree."""
    common = argparse.ArgumentParser(add_help=False)
    IgnoreAction = create_ignore_action(ignore_rules)

    common.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="Do not hide files and directories whose names start with a period.",
    )
    common.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        dest="ignore",
        action=IgnoreAction,
        help=(
            "Gitignore-style pattern matched against file and directory names (e.g. '*.bak', "
            "'node_modules/', '!keep.bak'). Can be specified multiple times."
        ),
    )
    common.add_argument(
        "--ignore-file",
        type=Path,
        metavar="FILE",
        dest="ignore",
        action=IgnoreAction,
        help="File of gitignore-style name patterns (e.g. .npmignore). Can be specified multiple times.",
    )
    common.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help="Descend into symlinked directories. By default they are skipped.",
    )
    common.add_argument(
        "-P",
        "--permission-action",
        choices=["ignore", "warn", "fail"],
        default="fail",
        help="How to handle directories that cannot be read (default: fail).",
    )
    return common


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-I",
        "--include",
        type=regex_type,
        metavar="REGEX",
        help="Only keep file paths in which this regular expression is found.",
    )
    parser.add_argument(
        "-X",
        "--exclude",
        type=regex_type,
        metavar="REGEX",
        help="Drop file paths in which this regular expression is found.",
    )


def create_parser(ignore_rules: GitIgnoreExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        ignore_rules: The rules object updated by -i/--ignore and --ignore-file.

    Returns:
        An ArgumentParser instance configured with the buildfs subcommands.
    """
    description = """
    buildfs: file-system helpers for build pipelines.

    List the files of a directory tree through include/exclude filters, copy the
    matching files into another directory, delete paths, and prune empty
    directories. Names starting with a period are hidden unless -a is given.
    """

    epilog = """
    Examples:
      # List JavaScript sources, skipping minified files
      buildfs list -I '\\.js$' -X '\\.min\\.js$' src

      # Show the matches as a tree
      buildfs list --tree -I '\\.css$' styles

      # Copy text files, only when the source is newer, with a summary
      buildfs copy -I '\\.txt$' -n -s src dist

      # Hide extra names in addition to dot-files
      buildfs copy -i 'node_modules/' -i '*.bak' src dist

      # Remove a build directory, then prune empty directories
      buildfs rm dist/tmp
      buildfs prune dist
    """

    parser = argparse.ArgumentParser(
        prog="buildfs",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"buildfs {__version__}", help="Show the version and exit"
    )

    common = _create_common_parser(ignore_rules)
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    list_parser = subparsers.add_parser("list", parents=[common], help="List matching files under a directory.")
    list_parser.add_argument("directory", type=Path, help="Directory to list.")
    _add_filter_arguments(list_parser)
    list_parser.add_argument(
        "-u",
        "--unix-paths",
        action="store_true",
        help="Print paths with forward-slash separators.",
    )
    list_parser.add_argument(
        "-t",
        "--tree",
        action="store_true",
        help="Print the matches as a tree relative to the directory.",
    )

    copy_parser = subparsers.add_parser("copy", parents=[common], help="Copy matching files into another directory.")
    copy_parser.add_argument("source", type=Path, help="Directory to copy from.")
    copy_parser.add_argument("destination", type=Path, help="Directory to copy into. Created if missing.")
    _add_filter_arguments(copy_parser)
    copy_parser.add_argument(
        "-n",
        "--only-new",
        action="store_true",
        help="Skip files whose destination is at least as new as the source.",
    )
    copy_parser.add_argument(
        "-s",
        "--summary",
        action="store_true",
        help="Print the number of files and bytes copied to stderr.",
    )
    copy_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Report skipped files on stderr.",
    )

    prune_parser = subparsers.add_parser("prune", help="Remove empty directories, bottom-up.")
    prune_parser.add_argument("directory", type=Path, help="Directory to prune, including itself if it ends up empty.")

    rm_parser = subparsers.add_parser("rm", help="Delete a file or directory tree if it exists.")
    rm_parser.add_argument("path", type=Path, help="File or directory to delete.")

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.command == "copy":
        source = args.source.resolve()
        destination = args.destination.resolve()
        if source == destination:
            raise ValueError("Source and destination are the same directory")
