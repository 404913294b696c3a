"""Command-line interface for buildfs.

This module wires the argument parser to the library: it builds the exclusion
rules and lister from the parsed options, runs the selected subcommand, and maps
failures and signals onto exit codes.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution
    2: Command-line syntax error
    126: Permission denied (with -P fail)
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # List the Python files of a project
    $ buildfs list -I '\\.py$' src

    # Copy only changed files and report totals
    $ buildfs copy -n -s src dist
"""

import argparse
import os
import sys
from typing import Iterable, Iterator, List, TypeVar

from humanfriendly import format_size

from buildfs.cli.argparser import create_parser, validate_args
from buildfs.cli.safe_writer import SafeWriter
from buildfs.cli.signal_handler import setup_signal_handling, signal_handler
from buildfs.exclusion_rules.base_rules import BaseExclusionRules
from buildfs.exclusion_rules.composite_rules import CompositeExclusionRules
from buildfs.exclusion_rules.git_rules import GitIgnoreExclusionRules
from buildfs.exclusion_rules.regex_rules import RegexExclusionRules
from buildfs.file_ops import delete_empty_dirs, delete_file
from buildfs.file_tree.file_lister import FileLister
from buildfs.file_tree.permission_action import PermissionAction
from buildfs.file_tree.tree_copier import TreeCopier
from buildfs.file_tree.tree_view import build_tree, stream_tree_representation
from buildfs.filters import PathFilter
from buildfs.process import quit_process

T = TypeVar("T")


def format_summary(file_count: int, byte_count: int) -> str:
    """Format the copy totals into a human-readable string.

    Example:
        >>> format_summary(3, 2048)
        'Files: 3\\nBytes: 2.05 KB'
    """
    return f"Files: {file_count}\nBytes: {format_size(byte_count)}"


def build_exclusion_rules(args: argparse.Namespace, ignore_rules: GitIgnoreExclusionRules) -> BaseExclusionRules:
    """Combine the default dot-file rule with any patterns given on the command line."""
    rules: List[BaseExclusionRules] = []
    if not args.all:
        rules.append(RegexExclusionRules())
    if ignore_rules.has_rules():
        rules.append(ignore_rules)

    if not rules:
        return RegexExclusionRules([])
    if len(rules) == 1:
        return rules[0]
    return CompositeExclusionRules(rules)


def build_lister(args: argparse.Namespace, ignore_rules: GitIgnoreExclusionRules) -> FileLister:
    # warn and fail both stop the traversal; they differ in how main() reports it
    perm_action = {
        "ignore": PermissionAction.IGNORE,
        "warn": PermissionAction.RAISE,
        "fail": PermissionAction.RAISE,
    }[args.permission_action]

    return FileLister(
        exclusion_rules=build_exclusion_rules(args, ignore_rules),
        follow_symlinks=args.follow_symlinks,
        permission_action=perm_action,
    )


def until_interrupted(items: Iterable[T]) -> Iterator[T]:
    """Pass items through until SIGINT or SIGPIPE has been recorded.

    The check runs after each item has been handled, so a copy is never cut off
    in the middle of a file.
    """
    for item in items:
        yield item
        if signal_handler.interrupted():
            return


def run_list(args: argparse.Namespace, lister: FileLister, writer: SafeWriter) -> None:
    path_filter = PathFilter(include=args.include, exclude=args.exclude)
    paths = until_interrupted(lister.iter_files(args.directory, path_filter, normalize_separators=args.unix_paths))

    if args.tree:
        for line in stream_tree_representation(build_tree(args.directory, paths)):
            writer.write_line(line)
    else:
        for path in paths:
            writer.write_line(path)


def run_copy(args: argparse.Namespace, lister: FileLister, writer: SafeWriter) -> None:
    path_filter = None
    if args.include is not None or args.exclude is not None:
        path_filter = PathFilter(include=args.include, exclude=args.exclude)

    copier = TreeCopier(lister=lister, only_copy_new=args.only_new)
    file_count = 0
    byte_count = 0

    try:
        for src_file, dest_file, copied in until_interrupted(
            copier.iter_copy(args.source, args.destination, path_filter)
        ):
            if copied:
                file_count += 1
                byte_count += os.path.getsize(dest_file)
                writer.write_line(dest_file)
            elif args.verbose:
                print(f"Skipped (destination is up to date): {src_file}", file=sys.stderr)
    finally:
        if signal_handler.interrupted():
            print(f"Interrupted: stopped after copying {file_count} files", file=sys.stderr)
        if args.summary:
            print(format_summary(file_count, byte_count), file=sys.stderr)


def main() -> None:
    """Main entry point for the buildfs command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Permission denied (with -P fail)
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    try:
        # Populated by -i/--ignore and --ignore-file while parsing
        ignore_rules = GitIgnoreExclusionRules()

        parser = create_parser(ignore_rules)
        args = parser.parse_args()
        validate_args(args)

        if args.command == "prune":
            delete_empty_dirs(args.directory)
        elif args.command == "rm":
            delete_file(args.path)
        else:
            lister = build_lister(args, ignore_rules)
            writer = SafeWriter(sys.stdout.fileno())
            try:
                if args.command == "list":
                    run_list(args, lister, writer)
                else:
                    run_copy(args, lister, writer)
            except BrokenPipeError:
                pass
            except PermissionError as e:
                if args.permission_action == "warn":
                    print(f"Warning: {str(e)}", file=sys.stderr)
                else:
                    print(f"Error: {str(e)}", file=sys.stderr)
                    quit_process(126)

    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        quit_process(1)

    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        quit_process(exit_code)


if __name__ == "__main__":
    main()
