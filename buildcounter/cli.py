"""
Copyright 2025 Adobe
All Rights Reserved.

NOTICE: Adobe permits you to use, modify, and distribute this file in accordance
with the terms of the Adobe license agreement accompanying it.
"""

import argparse
import os
import sys

from . import (
    __version__,
    BuildCounter,
    BuildCounterConfigurationError,
    BuildCounterResourceError,
    BuildCounterWriteError,
)
from buildcounter import loggers
from buildcounter.lifecycle import full_build_requested_from_tasks, Phase
from buildcounter.utils import FailureToAcquireLockException


def parse_args(argv):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog=argv[0],
        description="buildcounter manages the auto-incremented build version of a project",
    )

    parser.add_argument(
        "-d",
        "--directory",
        default=os.getcwd(),
        dest="directory",
        help="build directory (defaults to current working directory)",
    )

    parser.add_argument(
        "-f",
        "--file",
        default=None,
        dest="config_file",
        help='configuration file (defaults to "buildcounter.yaml" if it exists)',
    )

    parser.add_argument(
        "--version-file",
        default=None,
        dest="version_file",
        help='overrides the version-file configuration (defaults to "version.properties")',
    )

    parser.add_argument(
        "--lock",
        default=None,
        choices=["true", "false"],
        dest="lock",
        help="overrides the lock configuration, locks the version file while advancing it",
    )

    parser.add_argument(
        "--dry-run",
        default=False,
        action="store_true",
        dest="dry_run",
        help="compute versions without modifying the version file",
    )

    parser.add_argument(
        "-x",
        "--debug",
        dest="debug",
        action="store_true",
        help="enables debug logging",
    )

    parser.add_argument(
        "--log-file",
        default=None,
        dest="log_file",
        help="also append log output to this file",
    )

    parser.add_argument(
        "--disable-timestamps",
        default=False,
        action="store_true",
        dest="disable_timestamps",
        help="disables printing of timestamps in the logging output",
    )

    parser.add_argument(
        "--no-color",
        default=False,
        action="store_true",
        dest="no_log_color",
        help="disable colors when logging",
    )

    parser.add_argument(
        "--version",
        default=False,
        action="store_true",
        dest="print_version",
        help="print the current buildcounter version and exit",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("show", help="print the current build version (default)")
    subparsers.add_parser("advance", help="advance the build version and print it")

    finalize_parser = subparsers.add_parser(
        "finalize",
        help="advance the build version after a successful build or package step",
    )
    finalize_parser.add_argument(
        "phase",
        choices=[phase.value for phase in Phase],
        help="the step that succeeded",
    )
    finalize_parser.add_argument(
        "-t",
        "--tasks",
        default=[],
        dest="tasks",
        action="append",
        help="the tasks requested in this invocation (use the argument multiple times or "
        'specify as comma-delimited), packaging does not advance when "build" is listed',
    )

    resources_parser = subparsers.add_parser(
        "resources", help="copy resources expanding ${version} placeholders"
    )
    resources_parser.add_argument(
        "-s",
        "--source",
        default=None,
        dest="source",
        help="resources directory (overrides the resources.source configuration)",
    )
    resources_parser.add_argument(
        "-o",
        "--destination",
        default=None,
        dest="destination",
        help="output directory (overrides the resources.destination configuration)",
    )

    args = parser.parse_args(argv[1:])

    if not args.command:
        args.command = "show"

    args.directory = os.path.realpath(args.directory)

    _tasks = []
    for _task in getattr(args, "tasks", []):
        _tasks.extend(_task.split(","))
    args.tasks = _tasks

    return args


def _get_config_overrides(args: argparse.Namespace) -> dict:
    """
    Creates a dictionary of overrides to be deeply merged into the loaded config file data.
    Undefined values are filtered to prevent overriding configured values.
    :param args: the parsed CLI args
    :return: the overrides (if any specified)
    """
    overrides = {}
    if args.version_file:
        overrides["version-file"] = args.version_file
    if args.lock is not None:
        overrides["lock"] = args.lock == "true"
    return overrides


def _run_command(build_counter: BuildCounter, args: argparse.Namespace) -> int:
    if args.command == "show":
        print(build_counter.version())
    elif args.command == "advance":
        print(build_counter.advance())
    elif args.command == "finalize":
        build_counter.finalize(
            args.phase, full_build_requested_from_tasks(args.tasks)
        )
    elif args.command == "resources":
        build_counter.process_resources(args.source, args.destination)
    return os.EX_OK


def main(argv):
    """Main program execution."""
    args = parse_args(argv)

    # are we just printing the version?
    if args.print_version:
        print(__version__)
        return os.EX_OK

    loggers.initialize_root_logger(
        args.debug,
        args.no_log_color,
        args.disable_timestamps,
        args.log_file,
    )

    try:
        build_counter = BuildCounter(
            build_dir=args.directory,
            config_file=args.config_file,
            config_overrides=_get_config_overrides(args),
            dry_run=args.dry_run,
        )
        return _run_command(build_counter, args)
    except BuildCounterConfigurationError as bcce:
        sys.stderr.write(f"ERROR: {bcce}\n")
        return os.EX_CONFIG
    except BuildCounterWriteError as bcwe:
        sys.stderr.write(f"ERROR: {bcwe}\n")
        return os.EX_IOERR
    except FailureToAcquireLockException as exc:
        sys.stderr.write(f"ERROR: {exc}\n")
        return os.EX_TEMPFAIL
    except BuildCounterResourceError as bcre:
        sys.stderr.write(f"ERROR: {bcre}\n")
        return os.EX_DATAERR


if __name__ == "__main__":
    sys.exit(main(sys.argv))
