"""durrrrrenv CLI: per-directory environment loading with trust-on-first-use.

stdout only ever receives shell script meant for ``eval``; every notice,
prompt and error goes to stderr.
"""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from importlib.resources import files
from pathlib import Path

logger = logging.getLogger(__name__)


def _build_parser(durrrrrenv_version: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="durrrrrenv",
        description="durrrrrenv: a zsh alternative to direnv"
    )
    parser.add_argument("--version", action="version", version=f"durrrrrenv {durrrrrenv_version}")
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log output on stderr (-v for info, -vv for debug)."
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress notices from check, allow and deny (status output and errors are still shown)."
    )
    # Common arguments
    dir_parser = argparse.ArgumentParser(add_help=False)
    dir_parser.add_argument(
        "-d", "--dir",
        type=Path,
        default=None,
        help="Directory to operate on (defaults to current directory)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "check",
        help="Check directory and output shell script if allowed",
        parents=[dir_parser]
    )
    allow_parser = subparsers.add_parser(
        "allow",
        help="Allow the .local_environment file in the directory",
        parents=[dir_parser]
    )
    allow_parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Approve without asking for confirmation"
    )
    subparsers.add_parser(
        "deny",
        help="Remove permission for the directory",
        parents=[dir_parser]
    )
    subparsers.add_parser(
        "status",
        help="Show status of the directory",
        parents=[dir_parser]
    )
    subparsers.add_parser(
        "hook",
        help="Print the zsh hook script"
    )
    return parser


def _print_content(content: str) -> None:
    print("---", file=sys.stderr)
    print(content, file=sys.stderr)
    print("---", file=sys.stderr)


def main():
    """Main CLI entry point for durrrrrenv commands."""
    try:
        durrrrrenv_version = get_version("durrrrrenv")
    except PackageNotFoundError:
        durrrrrenv_version = "dev"

    parser = _build_parser(durrrrrenv_version)
    args = parser.parse_args()

    if not args.command:
        parser.print_help(sys.stderr)
        sys.exit(1)

    if args.command == "hook":
        sys.stdout.write(files("durrrrrenv").joinpath("hook.zsh").read_text(encoding="utf-8"))
        return

    from .config import load_settings
    from .errors import DurrrrrenvError
    from .logging_utils import configure_logging, level_for_verbosity
    from ._internal.io.trust_backend import FileTrustBackend
    from . import api

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(level_for_verbosity(args.verbose, settings.log_level))
    backend = FileTrustBackend(settings.trust_path)
    directory = args.dir if args.dir is not None else Path.cwd()

    try:
        if args.command == "check":
            result = api.check(directory, backend, settings)
            if result.status == "authorized":
                sys.stdout.write(result.script)
            elif result.status == "unauthorized" and not args.quiet:
                print(f"durrrrrenv: {settings.env_filename} file found but not allowed", file=sys.stderr)
                print("durrrrrenv: Run 'eval \"$(durrrrrenv allow)\"' to allow and load it", file=sys.stderr)
                print("durrrrrenv: File contents:", file=sys.stderr)
                _print_content(result.content or "")

        elif args.command == "allow":
            env_dir = api.locate(directory, settings)
            content = api.read_env_file(env_dir / settings.env_filename)

            if not args.yes:
                print(f"Contents of {settings.env_filename}:", file=sys.stderr)
                _print_content(content)
                print("Allow this file to be executed? [y/N]: ", end="", file=sys.stderr, flush=True)
                response = sys.stdin.readline()
                if response.strip().lower() != "y":
                    print("Aborted.", file=sys.stderr)
                    return

            result = api.allow(env_dir, backend, settings, content=content)
            if not args.quiet:
                print(f"Allowed {settings.env_filename} in {result.directory}", file=sys.stderr)
            sys.stdout.write(result.script)

        elif args.command == "deny":
            env_dir = api.locate(directory, settings)
            removed = api.deny(env_dir, backend, settings)
            if not args.quiet:
                if removed:
                    print(f"Denied {settings.env_filename} in {env_dir}", file=sys.stderr)
                else:
                    print(f"No approval recorded for {env_dir}", file=sys.stderr)

        elif args.command == "status":
            result = api.status(directory, backend, settings)
            print(f"Directory: {result.directory}", file=sys.stderr)
            if result.env_file is None:
                print(f"Status: No {settings.env_filename} file found", file=sys.stderr)
            elif result.allowed:
                print("Status: Allowed", file=sys.stderr)
                if result.parse_error:
                    print(f"Error parsing: {result.parse_error}", file=sys.stderr)
                else:
                    print("\nCommands to execute:", file=sys.stderr)
                    for line in result.directives:
                        print(f"  {line}", file=sys.stderr)
            else:
                print("Status: Not allowed or file has changed", file=sys.stderr)
                print("\nRun 'durrrrrenv allow' to allow execution", file=sys.stderr)

        else:
            parser.print_help(sys.stderr)
            sys.exit(1)
    except DurrrrrenvError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
