"""Command-line interface for xgit.

Usage:
    xgit download <repositoryURL> [branchName] [folderOrFilePath]
    xgit submodule remove [path]
"""

import argparse
import sys

from xgit import __version__
from xgit.cli.download_cmds import cmd_download
from xgit.cli.submodule_cmds import cmd_submodule_remove
from xgit.config import XgitConfig, load_config


def _resolve_config(args: argparse.Namespace) -> XgitConfig:
    """Load config from --config (or the default location) and apply flags."""
    config = load_config(getattr(args, "config", None))
    if getattr(args, "verbose", False):
        config.verbose = True
    if getattr(args, "keep_scratch", False):
        config.keep_scratch = True
    return config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xgit",
        description="Download folders or files from Git repositories and manage submodules",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to config.yaml (default: $XGIT_CONFIG or ~/.config/xgit/config.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Echo every git command before running it",
    )
    sub = parser.add_subparsers(dest="command")

    # download
    dl = sub.add_parser(
        "download", help="Download folders or files from a Git repository",
    )
    dl.add_argument("url", metavar="repositoryURL", help="Repository URL")
    dl.add_argument(
        "branch", metavar="branchName", nargs="?", default=None,
        help="Branch, tag or commit (default: main)",
    )
    dl.add_argument(
        "path", metavar="folderOrFilePath", nargs="?", default=None,
        help="File or folder to download (default: whole repository)",
    )
    dl.add_argument(
        "--keep-scratch", action="store_true",
        help="Keep the scratch workspace after copying",
    )

    # submodule
    sm = sub.add_parser("submodule", help="Manage Git submodules")
    sm_sub = sm.add_subparsers(dest="subcommand")
    rm = sm_sub.add_parser(
        "remove",
        help="Remove a Git submodule. If no path provided, lists current submodules.",
    )
    rm.add_argument("path", nargs="?", default=None, help="Submodule path")

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "download":
        return cmd_download(args)

    dispatch = {
        ("submodule", "remove"): cmd_submodule_remove,
    }

    subcommand: str | None = getattr(args, "subcommand", None)
    handler = dispatch.get((args.command, subcommand or ""))
    if handler:
        return handler(args)

    parser.parse_args([args.command, "--help"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
