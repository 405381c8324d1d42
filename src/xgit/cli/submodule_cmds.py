"""Submodule CLI commands."""

import argparse
import sys

import yaml


def _list(verbose: bool) -> int:
    from xgit.git.runner import ProcessError
    from xgit.git.submodule import NotARepositoryError, list_submodules

    try:
        status = list_submodules(verbose=verbose)
    except (NotARepositoryError, ProcessError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if status.strip():
        print(status.rstrip())
    else:
        print("  No submodules registered.")
    print("\nUsage: xgit submodule remove <path>")
    return 0


def cmd_submodule_remove(args: argparse.Namespace) -> int:
    from xgit.cli import _resolve_config
    from xgit.git.runner import ProcessError
    from xgit.git.submodule import remove_submodule

    try:
        config = _resolve_config(args)
    except (ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if not args.path:
        return _list(config.verbose)

    try:
        report = remove_submodule(args.path, verbose=config.verbose)
    except ProcessError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    for step in report.warnings:
        print(f"WARNING: {step.step}: {step.message}", file=sys.stderr)

    fatal = report.fatal
    if fatal:
        print(f"ERROR: {fatal.step}: {fatal.message}", file=sys.stderr)
        return 1

    print(f"\n  Successfully removed submodule: {report.path}")
    print("\n  Note: commit these changes with:")
    print(f'\n    git commit -m "Remove submodule {report.path}"')
    return 0
