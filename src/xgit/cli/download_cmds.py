"""Download CLI command."""

import argparse
import sys

import yaml


def cmd_download(args: argparse.Namespace) -> int:
    from xgit.cli import _resolve_config
    from xgit.git.download import fetch
    from xgit.git.runner import ProcessError

    try:
        config = _resolve_config(args)
        written = fetch(
            args.url,
            ref=args.branch,
            path=args.path,
            config=config,
        )
    except (ValueError, OSError, ProcessError, yaml.YAMLError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    ref = args.branch or config.default_branch
    print(f"  Downloaded {args.path or args.url} @ {ref}")
    for dest in written:
        print(f"    - {dest.name}")
    return 0
