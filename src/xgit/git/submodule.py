"""Submodule listing and teardown.

A submodule lives in four places: a section in .gitmodules, a section in
the local git config, a gitlink in the index, and a working-tree directory
(plus its cached git dir under .git/modules). Removal clears each of them
in turn. Repositories that need this tool are often half-broken, so every
clearing step except the index removal tolerates a missing piece and
records a warning instead of failing.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from xgit.git.runner import run_git

GITLINK_MODE = "160000"


class NotARepositoryError(RuntimeError):
    """The working directory is not inside a git working tree."""


class StepOutcome(str, Enum):
    OK = "ok"
    WARNING = "warning"
    FATAL = "fatal"


@dataclass
class StepResult:
    step: str
    outcome: StepOutcome
    message: str = ""


@dataclass
class RemovalReport:
    """Per-step outcome of a submodule removal."""

    path: str
    steps: list[StepResult] = field(default_factory=list)

    def record(self, step: str, outcome: StepOutcome, message: str = "") -> StepResult:
        result = StepResult(step, outcome, message)
        self.steps.append(result)
        return result

    @property
    def fatal(self) -> StepResult | None:
        for s in self.steps:
            if s.outcome is StepOutcome.FATAL:
                return s
        return None

    @property
    def ok(self) -> bool:
        return self.fatal is None

    @property
    def warnings(self) -> list[StepResult]:
        return [s for s in self.steps if s.outcome is StepOutcome.WARNING]


@dataclass
class SubmoduleTarget:
    """Where a submodule path is still known to the repository."""

    path: str
    name: str
    registered: bool = False
    indexed: bool = False
    materialized: bool = False

    @property
    def cleared(self) -> bool:
        return not (self.registered or self.indexed or self.materialized)


def _toplevel(start: Path, verbose: bool = False) -> Path | None:
    result = run_git(["rev-parse", "--show-toplevel"], start, check=False, verbose=verbose)
    if result.returncode != 0:
        return None
    return Path(result.stdout.strip())


def _config_keys(config_args: list[str], repo: Path, verbose: bool) -> list[tuple[str, str]]:
    """All submodule.* (key, value) pairs from one config source."""
    result = run_git(
        ["config"] + config_args + ["--null", "--get-regexp", r"^submodule\."],
        repo, check=False, verbose=verbose,
    )
    if result.returncode != 0:
        return []
    pairs = []
    # --null output: "key\nvalue\0" per entry, so names may contain spaces
    for entry in result.stdout.split("\0"):
        if not entry:
            continue
        key, _, value = entry.partition("\n")
        pairs.append((key, value))
    return pairs


def _has_section(pairs: list[tuple[str, str]], name: str) -> bool:
    section = f"submodule.{name}"
    return any(key.rsplit(".", 1)[0] == section for key, _ in pairs)


def _resolve_name(path: str, repo: Path, verbose: bool = False) -> str:
    """Find the .gitmodules section whose path is `path`; default to the path."""
    if not (repo / ".gitmodules").is_file():
        return path
    for key, value in _config_keys(["-f", ".gitmodules"], repo, verbose):
        if key.endswith(".path") and value.strip() == path:
            return key[len("submodule."):-len(".path")]
    return path


def inspect_submodule(path: str, repo: Path | str, verbose: bool = False) -> SubmoduleTarget:
    """Report which of a submodule's facets still exist.

    Args:
        path: Submodule path relative to the repository root.
        repo: Repository root.
        verbose: Echo git commands.

    Returns:
        SubmoduleTarget with registered/indexed/materialized flags.
    """
    repo = Path(repo)
    name = _resolve_name(path, repo, verbose)

    registered = False
    if (repo / ".gitmodules").is_file():
        registered = _has_section(_config_keys(["-f", ".gitmodules"], repo, verbose), name)
    if not registered:
        registered = _has_section(_config_keys(["--local"], repo, verbose), name)

    staged = run_git(["ls-files", "--stage", "--", path], repo, check=False, verbose=verbose)
    # "<mode> <sha> <stage>\t<path>"; a directory pathspec also lists entries below it
    indexed = staged.returncode == 0 and any(
        line.startswith(GITLINK_MODE + " ") and line.partition("\t")[2] == path
        for line in staged.stdout.splitlines()
    )

    return SubmoduleTarget(
        path=path,
        name=name,
        registered=registered,
        indexed=indexed,
        materialized=(repo / path).is_dir(),
    )


def _status_paths(status_output: str) -> list[str]:
    """Submodule paths from `git submodule status` lines.

    Format: "<flag><sha> <path>" optionally followed by " (<describe>)".
    """
    paths = []
    for line in status_output.splitlines():
        if not line.strip():
            continue
        _, _, rest = line[1:].partition(" ")
        if rest.endswith(")") and " (" in rest:
            rest = rest.rsplit(" (", 1)[0]
        paths.append(rest)
    return paths


def list_submodules(cwd: Path | str | None = None, verbose: bool = False) -> str:
    """Return `git submodule status` output for the repository at cwd.

    Raises:
        NotARepositoryError: If cwd is not inside a git working tree.
        ProcessError: If git cannot read the submodule configuration.
    """
    start = Path(cwd) if cwd else Path.cwd()
    if _toplevel(start, verbose) is None:
        raise NotARepositoryError(f"not a git repository: {start}")
    return run_git(["submodule", "status"], start, verbose=verbose).stdout


def remove_submodule(
    path: str,
    cwd: Path | str | None = None,
    verbose: bool = False,
) -> RemovalReport:
    """Deregister a submodule from .gitmodules, config, index and disk.

    Nothing is committed. Steps run in order and stop at the first FATAL
    outcome; steps already applied are not rolled back.

    Args:
        path: Submodule path relative to the repository root.
        cwd: Any directory inside the superproject. Defaults to the cwd.
        verbose: Echo git commands.

    Returns:
        RemovalReport listing every step that ran.
    """
    path = path.strip().strip("/")
    report = RemovalReport(path=path)
    start = Path(cwd) if cwd else Path.cwd()

    repo = _toplevel(start, verbose)
    if repo is None:
        report.record("check-repository", StepOutcome.FATAL, f"not a git repository: {start}")
        return report
    report.record("check-repository", StepOutcome.OK, str(repo))

    target = inspect_submodule(path, repo, verbose)
    status = run_git(["submodule", "status", "--", path], repo, check=False, verbose=verbose)
    known = status.returncode == 0 and path in _status_paths(status.stdout)
    if not (known or target.registered or target.indexed):
        report.record("check-registered", StepOutcome.FATAL, f"no submodule registered at '{path}'")
        return report
    report.record("check-registered", StepOutcome.OK, f"submodule '{target.name}'")

    section = f"submodule.{target.name}"
    gitmodules = repo / ".gitmodules"

    if not gitmodules.is_file():
        report.record("gitmodules-section", StepOutcome.WARNING, ".gitmodules not found")
    else:
        result = run_git(
            ["config", "-f", ".gitmodules", "--remove-section", section],
            repo, check=False, verbose=verbose,
        )
        if result.returncode == 0:
            report.record("gitmodules-section", StepOutcome.OK, f"removed [{section}] from .gitmodules")
        else:
            report.record(
                "gitmodules-section", StepOutcome.WARNING,
                f"no [{section}] in .gitmodules: {result.stderr.strip()}",
            )
        # git rm refuses to touch a submodule while .gitmodules has unstaged edits
        staged_gitmodules = run_git(["add", ".gitmodules"], repo, check=False, verbose=verbose)
        if staged_gitmodules.returncode != 0:
            report.record(
                "gitmodules-section", StepOutcome.WARNING,
                f"could not stage .gitmodules: {staged_gitmodules.stderr.strip()}",
            )

    result = run_git(
        ["config", "--local", "--remove-section", section],
        repo, check=False, verbose=verbose,
    )
    if result.returncode == 0:
        report.record("config-section", StepOutcome.OK, f"removed [{section}] from local config")
    else:
        report.record(
            "config-section", StepOutcome.WARNING,
            f"no [{section}] in local config: {result.stderr.strip()}",
        )

    if not target.indexed:
        report.record("index", StepOutcome.WARNING, f"'{path}' is not in the index")
    else:
        result = run_git(["rm", "--cached", "--", path], repo, check=False, verbose=verbose)
        if result.returncode != 0:
            report.record(
                "index", StepOutcome.FATAL,
                f"git rm --cached {path} failed: {result.stderr.strip()}",
            )
            return report
        report.record("index", StepOutcome.OK, f"removed '{path}' from the index")

    work_tree = repo / path
    if work_tree.is_symlink() or work_tree.is_file():
        work_tree.unlink()
        report.record("working-tree", StepOutcome.OK, f"deleted {work_tree}")
    elif work_tree.is_dir():
        shutil.rmtree(work_tree)
        report.record("working-tree", StepOutcome.OK, f"deleted {work_tree}")
    else:
        report.record("working-tree", StepOutcome.WARNING, f"{work_tree} does not exist")

    git_dir = run_git(["rev-parse", "--absolute-git-dir"], repo, verbose=verbose).stdout.strip()
    module_cache = Path(git_dir) / "modules" / target.name
    if module_cache.is_dir():
        shutil.rmtree(module_cache)
        report.record("module-cache", StepOutcome.OK, f"deleted {module_cache}")
    else:
        report.record("module-cache", StepOutcome.WARNING, f"{module_cache} does not exist")

    if not gitmodules.is_file():
        report.record("stage-gitmodules", StepOutcome.WARNING, ".gitmodules not found, nothing to stage")
    else:
        result = run_git(["add", ".gitmodules"], repo, check=False, verbose=verbose)
        if result.returncode == 0:
            report.record("stage-gitmodules", StepOutcome.OK, "staged .gitmodules")
        else:
            report.record(
                "stage-gitmodules", StepOutcome.WARNING,
                f"could not stage .gitmodules: {result.stderr.strip()}",
            )

    return report
