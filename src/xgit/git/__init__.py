"""Git module — sparse downloads and submodule teardown."""

from xgit.git.download import FetchRequest, InvalidURLError, fetch
from xgit.git.runner import ProcessError, run_command, run_git
from xgit.git.submodule import (
    NotARepositoryError,
    RemovalReport,
    StepOutcome,
    inspect_submodule,
    list_submodules,
    remove_submodule,
)

__all__ = [
    "FetchRequest",
    "InvalidURLError",
    "fetch",
    "ProcessError",
    "run_command",
    "run_git",
    "NotARepositoryError",
    "RemovalReport",
    "StepOutcome",
    "inspect_submodule",
    "list_submodules",
    "remove_submodule",
]
