"""Sparse download of a file or folder from a remote repository.

The remote ref is staged in a scratch workspace under the scratch root,
stripped of its .git directory, and only the requested content is copied
into the target directory. The output never carries git history.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

from xgit.config import XgitConfig, load_config
from xgit.git.runner import run_git


class InvalidURLError(ValueError):
    """The repository URL could not be parsed."""


@dataclass
class FetchRequest:
    """What to download: a repository, a ref, and an optional repo-relative path."""

    repository_url: str
    ref: str
    path: str | None = None

    def __post_init__(self) -> None:
        parsed = urlparse(self.repository_url)
        # A one-letter scheme is a Windows drive, not a URL
        if len(parsed.scheme) < 2 or not parsed.path.strip("/"):
            raise InvalidURLError(f"Invalid repository URL: {self.repository_url}")
        if parsed.scheme != "file" and not parsed.netloc:
            raise InvalidURLError(f"Invalid repository URL (no host): {self.repository_url}")

        if not self.ref:
            raise ValueError("ref must not be empty")

        if self.path is not None:
            cleaned = self.path.strip().strip("/")
            if ".." in PurePosixPath(cleaned).parts:
                raise ValueError(f"Path must stay inside the repository: {self.path}")
            self.path = cleaned or None


def scratch_workspace_for(repository_url: str, root: Path) -> Path:
    """Map a repository URL to its scratch workspace under root.

    The workspace is named after the URL's path component, so repeated
    downloads of the same repository reuse (and reset) the same directory.
    """
    url_path = PurePosixPath(urlparse(repository_url).path)
    parts = [p for p in url_path.parts if p not in ("/", ".", "..")]
    if not parts:
        raise InvalidURLError(f"Repository URL has no usable path: {repository_url}")
    return root.joinpath(*parts)


def _reset_workspace(workspace: Path) -> None:
    if workspace.is_symlink() or workspace.is_file():
        workspace.unlink()
    elif workspace.exists():
        shutil.rmtree(workspace)
    workspace.mkdir(parents=True)


def _checkout(request: FetchRequest, workspace: Path, verbose: bool) -> None:
    if request.path:
        run_git(["init"], workspace, verbose=verbose)
        run_git(["remote", "add", "origin", request.repository_url], workspace, verbose=verbose)
        run_git(["config", "core.sparseCheckout", "true"], workspace, verbose=verbose)
        sparse_file = workspace / ".git" / "info" / "sparse-checkout"
        sparse_file.parent.mkdir(parents=True, exist_ok=True)
        sparse_file.write_text(f"/{request.path}\n")
        run_git(["pull", "origin", request.ref], workspace, verbose=verbose)
    else:
        run_git(["clone", request.repository_url, "."], workspace, verbose=verbose)

    # The sparse pull leaves HEAD on the init default branch
    run_git(["checkout", request.ref], workspace, verbose=verbose)


def _copy_entry(source: Path, dest: Path) -> None:
    """Copy one file or directory to dest, replacing whatever is in the way."""
    if source.is_dir():
        if dest.is_symlink() or (dest.exists() and not dest.is_dir()):
            dest.unlink()
        shutil.copytree(source, dest, symlinks=True, dirs_exist_ok=True)
    else:
        if dest.is_symlink():
            dest.unlink()
        elif dest.is_dir():
            shutil.rmtree(dest)
        shutil.copy2(source, dest, follow_symlinks=False)


def fetch(
    repository_url: str,
    ref: str | None = None,
    path: str | None = None,
    target: Path | str | None = None,
    config: XgitConfig | None = None,
) -> list[Path]:
    """Download a file, a folder's contents, or a whole repository.

    Args:
        repository_url: Remote URL (https://, ssh://, file://, ...).
        ref: Branch, tag or commit. Defaults to config.default_branch.
        path: Repo-relative file or folder. None copies the whole tree.
        target: Directory to copy into. Defaults to the current directory.
        config: Settings. Loaded from disk/environment if None.

    Returns:
        Top-level paths written into target.

    Raises:
        InvalidURLError: Before any I/O, if the URL does not parse.
        ProcessError: If clone, pull or checkout fails.
        FileNotFoundError: If path does not exist at ref.
    """
    cfg = config or load_config()
    request = FetchRequest(repository_url, ref or cfg.default_branch, path)
    target_dir = Path(target) if target else Path.cwd()

    workspace = scratch_workspace_for(request.repository_url, cfg.scratch_root)
    _reset_workspace(workspace)
    try:
        _checkout(request, workspace, cfg.verbose)
        shutil.rmtree(workspace / ".git")

        source = workspace / request.path if request.path else workspace
        if not source.exists() and not source.is_symlink():
            raise FileNotFoundError(f"'{request.path}' not found at {request.ref} in {request.repository_url}")

        target_dir.mkdir(parents=True, exist_ok=True)
        if source.is_dir():
            written = []
            for entry in sorted(source.iterdir()):
                dest = target_dir / entry.name
                _copy_entry(entry, dest)
                written.append(dest)
            return written

        dest = target_dir / source.name
        _copy_entry(source, dest)
        return [dest]
    finally:
        if not cfg.keep_scratch and workspace.exists():
            shutil.rmtree(workspace, ignore_errors=True)
