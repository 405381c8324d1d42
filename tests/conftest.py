"""Shared test fixtures for xgit."""

import subprocess
from pathlib import Path

import pytest

from xgit.config import XgitConfig


def _git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True,
    )
    return result.stdout


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep git and xgit away from the real user config."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "t@t")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "t@t")
    monkeypatch.setenv("XGIT_CONFIG", str(home / "xgit.yaml"))
    monkeypatch.setenv("XGIT_SCRATCH_DIR", str(tmp_path / "scratch"))
    monkeypatch.delenv("XGIT_DEFAULT_BRANCH", raising=False)


@pytest.fixture
def config(tmp_path):
    return XgitConfig(scratch_dir=tmp_path / "scratch")


@pytest.fixture
def remote_repo(tmp_path):
    """A source repository with a main and a dev branch."""
    repo = tmp_path / "remote" / "org" / "repo"
    repo.mkdir(parents=True)
    _git(repo, "init", "-b", "main")
    (repo / "README.md").write_text("# repo\n")
    (repo / "docs" / "img").mkdir(parents=True)
    (repo / "docs" / "guide.md").write_text("Guide at main\n")
    (repo / "docs" / "img" / "logo.txt").write_text("logo\n")
    (repo / "src").mkdir()
    (repo / "src" / "app.py").write_text("print('hi')\n")
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "init")

    _git(repo, "checkout", "-b", "dev")
    (repo / "docs" / "guide.md").write_text("Guide at dev\n")
    (repo / "docs" / "dev.md").write_text("dev only\n")
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "dev")
    _git(repo, "checkout", "main")
    return repo


@pytest.fixture
def superproject(tmp_path):
    """A repository with a committed submodule at vendor/lib."""
    lib = tmp_path / "lib"
    lib.mkdir()
    _git(lib, "init", "-b", "main")
    (lib / "lib.py").write_text("VALUE = 1\n")
    _git(lib, "add", ".")
    _git(lib, "commit", "-m", "lib")

    sup = tmp_path / "super"
    sup.mkdir()
    _git(sup, "init", "-b", "main")
    (sup / "app.py").write_text("import lib\n")
    _git(sup, "add", ".")
    _git(sup, "commit", "-m", "app")
    _git(sup, "-c", "protocol.file.allow=always", "submodule", "add", str(lib), "vendor/lib")
    _git(sup, "commit", "-m", "add lib")
    return sup


@pytest.fixture
def git():
    """Run a git command in a directory and return its stdout."""
    return _git
