"""xgit — sparse downloads and submodule teardown on top of the git CLI."""

__version__ = "0.3.0"
