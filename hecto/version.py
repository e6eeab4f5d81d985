from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import Optional

# Version used when running from a source checkout that was never installed
FALLBACK_VERSION = "0.1.0"


def get_version() -> str:
    try:
        return importlib.metadata.version("hecto")
    except importlib.metadata.PackageNotFoundError:
        return FALLBACK_VERSION


def _git_commit() -> Optional[str]:
    here = Path(__file__).resolve().parent
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short=7", "HEAD"],
            cwd=str(here), stderr=subprocess.DEVNULL,
        )
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None
    return out.decode().strip() or None


def get_version_string() -> str:
    """Version for --version, with the git commit when run from a checkout."""
    commit = _git_commit()
    if commit:
        return f"hecto {get_version()} ({commit})"
    return f"hecto {get_version()}"
