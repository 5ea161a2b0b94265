"""Version reporting for ``linevi --version``.

The release number comes from the installed distribution metadata; the
commit is looked up from, in order, a live git checkout, the
``_build_info`` module written by the hatch build hook, or the PEP 610
``direct_url.json`` left by a VCS install.
"""

from __future__ import annotations

import importlib.metadata
import json
import subprocess
from pathlib import Path
from typing import Callable, NamedTuple, Optional

DISTRIBUTION = "linevi"


class BuildInfo(NamedTuple):
    commit: Optional[str]
    date: Optional[str]
    dirty: bool


def _git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None
    return out.decode().strip() or None


def _from_git_checkout() -> Optional[BuildInfo]:
    here = Path(__file__).resolve().parent
    if _git(["rev-parse", "--show-toplevel"], here) is None:
        return None
    status = _git(["status", "--porcelain"], here)
    return BuildInfo(
        commit=_git(["rev-parse", "HEAD"], here),
        date=_git(["show", "-s", "--format=%cI", "HEAD"], here),
        dirty=bool(status),
    )


def _from_build_hook() -> Optional[BuildInfo]:
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None
    return BuildInfo(
        commit=getattr(_build_info, "COMMIT", None),
        date=getattr(_build_info, "DATE", None),
        dirty=False,
    )


def _from_direct_url() -> Optional[BuildInfo]:
    try:
        dist = importlib.metadata.distribution(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        return None
    text = dist.read_text("direct_url.json")
    if not text:
        return None
    try:
        commit = (json.loads(text).get("vcs_info") or {}).get("commit_id")
    except (json.JSONDecodeError, AttributeError):
        return None
    return BuildInfo(commit=commit, date=None, dirty=False) if commit else None


_SOURCES: tuple[Callable[[], Optional[BuildInfo]], ...] = (
    _from_git_checkout,
    _from_build_hook,
    _from_direct_url,
)


def get_build_info() -> BuildInfo:
    for source in _SOURCES:
        info = source()
        if info and (info.commit or info.date):
            return info
    return BuildInfo(commit=None, date=None, dirty=False)


def get_release() -> str:
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        return "0+unknown"


def get_version_string() -> str:
    info = get_build_info()
    commit = info.commit[:7] if info.commit else "unknown"
    dirty = "-dirty" if info.dirty else ""
    return f"linevi {get_release()} ({commit}{dirty} {info.date or 'unknown'})"
