"""Hatchling build hook that records the git commit in linevi/_build_info.py.

``linevi --version`` reads this module when the package is installed
from a wheel or sdist and no git checkout is around.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any, Optional

from hatchling.builders.hooks.plugin.interface import BuildHookInterface

BUILD_INFO = "linevi/_build_info.py"


def _git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        # Building from an sdist: there is no repository to ask
        return None
    return out.decode().strip() or None


class CustomBuildHook(BuildHookInterface):
    """Generate the build info module and ship it as an artifact."""

    def initialize(self, version: str, build_data: dict[str, Any]) -> None:
        root = Path(self.root)
        target = root / BUILD_INFO
        commit = _git(["rev-parse", "HEAD"], root)
        date = _git(["show", "-s", "--format=%cI", "HEAD"], root)
        if commit is None and target.exists():
            # Keep the info that came with the sdist
            build_data.setdefault("artifacts", []).append(BUILD_INFO)
            return
        target.write_text(
            "# Auto-generated at build time.\n"
            f"COMMIT = {commit!r}\n"
            f"DATE = {date!r}\n",
            encoding="utf-8",
        )
        build_data.setdefault("artifacts", []).append(BUILD_INFO)
