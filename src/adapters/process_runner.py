"""`subprocess`-backed implementation of `ProcessRunner`.

stdout/stderr are inherited so cargo's own progress output reaches the
terminal unchanged.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Mapping, Sequence

from core.interfaces.runner import ProcessRunner
from core.logging import get_logger

logger = get_logger("process")


class SubprocessRunner(ProcessRunner):
    """Runs commands with the parent environment plus per-call overrides."""

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
    ) -> int:
        child_env = dict(os.environ)
        if env:
            child_env.update(env)
        # Only the override names are logged; values may be secrets.
        logger.debug("Running %s in %s (env overrides: %s)", list(args), cwd, sorted(env or {}))
        proc = subprocess.run(list(args), cwd=str(cwd), env=child_env, check=False)
        return proc.returncode
