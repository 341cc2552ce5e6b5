"""External process contract.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- Lets the publisher run against a fake runner in tests instead of a real
  `cargo` binary.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Protocol, Sequence, runtime_checkable


@runtime_checkable
class ProcessRunner(Protocol):
    """Minimal contract for running an external command.

    Design rules:
    - `env` overrides apply to that single child process only.
    - Returns the exit status; spawn failures raise `OSError`.
    """

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
    ) -> int:
        """Run `args` in `cwd` and return the exit status."""

        ...
