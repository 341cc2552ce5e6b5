"""Error taxonomy for the smoke test.

Every layer wraps the lower exception with `raise ... from exc` and a
one-line "Failed to ..." message, so `__cause__` is the context trail the
CLI prints. Configuration errors never get here: Typer rejects bad input
before any of this code runs.
"""

from __future__ import annotations


class SmokeTestError(RuntimeError):
    """Base class for every failure that aborts a smoke test run."""


class RegistryTransportError(SmokeTestError):
    """DNS/connect/TLS/timeout failure talking to the registry."""


class RegistryProtocolError(SmokeTestError):
    """Non-success HTTP status or unexpected JSON payload."""


class ScaffoldError(SmokeTestError):
    """The throwaway project could not be created or written."""


class ProcessError(SmokeTestError):
    """An external `cargo` invocation could not be spawned or exited non-zero."""

    def __init__(self, message: str, *, returncode: int | None = None) -> None:
        self.returncode = returncode
        super().__init__(message)


class VerificationError(SmokeTestError):
    """The registry returned data that does not match what was published."""

    def __init__(self, message: str, *, expected: str, found: str) -> None:
        self.expected = expected
        self.found = found
        super().__init__(message)


def error_chain(exc: BaseException) -> list[str]:
    """Messages from the outermost error down to the root cause."""

    messages: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        message = str(current) or type(current).__name__
        # httpx errors often repeat the message of the OSError they wrap.
        if not messages or messages[-1] != message:
            messages.append(message)
        current = current.__cause__
    return messages
