"""UI components for the CLI (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- The error panel is the only thing the tool prints besides its log trace.
"""

from __future__ import annotations

from rich.panel import Panel
from rich.text import Text

from core.errors import error_chain


def build_error_panel(exc: BaseException, *, title: str = "Smoke test failed") -> Panel:
    """Panel with the error message followed by its numbered causes."""

    messages = error_chain(exc)
    body = Text()
    body.append(messages[0], style="bold")
    causes = messages[1:]
    if causes:
        body.append("\n\nCaused by:\n", style="dim")
        for index, message in enumerate(causes):
            body.append(f"  {index}: {message}\n")

    return Panel(body, title=Text(title, style="bold red"), border_style="red")
