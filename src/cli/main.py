"""CLI entry point (Typer).

Resolves options, wires the real adapters and hands off to
`core.services.smoke_test.run_smoke_test`. Errors are rendered once, as a
cause chain, and turned into a non-zero exit status.
"""

from __future__ import annotations

import typer
from pydantic import SecretStr, ValidationError
from rich.console import Console

from adapters.process_runner import SubprocessRunner
from adapters.registry_client import RegistryClient
from cli.ui_components import build_error_panel
from core.config import AppSettings
from core.domain.models import DEFAULT_CRATE_NAME, Options
from core.errors import SmokeTestError
from core.logging import get_logger, init_logging
from core.services.publisher import CratePublisher
from core.services.smoke_test import run_smoke_test

app = typer.Typer(
    add_completion=False,
    help="End-to-end smoke test for the staging crates.io publish pipeline.",
)

_err_console = Console(stderr=True)

logger = get_logger("cli")


@app.command()
def smoke_test(
    crate_name: str = typer.Option(
        DEFAULT_CRATE_NAME,
        "--crate-name",
        help="Name of the test crate that will be published to the staging registry.",
    ),
    token: str = typer.Option(
        ...,
        "--token",
        envvar="CARGO_REGISTRY_TOKEN",
        show_default=False,
        help="Staging registry API token used to publish a new version.",
    ),
    skip_publish: bool = typer.Option(
        False,
        "--skip-publish",
        help="Skip publishing and run the verifications for the highest uploaded version instead.",
    ),
) -> None:
    """Publish a new patch version of the test crate and verify it via the API."""

    try:
        settings = AppSettings()
        options = Options(crate_name=crate_name, token=SecretStr(token), skip_publish=skip_publish)
    except ValidationError as exc:
        _err_console.print(build_error_panel(exc, title="Invalid configuration"))
        raise typer.Exit(code=2) from exc

    init_logging(settings.log_level, console=_err_console)
    logger.debug("Options: %r", options)

    try:
        with RegistryClient(settings) as registry:
            publisher = CratePublisher(SubprocessRunner(), settings)
            result = run_smoke_test(options, registry=registry, publisher=publisher, settings=settings)
    except SmokeTestError as exc:
        _err_console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc

    logger.debug("Result: %r", result)


def run() -> None:
    app(prog_name="crates-smoke-test")


if __name__ == "__main__":
    run()
