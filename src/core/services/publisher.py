"""Publish orchestration: scaffold a crate and `cargo publish` it.

The project lives in a `TemporaryDirectory` that is removed on every exit
path, including errors raised by cargo or by the file writes.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from pydantic import SecretStr

from adapters.project_scaffold import write_manifest, write_readme
from core.config import AppSettings
from core.domain.version import Version
from core.errors import ProcessError, ScaffoldError
from core.interfaces.runner import ProcessRunner
from core.logging import get_logger

logger = get_logger("publisher")

_COLOR_ENV = {"CARGO_TERM_COLOR": "always"}


class CratePublisher:
    """Creates a fresh `cargo new --lib` project and publishes it."""

    def __init__(self, runner: ProcessRunner, settings: AppSettings | None = None) -> None:
        self._runner = runner
        self._settings = settings or AppSettings()

    def publish(self, crate_name: str, version: Version, token: SecretStr) -> None:
        logger.info("Creating temporary working folder…")
        try:
            workdir = tempfile.TemporaryDirectory(prefix="crates-smoke-test-")
        except OSError as exc:
            raise ScaffoldError("Failed to create temporary working folder") from exc

        with workdir as tmp:
            tmp_path = Path(tmp)
            logger.debug("Temporary working folder: %s", tmp_path)

            logger.info("Creating `%s` project…", crate_name)
            self._cargo(["new", "--lib", crate_name], cwd=tmp_path, env=dict(_COLOR_ENV))

            project_path = tmp_path / crate_name
            logger.debug("Project path: %s", project_path)

            manifest_path = write_manifest(project_path, crate_name=crate_name, version=version)
            logger.info("Overrode `Cargo.toml` file (%s)", manifest_path)
            readme_path = write_readme(project_path, crate_name=crate_name, version=version)
            logger.info("Created `README.md` file (%s)", readme_path)

            logger.info("Publishing to %s…", self._settings.registry_host)
            env = {
                **_COLOR_ENV,
                self._settings.registry_env_var("index"): self._settings.registry_index_url,
                self._settings.registry_env_var("token"): token.get_secret_value(),
            }
            self._cargo(
                ["publish", "--registry", self._settings.registry_name, "--allow-dirty"],
                cwd=project_path,
                env=env,
            )

    def _cargo(self, args: list[str], *, cwd: Path, env: dict[str, str]) -> None:
        label = f"Failed to run `cargo {args[0]}`"
        try:
            returncode = self._runner.run([self._settings.cargo_bin, *args], cwd=cwd, env=env)
        except OSError as exc:
            raise ProcessError(label) from exc
        if returncode != 0:
            raise ProcessError(f"{label} (exit status {returncode})", returncode=returncode)
