from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, Sequence

import httpx
import pytest

from adapters.http_client import build_client
from adapters.registry_client import RegistryClient
from core.config import AppSettings

Handler = Callable[[httpx.Request], httpx.Response]


@dataclass
class RunnerCall:
    args: list[str]
    cwd: Path
    env: dict[str, str]
    # Snapshot of the project files at call time (the temp dir is gone afterwards).
    files: dict[str, str] = field(default_factory=dict)


class FakeRunner:
    """Stands in for `cargo`: `new` creates the layout, `publish` records the files."""

    def __init__(self, returncodes: Mapping[str, int] | None = None) -> None:
        self.returncodes = dict(returncodes or {})
        self.calls: list[RunnerCall] = []

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
    ) -> int:
        call = RunnerCall(args=list(args), cwd=Path(cwd), env=dict(env or {}))
        self.calls.append(call)
        subcommand = call.args[1]
        code = self.returncodes.get(subcommand, 0)

        if subcommand == "new" and code == 0:
            project = call.cwd / call.args[-1]
            (project / "src").mkdir(parents=True)
            (project / "Cargo.toml").write_text('[package]\nname = "generated"\n', encoding="utf-8")
            (project / "src" / "lib.rs").write_text("", encoding="utf-8")
        if subcommand == "publish":
            for name in ("Cargo.toml", "README.md"):
                path = call.cwd / name
                if path.exists():
                    call.files[name] = path.read_text(encoding="utf-8")
        return code

    def subcommands(self) -> list[str]:
        return [c.args[1] for c in self.calls]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        registry_base_url="https://staging.crates.io",
        registry_name="staging",
        registry_index_url="https://github.com/rust-lang/staging.crates.io-index",
        user_agent="crates.io smoke test",
        cargo_bin="cargo",
    )


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


def make_registry(settings: AppSettings, handler: Handler) -> RegistryClient:
    client = build_client(settings, transport=httpx.MockTransport(handler))
    return RegistryClient(settings, client=client)


def crate_payload(max_version: str) -> dict:
    return {
        "crate": {"id": "crates-staging-test-tb", "max_version": max_version},
        "versions": [{"num": max_version}],
    }


def version_payload(name: str, num: str) -> dict:
    return {"version": {"crate": name, "num": num, "yanked": False}}


class FakeRegistry:
    """Minimal API double: answers both endpoints from in-memory values."""

    def __init__(self, max_version: str, *, echo_name: str | None = None, echo_num: str | None = None) -> None:
        self.max_version = max_version
        self.echo_name = echo_name
        self.echo_num = echo_num
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.strip("/").split("/")
        # api/v1/crates/{name}[/{version}]
        if len(parts) == 4:
            return httpx.Response(200, json=crate_payload(self.max_version))
        if len(parts) == 5:
            name = self.echo_name if self.echo_name is not None else parts[3]
            num = self.echo_num if self.echo_num is not None else parts[4]
            return httpx.Response(200, json=version_payload(name, num))
        return httpx.Response(404, json={"errors": [{"detail": "Not Found"}]})

    def version_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if len(r.url.path.strip("/").split("/")) == 5]
