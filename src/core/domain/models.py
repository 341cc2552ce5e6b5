"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation at the edge of the registry API without coupling the
  core to httpx.
- `SecretStr` keeps the registry token out of reprs, logs and tracebacks.

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr
from pydantic.config import ConfigDict

from core.domain.version import Version

DEFAULT_CRATE_NAME = "crates-staging-test-tb"


class Options(BaseModel):
    """Resolved command-line options for one smoke test run."""

    model_config = ConfigDict(frozen=True)

    crate_name: str = Field(
        default=DEFAULT_CRATE_NAME,
        min_length=1,
        description="Name of the test crate that is published to the staging registry.",
    )
    token: SecretStr = Field(
        ...,
        description="Registry API token used to publish a new version.",
    )
    skip_publish: bool = Field(
        default=False,
        description="Skip publishing and verify the highest uploaded version instead.",
    )


class CrateSummary(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    max_version: Version = Field(
        ...,
        description="Highest version published for the crate.",
    )


class CrateResponse(BaseModel):
    """Envelope of `GET /api/v1/crates/{name}`."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    krate: CrateSummary = Field(..., alias="crate")


class VersionDetail(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    krate: str = Field(
        ...,
        alias="crate",
        description="Crate name echoed by the server.",
    )
    num: Version = Field(
        ...,
        description="Version number echoed by the server.",
    )


class VersionResponse(BaseModel):
    """Envelope of `GET /api/v1/crates/{name}/{version}`."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    version: VersionDetail
