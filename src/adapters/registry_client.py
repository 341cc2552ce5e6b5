"""Registry read API (crates.io `/api/v1`).

Two endpoints, one request each, no retries:
- `GET /api/v1/crates/{name}?include=versions` -> highest published version
- `GET /api/v1/crates/{name}/{version}` -> crate name + version echoed back
"""

from __future__ import annotations

from typing import TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.models import CrateResponse, VersionResponse
from core.domain.version import Version
from core.errors import RegistryProtocolError, RegistryTransportError
from core.logging import get_logger

logger = get_logger("registry")

_M = TypeVar("_M", bound=BaseModel)


class RegistryClient:
    """Reads crate and version metadata from the registry API."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client or build_client(self._settings)

    def __enter__(self) -> "RegistryClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def fetch_crate_summary(self, name: str) -> Version:
        """Return the highest published version of `name`."""

        url = f"/api/v1/crates/{quote(name, safe='')}"
        what = "crate information"
        response = self._get(url, params={"include": "versions"}, what=what)
        envelope = self._decode(response, CrateResponse, what=what)
        logger.debug("Crate response: %r", envelope)
        return envelope.krate.max_version

    def fetch_version_detail(self, name: str, version: Version) -> tuple[str, Version]:
        """Return `(crate name, version number)` as reported for `name@version`."""

        url = f"/api/v1/crates/{quote(name, safe='')}/{quote(str(version), safe='')}"
        what = "version information"
        response = self._get(url, what=what)
        envelope = self._decode(response, VersionResponse, what=what)
        logger.debug("Version response: %r", envelope)
        return envelope.version.krate, envelope.version.num

    def _get(
        self,
        url: str,
        *,
        what: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        message = f"Failed to load {what} from {self._settings.registry_host}"
        logger.debug("GET %s%s params=%s", self._settings.registry_base_url, url, params)
        try:
            response = self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise RegistryTransportError(message) from exc
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RegistryProtocolError(message) from exc
        return response

    @staticmethod
    def _decode(response: httpx.Response, model: type[_M], *, what: str) -> _M:
        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            raise RegistryProtocolError(f"Failed to deserialize {what}") from exc
