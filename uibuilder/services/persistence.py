"""
Configuration Persistence

The persistence port used by the builder controller, plus two adapters:
- InMemoryConfigurationStore: dict-backed, for previews and tests
- HttpConfigurationStore: the annotation API over httpx

Stores raise ConfigurationNotFoundError when nothing is stored under an id
and PersistenceError for every other failure.
"""

import json
import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from uibuilder.config import Settings, get_settings
from uibuilder.core.exceptions import ConfigurationNotFoundError, PersistenceError
from uibuilder.models.contracts.configuration import Configuration

logger = logging.getLogger(__name__)


def dump_configuration(configuration: Configuration) -> dict[str, Any]:
    """Canonical wire form: camelCase keys, ``None`` omitted."""
    return configuration.model_dump(mode="json", by_alias=True, exclude_none=True)


class ConfigurationStore(Protocol):
    """Persistence collaborator for configurations."""

    async def save(self, configuration: Configuration) -> None: ...

    async def load(self, configuration_id: str) -> Configuration: ...


class InMemoryConfigurationStore:
    """
    Keeps serialized configurations in a dict.

    Stores the JSON text rather than the model so a load always returns a
    fresh, re-validated configuration.
    """

    def __init__(self):
        self._documents: dict[str, str] = {}
        self.save_count = 0

    def __contains__(self, configuration_id: str) -> bool:
        return configuration_id in self._documents

    async def save(self, configuration: Configuration) -> None:
        self._documents[configuration.id] = json.dumps(dump_configuration(configuration))
        self.save_count += 1
        logger.debug(f"Stored configuration {configuration.id} in memory")

    async def load(self, configuration_id: str) -> Configuration:
        document = self._documents.get(configuration_id)
        if document is None:
            raise ConfigurationNotFoundError(configuration_id)
        return Configuration.model_validate_json(document)


class HttpConfigurationStore:
    """
    Annotation API client for UI configurations.

    Uses:
        PUT /api/v1/projects/{projectId}/ui-configurations
        GET /api/v1/ui-configurations/{configurationId}
    """

    def __init__(
        self,
        api_url: str,
        api_token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize client.

        Args:
            api_url: Annotation API URL
            api_token: Bearer token, if the API requires one
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.api_url = api_url.rstrip("/")
        headers = {"Authorization": f"Bearer {api_token}"} if api_token else {}
        self._http = httpx.AsyncClient(
            base_url=self.api_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "HttpConfigurationStore":
        settings = settings or get_settings()
        return cls(
            api_url=settings.api_url,
            api_token=settings.api_token,
            timeout=settings.persistence_timeout_seconds,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def save(self, configuration: Configuration) -> None:
        """Create or update the project's configuration."""
        payload = {
            "name": configuration.name,
            "description": configuration.description,
            "configuration": dump_configuration(configuration),
        }
        path = f"/api/v1/projects/{configuration.project_id}/ui-configurations"
        try:
            response = await self._http.put(path, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise PersistenceError(
                f"Saving configuration {configuration.id} failed with HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise PersistenceError(f"Saving configuration {configuration.id} failed: {exc}") from exc

        logger.info(f"Saved configuration {configuration.id} (version {configuration.version})")

    async def load(self, configuration_id: str) -> Configuration:
        """Fetch a configuration; the body may wrap it under ``configuration``."""
        try:
            response = await self._http.get(f"/api/v1/ui-configurations/{configuration_id}")
            if response.status_code == 404:
                raise ConfigurationNotFoundError(configuration_id)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise PersistenceError(
                f"Loading configuration {configuration_id} failed with HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise PersistenceError(f"Loading configuration {configuration_id} failed: {exc}") from exc

        body = data.get("configuration", data) if isinstance(data, dict) else data
        try:
            return Configuration.model_validate(body)
        except ValidationError as exc:
            raise PersistenceError(
                f"Server returned an invalid configuration for {configuration_id}: {exc}"
            ) from exc
