"""Hetzner Cloud API client.

Docs: https://docs.hetzner.cloud/#servers
"""

import httpx

from logger import logger
from utils.log_sanitizer import mask_token, sanitize_for_log
from ..errors import FetchError, ShutdownError
from ..usage import ServerSnapshot

PER_PAGE = 50


class HetznerClient:
    """Thin async wrapper around the server endpoints we need."""

    def __init__(
        self,
        base_url: str = "https://api.hetzner.cloud/v1",
        timeout: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self, token: str) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {token}"},
            timeout=self.timeout,
            transport=self._transport,
        )

    async def list_servers(self, token: str) -> list[ServerSnapshot]:
        """List every server visible to one project token.

        Follows Hetzner's page-based pagination.

        Raises:
            FetchError: On network errors, non-200 responses or bad payloads
        """
        snapshots = []
        page = 1

        try:
            async with self._client(token) as client:
                while page:
                    response = await client.get(
                        "/servers", params={"page": page, "per_page": PER_PAGE}
                    )
                    if response.status_code != 200:
                        raise FetchError(
                            f"HTTP {response.status_code}: {sanitize_for_log(response.text)}"
                        )

                    data = response.json()
                    for server in data.get("servers", []):
                        snapshots.append(ServerSnapshot.from_api(server, token))

                    pagination = (data.get("meta") or {}).get("pagination") or {}
                    page = pagination.get("next_page")
        except httpx.HTTPError as e:
            raise FetchError(sanitize_for_log(str(e))) from e
        except ValueError as e:
            raise FetchError(f"Invalid JSON from Hetzner: {e}") from e

        return snapshots

    async def list_all_servers(self, tokens: list[str]) -> list[ServerSnapshot]:
        """Merge the servers of every token, skipping tokens that fail."""
        servers = []

        for token in tokens:
            try:
                found = await self.list_servers(token)
            except FetchError as e:
                logger.error(f"Failed to fetch servers with token {mask_token(token)}: {e}")
                continue
            logger.debug(f"Token {mask_token(token)} returned {len(found)} servers")
            servers.extend(found)

        return servers

    async def shutdown_server(self, server_id: int, token: str) -> dict:
        """Send an ACPI shutdown to a server.

        Returns:
            The action object Hetzner created

        Raises:
            ShutdownError: On network errors or non-2xx responses
        """
        try:
            async with self._client(token) as client:
                response = await client.post(f"/servers/{server_id}/actions/shutdown")
        except httpx.HTTPError as e:
            raise ShutdownError(server_id, sanitize_for_log(str(e))) from e

        if not response.is_success:
            raise ShutdownError(
                server_id,
                f"HTTP {response.status_code}: {sanitize_for_log(response.text)}"
            )

        try:
            return response.json().get("action", {})
        except ValueError:
            return {}
