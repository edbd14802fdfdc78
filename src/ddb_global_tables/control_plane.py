"""DynamoDB control-plane access across regions."""

import asyncio
from typing import Any

import aioboto3


class DynamoDBControlPlane:
    """
    Issues DynamoDB control-plane requests against any region.

    One client is opened lazily per region and reused for the lifetime of
    the control plane. Errors are returned to the caller untouched as
    ``botocore.exceptions.ClientError``.

    Supports both AWS and LocalStack environments. When endpoint_url is
    provided, every region's client is pointed at that endpoint.
    """

    def __init__(
        self,
        endpoint_url: str | None = None,
        session: aioboto3.Session | None = None,
    ) -> None:
        """
        Initialize the control plane.

        Args:
            endpoint_url: Optional endpoint URL (for LocalStack or moto server)
            session: Optional aioboto3 session (default: a new session)
        """
        self.endpoint_url = endpoint_url
        self._session = session
        self._clients: dict[str, Any] = {}
        self._lock = asyncio.Lock()

    async def _get_client(self, region: str) -> Any:
        """Get or create the DynamoDB client for a region."""
        client = self._clients.get(region)
        if client is not None:
            return client

        async with self._lock:
            client = self._clients.get(region)
            if client is not None:
                return client

            if self._session is None:
                self._session = aioboto3.Session()

            kwargs: dict[str, Any] = {"region_name": region}
            if self.endpoint_url:
                kwargs["endpoint_url"] = self.endpoint_url

            client = await self._session.client("dynamodb", **kwargs).__aenter__()
            self._clients[region] = client
            return client

    async def describe_table(self, table_name: str, region: str) -> dict[str, Any]:
        """Return the ``Table`` description of a table as seen from ``region``."""
        client = await self._get_client(region)
        response = await client.describe_table(TableName=table_name)
        table: dict[str, Any] = response.get("Table", {})
        return table

    async def create_global_table(self, table_name: str, region: str) -> dict[str, Any]:
        """Create a global table whose only replica is ``region``."""
        client = await self._get_client(region)
        response: dict[str, Any] = await client.create_global_table(
            GlobalTableName=table_name,
            ReplicationGroup=[{"RegionName": region}],
        )
        return response

    async def add_global_table_replica(self, table_name: str, region: str) -> dict[str, Any]:
        """Add ``region`` to a global table through ``UpdateGlobalTable``."""
        client = await self._get_client(region)
        response: dict[str, Any] = await client.update_global_table(
            GlobalTableName=table_name,
            ReplicaUpdates=[{"Create": {"RegionName": region}}],
        )
        return response

    async def add_table_replica(
        self, table_name: str, replica_region: str, via_region: str
    ) -> dict[str, Any]:
        """
        Add a replica through the per-table ``UpdateTable`` API.

        Args:
            table_name: Table to update
            replica_region: Region of the new replica
            via_region: Region whose endpoint receives the request
        """
        client = await self._get_client(via_region)
        response: dict[str, Any] = await client.update_table(
            TableName=table_name,
            ReplicaUpdates=[{"Create": {"RegionName": replica_region}}],
        )
        return response

    async def close(self) -> None:
        """Close every open client."""
        clients, self._clients = self._clients, {}
        for client in clients.values():
            try:
                await client.__aexit__(None, None, None)
            except Exception:
                pass  # Best effort cleanup
        self._session = None

    async def __aenter__(self) -> "DynamoDBControlPlane":
        """Enter async context manager."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit async context manager."""
        await self.close()
