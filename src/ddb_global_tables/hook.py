"""Deployment lifecycle hook.

Binds the orchestrator to the ``after:deploy:deploy`` lifecycle event of a
deployment described by a :class:`DeploymentDescriptor`.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from .config import GlobalTablesConfig
from .control_plane import DynamoDBControlPlane
from .descriptor import DeploymentDescriptor
from .models import RunResult
from .naming import resolve_region
from .orchestrator import ReplicationOrchestrator
from .targets import gather_or_cancel

logger = logging.getLogger(__name__)

AFTER_DEPLOY_EVENT = "after:deploy:deploy"


class GlobalTablesHook:
    """
    Creates and upgrades DynamoDB global tables after a deploy.

    Example:
        hook = GlobalTablesHook(DeploymentDescriptor.from_file("serverless.yml"))
        result = await hook.hooks["after:deploy:deploy"]()

    Attributes:
        descriptor: The deployment being provisioned
        hooks: Lifecycle event name to coroutine function
    """

    def __init__(
        self,
        descriptor: DeploymentDescriptor,
        region: str | None = None,
        endpoint_url: str | None = None,
        control_plane: DynamoDBControlPlane | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """
        Initialize the hook.

        Args:
            descriptor: Parsed deployment descriptor
            region: Deploying region (default: env vars, then provider.region)
            endpoint_url: Optional DynamoDB endpoint (for LocalStack or moto server)
            control_plane: Optional control plane (injected for testing, not closed)
            environ: Environment used for overrides (default: ``os.environ``)
        """
        self.descriptor = descriptor
        self.region = region
        self.endpoint_url = endpoint_url
        self.environ = environ
        self._control_plane = control_plane
        self.hooks: dict[str, Callable[[], Awaitable[Any]]] = {
            AFTER_DEPLOY_EVENT: self.create_global_tables,
        }

    def load_config(self) -> GlobalTablesConfig:
        return GlobalTablesConfig.load(self.descriptor.global_tables_settings, self.environ)

    def resolve_region(self) -> str:
        return resolve_region(self.region, self.descriptor.provider_region)

    async def create_global_tables(self) -> RunResult:
        """
        Run the orchestrator for the deploying region.

        Returns:
            RunResult describing every step taken

        Raises:
            ConfigurationError: If the descriptor or settings are invalid
            ClientError: The first unexpected DynamoDB failure
        """
        config = self.load_config()
        if not config.enabled:
            logger.info("Plugin disabled")
            return RunResult(region=None, enabled=False)

        region = self.resolve_region()
        table_names = self.descriptor.table_names()

        if self._control_plane is not None:
            orchestrator = ReplicationOrchestrator(self._control_plane, config)
            return await orchestrator.run(table_names, region)

        async with DynamoDBControlPlane(endpoint_url=self.endpoint_url) as control_plane:
            orchestrator = ReplicationOrchestrator(control_plane, config)
            return await orchestrator.run(table_names, region)

    async def table_versions(self) -> dict[str, str]:
        """
        Read the global table version of every managed table.

        Covers the descriptor's tables and the legacy upgrade tables. Tables
        that report no version (or cannot be described) map to ``""``.
        """
        config = self.load_config()
        table_names = list(
            dict.fromkeys([*self.descriptor.table_names(), *config.upgrade_table_names])
        )

        async def _read(control_plane: DynamoDBControlPlane) -> dict[str, str]:
            orchestrator = ReplicationOrchestrator(control_plane, config)
            versions = await gather_or_cancel(
                *(orchestrator.read_version(t) for t in table_names)
            )
            return dict(zip(table_names, versions))

        if self._control_plane is not None:
            return await _read(self._control_plane)

        async with DynamoDBControlPlane(endpoint_url=self.endpoint_url) as control_plane:
            return await _read(control_plane)
