"""Replication orchestrator for DynamoDB global tables.

Every operation is a remote transition guarded by the global table version
read from the master region. Transitions that DynamoDB reports as already
satisfied are treated as successful no-ops, which makes each run safe to
repeat after a partial failure.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from botocore.exceptions import BotoCoreError, ClientError

from .config import GlobalTablesConfig
from .control_plane import DynamoDBControlPlane
from .models import Outcome, RunResult, Step, TableOutcome
from .targets import CurrentRegionTarget, LegacyUpgradeTarget, ReplicationTarget

logger = logging.getLogger(__name__)

GLOBAL_TABLE_EXISTS_CODE = "GlobalTableAlreadyExistsException"
REPLICA_EXISTS_CODE = "ReplicaAlreadyExistsException"
REPLICA_TABLE_EXISTS_CODE = "ValidationException"
REPLICA_TABLE_EXISTS_MESSAGE = "replicas already existed as tables"


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


def _error_message(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Message", ""))


class ReplicationOrchestrator:
    """
    Promotes tables to global tables and keeps their replicas in place.

    Example:
        async with DynamoDBControlPlane() as control_plane:
            orchestrator = ReplicationOrchestrator(control_plane)
            result = await orchestrator.run(["orders", "users"], "eu-west-2")

    Attributes:
        control_plane: DynamoDB client access per region
        config: Regions, target version and legacy table list
    """

    def __init__(
        self,
        control_plane: DynamoDBControlPlane,
        config: GlobalTablesConfig | None = None,
    ) -> None:
        self.control_plane = control_plane
        self.config = config or GlobalTablesConfig()

    async def read_version(self, table_name: str) -> str:
        """
        Read a table's global table version from the master region.

        Returns:
            The reported version, or ``""`` when the table reports none or
            cannot be described (the failure is logged)
        """
        try:
            table = await self.control_plane.describe_table(
                table_name, self.config.master_region
            )
        except (ClientError, BotoCoreError) as e:
            logger.warning("Unable to describe table %s: %s", table_name, e)
            return ""
        return str(table.get("GlobalTableVersion") or "")

    async def table_is_at_version(self, table_name: str) -> bool:
        """
        Check whether a table reports the target global table version.

        A failed read counts as "not at version" so the next run retries.
        """
        global_table_version = await self.read_version(table_name)
        logger.info("Table %s is at version %s", table_name, global_table_version)
        return global_table_version == self.config.target_version

    async def create_global_table(self, table_name: str, region: str) -> TableOutcome:
        """
        Create a global table with ``region`` as its only replica.

        Raises:
            ClientError: Any failure other than the global table already existing
        """
        if await self.table_is_at_version(table_name):
            logger.info(
                "Table %s has been upgraded to version %s",
                table_name,
                self.config.target_version,
            )
            return TableOutcome(
                table_name, Step.CREATE_GLOBAL_TABLE, Outcome.AT_TARGET_VERSION, region
            )

        try:
            await self.control_plane.create_global_table(table_name, region)
        except ClientError as e:
            if _error_code(e) != GLOBAL_TABLE_EXISTS_CODE:
                raise
            logger.info("Global table %s already exists", table_name)
            return TableOutcome(
                table_name, Step.CREATE_GLOBAL_TABLE, Outcome.ALREADY_EXISTS, region
            )

        logger.info("Added Global Table %s with %s replica", table_name, region)
        return TableOutcome(table_name, Step.CREATE_GLOBAL_TABLE, Outcome.APPLIED, region)

    async def add_replica(self, table_name: str, region: str) -> TableOutcome:
        """
        Add ``region`` as a replica of an existing global table.

        Raises:
            ClientError: Any failure other than the replica already existing
        """
        if await self.table_is_at_version(table_name):
            logger.info(
                "Table %s has been upgraded to version %s",
                table_name,
                self.config.target_version,
            )
            return TableOutcome(table_name, Step.ADD_REPLICA, Outcome.AT_TARGET_VERSION, region)

        logger.info("Adding replica for %s and %s", table_name, region)
        try:
            await self.control_plane.add_global_table_replica(table_name, region)
        except ClientError as e:
            if _error_code(e) != REPLICA_EXISTS_CODE:
                raise
            logger.info("Replica %s already exists in %s", table_name, region)
            return TableOutcome(table_name, Step.ADD_REPLICA, Outcome.ALREADY_EXISTS, region)

        logger.info("Added Replica %s to %s", table_name, region)
        return TableOutcome(table_name, Step.ADD_REPLICA, Outcome.APPLIED, region)

    async def update_replica_version(
        self,
        table_name: str,
        regions: Sequence[str] | None = None,
    ) -> list[TableOutcome]:
        """
        Add replicas to an upgraded table through the per-table API.

        Only tables already at the target version are updated. Requests go
        to the master region, one region at a time in listed order; the
        master region itself is skipped.

        Raises:
            ClientError: Any failure other than the replica table already existing
        """
        regions = self.config.upgrade_regions if regions is None else regions
        master_region = self.config.master_region
        target_version = self.config.target_version

        logger.info("Checking replica version for %s", table_name)
        if not await self.table_is_at_version(table_name):
            logger.info(
                "Replica cannot be updated for table %s and version %s",
                table_name,
                target_version,
            )
            return [
                TableOutcome(
                    table_name, Step.UPDATE_REPLICA_VERSION, Outcome.NOT_AT_TARGET_VERSION
                )
            ]

        outcomes: list[TableOutcome] = []
        for region in regions:
            if region == master_region:
                logger.info(
                    "Skipping adding version %s for the master region %s",
                    target_version,
                    region,
                )
                outcomes.append(
                    TableOutcome(
                        table_name,
                        Step.UPDATE_REPLICA_VERSION,
                        Outcome.SKIPPED_MASTER_REGION,
                        region,
                    )
                )
                continue

            logger.info(
                "Updating replica for %s and %s to version %s",
                table_name,
                region,
                target_version,
            )
            try:
                await self.control_plane.add_table_replica(table_name, region, master_region)
            except ClientError as e:
                if not (
                    _error_code(e) == REPLICA_TABLE_EXISTS_CODE
                    and REPLICA_TABLE_EXISTS_MESSAGE in _error_message(e)
                ):
                    raise
                logger.info("Replica %s already exists in %s", table_name, region)
                outcomes.append(
                    TableOutcome(
                        table_name, Step.UPDATE_REPLICA_VERSION, Outcome.ALREADY_EXISTS, region
                    )
                )
                continue

            logger.info("Added Replica %s to %s", table_name, region)
            outcomes.append(
                TableOutcome(table_name, Step.UPDATE_REPLICA_VERSION, Outcome.APPLIED, region)
            )

        return outcomes

    def plan(self, table_names: Sequence[str], region: str) -> list[ReplicationTarget]:
        """
        Decide which replication targets a run in ``region`` applies.

        The excluded region never receives the global-table path; the legacy
        upgrade path runs everywhere.
        """
        targets: list[ReplicationTarget] = []
        if region != self.config.excluded_region:
            targets.append(CurrentRegionTarget(tuple(table_names), region))
        else:
            logger.info("Skipping global table creation in excluded region %s", region)

        if self.config.upgrade_table_names:
            targets.append(
                LegacyUpgradeTarget(self.config.upgrade_table_names, self.config.upgrade_regions)
            )
        return targets

    async def run(self, table_names: Sequence[str], region: str) -> RunResult:
        """
        Apply every planned target in order.

        Raises:
            ClientError: The first unexpected remote failure, unchanged
        """
        result = RunResult(region=region)
        for target in self.plan(table_names, region):
            logger.debug("Applying %s", target.description)
            await target.apply(self, result)
        return result
