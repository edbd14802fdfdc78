"""Replication targets planned by the orchestrator.

A target bundles a set of tables with the path used to replicate them.
Every run is a list of targets applied in order.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from .models import RunResult
    from .orchestrator import ReplicationOrchestrator

T = TypeVar("T")


async def gather_or_cancel(*aws: Awaitable[T]) -> list[T]:
    """
    Await every awaitable concurrently, cancelling the rest on the first failure.

    The first exception is re-raised unchanged once every sibling has finished
    cancelling, so nothing keeps using a client the caller is about to close.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class ReplicationTarget(Protocol):
    """Protocol for replication targets."""

    @property
    def description(self) -> str:
        """Human-readable summary used in log lines."""
        ...

    async def apply(self, orchestrator: ReplicationOrchestrator, result: RunResult) -> None:
        """Drive every table of this target through its transitions."""
        ...


@dataclass(frozen=True)
class CurrentRegionTarget:
    """
    Global-table path for the deploying region.

    Creates each table's global table, then adds the region as a replica.
    Tables are independent, so each phase fans out across tables and waits
    for all of them before the next phase starts.
    """

    table_names: tuple[str, ...]
    region: str

    @property
    def description(self) -> str:
        return f"{len(self.table_names)} table(s) replicated into {self.region}"

    async def apply(self, orchestrator: ReplicationOrchestrator, result: RunResult) -> None:
        created = await gather_or_cancel(
            *(orchestrator.create_global_table(t, self.region) for t in self.table_names)
        )
        result.add(created)

        added = await gather_or_cancel(
            *(orchestrator.add_replica(t, self.region) for t in self.table_names)
        )
        result.add(added)


@dataclass(frozen=True)
class LegacyUpgradeTarget:
    """
    Upgrade path for tables that pre-date the current global table version.

    Tables fan out concurrently. Regions within a table are updated one at
    a time; DynamoDB accepts one replica change per table at a time.
    """

    table_names: tuple[str, ...]
    regions: tuple[str, ...]

    @property
    def description(self) -> str:
        return (
            f"{len(self.table_names)} legacy table(s) upgraded across "
            f"{len(self.regions)} region(s)"
        )

    async def apply(self, orchestrator: ReplicationOrchestrator, result: RunResult) -> None:
        upgraded = await gather_or_cancel(
            *(orchestrator.update_replica_version(t, self.regions) for t in self.table_names)
        )
        for outcomes in upgraded:
            result.add(outcomes)
