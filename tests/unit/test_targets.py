"""Tests for replication target planning."""

import asyncio

import pytest

from ddb_global_tables.config import UPGRADE_REGIONS, UPGRADE_TABLE_NAMES, GlobalTablesConfig
from ddb_global_tables.models import Outcome, RunResult, Step
from ddb_global_tables.orchestrator import ReplicationOrchestrator
from ddb_global_tables.targets import (
    CurrentRegionTarget,
    LegacyUpgradeTarget,
    gather_or_cancel,
)


class TestPlan:
    """Tests for ReplicationOrchestrator.plan."""

    def test_regular_region_plans_both_paths(self, control_plane) -> None:
        orchestrator = ReplicationOrchestrator(control_plane)

        targets = orchestrator.plan(["orders", "users"], "eu-west-1")

        assert targets == [
            CurrentRegionTarget(("orders", "users"), "eu-west-1"),
            LegacyUpgradeTarget(UPGRADE_TABLE_NAMES, UPGRADE_REGIONS),
        ]

    def test_excluded_region_plans_only_legacy_path(self, control_plane) -> None:
        orchestrator = ReplicationOrchestrator(control_plane)

        targets = orchestrator.plan(["orders"], "ca-central-1")

        assert targets == [LegacyUpgradeTarget(UPGRADE_TABLE_NAMES, UPGRADE_REGIONS)]

    def test_configured_excluded_region(self, control_plane) -> None:
        config = GlobalTablesConfig(excluded_region="ap-south-1")
        orchestrator = ReplicationOrchestrator(control_plane, config)

        assert len(orchestrator.plan(["orders"], "ca-central-1")) == 2
        assert len(orchestrator.plan(["orders"], "ap-south-1")) == 1

    def test_empty_legacy_list_plans_no_upgrade(self, control_plane) -> None:
        config = GlobalTablesConfig(upgrade_table_names=())
        orchestrator = ReplicationOrchestrator(control_plane, config)

        targets = orchestrator.plan(["orders"], "eu-west-1")

        assert targets == [CurrentRegionTarget(("orders",), "eu-west-1")]


class TestTargets:
    """Tests for applying individual targets."""

    def test_descriptions(self) -> None:
        assert (
            CurrentRegionTarget(("a", "b"), "eu-west-1").description
            == "2 table(s) replicated into eu-west-1"
        )
        assert (
            LegacyUpgradeTarget(("a",), ("us-east-1", "eu-west-2")).description
            == "1 legacy table(s) upgraded across 2 region(s)"
        )

    @pytest.mark.asyncio
    async def test_current_region_target_records_both_phases(self, control_plane) -> None:
        orchestrator = ReplicationOrchestrator(control_plane)
        result = RunResult(region="eu-west-1")

        await CurrentRegionTarget(("orders",), "eu-west-1").apply(orchestrator, result)

        assert [(o.step, o.outcome) for o in result.outcomes] == [
            (Step.CREATE_GLOBAL_TABLE, Outcome.APPLIED),
            (Step.ADD_REPLICA, Outcome.APPLIED),
        ]

    @pytest.mark.asyncio
    async def test_legacy_target_records_every_region(
        self, control_plane, table_versions, upgraded
    ) -> None:
        table_versions["legacy"] = upgraded
        orchestrator = ReplicationOrchestrator(control_plane)
        result = RunResult(region="eu-west-1")

        await LegacyUpgradeTarget(("legacy",), ("us-east-1", "eu-west-2")).apply(
            orchestrator, result
        )

        assert [(o.region, o.outcome) for o in result.for_step(Step.UPDATE_REPLICA_VERSION)] == [
            ("us-east-1", Outcome.APPLIED),
            ("eu-west-2", Outcome.SKIPPED_MASTER_REGION),
        ]


class TestGatherOrCancel:
    """Tests for gather_or_cancel."""

    @pytest.mark.asyncio
    async def test_returns_results_in_order(self) -> None:
        async def value(v: int) -> int:
            await asyncio.sleep(0)
            return v

        assert await gather_or_cancel(value(1), value(2)) == [1, 2]

    @pytest.mark.asyncio
    async def test_failure_cancels_siblings_before_raising(self) -> None:
        error = RuntimeError("boom")
        state: dict[str, bool] = {"cancelled": False, "finished": False}

        async def fail() -> None:
            raise error

        async def slow() -> None:
            try:
                await asyncio.sleep(0.05)
            except asyncio.CancelledError:
                state["cancelled"] = True
                raise
            state["finished"] = True

        with pytest.raises(RuntimeError) as exc_info:
            await gather_or_cancel(fail(), slow())

        assert exc_info.value is error
        assert state == {"cancelled": True, "finished": False}
