"""Version checks against a moto server over HTTP."""

import uuid

import pytest

from ddb_global_tables.config import GLOBAL_TABLE_VERSION
from ddb_global_tables.control_plane import DynamoDBControlPlane
from ddb_global_tables.descriptor import DeploymentDescriptor
from ddb_global_tables.hook import GlobalTablesHook
from ddb_global_tables.orchestrator import ReplicationOrchestrator

pytestmark = pytest.mark.integration


def _create_table(dynamodb) -> str:
    table_name = f"test-{uuid.uuid4().hex[:8]}"
    dynamodb.create_table(
        TableName=table_name,
        KeySchema=[{"AttributeName": "PK", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "PK", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST",
    )
    return table_name


class TestVersionCheck:
    """DescribeTable round-trips through aioboto3."""

    @pytest.mark.asyncio
    async def test_describe_table(self, dynamodb, moto_endpoint) -> None:
        table_name = _create_table(dynamodb)

        async with DynamoDBControlPlane(endpoint_url=moto_endpoint) as control_plane:
            table = await control_plane.describe_table(table_name, "eu-west-2")

        assert table["TableName"] == table_name

    @pytest.mark.asyncio
    async def test_version_gate_matches_reported_version(self, dynamodb, moto_endpoint) -> None:
        table_name = _create_table(dynamodb)

        async with DynamoDBControlPlane(endpoint_url=moto_endpoint) as control_plane:
            orchestrator = ReplicationOrchestrator(control_plane)
            version = await orchestrator.read_version(table_name)
            at_version = await orchestrator.table_is_at_version(table_name)

        assert at_version is (version == GLOBAL_TABLE_VERSION)

    @pytest.mark.asyncio
    async def test_missing_table_degrades_to_not_upgraded(
        self, dynamodb, moto_endpoint
    ) -> None:
        async with DynamoDBControlPlane(endpoint_url=moto_endpoint) as control_plane:
            orchestrator = ReplicationOrchestrator(control_plane)
            assert await orchestrator.read_version("does-not-exist") == ""
            assert await orchestrator.table_is_at_version("does-not-exist") is False

    @pytest.mark.asyncio
    async def test_hook_status_reads_versions(self, dynamodb, moto_endpoint) -> None:
        table_name = _create_table(dynamodb)
        descriptor = DeploymentDescriptor.from_dict(
            {
                "custom": {"dynamoDBGlobalTables": {"upgradeTables": []}},
                "resources": {
                    "Resources": {
                        "Table": {
                            "Type": "AWS::DynamoDB::Table",
                            "Properties": {"TableName": table_name},
                        }
                    }
                },
            }
        )
        hook = GlobalTablesHook(descriptor, endpoint_url=moto_endpoint)

        versions = await hook.table_versions()

        assert list(versions) == [table_name]
