"""Unit test fixtures with a mocked control plane."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ddb_global_tables.config import GLOBAL_TABLE_VERSION
from ddb_global_tables.control_plane import DynamoDBControlPlane


@pytest.fixture
def table_versions() -> dict[str, str]:
    """Global table version reported per table; missing tables report none."""
    return {}


@pytest.fixture
def control_plane(table_versions):
    """Control plane whose DescribeTable answers from ``table_versions``."""
    mock = MagicMock(spec=DynamoDBControlPlane)

    async def describe_table(table_name: str, region: str) -> dict:
        table: dict = {"TableName": table_name, "TableStatus": "ACTIVE"}
        version = table_versions.get(table_name)
        if version:
            table["GlobalTableVersion"] = version
        return table

    mock.describe_table = AsyncMock(side_effect=describe_table)
    mock.create_global_table = AsyncMock(return_value={})
    mock.add_global_table_replica = AsyncMock(return_value={})
    mock.add_table_replica = AsyncMock(return_value={})
    return mock


@pytest.fixture
def upgraded() -> str:
    """The target global table version."""
    return GLOBAL_TABLE_VERSION
