"""Pytest fixtures for ddb-global-tables tests."""

import pytest
from botocore.exceptions import ClientError


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mock AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    # Unset AWS_ENDPOINT_URL so tests pass their own endpoint explicitly
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment variables that influence region and settings."""
    for name in (
        "AWS_REGION",
        "AWS_DEFAULT_REGION",
        "DDB_GLOBAL_TABLES_ENABLED",
        "DDB_GLOBAL_TABLES_MASTER_REGION",
        "DDB_GLOBAL_TABLES_EXCLUDED_REGION",
        "DDB_GLOBAL_TABLES_TARGET_VERSION",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def client_error():
    """Factory for botocore ClientErrors."""

    def _make(code: str, message: str = "", operation: str = "Operation") -> ClientError:
        return ClientError({"Error": {"Code": code, "Message": message}}, operation)

    return _make
