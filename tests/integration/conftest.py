"""Integration fixtures backed by a moto server."""

import pytest
from moto.server import ThreadedMotoServer

MOTO_PORT = 5123


@pytest.fixture(scope="module")
def moto_endpoint():
    """Run a moto server for the module and return its endpoint URL."""
    server = ThreadedMotoServer(ip_address="127.0.0.1", port=MOTO_PORT, verbose=False)
    server.start()
    try:
        yield f"http://127.0.0.1:{MOTO_PORT}"
    finally:
        server.stop()


@pytest.fixture
def dynamodb(moto_endpoint, aws_credentials):
    """Sync DynamoDB client in the master region, for test setup."""
    import boto3

    return boto3.client("dynamodb", region_name="eu-west-2", endpoint_url=moto_endpoint)
