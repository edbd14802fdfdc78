"""Command-line interface for DynamoDB global table provisioning."""

import asyncio
import sys

import click

from .descriptor import DeploymentDescriptor
from .exceptions import ConfigurationError
from .hook import GlobalTablesHook
from .log import configure_logging
from .models import Outcome


def _load_descriptor(path: str) -> DeploymentDescriptor:
    try:
        return DeploymentDescriptor.from_file(path)
    except ConfigurationError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)


descriptor_option = click.option(
    "--descriptor",
    "-d",
    type=click.Path(exists=True, dir_okay=False),
    default="serverless.yml",
    show_default=True,
    help="Deployment descriptor (serverless-style YAML)",
)
region_option = click.option(
    "--region",
    help="Deploying region (default: AWS_REGION, AWS_DEFAULT_REGION, then provider.region)",
)
endpoint_option = click.option(
    "--endpoint-url",
    help=(
        "AWS endpoint URL "
        "(e.g., http://localhost:4566 for LocalStack, or other AWS-compatible services)"
    ),
)


@click.group()
@click.version_option(package_name="ddb-global-tables")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """DynamoDB global tables provisioning CLI."""
    configure_logging(verbose)


@cli.command()
@descriptor_option
@region_option
@endpoint_option
def deploy(descriptor: str, region: str | None, endpoint_url: str | None) -> None:
    """Create global tables and replicas after a stack deploy."""
    hook = GlobalTablesHook(
        _load_descriptor(descriptor),
        region=region,
        endpoint_url=endpoint_url,
    )

    try:
        result = asyncio.run(hook.create_global_tables())
    except Exception as e:
        click.echo(f"✗ Global table provisioning failed: {e}", err=True)
        sys.exit(1)

    if not result.enabled:
        return

    already = sum(1 for o in result.outcomes if o.outcome == Outcome.ALREADY_EXISTS)
    click.echo(
        f"✓ Global tables provisioned in {result.region} "
        f"({result.applied} applied, {already} already in place)"
    )


@cli.command()
@descriptor_option
def tables(descriptor: str) -> None:
    """List the DynamoDB tables declared in the descriptor."""
    try:
        names = _load_descriptor(descriptor).table_names()
    except ConfigurationError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    if not names:
        click.echo("No DynamoDB tables declared")
        return
    for name in names:
        click.echo(name)


@cli.command()
@descriptor_option
@endpoint_option
def status(descriptor: str, endpoint_url: str | None) -> None:
    """Show the global table version of every managed table."""
    hook = GlobalTablesHook(_load_descriptor(descriptor), endpoint_url=endpoint_url)

    try:
        config = hook.load_config()
        versions = asyncio.run(hook.table_versions())
    except Exception as e:
        click.echo(f"✗ Failed to get status: {e}", err=True)
        sys.exit(1)

    click.echo(f"Master region: {config.master_region}")
    click.echo(f"Target version: {config.target_version}")
    click.echo()
    for table_name, version in versions.items():
        marker = "✓" if version == config.target_version else "✗"
        click.echo(f"{marker} {table_name}: {version or 'none'}")


if __name__ == "__main__":
    cli()
