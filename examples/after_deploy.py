"""Run the after-deploy hook programmatically.

Usage:
    python examples/after_deploy.py [region]
"""

import asyncio
import sys
from pathlib import Path

from ddb_global_tables import DeploymentDescriptor, GlobalTablesHook
from ddb_global_tables.log import configure_logging


async def main(region: str | None) -> None:
    descriptor = DeploymentDescriptor.from_file(Path(__file__).parent / "serverless.yml")
    hook = GlobalTablesHook(descriptor, region=region)

    result = await hook.hooks["after:deploy:deploy"]()

    for outcome in result.outcomes:
        print(f"{outcome.table_name:<32} {outcome.step.value:<24} {outcome.outcome.value}")


if __name__ == "__main__":
    configure_logging()
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else None))
