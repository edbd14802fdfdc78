"""
ddb-global-tables: DynamoDB global table provisioning for deployments.

After a stack deploy this package:
- Promotes every declared DynamoDB table to a global table
- Adds the deploying region as a replica
- Upgrades a legacy table list to the current global table version

Example:
    from ddb_global_tables import DeploymentDescriptor, GlobalTablesHook

    hook = GlobalTablesHook(
        DeploymentDescriptor.from_file("serverless.yml"),
        region="eu-west-2",
    )
    result = await hook.create_global_tables()
"""

from .config import (
    EXCLUDED_REGION,
    GLOBAL_TABLE_VERSION,
    MASTER_REGION,
    GlobalTablesConfig,
)
from .control_plane import DynamoDBControlPlane
from .descriptor import DeploymentDescriptor
from .exceptions import (
    ConfigurationError,
    DescriptorError,
    GlobalTablesError,
    ValidationError,
)
from .hook import GlobalTablesHook
from .models import Outcome, RunResult, Step, TableOutcome
from .orchestrator import ReplicationOrchestrator
from .targets import CurrentRegionTarget, LegacyUpgradeTarget, ReplicationTarget

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0+unknown"

__all__ = [
    # Version
    "__version__",
    # Main classes
    "GlobalTablesHook",
    "ReplicationOrchestrator",
    "DynamoDBControlPlane",
    "DeploymentDescriptor",
    "GlobalTablesConfig",
    # Targets
    "ReplicationTarget",
    "CurrentRegionTarget",
    "LegacyUpgradeTarget",
    # Models
    "RunResult",
    "TableOutcome",
    "Step",
    "Outcome",
    # Constants
    "GLOBAL_TABLE_VERSION",
    "MASTER_REGION",
    "EXCLUDED_REGION",
    # Exceptions
    "GlobalTablesError",
    "ConfigurationError",
    "ValidationError",
    "DescriptorError",
]
