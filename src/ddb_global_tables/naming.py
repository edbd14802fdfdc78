"""Region validation and resolution.

Region identifiers follow the AWS shape ``<area>-<direction>-<number>``,
optionally with a partition qualifier (e.g. ``us-gov-west-1``).
"""

import os
import re

from .exceptions import ConfigurationError, ValidationError

REGION_ENV_VARS = ("AWS_REGION", "AWS_DEFAULT_REGION")
"""Environment variables consulted for the deploying region, in order."""

REGION_PATTERN = re.compile(r"^[a-z]{2}(-[a-z]+)?-[a-z]+-\d+$")


def validate_region(region: str, field: str = "region") -> None:
    """
    Validate an AWS region identifier.

    Args:
        region: The region string (e.g. ``eu-west-2``)
        field: Setting name reported in the error

    Raises:
        ValidationError: If the region is empty or malformed
    """
    if not region:
        raise ValidationError(field, region, "Region cannot be empty")

    if region != region.strip():
        raise ValidationError(field, region, "Contains leading or trailing whitespace")

    if not REGION_PATTERN.match(region):
        raise ValidationError(
            field,
            region,
            "Must look like an AWS region identifier (e.g., 'eu-west-2').",
        )


def normalize_region(region: str, field: str = "region") -> str:
    """Validate region and return as-is."""
    validate_region(region, field)
    return region


def resolve_region(region: str | None, fallback: str | None = None) -> str:
    """Resolve the deploying region from explicit arg, env vars, or fallback.

    Resolution order: ``region`` arg → ``AWS_REGION`` → ``AWS_DEFAULT_REGION``
    → ``fallback`` (normally the descriptor's ``provider.region``).

    Raises:
        ConfigurationError: If no source provides a region
        ValidationError: If the resolved region is malformed
    """
    resolved = region
    if not resolved:
        for env_var in REGION_ENV_VARS:
            resolved = os.environ.get(env_var)
            if resolved:
                break
    resolved = resolved or fallback
    if not resolved:
        raise ConfigurationError(
            "Unable to determine the deploying region. Pass --region, set "
            "AWS_REGION, or set provider.region in the deployment descriptor."
        )
    if "${" in resolved:
        raise ValidationError(
            "region",
            resolved,
            "Unresolved variable in provider.region. Pass --region or set AWS_REGION.",
        )
    return normalize_region(resolved)
