"""Exceptions for ddb-global-tables.

Remote DynamoDB failures are deliberately absent from this hierarchy:
``botocore.exceptions.ClientError`` propagates to the caller unchanged.
"""

from typing import Any

# ---------------------------------------------------------------------------
# Base Exception
# ---------------------------------------------------------------------------


class GlobalTablesError(Exception):
    """
    Base exception for all ddb-global-tables errors.

    All exceptions raised by this library inherit from this class,
    allowing callers to catch all library-specific errors with a single
    except clause.
    """

    pass


# ---------------------------------------------------------------------------
# Category Exceptions
# ---------------------------------------------------------------------------


class ConfigurationError(GlobalTablesError):
    """
    Base exception for configuration-related errors.

    This includes malformed deployment descriptors, invalid settings in the
    ``custom.dynamoDBGlobalTables`` section and unresolvable regions.
    """

    pass


# ---------------------------------------------------------------------------
# Configuration Exceptions
# ---------------------------------------------------------------------------


class ValidationError(ConfigurationError):
    """
    Raised when a configuration value fails validation.

    Attributes:
        field: The setting that failed validation
        value: The offending value
        reason: Human-readable explanation
    """

    def __init__(self, field: str, value: Any, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class DescriptorError(ConfigurationError):
    """Raised when the deployment descriptor is malformed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed deployment descriptor at '{path}': {reason}")
