"""Deployment descriptor parsing.

The descriptor is a serverless-style document. Only three parts of it
matter here::

    provider:
      region: eu-west-2
    custom:
      dynamoDBGlobalTables:
        enabled: true
    resources:
      Resources:
        OrdersTable:
          Type: AWS::DynamoDB::Table
          Properties:
            TableName: orders
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .exceptions import DescriptorError

TABLE_RESOURCE_TYPE = "AWS::DynamoDB::Table"
SETTINGS_KEY = "dynamoDBGlobalTables"


def _mapping_at(data: Mapping[str, Any], key: str, path: str) -> Mapping[str, Any]:
    """Return ``data[key]`` as a mapping, treating a missing key as empty."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise DescriptorError(path, f"expected a mapping, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class DeploymentDescriptor:
    """Parsed deployment descriptor."""

    data: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: Any) -> DeploymentDescriptor:
        if d is None:
            return cls()
        if not isinstance(d, Mapping):
            raise DescriptorError("<root>", f"expected a mapping, got {type(d).__name__}")
        return cls(data=d)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> DeploymentDescriptor:
        import yaml

        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise DescriptorError("<root>", f"invalid YAML: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> DeploymentDescriptor:
        return cls.from_yaml(Path(path).read_text())

    @property
    def provider_region(self) -> str | None:
        """Region declared under ``provider.region``, if any."""
        provider = _mapping_at(self.data, "provider", "provider")
        region = provider.get("region")
        if region is None:
            return None
        if not isinstance(region, str):
            raise DescriptorError("provider.region", "expected a string")
        return region

    @property
    def global_tables_settings(self) -> Mapping[str, Any]:
        """The ``custom.dynamoDBGlobalTables`` section (empty if absent)."""
        custom = _mapping_at(self.data, "custom", "custom")
        return _mapping_at(custom, SETTINGS_KEY, f"custom.{SETTINGS_KEY}")

    def table_names(self) -> list[str]:
        """
        Extract the table name of every DynamoDB table resource.

        Returns:
            Table names in declaration order.

        Raises:
            DescriptorError: If the resources section is malformed
        """
        resources = _mapping_at(self.data, "resources", "resources")
        declared = _mapping_at(resources, "Resources", "resources.Resources")

        names: list[str] = []
        for logical_id, resource in declared.items():
            path = f"resources.Resources.{logical_id}"
            if not isinstance(resource, Mapping):
                raise DescriptorError(path, "expected a resource mapping")
            resource_type = resource.get("Type")
            if not resource_type:
                raise DescriptorError(f"{path}.Type", "resource has no Type")
            if resource_type != TABLE_RESOURCE_TYPE:
                continue

            properties = _mapping_at(resource, "Properties", f"{path}.Properties")
            table_name = properties.get("TableName")
            if not table_name:
                raise DescriptorError(f"{path}.Properties.TableName", "table has no TableName")
            if not isinstance(table_name, str):
                # Intrinsics like Fn::Sub are resolved by CloudFormation, not here
                raise DescriptorError(
                    f"{path}.Properties.TableName",
                    "expected a literal string table name",
                )
            names.append(table_name)

        return names
