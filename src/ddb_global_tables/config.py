"""Configuration for global table provisioning."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .exceptions import ValidationError
from .naming import normalize_region

GLOBAL_TABLE_VERSION = "2019.11.21"
"""Global table version that marks a table as fully migrated."""

MASTER_REGION = "eu-west-2"
"""Region read for version checks and used to issue legacy replica updates."""

EXCLUDED_REGION = "ca-central-1"
"""Deploying region that skips the global-table path entirely."""

UPGRADE_TABLE_NAMES: tuple[str, ...] = (
    "devmartn-user-tier-activities",
    "devmartn-user-tiers",
)
"""Tables upgraded through the legacy per-table replica path."""

UPGRADE_REGIONS: tuple[str, ...] = (
    "ca-central-1",
    "ap-southeast-2",
    "us-east-1",
    "us-east-2",
    MASTER_REGION,
)
"""Replica regions for the legacy upgrade path, in the order they are updated."""

ENV_PREFIX = "DDB_GLOBAL_TABLES_"

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


def _parse_bool(field_name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValidationError(field_name, value, "Expected a boolean (true/false)")


def _parse_str_list(field_name: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ValidationError(field_name, value, "Expected a list of strings")
    for item in value:
        if not isinstance(item, str) or not item:
            raise ValidationError(field_name, value, "Expected a list of non-empty strings")
    return tuple(value)


@dataclass(frozen=True)
class GlobalTablesConfig:
    """
    Settings that drive a provisioning run.

    Built from defaults, then the descriptor's ``custom.dynamoDBGlobalTables``
    section, then ``DDB_GLOBAL_TABLES_*`` environment variables.
    """

    enabled: bool = True
    master_region: str = MASTER_REGION
    excluded_region: str = EXCLUDED_REGION
    target_version: str = GLOBAL_TABLE_VERSION
    upgrade_table_names: tuple[str, ...] = UPGRADE_TABLE_NAMES
    upgrade_regions: tuple[str, ...] = field(default=UPGRADE_REGIONS)

    def __post_init__(self) -> None:
        normalize_region(self.master_region, "masterRegion")
        normalize_region(self.excluded_region, "excludedRegion")
        for region in self.upgrade_regions:
            normalize_region(region, "upgradeRegions")
        if not self.target_version:
            raise ValidationError("targetVersion", self.target_version, "Cannot be empty")

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> GlobalTablesConfig:
        """Create from a ``custom.dynamoDBGlobalTables`` mapping."""
        kwargs: dict[str, Any] = {}
        if "enabled" in settings:
            kwargs["enabled"] = _parse_bool("enabled", settings["enabled"])
        if "masterRegion" in settings:
            kwargs["master_region"] = settings["masterRegion"]
        if "excludedRegion" in settings:
            kwargs["excluded_region"] = settings["excludedRegion"]
        if "targetVersion" in settings:
            kwargs["target_version"] = str(settings["targetVersion"])
        if "upgradeTables" in settings:
            kwargs["upgrade_table_names"] = _parse_str_list(
                "upgradeTables", settings["upgradeTables"]
            )
        if "upgradeRegions" in settings:
            kwargs["upgrade_regions"] = _parse_str_list(
                "upgradeRegions", settings["upgradeRegions"]
            )
        return cls(**kwargs)

    def with_environment(self, environ: Mapping[str, str] | None = None) -> GlobalTablesConfig:
        """Return a copy with ``DDB_GLOBAL_TABLES_*`` overrides applied."""
        env = os.environ if environ is None else environ
        kwargs: dict[str, Any] = {
            "enabled": self.enabled,
            "master_region": self.master_region,
            "excluded_region": self.excluded_region,
            "target_version": self.target_version,
            "upgrade_table_names": self.upgrade_table_names,
            "upgrade_regions": self.upgrade_regions,
        }
        if env.get(f"{ENV_PREFIX}ENABLED"):
            kwargs["enabled"] = _parse_bool("enabled", env[f"{ENV_PREFIX}ENABLED"])
        if env.get(f"{ENV_PREFIX}MASTER_REGION"):
            kwargs["master_region"] = env[f"{ENV_PREFIX}MASTER_REGION"]
        if env.get(f"{ENV_PREFIX}EXCLUDED_REGION"):
            kwargs["excluded_region"] = env[f"{ENV_PREFIX}EXCLUDED_REGION"]
        if env.get(f"{ENV_PREFIX}TARGET_VERSION"):
            kwargs["target_version"] = env[f"{ENV_PREFIX}TARGET_VERSION"]
        return GlobalTablesConfig(**kwargs)

    @classmethod
    def load(
        cls,
        settings: Mapping[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> GlobalTablesConfig:
        """Defaults, then descriptor settings, then environment."""
        return cls.from_settings(settings or {}).with_environment(environ)
