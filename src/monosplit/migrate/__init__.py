from .identity import UnitIdentity, derive_identity, validate_unit_name
from .context import MigrationContext
from .pipeline import MigrationPipeline, default_stages
from .hooks import (
    PostCommitHook,
    CommandHook,
    FormatFilesHook,
    InstallPackagesHook,
)
from .exceptions import (
    MigrationError,
    InvalidUnitNameError,
    SchemaAssumptionError,
    ScaffoldManifestError,
    HookError,
)

__all__ = [
    "UnitIdentity",
    "derive_identity",
    "validate_unit_name",
    "MigrationContext",
    "MigrationPipeline",
    "default_stages",
    "PostCommitHook",
    "CommandHook",
    "FormatFilesHook",
    "InstallPackagesHook",
    "MigrationError",
    "InvalidUnitNameError",
    "SchemaAssumptionError",
    "ScaffoldManifestError",
    "HookError",
]
