import re
from dataclasses import dataclass

from monosplit.common.naming import classify, import_path_for, project_name_for
from monosplit.config import MonosplitConfig
from .exceptions import InvalidUnitNameError

_VALID_NAME = re.compile(r"^[A-Za-z0-9]+(?:[._-][A-Za-z0-9]+)*$")


@dataclass(frozen=True)
class UnitIdentity:
    """Every path and identifier of one migration, derived once from the name."""

    name: str
    classified: str
    command_symbol: str
    flat_root: str
    canonical_root: str
    canonical_project: str
    canonical_source_root: str
    legacy_root: str
    legacy_project: str
    e2e_project: str
    legacy_package: str
    module_path: str
    module_target: str
    legacy_module_path: str
    alias_key: str
    alias_target: str
    output_dir: str

    def flat(self, filename: str) -> str:
        return f"{self.flat_root}/{filename}"

    def canonical(self, filename: str) -> str:
        return f"{self.canonical_root}/{filename}"

    def legacy(self, filename: str) -> str:
        return f"{self.legacy_root}/{filename}"

    def owns_alias(self, key: str) -> bool:
        return key == self.module_path or key.startswith(self.module_path + "/")

    def unit_aliases(self) -> dict:
        """Root import and sub-path pattern, both into the canonical library."""
        return {
            self.module_path: [self.module_target],
            self.alias_key: [self.alias_target],
        }


def validate_unit_name(name: str) -> None:
    if not name:
        raise InvalidUnitNameError(name, "name must not be empty")
    if "/" in name or "\\" in name:
        raise InvalidUnitNameError(name, "name must not contain path separators")
    if not _VALID_NAME.match(name):
        raise InvalidUnitNameError(
            name,
            "use letters and digits, optionally joined by single '-', '_' or '.'",
        )


def derive_identity(name: str, config: MonosplitConfig) -> UnitIdentity:
    validate_unit_name(name)

    classified = classify(name)
    canonical_root = f"{config.canonical_dir}/{name}"
    module_path = import_path_for(config.npm_scope, config.canonical_dir, name)

    return UnitIdentity(
        name=name,
        classified=classified,
        command_symbol=f"{classified}Command",
        flat_root=f"{config.flat_dir}/{name}",
        canonical_root=canonical_root,
        canonical_project=project_name_for(config.canonical_dir, name),
        canonical_source_root=f"{canonical_root}/src",
        legacy_root=f"{config.legacy_dir}/{name}",
        legacy_project=project_name_for(config.legacy_dir, name),
        e2e_project=f"{config.e2e_prefix}-{name}",
        legacy_package=f"{config.npm_scope}/{name}",
        module_path=module_path,
        module_target=f"{canonical_root}/src/index{config.source_extension}",
        legacy_module_path=import_path_for(config.npm_scope, config.legacy_dir, name),
        alias_key=f"{module_path}/*",
        alias_target=f"{canonical_root}/src/*",
        output_dir=config.output_dir,
    )
