from typing import Any, Dict

from monosplit.config import MonosplitConfig
from monosplit.migrate.context import MigrationContext
from monosplit.migrate.exceptions import SchemaAssumptionError
from monosplit.migrate.identity import UnitIdentity
from monosplit.workspace import MissingPathError, update_json
from .base import AbstractStage, StageFootprint


def rewrite_aliases(
    paths: Dict[str, Any], identity: UnitIdentity, legacy_marker: str
) -> Dict[str, Any]:
    unit = identity.unit_aliases()
    kept = {
        k: v
        for k, v in paths.items()
        if not identity.owns_alias(k)
        and k != identity.legacy_module_path
        and legacy_marker not in k
    }
    # The unit's own keys survive even when its name contains the marker.
    return dict(sorted({**kept, **unit}.items()))


class AliasStage(AbstractStage):
    """Points the unit's module alias at the canonical library."""

    name = "aliases"

    def footprint(
        self, identity: UnitIdentity, config: MonosplitConfig
    ) -> StageFootprint:
        return StageFootprint(
            reads=(config.alias_table, f"{identity.canonical_source_root}/"),
            writes=(config.alias_table,),
        )

    def apply(self, ctx: MigrationContext) -> None:
        identity = ctx.identity
        table = ctx.config.alias_table

        if not ctx.tree.is_dir(identity.canonical_source_root):
            raise MissingPathError(identity.canonical_source_root, "alias")

        def _update(tsconfig: Dict[str, Any]) -> Dict[str, Any]:
            compiler_options = tsconfig.get("compilerOptions")
            paths = (
                compiler_options.get("paths")
                if isinstance(compiler_options, dict)
                else None
            )
            if not isinstance(paths, dict):
                raise SchemaAssumptionError(table, "missing 'compilerOptions.paths'")
            return {
                **tsconfig,
                "compilerOptions": {
                    **compiler_options,
                    "paths": rewrite_aliases(
                        paths, identity, ctx.config.legacy_marker
                    ),
                },
            }

        update_json(ctx.tree, table, _update)
