from monosplit.common import bus
from monosplit.config import MonosplitConfig
from monosplit.migrate.context import MigrationContext
from monosplit.migrate.exceptions import SchemaAssumptionError
from monosplit.migrate.identity import UnitIdentity
from monosplit.needle import L
from .base import AbstractStage, StageFootprint


class ScaffoldStage(AbstractStage):
    """Creates the canonical library and the legacy-structure library."""

    name = "scaffold"

    def footprint(
        self, identity: UnitIdentity, config: MonosplitConfig
    ) -> StageFootprint:
        return StageFootprint(
            reads=(config.alias_table,),
            writes=(
                f"{identity.canonical_root}/",
                f"{identity.legacy_root}/",
                config.alias_table,
            ),
        )

    def apply(self, ctx: MigrationContext) -> None:
        identity = ctx.identity
        plan = [
            (ctx.config.canonical_dir, "none", identity.canonical_project),
            (ctx.config.legacy_dir, "jest", identity.legacy_project),
        ]
        for directory, test_runner, expected_project in plan:
            result = ctx.scaffolder.generate(
                ctx.tree, identity.name, directory, test_runner
            )
            if result.project_name != expected_project:
                raise SchemaAssumptionError(
                    f"{result.root}/project.json",
                    f"scaffolder created project '{result.project_name}', "
                    f"expected '{expected_project}'",
                )
            ctx.scaffolds[result.project_name] = result
            bus.debug(
                L.migrate.scaffold.created,
                project=result.project_name,
                root=result.root,
                count=len(result.files),
            )
