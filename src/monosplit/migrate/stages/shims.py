from monosplit.config import MonosplitConfig
from monosplit.migrate.context import MigrationContext
from monosplit.migrate.exceptions import SchemaAssumptionError
from monosplit.migrate.identity import UnitIdentity
from monosplit.workspace import read_json
from .base import AbstractStage, StageFootprint

ESLINT_DISABLE = "// eslint-disable-next-line @typescript-eslint/no-var-requires\n"


def render_index_shim(identity: UnitIdentity) -> str:
    symbol = identity.command_symbol
    return (
        ESLINT_DISABLE
        + f'const index = require("{identity.module_path}");\n'
        + "\n"
        + "module.exports = index;\n"
        + f"module.exports.{symbol} = index.{symbol};\n"
    )


def render_command_shim(identity: UnitIdentity) -> str:
    return (
        ESLINT_DISABLE
        + f'const command = require("{identity.module_path}/command");\n'
        + "\n"
        + "module.exports = command;\n"
    )


class ShimStage(AbstractStage):
    """Writes the forwarding sources that keep the legacy import path alive."""

    name = "shims"

    def _targets(self, identity: UnitIdentity, config: MonosplitConfig):
        ext = config.source_extension
        return (
            identity.legacy(f"src/index{ext}"),
            identity.legacy(f"src/command{ext}"),
        )

    def footprint(
        self, identity: UnitIdentity, config: MonosplitConfig
    ) -> StageFootprint:
        return StageFootprint(
            reads=(config.alias_table,), writes=self._targets(identity, config)
        )

    def apply(self, ctx: MigrationContext) -> None:
        identity = ctx.identity
        table = ctx.config.alias_table
        paths = read_json(ctx.tree, table).get("compilerOptions", {}).get("paths", {})
        for key in identity.unit_aliases():
            if key not in paths:
                raise SchemaAssumptionError(
                    table, f"alias '{key}' must exist before shims"
                )

        index_path, command_path = self._targets(identity, ctx.config)
        ctx.tree.write(index_path, render_index_shim(identity))
        ctx.tree.write(command_path, render_command_shim(identity))
