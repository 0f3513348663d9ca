from typing import List, Tuple

from monosplit.common import bus
from monosplit.config import MonosplitConfig
from monosplit.migrate.context import MigrationContext
from monosplit.migrate.exceptions import (
    ScaffoldManifestError,
    SchemaAssumptionError,
)
from monosplit.migrate.identity import UnitIdentity
from monosplit.needle import L
from monosplit.workspace import update_json
from .base import AbstractStage, StageFootprint

LEGACY_GITIGNORE = """\
# README.md is produced by the compile target, which copies it from the
# canonical library. The canonical library's README.md is the source of truth.
README.md
"""

TESTS_DIR = "__tests__"


def relocations(
    identity: UnitIdentity, config: MonosplitConfig
) -> List[Tuple[str, str]]:
    ext = config.source_extension
    return [
        (identity.flat("README.md"), identity.canonical("README.md")),
        (identity.flat("CHANGELOG.md"), identity.legacy("CHANGELOG.md")),
        (identity.flat("index.js"), identity.canonical(f"src/index{ext}")),
        (identity.flat("command.js"), identity.canonical(f"src/command{ext}")),
        (identity.flat(TESTS_DIR), identity.legacy(TESTS_DIR)),
    ]


def scaffold_stubs(
    identity: UnitIdentity, config: MonosplitConfig
) -> List[Tuple[str, str, bool]]:
    """(project, path, required) for every scaffold placeholder to remove."""
    ext = config.source_extension
    return [
        (
            identity.canonical_project,
            identity.canonical(f"src/lib/{identity.canonical_project}{ext}"),
            True,
        ),
        (
            identity.legacy_project,
            identity.legacy(f"src/lib/{identity.legacy_project}{ext}"),
            True,
        ),
        (identity.legacy_project, identity.legacy("README.md"), True),
        (
            identity.legacy_project,
            identity.legacy(f"src/lib/{identity.legacy_project}.spec{ext}"),
            False,
        ),
    ]


class RelocateStage(AbstractStage):
    """Moves the unit's real files into the new roots and clears scaffold stubs."""

    name = "relocate"

    def footprint(
        self, identity: UnitIdentity, config: MonosplitConfig
    ) -> StageFootprint:
        moves = relocations(identity, config)
        stubs = tuple(path for _, path, _ in scaffold_stubs(identity, config))
        configs = (
            identity.legacy("tsconfig.lib.json"),
            identity.legacy("tsconfig.spec.json"),
        )
        return StageFootprint(
            reads=tuple(src for src, _ in moves) + configs,
            writes=tuple(p for move in moves for p in move)
            + stubs
            + configs
            + (identity.legacy(".gitignore"),),
        )

    def apply(self, ctx: MigrationContext) -> None:
        identity, tree = ctx.identity, ctx.tree

        # Stubs are checked against the scaffold output before any move.
        stubs = self._resolve_stubs(ctx)

        for src, dest in relocations(identity, ctx.config):
            tree.rename(src, dest)
            bus.debug(L.migrate.relocate.moved, src=src, dest=dest)

        for path in stubs:
            tree.delete(path)
            bus.debug(L.migrate.relocate.stub_removed, path=path)

        tree.write(identity.legacy(".gitignore"), LEGACY_GITIGNORE)
        update_json(tree, identity.legacy("tsconfig.lib.json"), _with_node_types)
        spec_config = identity.legacy("tsconfig.spec.json")
        update_json(
            tree,
            spec_config,
            lambda doc: _with_legacy_tests(
                doc, spec_config, ctx.config.source_extension
            ),
        )

        leftovers = tree.iter_files(identity.flat_root)
        if leftovers:
            bus.warning(
                L.migrate.relocate.leftovers,
                root=identity.flat_root,
                files=", ".join(leftovers),
            )

    def _resolve_stubs(self, ctx: MigrationContext) -> List[str]:
        to_delete: List[str] = []
        unexpected: List[str] = []
        for project, path, required in scaffold_stubs(ctx.identity, ctx.config):
            result = ctx.scaffolds.get(project)
            if result is not None and result.created(path):
                to_delete.append(path)
            elif required:
                unexpected.append(path)
        if unexpected:
            raise ScaffoldManifestError(unexpected)
        return to_delete


def _with_node_types(tsconfig: dict) -> dict:
    return {
        **tsconfig,
        "compilerOptions": {**tsconfig.get("compilerOptions", {}), "types": ["node"]},
    }


def _with_legacy_tests(tsconfig: dict, path: str, ext: str) -> dict:
    include = tsconfig.get("include")
    if not isinstance(include, list):
        raise SchemaAssumptionError(path, "missing 'include' list")
    pattern = f"{TESTS_DIR}/**/*{ext}"
    if pattern in include:
        return tsconfig
    return {**tsconfig, "include": [*include, pattern]}
