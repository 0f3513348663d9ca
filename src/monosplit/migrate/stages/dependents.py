from typing import Any, Dict

from monosplit.common import bus
from monosplit.config import MonosplitConfig
from monosplit.migrate.context import MigrationContext
from monosplit.migrate.exceptions import SchemaAssumptionError
from monosplit.migrate.identity import UnitIdentity
from monosplit.needle import L
from monosplit.workspace import (
    read_project_configuration,
    update_json,
    update_project_configuration,
)
from monosplit.workspace.projects import find_project_file
from .base import AbstractStage, StageFootprint


class DependentsStage(AbstractStage):
    """Repoints the e2e project and the umbrella package at the new unit."""

    name = "dependents"

    def footprint(
        self, identity: UnitIdentity, config: MonosplitConfig
    ) -> StageFootprint:
        e2e_config = f"<project {identity.e2e_project}>"
        return StageFootprint(
            reads=(e2e_config, config.umbrella_manifest),
            writes=(e2e_config, config.umbrella_manifest),
        )

    def apply(self, ctx: MigrationContext) -> None:
        self._fix_e2e_project(ctx)
        self._fix_umbrella_manifest(ctx)

    def _fix_e2e_project(self, ctx: MigrationContext) -> None:
        identity = ctx.identity
        config = read_project_configuration(ctx.tree, identity.e2e_project)
        deps = config.get("implicitDependencies")
        if not isinstance(deps, list):
            raise SchemaAssumptionError(
                find_project_file(ctx.tree, identity.e2e_project) or "project.json",
                "missing 'implicitDependencies' list",
            )
        update_project_configuration(
            ctx.tree,
            identity.e2e_project,
            {
                **config,
                "implicitDependencies": [
                    identity.canonical_project if dep == identity.name else dep
                    for dep in deps
                ],
            },
        )

    def _fix_umbrella_manifest(self, ctx: MigrationContext) -> None:
        identity = ctx.identity
        path = ctx.config.umbrella_manifest

        def _update(manifest: Dict[str, Any]) -> Dict[str, Any]:
            deps = manifest.get("dependencies")
            if not isinstance(deps, dict):
                raise SchemaAssumptionError(path, "missing 'dependencies' map")
            if identity.legacy_package not in deps:
                bus.warning(
                    L.migrate.dependents.umbrella_missing,
                    package=identity.legacy_package,
                    path=path,
                )
                return manifest
            return {
                **manifest,
                "dependencies": {
                    k: v for k, v in deps.items() if k != identity.legacy_package
                },
            }

        update_json(ctx.tree, path, _update)
