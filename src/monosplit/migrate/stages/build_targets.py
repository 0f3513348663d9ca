from typing import Any, Dict

from monosplit.config import MonosplitConfig
from monosplit.migrate.context import MigrationContext
from monosplit.migrate.exceptions import SchemaAssumptionError
from monosplit.migrate.identity import UnitIdentity
from monosplit.workspace import (
    read_project_configuration,
    update_project_configuration,
)
from .base import AbstractStage, StageFootprint

SOURCE_FOLDER_SUFFIX = "/src"


def strip_source_folder(source_root: str) -> str:
    if source_root.endswith(SOURCE_FOLDER_SUFFIX):
        return source_root[: -len(SOURCE_FOLDER_SUFFIX)]
    return source_root


def build_targets(
    source_root: str, identity: UnitIdentity, config: MonosplitConfig
) -> Dict[str, Any]:
    output_path = f"{source_root}/{identity.output_dir}"
    ext = config.source_extension
    return {
        "build": {
            "dependsOn": ["compile"],
            "executor": "nx:run-commands",
            "options": {
                "cwd": output_path,
                "parallel": False,
                # The compiled output must not look like a publishable package.
                "commands": ["rm -rf package.json"],
            },
        },
        "compile": {
            "executor": "@nrwl/esbuild:esbuild",
            "outputs": ["{options.outputPath}"],
            "options": {
                "outputPath": output_path,
                "main": f"{source_root}/src/index{ext}",
                "tsConfig": f"{source_root}/tsconfig.lib.json",
                "assets": [
                    {
                        "input": identity.canonical_root,
                        "glob": "README.md",
                        "output": "../",
                    }
                ],
                "thirdParty": False,
                "platform": "node",
                "format": ["cjs"],
                "additionalEntryPoints": [f"{source_root}/src/command{ext}"],
                "esbuildOptions": {
                    "external": ["*package.json"],
                    "outExtension": {".js": ".js"},
                },
            },
        },
    }


class BuildTargetStage(AbstractStage):
    """Turns the legacy-structure library into a compile-then-package application."""

    name = "build-targets"

    def footprint(
        self, identity: UnitIdentity, config: MonosplitConfig
    ) -> StageFootprint:
        project_file = identity.legacy("project.json")
        return StageFootprint(reads=(project_file,), writes=(project_file,))

    def apply(self, ctx: MigrationContext) -> None:
        identity = ctx.identity
        config = read_project_configuration(ctx.tree, identity.legacy_project)

        declared = config.get("sourceRoot")
        if not isinstance(declared, str):
            raise SchemaAssumptionError(
                identity.legacy("project.json"), "missing 'sourceRoot'"
            )
        source_root = strip_source_folder(declared)
        if source_root != identity.legacy_root:
            raise SchemaAssumptionError(
                identity.legacy("project.json"),
                f"sourceRoot resolves to '{source_root}', "
                f"expected '{identity.legacy_root}'",
            )

        existing_targets = config.get("targets") or {}
        targets = {
            **existing_targets,
            **build_targets(source_root, identity, ctx.config),
        }
        update_project_configuration(
            ctx.tree,
            identity.legacy_project,
            {
                **config,
                "sourceRoot": source_root,
                "projectType": "application",
                "targets": targets,
            },
        )
