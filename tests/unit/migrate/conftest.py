import json

import pytest
from monosplit.config import MonosplitConfig
from monosplit.migrate import MigrationContext, derive_identity
from monosplit.migrate.stages import ScaffoldStage
from monosplit.scaffold import LibraryScaffolder
from monosplit.workspace import VirtualTree


def _json(data):
    return json.dumps(data, indent=2) + "\n"


@pytest.fixture
def config():
    return MonosplitConfig()


@pytest.fixture
def legacy_files():
    return {
        "commands/version/package.json": _json(
            {
                "name": "@lerna/version",
                "version": "6.4.1",
                "main": "index.js",
                "scripts": {"test": "exit 1"},
                "files": ["command.js", "index.js", "lib"],
                "repository": {
                    "type": "git",
                    "url": "git+https://github.com/lerna/lerna.git",
                    "directory": "commands/version",
                },
                "dependencies": {"@lerna/command": "file:../../core/command"},
            }
        ),
        "commands/version/README.md": "# `@lerna/version`\n",
        "commands/version/CHANGELOG.md": "# Change Log\n",
        "commands/version/index.js": "module.exports = factory;\n",
        "commands/version/command.js": 'exports.command = "version";\n',
        "commands/version/__tests__/version-command.test.js": "describe();\n",
        "e2e/version/project.json": _json(
            {"name": "e2e-version", "implicitDependencies": ["version", "core"]}
        ),
        "packages/lerna/package.json": _json(
            {
                "name": "lerna",
                "dependencies": {"@lerna/version": "6.4.1", "@lerna/init": "6.4.1"},
            }
        ),
        "tsconfig.base.json": _json(
            {
                "compilerOptions": {
                    "baseUrl": ".",
                    "paths": {
                        "@lerna/core": ["libs/core/src/index.ts"],
                        "@lerna/legacy-package-management": [
                            "libs/legacy-package-management/src/index.ts"
                        ],
                    },
                }
            }
        ),
    }


@pytest.fixture
def ctx(legacy_files, config):
    return MigrationContext(
        tree=VirtualTree.in_memory(legacy_files),
        identity=derive_identity("version", config),
        config=config,
        scaffolder=LibraryScaffolder(config),
    )


@pytest.fixture
def scaffolded_ctx(ctx):
    ScaffoldStage().apply(ctx)
    return ctx
