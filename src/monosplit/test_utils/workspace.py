import json
from pathlib import Path
from textwrap import dedent
from typing import Any, Dict, List, Optional

import tomli_w


class WorkspaceFactory:
    """Builds a legacy flat-package monorepo on disk for tests."""

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._files: Dict[str, str] = {}
        self._config: Dict[str, Any] = {}
        self._aliases: Dict[str, List[str]] = {}
        self._umbrella_deps: Dict[str, str] = {}

    def with_config(self, config: Dict[str, Any]) -> "WorkspaceFactory":
        self._config.update(config)
        return self

    def with_source(self, path: str, content: str) -> "WorkspaceFactory":
        self._files[path] = dedent(content)
        return self

    def with_json(self, path: str, data: Dict[str, Any]) -> "WorkspaceFactory":
        self._files[path] = json.dumps(data, indent=2) + "\n"
        return self

    def with_alias(self, key: str, target: str) -> "WorkspaceFactory":
        self._aliases[key] = [target]
        return self

    def with_umbrella_dependency(
        self, package: str, version: str = "6.4.1"
    ) -> "WorkspaceFactory":
        self._umbrella_deps[package] = version
        return self

    def with_legacy_command(
        self,
        name: str,
        manifest: Optional[Dict[str, Any]] = None,
        with_tests: bool = True,
        extra_files: Optional[Dict[str, str]] = None,
    ) -> "WorkspaceFactory":
        root = f"commands/{name}"
        default_manifest: Dict[str, Any] = {
            "name": f"@lerna/{name}",
            "version": "6.4.1",
            "description": f"Lerna's {name} command",
            "main": "index.js",
            "scripts": {"test": 'echo "Run tests from root" && exit 1'},
            "files": ["command.js", "index.js", "lib"],
            "repository": {
                "type": "git",
                "url": "git+https://github.com/lerna/lerna.git",
                "directory": root,
            },
            "dependencies": {"@lerna/command": "file:../../core/command"},
        }
        self.with_json(f"{root}/package.json", manifest or default_manifest)
        self.with_source(f"{root}/README.md", f"# `@lerna/{name}`\n")
        self.with_source(f"{root}/CHANGELOG.md", "# Change Log\n")
        self.with_source(
            f"{root}/index.js",
            "module.exports = factory;\nmodule.exports.Command = Command;\n",
        )
        self.with_source(f"{root}/command.js", f'exports.command = "{name}";\n')
        if with_tests:
            self.with_source(
                f"{root}/__tests__/{name}-command.test.js",
                f'describe("{name}", () => {{}});\n',
            )
        for rel, content in (extra_files or {}).items():
            self.with_source(f"{root}/{rel}", content)
        self.with_umbrella_dependency(f"@lerna/{name}")
        return self

    def with_e2e_project(
        self, name: str, implicit_dependencies: Optional[List[str]] = None
    ) -> "WorkspaceFactory":
        deps = implicit_dependencies if implicit_dependencies is not None else [name]
        return self.with_json(
            f"e2e/{name}/project.json",
            {
                "name": f"e2e-{name}",
                "$schema": "../../node_modules/nx/schemas/project-schema.json",
                "projectType": "application",
                "implicitDependencies": deps,
                "targets": {"e2e": {"executor": "nx:run-commands"}},
            },
        )

    def build(self) -> Path:
        self.root_path.mkdir(parents=True, exist_ok=True)

        if "tsconfig.base.json" not in self._files:
            self.with_json(
                "tsconfig.base.json",
                {
                    "compileOnSave": False,
                    "compilerOptions": {
                        "rootDir": ".",
                        "baseUrl": ".",
                        "paths": dict(sorted(self._aliases.items())),
                    },
                    "exclude": ["node_modules", "tmp"],
                },
            )
        if "packages/lerna/package.json" not in self._files:
            self.with_json(
                "packages/lerna/package.json",
                {
                    "name": "lerna",
                    "version": "6.4.1",
                    "dependencies": dict(sorted(self._umbrella_deps.items())),
                },
            )

        for path, content in self._files.items():
            output_path = self.root_path / path
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding="utf-8")

        if self._config:
            with (self.root_path / "monosplit.toml").open("wb") as f:
                tomli_w.dump(self._config, f)

        return self.root_path
