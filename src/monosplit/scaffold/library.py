import logging
from pathlib import PurePosixPath
from typing import Dict, List

from monosplit.common.naming import classify, import_path_for, project_name_for
from monosplit.config import MonosplitConfig
from monosplit.workspace import (
    VirtualTree,
    dump_json,
    find_projects,
    read_json,
    write_json,
)
from .exceptions import ScaffoldCollisionError, ScaffoldError
from .protocols import ScaffoldResult

log = logging.getLogger(__name__)

TEST_RUNNERS = ("none", "jest")


class LibraryScaffolder:
    """Generates an Nx-style TypeScript library skeleton."""

    def __init__(self, config: MonosplitConfig):
        self.config = config

    def generate(
        self, tree: VirtualTree, name: str, directory: str, test_runner: str
    ) -> ScaffoldResult:
        if test_runner not in TEST_RUNNERS:
            raise ScaffoldError(
                f"Unsupported test runner '{test_runner}' "
                f"(expected one of: {', '.join(TEST_RUNNERS)})"
            )

        project_name = project_name_for(directory, name)
        root = f"{directory}/{name}"

        if tree.exists(root):
            raise ScaffoldCollisionError(project_name, root, "directory already exists")
        if project_name in find_projects(tree):
            raise ScaffoldCollisionError(
                project_name, root, "a project with this name already exists"
            )

        files = self._render_files(project_name, root, test_runner)
        for path, content in files.items():
            tree.write(path, content)

        self._register_import_path(tree, directory, name, root)
        log.debug(f"scaffolded {project_name} at {root} ({len(files)} files)")

        return ScaffoldResult(
            project_name=project_name, root=root, files=tuple(sorted(files))
        )

    def _register_import_path(
        self, tree: VirtualTree, directory: str, name: str, root: str
    ) -> None:
        table_path = self.config.alias_table
        tsconfig = read_json(tree, table_path) if tree.is_file(table_path) else {}
        compiler_options = tsconfig.setdefault("compilerOptions", {})
        paths = compiler_options.setdefault("paths", {})
        import_path = import_path_for(self.config.npm_scope, directory, name)
        paths[import_path] = [f"{root}/src/index{self.config.source_extension}"]
        compiler_options["paths"] = dict(sorted(paths.items()))
        write_json(tree, table_path, tsconfig)

    def _render_files(
        self, project_name: str, root: str, test_runner: str
    ) -> Dict[str, str]:
        offset = "/".join([".."] * len(PurePosixPath(root).parts))
        ext = self.config.source_extension
        function_name = classify(project_name)
        function_name = function_name[0].lower() + function_name[1:]

        targets: Dict[str, dict] = {
            "lint": {
                "executor": "@nrwl/linter:eslint",
                "outputs": ["{options.outputFile}"],
                "options": {"lintFilePatterns": [f"{root}/**/*.ts"]},
            }
        }
        if test_runner == "jest":
            targets["test"] = {
                "executor": "@nrwl/jest:jest",
                "outputs": [f"{{workspaceRoot}}/coverage/{{projectRoot}}"],
                "options": {
                    "jestConfig": f"{root}/jest.config.ts",
                    "passWithNoTests": True,
                },
            }

        references: List[dict] = [{"path": "./tsconfig.lib.json"}]
        if test_runner == "jest":
            references.append({"path": "./tsconfig.spec.json"})

        files: Dict[str, str] = {
            f"{root}/project.json": dump_json(
                {
                    "name": project_name,
                    "$schema": f"{offset}/node_modules/nx/schemas/project-schema.json",
                    "sourceRoot": f"{root}/src",
                    "projectType": "library",
                    "targets": targets,
                    "tags": [],
                }
            ),
            f"{root}/README.md": (
                f"# {project_name}\n\n"
                "This library was generated with [Nx](https://nx.dev).\n"
            ),
            f"{root}/src/index{ext}": f'export * from "./lib/{project_name}";\n',
            f"{root}/src/lib/{project_name}{ext}": (
                f"export function {function_name}(): string {{\n"
                f'  return "{project_name}";\n'
                "}\n"
            ),
            f"{root}/tsconfig.json": dump_json(
                {
                    "extends": f"{offset}/{self.config.alias_table}",
                    "compilerOptions": {"module": "commonjs"},
                    "files": [],
                    "include": [],
                    "references": references,
                }
            ),
            f"{root}/tsconfig.lib.json": dump_json(
                {
                    "extends": "./tsconfig.json",
                    "compilerOptions": {
                        "outDir": f"{offset}/dist/out-tsc",
                        "declaration": True,
                        "types": [],
                    },
                    "include": ["**/*.ts"],
                    "exclude": ["jest.config.ts", "**/*.spec.ts", "**/*.test.ts"],
                }
            ),
            f"{root}/.eslintrc.json": dump_json(
                {
                    "extends": [f"{offset}/.eslintrc.json"],
                    "ignorePatterns": ["!**/*"],
                    "overrides": [{"files": ["*.ts"], "rules": {}}],
                }
            ),
        }

        if test_runner == "jest":
            files[f"{root}/jest.config.ts"] = (
                "/* eslint-disable */\n"
                "export default {\n"
                f'  displayName: "{project_name}",\n'
                f'  preset: "{offset}/jest.preset.js",\n'
                '  testEnvironment: "node",\n'
                '  transform: {\n'
                '    "^.+\\\\.[tj]s$": ["ts-jest", { tsconfig: "<rootDir>/tsconfig.spec.json" }],\n'
                "  },\n"
                '  moduleFileExtensions: ["ts", "js", "html"],\n'
                f'  coverageDirectory: "{offset}/coverage/{root}",\n'
                "};\n"
            )
            files[f"{root}/tsconfig.spec.json"] = dump_json(
                {
                    "extends": "./tsconfig.json",
                    "compilerOptions": {
                        "outDir": f"{offset}/dist/out-tsc",
                        "module": "commonjs",
                        "types": ["jest", "node"],
                    },
                    "include": [
                        "jest.config.ts",
                        "src/**/*.test.ts",
                        "src/**/*.spec.ts",
                        "src/**/*.d.ts",
                    ],
                }
            )
            files[f"{root}/src/lib/{project_name}.spec{ext}"] = (
                f'import {{ {function_name} }} from "./{project_name}";\n\n'
                f'describe("{function_name}", () => {{\n'
                '  it("should work", () => {\n'
                f'    expect({function_name}()).toEqual("{project_name}");\n'
                "  });\n"
                "});\n"
            )

        return files
