import json
from pathlib import Path
from typing import Dict
from unittest.mock import Mock

from monosplit.app import MigrateRunner
from monosplit.migrate import HookError, PostCommitHook
from monosplit.needle import L


def _snapshot(root: Path) -> Dict[str, str]:
    return {
        p.relative_to(root).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


def _load(root: Path, path: str) -> dict:
    return json.loads((root / path).read_text(encoding="utf-8"))


def _build_lerna_workspace(factory):
    return (
        factory.with_legacy_command("version")
        .with_legacy_command("init", with_tests=False)
        .with_e2e_project("version", ["version", "init"])
        .with_alias("@lerna/core", "libs/core/src/index.ts")
        .with_alias("@lerna/legacy-package-management", "libs/lpm/src/index.ts")
        .build()
    )


def test_version_end_to_end(workspace_factory, spy_bus):
    root = _build_lerna_workspace(workspace_factory)

    assert MigrateRunner(root).run("version", hooks=[]) is True

    # Canonical library: no test runner, real sources moved in
    canonical = root / "libs" / "commands" / "version"
    assert not (canonical / "jest.config.ts").exists()
    assert (canonical / "README.md").read_text(encoding="utf-8") == (
        "# `@lerna/version`\n"
    )
    assert (canonical / "src" / "index.ts").exists()
    assert (canonical / "src" / "command.ts").exists()
    assert not (canonical / "src" / "lib").exists()

    # Legacy-structure application
    legacy = "packages/legacy-structure/commands/version"
    project = _load(root, f"{legacy}/project.json")
    assert project["name"] == "legacy-structure-commands-version"
    assert project["projectType"] == "application"
    assert {"build", "compile", "lint", "test"} <= set(project["targets"])

    manifest = _load(root, f"{legacy}/package.json")
    assert "scripts" not in manifest
    assert set(manifest["exports"]) == {".", "./command"}
    for entry in manifest["exports"].values():
        assert entry["import"].startswith("./dist/")
        assert entry["require"].startswith("./dist/")
    assert manifest["repository"]["directory"] == legacy
    assert (root / legacy / "CHANGELOG.md").exists()
    assert (root / legacy / "__tests__" / "version-command.test.js").exists()
    assert not (root / legacy / "README.md").exists()
    assert "VersionCommand" in (root / legacy / "src" / "index.ts").read_text(
        encoding="utf-8"
    )

    # Alias table
    paths = _load(root, "tsconfig.base.json")["compilerOptions"]["paths"]
    unit_keys = [k for k in paths if k.startswith("@lerna/commands/version")]
    assert unit_keys == ["@lerna/commands/version", "@lerna/commands/version/*"]
    assert paths["@lerna/commands/version"] == ["libs/commands/version/src/index.ts"]
    assert not [k for k in paths if "legacy" in k]

    # Dependents
    umbrella = _load(root, "packages/lerna/package.json")
    assert "@lerna/version" not in umbrella["dependencies"]
    assert "@lerna/init" in umbrella["dependencies"]
    e2e = _load(root, "e2e/version/project.json")
    assert e2e["implicitDependencies"] == ["commands-version", "init"]

    # The flat directory is gone; other units are untouched
    assert not (root / "commands" / "version").exists()
    assert (root / "commands" / "init" / "index.js").exists()

    spy_bus.assert_id_called(L.migrate.run.success, level="success")


def test_second_run_aborts_at_scaffolding(workspace_factory, spy_bus):
    root = _build_lerna_workspace(workspace_factory)
    assert MigrateRunner(root).run("version", hooks=[]) is True
    before = _snapshot(root)

    assert MigrateRunner(root).run("version", hooks=[]) is False

    assert _snapshot(root) == before
    failures = [m for m in spy_bus.get_messages() if m["level"] == "error"]
    assert failures[-1]["id"] == "migrate.run.failed"
    assert "already exists" in failures[-1]["params"]["error"]


def test_dry_run_writes_nothing(workspace_factory, spy_bus):
    root = _build_lerna_workspace(workspace_factory)
    before = _snapshot(root)

    assert MigrateRunner(root).run("version", dry_run=True, hooks=[]) is True

    assert _snapshot(root) == before
    spy_bus.assert_id_called(L.migrate.run.preview_header, level="warning")
    assert "[DELETE] commands/version/index.js" in spy_bus.ids("info")


def test_declined_confirmation_writes_nothing(workspace_factory, spy_bus):
    root = _build_lerna_workspace(workspace_factory)
    before = _snapshot(root)
    confirm = Mock(return_value=False)

    assert MigrateRunner(root).run("version", confirm_callback=confirm) is False

    confirm.assert_called_once()
    assert _snapshot(root) == before
    spy_bus.assert_id_called(L.migrate.run.aborted, level="error")


def test_core_failure_skips_hooks(workspace_factory, spy_bus):
    root = (
        workspace_factory.with_legacy_command("version")
        .with_alias("@lerna/core", "libs/core/src/index.ts")
        .build()
    )
    hook = Mock(spec=PostCommitHook)
    before = _snapshot(root)

    # No e2e-version project exists
    assert MigrateRunner(root).run("version", hooks=[hook]) is False

    hook.run.assert_not_called()
    assert _snapshot(root) == before
    spy_bus.assert_id_called(L.migrate.run.failed, level="error")


def test_hook_failure_is_reported_after_commit(workspace_factory, spy_bus):
    root = _build_lerna_workspace(workspace_factory)
    failing = Mock(spec=PostCommitHook)
    failing.name = "install"
    failing.run.side_effect = HookError("install", "exited with status 1")
    never = Mock(spec=PostCommitHook)
    never.name = "later"

    assert MigrateRunner(root).run("version", hooks=[failing, never]) is False

    # The transaction itself was committed
    assert (root / "libs" / "commands" / "version" / "project.json").exists()
    failing.run.assert_called_once()
    touched = failing.run.call_args.args[1]
    assert Path("tsconfig.base.json") in touched
    never.run.assert_not_called()
    spy_bus.assert_id_called(L.migrate.run.committed, level="success")
    spy_bus.assert_id_called(L.migrate.hook.failed, level="error")
    assert "migrate.run.failed" not in spy_bus.ids("error")


def test_invalid_name_is_rejected(workspace_factory, spy_bus):
    root = _build_lerna_workspace(workspace_factory)

    assert MigrateRunner(root).run("../version", hooks=[]) is False
    spy_bus.assert_id_called(L.migrate.run.failed, level="error")


def test_custom_layout_from_config(workspace_factory):
    root = (
        workspace_factory.with_config(
            {"canonical_dir": "libs/cli", "legacy_dir": "packages/compat"}
        )
        .with_legacy_command("init")
        .with_e2e_project("init")
        .build()
    )

    assert MigrateRunner(root).run("init", hooks=[]) is True

    project = _load(root, "packages/compat/init/project.json")
    assert project["name"] == "compat-init"
    paths = _load(root, "tsconfig.base.json")["compilerOptions"]["paths"]
    assert paths == {
        "@lerna/cli/init": ["libs/cli/init/src/index.ts"],
        "@lerna/cli/init/*": ["libs/cli/init/src/*"],
    }
    e2e = _load(root, "e2e/init/project.json")
    assert e2e["implicitDependencies"] == ["cli-init"]


def test_unit_name_containing_legacy_marker(workspace_factory):
    root = (
        workspace_factory.with_legacy_command("legacy-init")
        .with_e2e_project("legacy-init")
        .build()
    )

    assert MigrateRunner(root).run("legacy-init", hooks=[]) is True

    paths = _load(root, "tsconfig.base.json")["compilerOptions"]["paths"]
    assert paths["@lerna/commands/legacy-init/*"] == [
        "libs/commands/legacy-init/src/*"
    ]
    assert "@lerna/legacy-structure/commands/legacy-init" not in paths
    shim = root / "packages/legacy-structure/commands/legacy-init/src/index.ts"
    assert "LegacyInitCommand" in shim.read_text(encoding="utf-8")
