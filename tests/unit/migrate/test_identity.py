import pytest
from monosplit.config import MonosplitConfig
from monosplit.migrate import InvalidUnitNameError, derive_identity


def test_version_identity():
    identity = derive_identity("version", MonosplitConfig())

    assert identity.flat_root == "commands/version"
    assert identity.canonical_root == "libs/commands/version"
    assert identity.canonical_project == "commands-version"
    assert identity.canonical_source_root == "libs/commands/version/src"
    assert identity.legacy_root == "packages/legacy-structure/commands/version"
    assert identity.legacy_project == "legacy-structure-commands-version"
    assert identity.e2e_project == "e2e-version"
    assert identity.legacy_package == "@lerna/version"
    assert identity.module_path == "@lerna/commands/version"
    assert identity.module_target == "libs/commands/version/src/index.ts"
    assert identity.legacy_module_path == "@lerna/legacy-structure/commands/version"
    assert identity.alias_key == "@lerna/commands/version/*"
    assert identity.alias_target == "libs/commands/version/src/*"
    assert identity.command_symbol == "VersionCommand"


def test_identity_follows_config():
    config = MonosplitConfig(
        npm_scope="@acme", canonical_dir="libs/cli", legacy_dir="packages/compat"
    )
    identity = derive_identity("add-dependencies", config)

    assert identity.module_path == "@acme/cli/add-dependencies"
    assert identity.canonical_project == "cli-add-dependencies"
    assert identity.legacy_project == "compat-add-dependencies"
    assert identity.command_symbol == "AddDependenciesCommand"


def test_owns_alias():
    identity = derive_identity("version", MonosplitConfig())

    assert identity.owns_alias("@lerna/commands/version")
    assert identity.owns_alias("@lerna/commands/version/*")
    assert not identity.owns_alias("@lerna/commands/version-bump")


@pytest.mark.parametrize(
    "name", ["", "commands/version", "-version", "version-", "a--b", "ver sion"]
)
def test_invalid_names(name):
    with pytest.raises(InvalidUnitNameError):
        derive_identity(name, MonosplitConfig())
