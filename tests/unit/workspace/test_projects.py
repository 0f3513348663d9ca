import json

import pytest
from monosplit.workspace import (
    DocumentError,
    ProjectNotFoundError,
    VirtualTree,
    find_projects,
    read_json,
    read_project_configuration,
    update_json,
    update_project_configuration,
)


@pytest.fixture
def tree():
    return VirtualTree.in_memory(
        {
            "e2e/version/project.json": json.dumps(
                {"name": "e2e-version", "implicitDependencies": ["version"]}
            ),
            "libs/core/project.json": json.dumps({"name": "core", "targets": {}}),
            "broken/project.json": "{not json",
            "package.json": json.dumps({"name": "root", "private": True}),
        }
    )


def test_find_projects_maps_names_to_files(tree):
    assert find_projects(tree) == {
        "e2e-version": "e2e/version/project.json",
        "core": "libs/core/project.json",
    }


def test_read_and_update_project_configuration(tree):
    config = read_project_configuration(tree, "e2e-version")
    config["implicitDependencies"] = ["commands-version"]
    update_project_configuration(tree, "e2e-version", config)

    assert read_json(tree, "e2e/version/project.json") == {
        "name": "e2e-version",
        "implicitDependencies": ["commands-version"],
    }


def test_unknown_project_is_an_error(tree):
    with pytest.raises(ProjectNotFoundError, match="version"):
        read_project_configuration(tree, "version")
    with pytest.raises(ProjectNotFoundError):
        update_project_configuration(tree, "version", {})


def test_update_json_preserves_key_order_and_formats(tree):
    update_json(tree, "package.json", lambda d: {**d, "version": "1.0.0"})

    assert tree.read("package.json") == (
        '{\n  "name": "root",\n  "private": true,\n  "version": "1.0.0"\n}\n'
    )


def test_invalid_json_is_reported(tree):
    with pytest.raises(DocumentError, match="broken/project.json"):
        read_json(tree, "broken/project.json")
