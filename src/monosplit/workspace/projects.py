from typing import Dict, Optional

from .documents import JsonDict, read_json, write_json
from .exceptions import DocumentError, ProjectNotFoundError
from .tree import VirtualTree

PROJECT_FILE = "project.json"


def find_projects(tree: VirtualTree) -> Dict[str, str]:
    """Maps every project name in the tree to its project.json path."""
    projects: Dict[str, str] = {}
    for path in tree.iter_files():
        if path.rsplit("/", 1)[-1] != PROJECT_FILE:
            continue
        try:
            name = read_json(tree, path).get("name")
        except DocumentError:
            continue
        if isinstance(name, str):
            projects[name] = path
    return projects


def find_project_file(tree: VirtualTree, project_name: str) -> Optional[str]:
    return find_projects(tree).get(project_name)


def read_project_configuration(tree: VirtualTree, project_name: str) -> JsonDict:
    path = find_project_file(tree, project_name)
    if path is None:
        raise ProjectNotFoundError(project_name)
    return read_json(tree, path)


def update_project_configuration(
    tree: VirtualTree, project_name: str, config: JsonDict
) -> None:
    path = find_project_file(tree, project_name)
    if path is None:
        raise ProjectNotFoundError(project_name)
    write_json(tree, path, {**config, "name": project_name})
