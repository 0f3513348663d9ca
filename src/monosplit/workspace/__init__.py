from .tree import VirtualTree
from .documents import read_json, write_json, update_json, dump_json
from .projects import (
    find_projects,
    read_project_configuration,
    update_project_configuration,
)
from .exceptions import (
    WorkspaceError,
    MissingPathError,
    ProjectNotFoundError,
    DocumentError,
)

__all__ = [
    "VirtualTree",
    "read_json",
    "write_json",
    "update_json",
    "dump_json",
    "find_projects",
    "read_project_configuration",
    "update_project_configuration",
    "WorkspaceError",
    "MissingPathError",
    "ProjectNotFoundError",
    "DocumentError",
]
