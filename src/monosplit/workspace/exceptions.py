from monosplit.common.exceptions import MonosplitError


class WorkspaceError(MonosplitError):
    pass


class MissingPathError(WorkspaceError):
    def __init__(self, path: str, operation: str):
        self.path = path
        self.operation = operation
        super().__init__(f"Cannot {operation} '{path}': path does not exist.")


class ProjectNotFoundError(WorkspaceError):
    def __init__(self, project_name: str):
        self.project_name = project_name
        super().__init__(
            f"No project named '{project_name}' was found in the workspace "
            "(no project.json declares that name)."
        )


class DocumentError(WorkspaceError):
    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot parse '{path}' as JSON: {reason}")
