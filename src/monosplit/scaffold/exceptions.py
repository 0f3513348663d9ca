from monosplit.common.exceptions import MonosplitError


class ScaffoldError(MonosplitError):
    pass


class ScaffoldCollisionError(ScaffoldError):
    def __init__(self, project_name: str, root: str, reason: str):
        self.project_name = project_name
        self.root = root
        super().__init__(
            f"Cannot scaffold '{project_name}' at '{root}': {reason}. "
            "Was this unit already migrated?"
        )
