from typing import List

from monosplit.common.exceptions import MonosplitError


class MigrationError(MonosplitError):
    pass


class InvalidUnitNameError(MigrationError):
    def __init__(self, name: str, reason: str):
        self.name = name
        super().__init__(f"Invalid unit name '{name}': {reason}")


class SchemaAssumptionError(MigrationError):
    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Unexpected structure in '{path}': {detail}")


class ScaffoldManifestError(MigrationError):
    def __init__(self, missing: List[str]):
        self.missing = missing
        super().__init__(
            "Refusing to delete files the scaffolder did not create: "
            + ", ".join(missing)
        )


class HookError(MonosplitError):
    def __init__(self, hook_name: str, detail: str):
        self.hook_name = hook_name
        self.detail = detail
        super().__init__(f"Post-commit hook '{hook_name}' failed: {detail}")
