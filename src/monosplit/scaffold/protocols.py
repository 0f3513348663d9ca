from dataclasses import dataclass
from typing import Protocol, Tuple

from monosplit.workspace import VirtualTree


@dataclass(frozen=True)
class ScaffoldResult:
    project_name: str
    root: str
    files: Tuple[str, ...]

    def created(self, path: str) -> bool:
        return path in self.files


class Scaffolder(Protocol):
    def generate(
        self, tree: VirtualTree, name: str, directory: str, test_runner: str
    ) -> ScaffoldResult:
        """
        Creates the skeleton of a new library named `name` under
        `directory` and registers its project configuration.

        Args:
            tree: The workspace tree to write into.
            name: The library's short name.
            directory: The parent directory, e.g. "libs/commands".
            test_runner: "none" or "jest".

        Raises:
            ScaffoldCollisionError: The root or the project name is taken.
        """
        ...
