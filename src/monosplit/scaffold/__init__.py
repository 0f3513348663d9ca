from .protocols import Scaffolder, ScaffoldResult
from .library import LibraryScaffolder
from .exceptions import ScaffoldError, ScaffoldCollisionError

__all__ = [
    "Scaffolder",
    "ScaffoldResult",
    "LibraryScaffolder",
    "ScaffoldError",
    "ScaffoldCollisionError",
]
