from .base import AbstractStage, StageFootprint
from .scaffold import ScaffoldStage
from .build_targets import BuildTargetStage
from .manifest import ManifestStage
from .relocate import RelocateStage
from .aliases import AliasStage
from .shims import ShimStage
from .dependents import DependentsStage

__all__ = [
    "AbstractStage",
    "StageFootprint",
    "ScaffoldStage",
    "BuildTargetStage",
    "ManifestStage",
    "RelocateStage",
    "AliasStage",
    "ShimStage",
    "DependentsStage",
]
