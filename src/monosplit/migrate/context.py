from dataclasses import dataclass, field
from typing import Dict

from monosplit.config import MonosplitConfig
from monosplit.scaffold import Scaffolder, ScaffoldResult
from monosplit.workspace import VirtualTree
from .identity import UnitIdentity


@dataclass
class MigrationContext:
    tree: VirtualTree
    identity: UnitIdentity
    config: MonosplitConfig
    scaffolder: Scaffolder
    # project name -> what the scaffolder created for it
    scaffolds: Dict[str, ScaffoldResult] = field(default_factory=dict)
