from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

from monosplit.config import MonosplitConfig
from monosplit.migrate.context import MigrationContext
from monosplit.migrate.identity import UnitIdentity


@dataclass(frozen=True)
class StageFootprint:
    reads: Tuple[str, ...] = ()
    writes: Tuple[str, ...] = ()


class AbstractStage(ABC):
    name: str = ""

    @abstractmethod
    def footprint(
        self, identity: UnitIdentity, config: MonosplitConfig
    ) -> StageFootprint:
        """The workspace paths this stage reads and writes."""

    @abstractmethod
    def apply(self, ctx: MigrationContext) -> None:
        pass
