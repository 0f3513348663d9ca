from typing import List, Optional

from monosplit.common import bus
from monosplit.needle import L
from .context import MigrationContext
from .stages import (
    AbstractStage,
    AliasStage,
    BuildTargetStage,
    DependentsStage,
    ManifestStage,
    RelocateStage,
    ScaffoldStage,
    ShimStage,
)


def default_stages() -> List[AbstractStage]:
    # Order encodes data dependencies: scaffold before any project read,
    # manifest rename before its rewrite, aliases before the shims that use them.
    return [
        ScaffoldStage(),
        BuildTargetStage(),
        ManifestStage(),
        RelocateStage(),
        AliasStage(),
        ShimStage(),
        DependentsStage(),
    ]


class MigrationPipeline:
    def __init__(self, stages: Optional[List[AbstractStage]] = None):
        self.stages = stages if stages is not None else default_stages()

    def run(self, ctx: MigrationContext) -> None:
        total = len(self.stages)
        for index, stage in enumerate(self.stages, start=1):
            bus.info(
                L.migrate.stage.start, index=index, total=total, stage=stage.name
            )
            footprint = stage.footprint(ctx.identity, ctx.config)
            bus.debug(
                L.migrate.stage.footprint,
                stage=stage.name,
                reads=", ".join(footprint.reads) or "-",
                writes=", ".join(footprint.writes) or "-",
            )
            stage.apply(ctx)
