import logging
from dataclasses import asdict
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from monosplit.common import MonosplitError, bus
from monosplit.config import MonosplitConfig, load_config_from_path
from monosplit.migrate import (
    FormatFilesHook,
    HookError,
    InstallPackagesHook,
    MigrationContext,
    MigrationPipeline,
    PostCommitHook,
    UnitIdentity,
    derive_identity,
)
from monosplit.migrate.stages import StageFootprint
from monosplit.needle import L, needle
from monosplit.scaffold import LibraryScaffolder, Scaffolder
from monosplit.workspace import VirtualTree

log = logging.getLogger(__name__)


def make_hooks(
    config: MonosplitConfig, format_files: bool = True, install: bool = True
) -> List[PostCommitHook]:
    hooks: List[PostCommitHook] = []
    if format_files:
        hooks.append(FormatFilesHook(config.format_command))
    if install:
        hooks.append(InstallPackagesHook(config.install_command))
    return hooks


class MigrateRunner:
    def __init__(
        self,
        root_path: Path,
        config: Optional[MonosplitConfig] = None,
        scaffolder: Optional[Scaffolder] = None,
        pipeline: Optional[MigrationPipeline] = None,
    ):
        self.root_path = root_path
        self._config = config
        self._scaffolder = scaffolder
        self.pipeline = pipeline or MigrationPipeline()
        needle.add_root(root_path)

    @property
    def config(self) -> MonosplitConfig:
        if self._config is None:
            self._config = load_config_from_path(self.root_path)
        return self._config

    def describe(
        self, name: str
    ) -> Tuple[UnitIdentity, List[Tuple[str, StageFootprint]]]:
        identity = derive_identity(name, self.config)
        return identity, [
            (stage.name, stage.footprint(identity, self.config))
            for stage in self.pipeline.stages
        ]

    def run(
        self,
        name: str,
        dry_run: bool = False,
        confirm_callback: Optional[Callable[[int], bool]] = None,
        hooks: Optional[List[PostCommitHook]] = None,
    ) -> bool:
        try:
            # 1. Derive everything from the unit name once
            config = self.config
            identity = derive_identity(name, config)
            bus.info(L.migrate.run.start, name=name, root=self.root_path)
            bus.debug(L.migrate.run.identity, identity=asdict(identity))

            # 2. Run every stage against the in-memory tree
            tree = VirtualTree(self.root_path)
            ctx = MigrationContext(
                tree=tree,
                identity=identity,
                config=config,
                scaffolder=self._scaffolder or LibraryScaffolder(config),
            )
            self.pipeline.run(ctx)

            # 3. Preview
            tm = tree.to_transaction()
            if tm.pending_count == 0:
                bus.success(L.migrate.run.no_ops)
                return True

            bus.warning(L.migrate.run.preview_header, count=tm.pending_count)
            for desc in tm.preview():
                bus.info(desc)

            if dry_run:
                return True

            # 4. Confirm (via callback)
            if confirm_callback and not confirm_callback(tm.pending_count):
                bus.error(L.migrate.run.aborted)
                return False

            # 5. Flush
            bus.info(L.migrate.run.applying)
            touched = tm.commit()
            bus.success(L.migrate.run.committed, count=len(touched), name=name)

        except MonosplitError as e:
            bus.error(L.migrate.run.failed, error=str(e))
            return False
        except Exception as e:
            log.exception("unexpected failure during migration")
            bus.error(L.error.unexpected, error=str(e))
            return False

        # 6. Post-commit hooks, reported apart from the transaction itself
        if hooks is None:
            hooks = make_hooks(config)
        for hook in hooks:
            bus.info(L.migrate.hook.start, hook=hook.name)
            try:
                hook.run(self.root_path, touched)
            except HookError as e:
                bus.error(L.migrate.hook.failed, hook=hook.name, error=e.detail)
                return False

        bus.success(L.migrate.run.success, name=name)
        return True
