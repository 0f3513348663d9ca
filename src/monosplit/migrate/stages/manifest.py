from typing import Any, Dict

from monosplit.config import MonosplitConfig
from monosplit.migrate.context import MigrationContext
from monosplit.migrate.identity import UnitIdentity
from monosplit.workspace import update_json
from .base import AbstractStage, StageFootprint

MANIFEST = "package.json"


def transform_manifest(
    manifest: Dict[str, Any], identity: UnitIdentity
) -> Dict[str, Any]:
    out = identity.output_dir
    passthrough = {k: v for k, v in manifest.items() if k != "scripts"}
    repository = manifest.get("repository")
    if not isinstance(repository, dict):
        # npm allows a bare "github:user/repo" string; keep it as the url.
        repository = {"url": repository} if repository else {}

    return {
        **passthrough,
        "files": [out, "README.md", "CHANGELOG.md"],
        "exports": {
            ".": {
                "import": f"./{out}/index.js",
                "require": f"./{out}/index.js",
            },
            "./command": {
                "import": f"./{out}/command.js",
                "require": f"./{out}/command.js",
            },
        },
        "main": f"./{out}/index.js",
        "repository": {**repository, "directory": identity.legacy_root},
    }


class ManifestStage(AbstractStage):
    """Moves the publish manifest into the legacy-structure root and rewrites it."""

    name = "manifest"

    def footprint(
        self, identity: UnitIdentity, config: MonosplitConfig
    ) -> StageFootprint:
        return StageFootprint(
            reads=(identity.flat(MANIFEST),),
            writes=(identity.flat(MANIFEST), identity.legacy(MANIFEST)),
        )

    def apply(self, ctx: MigrationContext) -> None:
        identity = ctx.identity
        target = identity.legacy(MANIFEST)
        ctx.tree.rename(identity.flat(MANIFEST), target)
        update_json(ctx.tree, target, lambda m: transform_manifest(m, identity))
