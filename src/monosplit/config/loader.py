import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib

from monosplit.common.exceptions import MonosplitError

CONFIG_FILENAME = "monosplit.toml"


class ConfigError(MonosplitError):
    pass


@dataclass
class MonosplitConfig:
    npm_scope: str = "@lerna"
    flat_dir: str = "commands"
    canonical_dir: str = "libs/commands"
    legacy_dir: str = "packages/legacy-structure/commands"
    e2e_prefix: str = "e2e"
    umbrella_manifest: str = "packages/lerna/package.json"
    alias_table: str = "tsconfig.base.json"
    legacy_marker: str = "legacy"
    output_dir: str = "dist"
    source_extension: str = ".ts"
    format_command: List[str] = field(
        default_factory=lambda: ["npx", "prettier", "--write"]
    )
    install_command: List[str] = field(default_factory=lambda: ["npm", "install"])


def _find_config_file(search_path: Path) -> Path:
    current_dir = search_path.resolve()
    while True:
        config_path = current_dir / CONFIG_FILENAME
        if config_path.is_file():
            return config_path
        if current_dir.parent == current_dir:
            break
        current_dir = current_dir.parent
    raise FileNotFoundError(f"Could not find {CONFIG_FILENAME} in any parent directory.")


def _check_types(section: Dict[str, Any], config_path: Path) -> None:
    for f in fields(MonosplitConfig):
        if f.name not in section:
            continue
        value = section[f.name]
        if f.type is str or f.type == "str":
            ok = isinstance(value, str)
            expected = "a string"
        else:
            ok = (
                isinstance(value, list)
                and bool(value)
                and all(isinstance(v, str) for v in value)
            )
            expected = "a non-empty list of strings"
        if not ok:
            raise ConfigError(
                f"'{f.name}' in {config_path} must be {expected}, got {value!r}"
            )


def load_config_from_path(search_path: Path) -> MonosplitConfig:
    try:
        config_path = _find_config_file(search_path)
    except FileNotFoundError:
        return MonosplitConfig()

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Both a bare file and a [tool.monosplit] table are accepted.
    section: Dict[str, Any] = data.get("tool", {}).get("monosplit", data)
    known = {f.name for f in fields(MonosplitConfig)}
    unknown = sorted(set(section) - known - {"tool"})
    if unknown:
        raise ConfigError(f"Unknown keys in {config_path}: {', '.join(unknown)}")

    section = {k: v for k, v in section.items() if k in known}
    _check_types(section, config_path)
    return MonosplitConfig(**section)
