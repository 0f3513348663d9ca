from pathlib import Path


def get_workspace_root() -> Path:
    return Path.cwd()
