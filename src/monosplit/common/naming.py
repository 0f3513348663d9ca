import re
from pathlib import PurePosixPath
from typing import List

_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")


def classify(name: str) -> str:
    """
    'add-dependencies' -> 'AddDependencies', 'init' -> 'Init'.
    """
    segments = [s for s in _SEPARATORS.split(name) if s]
    return "".join(s[0].upper() + s[1:] for s in segments)


def _project_segments(directory: str, name: str) -> List[str]:
    # The first segment is the workspace layout root (libs/, packages/).
    parts = list(PurePosixPath(directory).parts[1:])
    return parts + [name]


def project_name_for(directory: str, name: str) -> str:
    return "-".join(_project_segments(directory, name))


def import_path_for(npm_scope: str, directory: str, name: str) -> str:
    return "/".join([npm_scope] + _project_segments(directory, name))
