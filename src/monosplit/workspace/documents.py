import json
from typing import Any, Callable, Dict

from .exceptions import DocumentError
from .tree import PathLike, VirtualTree, normalize

JsonDict = Dict[str, Any]


def read_json(tree: VirtualTree, path: PathLike) -> JsonDict:
    content = tree.read(path)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise DocumentError(normalize(path), str(e)) from e
    if not isinstance(data, dict):
        raise DocumentError(normalize(path), "top-level value is not an object")
    return data


def dump_json(data: JsonDict) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json(tree: VirtualTree, path: PathLike, data: JsonDict) -> None:
    tree.write(path, dump_json(data))


def update_json(
    tree: VirtualTree, path: PathLike, updater: Callable[[JsonDict], JsonDict]
) -> JsonDict:
    """
    Applies `updater` to the parsed document at `path` and writes the
    returned document back. Key order is whatever the updater returns.
    """
    updated = updater(read_json(tree, path))
    write_json(tree, path, updated)
    return updated
