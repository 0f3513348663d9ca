import logging
from pathlib import Path, PurePosixPath
from typing import Dict, Iterator, List, Mapping, Optional, Union

from monosplit.common.transaction import TransactionManager, FileSystemAdapter
from .exceptions import MissingPathError

log = logging.getLogger(__name__)

IGNORED_DIRS = {".git", "node_modules", "dist"}

PathLike = Union[str, PurePosixPath]


def normalize(path: PathLike) -> str:
    normalized = PurePosixPath(path).as_posix().strip("/")
    if normalized == ".":
        return ""
    return normalized


class VirtualTree:
    """
    An in-memory overlay over a workspace directory.

    Reads fall through to disk until a path is written or deleted; all
    mutations stay in memory until commit(). A tree without a root_path is
    purely in-memory.
    """

    def __init__(self, root_path: Optional[Path] = None):
        self.root_path = root_path
        # path -> content, or None for a deletion
        self._changes: Dict[str, Optional[str]] = {}

    @classmethod
    def in_memory(cls, files: Mapping[str, str]) -> "VirtualTree":
        tree = cls()
        for path, content in files.items():
            tree.write(path, content)
        return tree

    # --- Queries ---

    def _disk_path(self, path: str) -> Optional[Path]:
        if self.root_path is None:
            return None
        return self.root_path / path

    def is_file(self, path: PathLike) -> bool:
        key = normalize(path)
        if key in self._changes:
            return self._changes[key] is not None
        disk = self._disk_path(key)
        return disk is not None and disk.is_file()

    def is_dir(self, path: PathLike) -> bool:
        key = normalize(path)
        prefix = f"{key}/" if key else ""
        return any(True for _ in self._iter_under(prefix))

    def exists(self, path: PathLike) -> bool:
        return self.is_file(path) or self.is_dir(path)

    def read(self, path: PathLike) -> str:
        key = normalize(path)
        if key in self._changes:
            content = self._changes[key]
            if content is None:
                raise MissingPathError(key, "read")
            return content
        disk = self._disk_path(key)
        if disk is None or not disk.is_file():
            raise MissingPathError(key, "read")
        return disk.read_text(encoding="utf-8")

    def _iter_disk(self, prefix: str) -> Iterator[str]:
        if self.root_path is None:
            return
        start = self.root_path / prefix if prefix else self.root_path
        if not start.is_dir():
            return
        stack = [start]
        while stack:
            current = stack.pop()
            for item in sorted(current.iterdir()):
                if item.is_dir():
                    if item.name not in IGNORED_DIRS:
                        stack.append(item)
                elif item.is_file():
                    yield item.relative_to(self.root_path).as_posix()

    def _iter_under(self, prefix: str) -> Iterator[str]:
        for path in self._iter_disk(prefix.rstrip("/")):
            if path not in self._changes:
                yield path
        for path, content in self._changes.items():
            if content is not None and path.startswith(prefix):
                yield path

    def iter_files(self, directory: PathLike = "") -> List[str]:
        key = normalize(directory)
        prefix = f"{key}/" if key else ""
        return sorted(set(self._iter_under(prefix)))

    def children(self, directory: PathLike) -> List[str]:
        key = normalize(directory)
        prefix = f"{key}/" if key else ""
        return sorted(
            {p[len(prefix) :].split("/", 1)[0] for p in self._iter_under(prefix)}
        )

    # --- Mutations ---

    def write(self, path: PathLike, content: str) -> None:
        key = normalize(path)
        log.debug(f"write {key}")
        self._changes[key] = content

    def delete(self, path: PathLike) -> None:
        key = normalize(path)
        if self.is_file(key):
            log.debug(f"delete {key}")
            self._changes[key] = None
            return
        files = self.iter_files(key)
        if not files:
            raise MissingPathError(key, "delete")
        log.debug(f"delete directory {key} ({len(files)} files)")
        for file_path in files:
            self._changes[file_path] = None

    def rename(self, src: PathLike, dest: PathLike) -> None:
        src_key, dest_key = normalize(src), normalize(dest)
        if self.is_file(src_key):
            log.debug(f"rename {src_key} -> {dest_key}")
            content = self.read(src_key)
            self._changes[src_key] = None
            self._changes[dest_key] = content
            return
        files = self.iter_files(src_key)
        if not files:
            raise MissingPathError(src_key, "rename")
        log.debug(f"rename directory {src_key} -> {dest_key} ({len(files)} files)")
        for file_path in files:
            content = self.read(file_path)
            self._changes[file_path] = None
            self._changes[dest_key + file_path[len(src_key) :]] = content

    # --- Flush ---

    def _is_noop(self, path: str, content: Optional[str]) -> bool:
        disk = self._disk_path(path)
        on_disk = disk is not None and disk.is_file()
        if content is None:
            return not on_disk
        return on_disk and disk.read_text(encoding="utf-8") == content

    def changes(self) -> Dict[str, Optional[str]]:
        return {
            path: content
            for path, content in sorted(self._changes.items())
            if not self._is_noop(path, content)
        }

    def to_transaction(
        self, fs: Optional[FileSystemAdapter] = None
    ) -> TransactionManager:
        if self.root_path is None:
            raise ValueError("An in-memory tree has no root to commit to.")
        tm = TransactionManager(self.root_path, fs=fs)
        for path, content in self.changes().items():
            if content is None:
                tm.add_delete_file(path)
            else:
                tm.add_write(path, content)
        return tm
