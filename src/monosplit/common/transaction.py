from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Union


class FileSystemAdapter(Protocol):
    def write_text(self, path: Path, content: str) -> None: ...
    def exists(self, path: Path) -> bool: ...
    def read_text(self, path: Path) -> str: ...
    def remove(self, path: Path, stop_at: Path) -> None: ...


class RealFileSystem:
    def write_text(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def remove(self, path: Path, stop_at: Path) -> None:
        if path.exists():
            path.unlink()
        # Directories emptied by the removal go with it, up to stop_at.
        parent = path.parent
        while parent != stop_at and parent.is_dir() and not any(parent.iterdir()):
            parent.rmdir()
            parent = parent.parent


@dataclass
class FileOp(ABC):
    path: Path

    @abstractmethod
    def execute(self, fs: FileSystemAdapter, root: Path) -> None: ...

    @abstractmethod
    def describe(self) -> str: ...


@dataclass
class WriteFileOp(FileOp):
    content: str

    def execute(self, fs: FileSystemAdapter, root: Path) -> None:
        fs.write_text(root / self.path, self.content)

    def describe(self) -> str:
        return f"[WRITE] {self.path.as_posix()}"


@dataclass
class DeleteFileOp(FileOp):
    def execute(self, fs: FileSystemAdapter, root: Path) -> None:
        fs.remove(root / self.path, stop_at=root)

    def describe(self) -> str:
        return f"[DELETE] {self.path.as_posix()}"


class TransactionManager:
    def __init__(self, root_path: Path, fs: Optional[FileSystemAdapter] = None):
        self.root_path = root_path
        self.fs = fs or RealFileSystem()
        self._ops: List[FileOp] = []

    def add_write(self, path: Union[str, Path], content: str) -> None:
        self._ops.append(WriteFileOp(Path(path), content))

    def add_delete_file(self, path: Union[str, Path]) -> None:
        self._ops.append(DeleteFileOp(Path(path)))

    def preview(self) -> List[str]:
        return [op.describe() for op in self._ops]

    def commit(self) -> List[Path]:
        touched = [op.path for op in self._ops]
        for op in self._ops:
            op.execute(self.fs, self.root_path)
        self._ops.clear()
        return touched

    @property
    def pending_count(self) -> int:
        return len(self._ops)
