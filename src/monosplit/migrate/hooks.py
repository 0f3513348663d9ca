import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Sequence

from .exceptions import HookError

log = logging.getLogger(__name__)


class PostCommitHook(ABC):
    name: str = ""

    @abstractmethod
    def run(self, root_path: Path, touched: Sequence[Path]) -> None:
        """Runs after the tree was flushed. Raises HookError on failure."""


class CommandHook(PostCommitHook):
    def __init__(self, command: Sequence[str]):
        self.command = list(command)

    def _execute(self, root_path: Path, argv: List[str]) -> None:
        log.info(f"[{self.name}] running: {' '.join(argv)}")
        try:
            subprocess.run(argv, cwd=root_path, check=True)
        except FileNotFoundError as e:
            raise HookError(self.name, f"command not found: {argv[0]}") from e
        except subprocess.CalledProcessError as e:
            raise HookError(
                self.name, f"'{' '.join(argv)}' exited with status {e.returncode}"
            ) from e
        except OSError as e:
            raise HookError(self.name, f"cannot run {argv[0]}: {e}") from e


class FormatFilesHook(CommandHook):
    name = "format"

    def run(self, root_path: Path, touched: Sequence[Path]) -> None:
        # Deleted files cannot be formatted.
        existing = [p.as_posix() for p in touched if (root_path / p).is_file()]
        if not existing:
            log.debug("[format] nothing to format")
            return
        self._execute(root_path, self.command + existing)


class InstallPackagesHook(CommandHook):
    """Always runs, whether or not a manifest changed."""

    name = "install"

    def run(self, root_path: Path, touched: Sequence[Path]) -> None:
        self._execute(root_path, self.command)
