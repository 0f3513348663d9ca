import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

log = logging.getLogger(__name__)


class JsonCatalogLoader:
    """Loads flat ``{fqn: template}`` JSON catalogs from a directory tree."""

    def match(self, path: Path) -> bool:
        return path.suffix.lower() == ".json"

    def load_file(self, path: Path) -> Dict[str, Any]:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}

    def load_directory(self, root_path: Path) -> Dict[str, str]:
        registry: Dict[str, str] = {}
        if not root_path.is_dir():
            return registry

        for dirpath, _, filenames in os.walk(root_path):
            for filename in sorted(filenames):
                file_path = Path(dirpath) / filename
                if not self.match(file_path):
                    continue
                try:
                    content = self.load_file(file_path)
                except (json.JSONDecodeError, OSError) as e:
                    log.warning(f"Skipping malformed message catalog {file_path}: {e}")
                    continue
                for key, value in content.items():
                    registry[str(key)] = str(value)
        return registry
