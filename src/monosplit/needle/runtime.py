import os
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

from .loader import JsonCatalogLoader
from .pointer import SemanticPointer

ASSETS_ROOT = Path(__file__).parent / "assets"


class Needle:
    """
    Resolves semantic pointers to message templates.

    Lookup order: target language, default language (en), then the key
    itself. Catalogs are read from the packaged assets first and then from
    every override root's ``.monosplit/needle/<lang>`` directory, later
    roots winning.
    """

    def __init__(self, override_roots: Optional[List[Path]] = None):
        self.default_lang = "en"
        self.override_roots: List[Path] = list(override_roots or [])
        self._loader = JsonCatalogLoader()
        self._registry: Dict[str, Dict[str, str]] = {}
        self._loaded_langs: Set[str] = set()

    def add_root(self, path: Path) -> None:
        if path not in self.override_roots:
            self.override_roots.append(path)
            self._registry.clear()
            self._loaded_langs.clear()

    def _ensure_lang_loaded(self, lang: str) -> None:
        if lang in self._loaded_langs:
            return

        merged: Dict[str, str] = {}
        merged.update(self._loader.load_directory(ASSETS_ROOT / lang))
        for root in self.override_roots:
            merged.update(
                self._loader.load_directory(root / ".monosplit" / "needle" / lang)
            )

        self._registry[lang] = merged
        self._loaded_langs.add(lang)

    def get(
        self, pointer: Union[SemanticPointer, str], lang: Optional[str] = None
    ) -> str:
        key = str(pointer)
        target_lang = lang or os.getenv("MONOSPLIT_LANG", self.default_lang)

        self._ensure_lang_loaded(target_lang)
        value = self._registry[target_lang].get(key)
        if value is not None:
            return value

        if target_lang != self.default_lang:
            self._ensure_lang_loaded(self.default_lang)
            value = self._registry[self.default_lang].get(key)
            if value is not None:
                return value

        return key


needle = Needle()
