"""Test helpers for monosplit's own suite.

Not imported by the tool itself. ``WorkspaceFactory`` needs ``tomli-w``,
which ships with the ``test`` extra: ``pip install monosplit[test]``.
"""

from .bus import SpyBus
from .workspace import WorkspaceFactory

__all__ = ["SpyBus", "WorkspaceFactory"]
