from .messaging.bus import bus
from .exceptions import MonosplitError

__all__ = ["bus", "MonosplitError"]
