from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Union

import monosplit.common
from monosplit.needle import SemanticPointer


class SpyBus:
    """
    Spies on the global monosplit.common.bus singleton.

    The instance's _render method is patched in place, so modules that
    already did 'from monosplit.common import bus' are covered too.
    """

    def __init__(self):
        self.messages: List[Dict[str, Any]] = []

    @contextmanager
    def patch(self, monkeypatch: Any):
        real_bus = monosplit.common.bus

        def intercept_render(
            level: str, msg_id: Union[str, SemanticPointer], **kwargs: Any
        ) -> None:
            self.messages.append({"level": level, "id": str(msg_id), "params": kwargs})

        monkeypatch.setattr(real_bus, "_render", intercept_render)
        yield self

    def get_messages(self) -> List[Dict[str, Any]]:
        return self.messages

    def ids(self, level: Optional[str] = None) -> List[str]:
        return [m["id"] for m in self.messages if level is None or m["level"] == level]

    def assert_id_called(self, msg_id: SemanticPointer, level: Optional[str] = None):
        key = str(msg_id)
        if key not in self.ids(level):
            raise AssertionError(
                f"Message with ID '{key}' was not sent.\nCaptured IDs: {self.ids()}"
            )
