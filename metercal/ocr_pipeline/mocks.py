"""Mock text sources for tests and dependency-free CLI runs."""
from __future__ import annotations

import threading
from typing import Dict, List, Mapping, Optional

from .interfaces import DisplayClassifier, TextSource
from .models import DisplayKind


class MockTextSource(TextSource):
    """Return scripted text per image key.

    ``texts`` maps an image (or any hashable key standing in for one) to the
    text to return; unknown images yield ``default``. ``gates`` optionally
    maps an image to an event the call waits on, so tests can script the
    order in which concurrent recognitions finish.
    """

    def __init__(
        self,
        texts: Optional[Mapping[object, Optional[str]]] = None,
        default: Optional[str] = None,
        gates: Optional[Mapping[object, threading.Event]] = None,
        gate_timeout: float = 5.0,
    ) -> None:
        self.texts: Dict[object, Optional[str]] = dict(texts or {})
        self.default = default
        self.gates: Dict[object, threading.Event] = dict(gates or {})
        self.gate_timeout = gate_timeout
        self.calls: List[object] = []
        self._lock = threading.Lock()

    def recognize(self, image: object) -> Optional[str]:
        with self._lock:
            self.calls.append(image)
        gate = _lookup(self.gates, image, None)
        if gate is not None and not gate.wait(self.gate_timeout):
            raise TimeoutError(f"gate for {image!r} was never released")
        return _lookup(self.texts, image, self.default)


def _lookup(mapping: Mapping[object, object], key: object, default):
    # PIL images define __eq__ without __hash__.
    try:
        return mapping.get(key, default)
    except TypeError:
        return default


class FailingTextSource(TextSource):
    def __init__(self, message: str = "recognizer unavailable") -> None:
        self.message = message
        self.calls: List[object] = []

    def recognize(self, image: object) -> Optional[str]:
        self.calls.append(image)
        raise RuntimeError(self.message)


class MockDisplayClassifier(DisplayClassifier):
    def __init__(self, kind: DisplayKind = DisplayKind.DIGITAL) -> None:
        self.kind = kind
        self.calls: List[object] = []

    def classify(self, image: object) -> DisplayKind:
        self.calls.append(image)
        return self.kind
