"""Fake code generator — deterministic codes for tests and local development."""

import threading

from delivery.codes.port import CodeGenerator


class FakeCodeGenerator(CodeGenerator):
    """Hands out ``FAKE-000001``, ``FAKE-000002``... unless scripted otherwise."""

    def __init__(self):
        self.counter = 0
        self.scripted: list[str] = []
        self.failure: Exception | None = None
        self._lock = threading.Lock()

    def configure(self, codes: list[str] | None = None, failure: Exception | None = None):
        """Script the next codes to hand out, or make every call raise ``failure``."""
        self.scripted = list(codes or [])
        self.failure = failure

    def generate(self) -> str:
        if self.failure is not None:
            raise self.failure
        with self._lock:
            if self.scripted:
                return self.scripted.pop(0)
            self.counter += 1
            return f"FAKE-{self.counter:06d}"
