"""
Process-wide failure signal.

Any failing assertion sets FAILURE_SIGNAL; the runner reads it after each
test. The runner never clears it, so once set the run ends in failure.
"""

import threading


class FailureSignal:
    """Atomic boolean shared between test workers and the runner."""

    def __init__(self):
        self._event = threading.Event()

    def set(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()

    def clear(self) -> None:
        """Reset the signal. Only for harnesses that run more than one registry."""
        self._event.clear()

    def __bool__(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"<FailureSignal set={self.is_set()}>"


FAILURE_SIGNAL = FailureSignal()
