"""Block measurers for tests: fixed heights and failures on demand."""

from __future__ import annotations


class FixedHeightMeasurer:
    """Reports the same height for every block and remembers what it measured."""

    def __init__(self, height: float = 100.0) -> None:
        self.height = height
        self.measured: list[str] = []

    def measure(self, markup: str) -> float:
        self.measured.append(markup)
        return self.height


class FailingMeasurer:
    """Simulates a layout engine crash."""

    def __init__(self, message: str = "layout engine crashed") -> None:
        self.message = message

    def measure(self, markup: str) -> float:
        raise RuntimeError(self.message)
