"""Split a list of strings into fixed-size chunks."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["SplitResult", "Splitter"]


@dataclass
class SplitResult:
    """One chunk of split data."""

    item: list[str] = field(default_factory=list)


@dataclass
class Splitter:
    """Splits ``data`` into chunks of ``split_count`` items, with a shorter final chunk."""

    split_count: int
    data: list[str]

    def get_split_result(self) -> list[SplitResult]:
        if self.split_count <= 0:
            raise ValueError("split_count must be positive")
        size = self.split_count
        return [SplitResult(list(self.data[start:start + size])) for start in range(0, len(self.data), size)]