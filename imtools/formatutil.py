"""Text progress bars."""

from __future__ import annotations

__all__ = ["progress_bar"]

_BAR_LENGTH = 50


def progress_bar(name: str, progress: int, total: int) -> str:
    """Render a carriage-return prefixed progress bar line."""
    if total == 0:
        percentage = 0.0
        filled = 0
    else:
        percentage = progress / total * 100
        filled = int(percentage / 100 * _BAR_LENGTH)
    filled = min(filled, _BAR_LENGTH)
    if filled < 0:
        raise ValueError("progress must not be negative")
    bar = "█" * filled + " " * (_BAR_LENGTH - filled)
    return f"\r{name}: [{bar}] {percentage:3.0f}% ({progress}/{total})"