"""Shared helpers for hoist commands."""

from rich.console import Console


def merge_names(*groups: tuple[str, ...]) -> list[str]:
    """Merge name lists from positional args and flags, dropping duplicates.

    First occurrence wins, so the order the user typed is kept.
    """
    return list(dict.fromkeys(name for group in groups for name in group))


def stderr_console() -> Console:
    return Console(stderr=True)
