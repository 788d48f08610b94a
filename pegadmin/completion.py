"""Helpers for command-line auto-completion."""

from __future__ import annotations

from typing import Iterable


def filter_string_with_prefix(strs: Iterable[str], prefix: str) -> list[str]:
    """Return the strings that start with ``prefix``, in their original order."""
    return [s for s in strs if s.startswith(prefix)]