"""Exception hierarchy for the example hub.

Lookup failures carry the requested key and the valid keys so callers can
print a useful diagnostic without going back to the registry.
"""

from __future__ import annotations

from collections.abc import Sequence


class HubError(Exception):
    """Base class for every error raised by the example hub."""


class UnknownExampleError(HubError, KeyError):
    """Raised when an example name is not in the registry."""

    def __init__(self, key: str, available: Sequence[str]) -> None:
        self.key = key
        self.available = list(available)
        super().__init__(key)

    def __str__(self) -> str:
        return (
            f"Example '{self.key}' not found. "
            f"Available examples: {', '.join(self.available) or '(none)'}"
        )


class UnknownCategoryError(HubError, KeyError):
    """Raised when a category name is not in the registry."""

    def __init__(self, key: str, available: Sequence[str]) -> None:
        self.key = key
        self.available = list(available)
        super().__init__(key)

    def __str__(self) -> str:
        return (
            f"Category '{self.key}' not found. "
            f"Available categories: {', '.join(self.available) or '(none)'}"
        )


class DuplicateDefinitionError(HubError, ValueError):
    """Raised when an example or category name is registered twice."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind.capitalize()} '{key}' is already registered")
