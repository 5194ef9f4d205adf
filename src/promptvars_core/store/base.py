"""Shared (global) variable store boundary."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class SharedVariableStore(Protocol):
    """Store of variable values shared across templates.

    The persistence behind it is owned by the host; promptvars only reads
    values for rendering and writes them on explicit promotion.
    """

    def has(self, name: str) -> bool:
        """Whether the store holds a value for ``name``."""
        ...

    def get(self, name: str) -> str | None:
        """Value for ``name`` or None."""
        ...

    def set(self, name: str, value: str) -> None:
        """Store ``value`` under ``name``."""
        ...


class InMemoryVariableStore:
    """Dict-backed shared store."""

    def __init__(self, values: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(values or {})

    def has(self, name: str) -> bool:
        return name in self._values

    def get(self, name: str) -> str | None:
        return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        self._values[name] = value

    def delete(self, name: str) -> bool:
        """Remove a value. Returns True if it existed."""
        return self._values.pop(name, None) is not None

    def as_dict(self) -> dict[str, str]:
        """Copy of all stored values."""
        return dict(self._values)

    def __len__(self) -> int:
        return len(self._values)
