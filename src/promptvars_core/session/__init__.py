"""Variable sessions."""

from .session import VariableSession

__all__ = ["VariableSession"]
