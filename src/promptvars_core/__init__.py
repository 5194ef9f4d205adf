"""promptvars core - Template variable validation and debounced input sync.

Fills named placeholders in prompt templates, validates each value, and
buffers fast local edits so that only settled values reach the owner state
and, on explicit promotion, the shared variable store.
"""

from promptvars_core.session import VariableSession
from promptvars_core.store import InMemoryVariableStore, SharedVariableStore
from promptvars_core.sync import AsyncioScheduler, Debouncer, VariableInput
from promptvars_core.template import TemplateEngine, parse_template
from promptvars_core.validation import ValidationOptions, validate

__version__ = "0.3.0"
__all__ = [
    "__version__",
    "VariableSession",
    "VariableInput",
    "Debouncer",
    "AsyncioScheduler",
    "TemplateEngine",
    "parse_template",
    "ValidationOptions",
    "validate",
    "SharedVariableStore",
    "InMemoryVariableStore",
]
