"""Template parsing and rendering."""

from .cache import TemplateCache
from .engine import TemplateEngine
from .parser import is_valid_name, parse_template, replace_variables, unescape_template
from .types import ParseResult, ParseStats, TemplateIssue

__all__ = [
    "TemplateEngine",
    "TemplateCache",
    "ParseResult",
    "ParseStats",
    "TemplateIssue",
    "parse_template",
    "replace_variables",
    "unescape_template",
    "is_valid_name",
]
