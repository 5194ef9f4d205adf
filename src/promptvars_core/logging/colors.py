"""ANSI color codes for terminal log output.

All colors use the 256-color palette.

Usage:
    from promptvars_core.logging.colors import GREEN, RESET

    print(f"{GREEN}Committed{RESET}")
"""

RESET = "\033[0m"

# Status
GREEN = "\033[38;5;82m"  # Commit / promotion
RED = "\033[38;5;196m"  # Errors
YELLOW = "\033[38;5;226m"  # Warnings, rejected promotions
ORANGE = "\033[38;5;208m"  # Pending edits

# Information
LIGHT_BLUE = "\033[38;5;153m"  # Context payloads
CYAN = "\033[38;5;51m"  # Info
MAGENTA = "\033[38;5;201m"  # Template component

__all__ = [
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "ORANGE",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
