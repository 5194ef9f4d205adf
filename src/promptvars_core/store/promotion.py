"""Explicit promotion of session values to the shared store."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from promptvars_core.logging import PromptVarsLogger
from promptvars_core.types import PromotionOutcome

from .base import SharedVariableStore

if TYPE_CHECKING:
    from promptvars_core.session import VariableSession


@dataclass(frozen=True)
class PromotionResult:
    """Outcome of one promotion attempt."""

    name: str
    outcome: PromotionOutcome

    @property
    def promoted(self) -> bool:
        return self.outcome is PromotionOutcome.PROMOTED


def promote(
    session: "VariableSession",
    name: str,
    store: SharedVariableStore,
    logger: PromptVarsLogger | None = None,
) -> PromotionResult:
    """Copy a variable's committed value into the shared store.

    Only a valid, dirty value that differs from the stored one is written,
    replacing any earlier shared value. Anything else is a no-op, so
    repeating a promotion leaves the store unchanged. The session state is
    never modified.

    Args:
        session: Session owning the variable state
        name: Variable name
        store: Shared store
        logger: Optional logger

    Returns:
        PromotionResult describing what happened
    """
    outcome = _check(session, name, store)
    if outcome is PromotionOutcome.PROMOTED:
        store.set(name, session.state(name).value)

    if logger:
        promotion_logger = logger.promotion()
        if outcome is PromotionOutcome.PROMOTED:
            promotion_logger.promoted(name)
        else:
            promotion_logger.rejected(name, outcome.value)

    return PromotionResult(name=name, outcome=outcome)


def promote_all(
    session: "VariableSession",
    store: SharedVariableStore,
    logger: PromptVarsLogger | None = None,
) -> dict[str, PromotionResult]:
    """Promote every dirty variable of a session.

    Args:
        session: Session owning the variable state
        store: Shared store
        logger: Optional logger

    Returns:
        Result per dirty variable name, in template order
    """
    return {name: promote(session, name, store, logger) for name in session.dirty_names}


def _check(session: "VariableSession", name: str, store: SharedVariableStore) -> PromotionOutcome:
    if name not in session:
        return PromotionOutcome.UNKNOWN_VARIABLE
    state = session.state(name)
    if not state.is_valid:
        return PromotionOutcome.INVALID
    if not state.is_dirty:
        return PromotionOutcome.NOT_DIRTY
    if store.has(name) and store.get(name) == state.value:
        return PromotionOutcome.UNCHANGED
    return PromotionOutcome.PROMOTED
