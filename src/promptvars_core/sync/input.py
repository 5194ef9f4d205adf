"""Debounced binding between one rendered input and its owner's state."""

from collections.abc import Callable
from dataclasses import dataclass
from types import TracebackType

from promptvars_core.logging import PromptVarsLogger
from promptvars_core.types import TemplateVariable, ValidationError, VariableState
from promptvars_core.validation import ValidationOptions, ValidationOutcome, validate

from .debounce import DEFAULT_DELAY_MS, DEFAULT_MAX_WAIT_MS, Debouncer
from .scheduler import Scheduler

STATUS_TYPING = "Typing…"
STATUS_MODIFIED = "Modified"


@dataclass(frozen=True)
class InputStatus:
    """What a host layer needs to display one input."""

    local_value: str
    is_pending: bool
    is_dirty: bool
    is_valid: bool
    errors: tuple[ValidationError, ...]
    status_message: str


def status_message(
    is_pending: bool,
    is_dirty: bool,
    local_value: str,
    max_length: int | None,
) -> str:
    """Derive the short status line shown under an input.

    Args:
        is_pending: Whether an edit is waiting to be committed
        is_dirty: Whether the committed value differs from its initial value
        local_value: Value currently typed
        max_length: Configured maximum length, if any

    Returns:
        "Typing…", "Modified", "<n> characters remaining" or ""
    """
    if is_pending:
        return STATUS_TYPING
    if is_dirty:
        return STATUS_MODIFIED
    if max_length is not None:
        return f"{max_length - len(local_value)} characters remaining"
    return ""


class VariableInput:
    """Local edit buffer for one variable, synced to its owner after a quiet period.

    The owner is represented by two callables: ``state`` returns the owner's
    current VariableState and ``on_change`` receives committed values. A
    commit that equals the owner's known value is not propagated.
    """

    def __init__(
        self,
        variable: TemplateVariable,
        *,
        state: Callable[[], VariableState],
        on_change: Callable[[str], None],
        scheduler: Scheduler,
        options: ValidationOptions | None = None,
        delay_ms: float = DEFAULT_DELAY_MS,
        max_wait_ms: float = DEFAULT_MAX_WAIT_MS,
        on_pending: Callable[[], None] | None = None,
        on_complete: Callable[[], None] | None = None,
        logger: PromptVarsLogger | None = None,
    ):
        """Initialize input binding.

        Args:
            variable: Variable this input edits
            state: Returns the owner's current state for the variable
            on_change: Receives each committed value that differs from the owner's
            scheduler: Timer source
            options: Validation options (for live preview and remaining count)
            delay_ms: Quiet period
            max_wait_ms: Ceiling
            on_pending: Advisory hook, once per IDLE -> PENDING transition
            on_complete: Advisory hook, once per commit
            logger: Optional logger
        """
        self.variable = variable
        self.options = options
        self._state = state
        self._on_change = on_change
        self._on_pending_hook = on_pending
        self._on_complete_hook = on_complete
        self._logger = logger.sync(variable.name) if logger else None
        self._debouncer = Debouncer(
            state().value,
            scheduler=scheduler,
            delay_ms=delay_ms,
            max_wait_ms=max_wait_ms,
            on_commit=self._handle_commit,
            on_pending=self._handle_pending,
            on_complete=self._handle_complete,
            is_committed=self._matches_owner,
        )

    @property
    def name(self) -> str:
        return self.variable.name

    @property
    def local_value(self) -> str:
        return self._debouncer.value

    @property
    def is_pending(self) -> bool:
        return self._debouncer.pending

    @property
    def disposed(self) -> bool:
        return self._debouncer.disposed

    def edit(self, value: str) -> None:
        """Record a keystroke-level change.

        Args:
            value: Full new text of the input
        """
        self._debouncer.push(value)

    def flush(self) -> bool:
        """Commit any pending edit now (e.g. on submit or blur).

        Returns:
            True if a commit happened
        """
        return self._debouncer.flush()

    def sync_from_owner(self) -> None:
        """Adopt the owner's current value, dropping any pending edit."""
        if not self._debouncer.disposed:
            self._debouncer.reset(self._state().value)

    def preview(self) -> ValidationOutcome:
        """Validate the local (uncommitted) value without touching owner state."""
        return validate(self.variable, self.local_value, self.options)

    def snapshot(self) -> InputStatus:
        """Current display status."""
        owner = self._state()
        max_length = self.options.max_length if self.options else None
        return InputStatus(
            local_value=self.local_value,
            is_pending=self.is_pending,
            is_dirty=owner.is_dirty,
            is_valid=owner.is_valid,
            errors=owner.errors,
            status_message=status_message(
                self.is_pending, owner.is_dirty, self.local_value, max_length
            ),
        )

    def dispose(self) -> None:
        """Release timers. No on_change or on_complete call happens afterwards."""
        if self._debouncer.disposed:
            return
        was_pending = self._debouncer.dispose()
        if self._logger:
            self._logger.disposed(was_pending)

    def __enter__(self) -> "VariableInput":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()

    def _matches_owner(self, value: str) -> bool:
        # The owner may change without sync_from_owner(), so ask it directly
        return value == self._state().value

    def _handle_pending(self) -> None:
        if self._logger:
            self._logger.pending()
        if self._on_pending_hook:
            self._on_pending_hook()

    def _handle_commit(self, value: str, trigger: str) -> None:
        if self._logger:
            self._logger.committed(value, trigger)
        if value == self._state().value:
            if self._logger:
                self._logger.suppressed()
            return
        self._on_change(value)

    def _handle_complete(self) -> None:
        if self._on_complete_hook:
            self._on_complete_hook()
