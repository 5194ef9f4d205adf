"""Debounced value synchronizer.

States::

    IDLE --push(value != committed)--> PENDING
    PENDING --quiet timer | ceiling timer | flush()--> IDLE   (commit)
    PENDING --cancel() | reset() | dispose()--> IDLE          (no commit)

The quiet timer restarts on every push; the ceiling timer is armed once,
on the first push after leaving IDLE, and is never restarted.
"""

from collections.abc import Callable
from functools import partial
from types import TracebackType

from promptvars_core.errors import create_error
from promptvars_core.types import SyncState

from .scheduler import Scheduler, TimerHandle

DEFAULT_DELAY_MS = 300
DEFAULT_MAX_WAIT_MS = 1000


class Debouncer:
    """Coalesce rapid value changes into one commit per burst."""

    def __init__(
        self,
        initial: str = "",
        *,
        scheduler: Scheduler,
        delay_ms: float = DEFAULT_DELAY_MS,
        max_wait_ms: float = DEFAULT_MAX_WAIT_MS,
        on_commit: Callable[[str, str], None] | None = None,
        on_pending: Callable[[], None] | None = None,
        on_complete: Callable[[], None] | None = None,
        is_committed: Callable[[str], bool] | None = None,
    ):
        """Initialize debouncer.

        Args:
            initial: Starting committed value
            scheduler: Timer source
            delay_ms: Quiet period measured from the latest push
            max_wait_ms: Ceiling measured from the first push of a burst
            on_commit: Called with (value, trigger) on every commit
            on_pending: Called once on each IDLE -> PENDING transition
            on_complete: Called once after each commit
            is_committed: Tells whether a value matches the authoritative one.
                Defaults to comparing with the last committed value.

        Raises:
            PromptVarsError(SYNC_CONFIG_INVALID): For negative delays or
                max_wait_ms < delay_ms
        """
        if delay_ms < 0 or max_wait_ms < 0 or max_wait_ms < delay_ms:
            raise create_error(
                "SYNC_CONFIG_INVALID",
                delay_ms=delay_ms,
                max_wait_ms=max_wait_ms,
            )

        self._scheduler = scheduler
        self.delay_ms = delay_ms
        self.max_wait_ms = max_wait_ms
        self._on_commit = on_commit
        self._on_pending = on_pending
        self._on_complete = on_complete
        self._is_committed = is_committed or self._matches_committed

        self._value = initial
        self._committed = initial
        self._state = SyncState.IDLE
        self._quiet: TimerHandle | None = None
        self._ceiling: TimerHandle | None = None
        # Bumped whenever timers are released; stale callbacks compare against it
        self._generation = 0
        self._disposed = False

    @property
    def state(self) -> SyncState:
        """Current IDLE or PENDING state."""
        return self._state

    @property
    def pending(self) -> bool:
        """True while a commit is scheduled."""
        return self._state is SyncState.PENDING

    @property
    def value(self) -> str:
        """Latest pushed value (leads the committed value)."""
        return self._value

    @property
    def committed(self) -> str:
        """Last committed value."""
        return self._committed

    @property
    def disposed(self) -> bool:
        """True once dispose() has run."""
        return self._disposed

    def push(self, value: str) -> None:
        """Record an edit.

        Ignored after dispose().

        Args:
            value: New local value
        """
        if self._disposed:
            return

        self._value = value

        if self._state is SyncState.IDLE:
            if self._is_committed(value):
                return
            self._state = SyncState.PENDING
            self._ceiling = self._schedule(self.max_wait_ms, "ceiling")
            self._quiet = self._schedule(self.delay_ms, "quiet")
            if self._on_pending:
                self._on_pending()
            return

        if self._quiet is not None:
            self._quiet.cancel()
        self._quiet = self._schedule(self.delay_ms, "quiet")

    def flush(self) -> bool:
        """Commit the pending value now.

        Returns:
            True if a commit happened
        """
        if self._disposed or self._state is not SyncState.PENDING:
            return False
        self._commit("flush")
        return True

    def cancel(self) -> bool:
        """Drop the pending commit without emitting it.

        The latest pushed value is kept; a later push that differs from the
        committed value starts a new burst.

        Returns:
            True if a commit was pending
        """
        was_pending = self._state is SyncState.PENDING
        self._release_timers()
        self._state = SyncState.IDLE
        return was_pending

    def reset(self, value: str) -> None:
        """Adopt an externally set value as both local and committed.

        Any pending commit is dropped without notification.

        Args:
            value: New authoritative value
        """
        self.cancel()
        self._value = value
        self._committed = value

    def dispose(self) -> bool:
        """Release timers for good. No callback runs after this returns.

        Returns:
            True if a commit was pending and has been dropped
        """
        was_pending = self.cancel()
        self._disposed = True
        return was_pending

    def __enter__(self) -> "Debouncer":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()

    def _schedule(self, delay_ms: float, trigger: str) -> TimerHandle:
        return self._scheduler.call_later(
            delay_ms, partial(self._fire, self._generation, trigger)
        )

    def _fire(self, generation: int, trigger: str) -> None:
        if self._disposed or generation != self._generation:
            return
        if self._state is not SyncState.PENDING:
            return
        self._commit(trigger)

    def _release_timers(self) -> None:
        self._generation += 1
        for handle in (self._quiet, self._ceiling):
            if handle is not None:
                handle.cancel()
        self._quiet = None
        self._ceiling = None

    def _commit(self, trigger: str) -> None:
        self._release_timers()
        self._state = SyncState.IDLE
        self._committed = self._value
        if self._on_commit:
            self._on_commit(self._value, trigger)
        # on_commit may dispose us
        if self._disposed:
            return
        if self._on_complete:
            self._on_complete()

    def _matches_committed(self, value: str) -> bool:
        return value == self._committed
