"""Unit tests for the Debouncer state machine on a virtual clock."""

import pytest

from promptvars_core.errors import PromptVarsError
from promptvars_core.sync import Debouncer
from promptvars_core.types import SyncState


class Recorder:
    """Collects debouncer callbacks with the virtual time they happened at."""

    def __init__(self, scheduler):
        self.scheduler = scheduler
        self.commits = []
        self.pending = []
        self.complete = []

    def on_commit(self, value, trigger):
        self.commits.append((self.scheduler.now, value, trigger))

    def on_pending(self):
        self.pending.append(self.scheduler.now)

    def on_complete(self):
        self.complete.append(self.scheduler.now)


@pytest.fixture
def recorder(scheduler):
    return Recorder(scheduler)


@pytest.fixture
def debouncer(scheduler, recorder):
    return Debouncer(
        "",
        scheduler=scheduler,
        delay_ms=300,
        max_wait_ms=1000,
        on_commit=recorder.on_commit,
        on_pending=recorder.on_pending,
        on_complete=recorder.on_complete,
    )


def type_at(scheduler, debouncer, edits):
    """Push each (time, value) edit at its virtual time."""
    for at, value in edits:
        scheduler.advance_to(at)
        debouncer.push(value)


@pytest.mark.sync
class TestCoalescing:
    """Rapid edits collapse into one commit."""

    def test_burst_commits_last_value_after_quiet_period(self, scheduler, debouncer, recorder):
        type_at(scheduler, debouncer, [(0, "a"), (50, "ab"), (100, "abc"), (150, "abcd")])

        scheduler.advance_to(449)
        assert recorder.commits == []
        assert debouncer.pending is True

        scheduler.advance_to(450)
        assert recorder.commits == [(450, "abcd", "quiet")]
        assert debouncer.state is SyncState.IDLE
        assert debouncer.committed == "abcd"

    def test_single_edit(self, scheduler, debouncer, recorder):
        debouncer.push("x")
        scheduler.run_all()

        assert recorder.commits == [(300, "x", "quiet")]

    def test_hooks_fire_once_per_burst(self, scheduler, debouncer, recorder):
        type_at(scheduler, debouncer, [(0, "a"), (50, "ab"), (100, "abc")])
        scheduler.run_all()

        assert recorder.pending == [0]
        assert recorder.complete == [400]

    def test_two_separate_bursts(self, scheduler, debouncer, recorder):
        type_at(scheduler, debouncer, [(0, "a"), (100, "ab")])
        scheduler.advance_to(400)
        type_at(scheduler, debouncer, [(1000, "abc")])
        scheduler.run_all()

        assert [c[:2] for c in recorder.commits] == [(400, "ab"), (1300, "abc")]
        assert recorder.pending == [0, 1000]
        assert recorder.complete == [400, 1300]

    def test_push_equal_to_committed_from_idle_is_ignored(self, scheduler, debouncer, recorder):
        debouncer.push("")
        scheduler.run_all()

        assert debouncer.state is SyncState.IDLE
        assert recorder.pending == []
        assert recorder.commits == []

    def test_is_committed_predicate_decides_idle_noop(self, scheduler, recorder):
        authoritative = {"value": "abc"}
        debouncer = Debouncer(
            "",
            scheduler=scheduler,
            on_commit=recorder.on_commit,
            is_committed=lambda value: value == authoritative["value"],
        )

        debouncer.push("abc")
        assert debouncer.pending is False

        debouncer.push("")
        assert debouncer.pending is True
        scheduler.run_all()
        assert recorder.commits == [(300, "", "quiet")]

    def test_value_leads_committed(self, scheduler, debouncer):
        debouncer.push("draft")

        assert debouncer.value == "draft"
        assert debouncer.committed == ""


@pytest.mark.sync
class TestCeiling:
    """Continuous typing still commits within max_wait_ms."""

    def test_continuous_typing_commits_at_ceiling(self, scheduler, debouncer, recorder):
        edits = [(t, "x" * (t // 50 + 1)) for t in range(0, 1000, 50)]
        type_at(scheduler, debouncer, edits)

        scheduler.advance_to(999)
        assert recorder.commits == []

        scheduler.advance_to(1000)
        assert recorder.commits == [(1000, "x" * 20, "ceiling")]

    def test_typing_after_ceiling_starts_new_burst(self, scheduler, debouncer, recorder):
        edits = [(t, "x" * (t // 50 + 1)) for t in range(0, 1500, 50)]
        type_at(scheduler, debouncer, edits)
        scheduler.run_all()

        assert [c[0] for c in recorder.commits] == [1000, 1750]
        assert recorder.commits[-1][1] == "x" * 30
        assert recorder.pending == [0, 1000]

    def test_ceiling_not_restarted_by_edits(self, scheduler, debouncer, recorder):
        type_at(scheduler, debouncer, [(0, "a"), (250, "ab"), (500, "abc"), (750, "abcd")])

        scheduler.advance_to(1000)

        assert recorder.commits == [(1000, "abcd", "ceiling")]

    def test_no_leftover_timers_after_commit(self, scheduler, debouncer):
        type_at(scheduler, debouncer, [(0, "a"), (50, "ab")])
        scheduler.advance_to(350)

        assert scheduler.live_timers == 0

    def test_equal_delays(self, scheduler, recorder):
        debouncer = Debouncer(
            scheduler=scheduler,
            delay_ms=200,
            max_wait_ms=200,
            on_commit=recorder.on_commit,
        )
        type_at(scheduler, debouncer, [(0, "a"), (100, "ab")])
        scheduler.run_all()

        assert [c[:2] for c in recorder.commits] == [(200, "ab")]


@pytest.mark.sync
class TestFlushCancelReset:
    """Tests for explicit control operations."""

    def test_flush_commits_immediately(self, scheduler, debouncer, recorder):
        type_at(scheduler, debouncer, [(0, "a"), (40, "ab")])

        assert debouncer.flush() is True
        assert recorder.commits == [(40, "ab", "flush")]
        assert recorder.complete == [40]

        scheduler.run_all()
        assert len(recorder.commits) == 1

    def test_flush_when_idle(self, debouncer, recorder):
        assert debouncer.flush() is False
        assert recorder.commits == []

    def test_cancel_drops_pending_commit(self, scheduler, debouncer, recorder):
        debouncer.push("a")

        assert debouncer.cancel() is True
        scheduler.run_all()

        assert recorder.commits == []
        assert recorder.complete == []
        assert debouncer.value == "a"
        assert debouncer.committed == ""

    def test_push_after_cancel_starts_new_burst(self, scheduler, debouncer, recorder):
        debouncer.push("a")
        debouncer.cancel()
        scheduler.advance_to(100)
        debouncer.push("ab")
        scheduler.run_all()

        assert recorder.commits == [(400, "ab", "quiet")]
        assert recorder.pending == [0, 100]

    def test_reset_adopts_external_value(self, scheduler, debouncer, recorder):
        debouncer.push("local")
        debouncer.reset("external")
        scheduler.run_all()

        assert recorder.commits == []
        assert debouncer.value == "external"
        assert debouncer.committed == "external"

        debouncer.push("external")
        assert debouncer.pending is False


@pytest.mark.sync
class TestDispose:
    """No callback runs after dispose."""

    def test_dispose_mid_burst(self, scheduler, debouncer, recorder):
        type_at(scheduler, debouncer, [(0, "a"), (50, "ab")])
        scheduler.advance_to(100)

        assert debouncer.dispose() is True
        scheduler.advance_to(5000)

        assert recorder.commits == []
        assert recorder.complete == []
        assert scheduler.live_timers == 0

    def test_dispose_inside_on_commit_skips_complete(self, scheduler):
        calls = []

        def on_commit(value, trigger):
            calls.append(("commit", value))
            debouncer.dispose()

        debouncer = Debouncer(
            scheduler=scheduler,
            on_commit=on_commit,
            on_complete=lambda: calls.append(("complete",)),
        )
        debouncer.push("x")
        scheduler.run_all()

        assert calls == [("commit", "x")]
        assert debouncer.disposed is True

    def test_push_after_dispose_ignored(self, scheduler, debouncer, recorder):
        debouncer.dispose()
        debouncer.push("late")
        scheduler.run_all()

        assert debouncer.disposed is True
        assert debouncer.value == ""
        assert recorder.pending == []
        assert debouncer.flush() is False

    def test_dispose_when_idle(self, debouncer):
        assert debouncer.dispose() is False

    def test_context_manager_disposes(self, scheduler, recorder):
        with Debouncer(scheduler=scheduler, on_commit=recorder.on_commit) as debouncer:
            debouncer.push("a")

        scheduler.run_all()
        assert debouncer.disposed is True
        assert recorder.commits == []

    def test_stale_timer_callback_is_ignored(self, recorder):
        """A timer that fires after being released must not commit."""

        class LeakyScheduler:
            def __init__(self):
                self.callbacks = []

            def call_later(self, delay_ms, callback):
                self.callbacks.append(callback)
                return self

            def cancel(self):
                pass

        leaky = LeakyScheduler()
        debouncer = Debouncer(scheduler=leaky, on_commit=recorder.on_commit)
        debouncer.push("a")
        debouncer.cancel()

        for callback in leaky.callbacks:
            callback()

        assert recorder.commits == []


class TestConfiguration:
    """Tests for delay validation."""

    @pytest.mark.parametrize(
        "delay_ms,max_wait_ms",
        [(-1, 1000), (300, -1), (500, 100)],
    )
    def test_invalid_delays(self, scheduler, delay_ms, max_wait_ms):
        with pytest.raises(PromptVarsError) as exc_info:
            Debouncer(scheduler=scheduler, delay_ms=delay_ms, max_wait_ms=max_wait_ms)

        assert exc_info.value.code == "SYNC_CONFIG_INVALID"
        assert str(max_wait_ms) in exc_info.value.detail

    def test_defaults(self, scheduler):
        debouncer = Debouncer(scheduler=scheduler)

        assert debouncer.delay_ms == 300
        assert debouncer.max_wait_ms == 1000
        assert debouncer.state is SyncState.IDLE
