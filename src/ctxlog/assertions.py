"""
Assertion failure handling.

An assertion failure is always logged (message, then call stack) at
ERROR before anything else happens. What happens next depends on the
recorder:

    recording enabled   →  one-shot ``recorded`` flag is set (tests)
    recording disabled  →  the configured policy decides:
        RecordPolicy    records anyway
        AbortPolicy     aborts the process, but only when built for
                        interactive debugging; otherwise logs and
                        carries on

Test harnesses enable recording (or inject RecordPolicy) and call
recorded_and_clear() to assert that exactly one failure happened since
the last check.
"""

import os
import sys
import threading
import traceback
from enum import Enum
from typing import Callable, Optional, Sequence


class AssertionOutcome(Enum):
    RECORDED = 'recorded'
    ABORTED = 'aborted'
    IGNORED = 'ignored'


class RecordPolicy:
    """Record every failure; never terminate."""

    def handle(self, recorder: "AssertionRecorder") -> AssertionOutcome:
        recorder.mark_recorded()
        return AssertionOutcome.RECORDED


class AbortPolicy:
    """Terminate the process on failure in debug deployments only.

    Args:
        debug: True for interactive development builds. When False the
            failure is logged and the process keeps running.
        abort: Termination hook, ``os.abort`` unless overridden.
    """

    def __init__(self, debug: bool = False,
                 abort: Optional[Callable[[], None]] = None):
        self.debug = debug
        self._abort = abort if abort is not None else os.abort

    def handle(self, recorder: "AssertionRecorder") -> AssertionOutcome:
        if not self.debug:
            return AssertionOutcome.IGNORED
        self._abort()
        return AssertionOutcome.ABORTED


def _stderr_emit(text: str) -> None:
    print(text, file=sys.stderr)


class AssertionRecorder:
    """Logs assertion failures and tracks the one-shot recorded flag.

    Both flags (recording enabled, failure recorded) live under a single
    lock so a set and a check-and-clear can never interleave.

    Args:
        policy: What to do when recording is disabled. Defaults to a
            non-debug AbortPolicy (log only).
        emit: Callable receiving each ERROR line. The facade passes its
            own error entry point; standalone use falls back to stderr.
    """

    def __init__(self, policy=None, emit: Optional[Callable[[str], None]] = None):
        self._lock = threading.Lock()
        self._recording_enabled = False
        self._recorded = False
        self.policy = policy if policy is not None else AbortPolicy()
        self._emit = emit or _stderr_emit

    @property
    def recording_enabled(self) -> bool:
        with self._lock:
            return self._recording_enabled

    def set_recording_enabled(self, enabled: bool) -> None:
        with self._lock:
            self._recording_enabled = bool(enabled)

    def mark_recorded(self) -> None:
        with self._lock:
            self._recorded = True

    def recorded_and_clear(self) -> bool:
        """Return whether a failure was recorded, clearing the flag."""
        with self._lock:
            recorded = self._recorded
            self._recorded = False
        return recorded

    def on_assertion_failure(self, where: str, message: str,
                             frames: Optional[Sequence[str]] = None) -> AssertionOutcome:
        """Log a failure with its stack, then record or defer to the policy.

        Args:
            where: Location description, e.g. ``"Session.refresh"`` or a
                ``file:line`` pair.
            message: Failure description.
            frames: Pre-captured stack lines. Captured here when omitted.
        """
        self._emit(f"ASSERTION FAILURE: [{where}]: {message}")
        self._emit(self._format_stack(frames))

        with self._lock:
            recording = self._recording_enabled
            if recording:
                self._recorded = True
        if recording:
            return AssertionOutcome.RECORDED
        return self.policy.handle(self)

    def check(self, condition, where: str, message: str) -> Optional[AssertionOutcome]:
        """Assert ``condition``; returns None when it holds."""
        if condition:
            return None
        return self.on_assertion_failure(where, message)

    @staticmethod
    def _format_stack(frames: Optional[Sequence[str]]) -> str:
        try:
            if frames is None:
                # drop this helper and on_assertion_failure itself
                frames = traceback.format_stack()[:-2]
            return "".join(
                line if line.endswith("\n") else line + "\n" for line in frames
            ).rstrip("\n")
        except Exception as e:
            return f"<stack unavailable: {type(e).__name__}: {e}>"
