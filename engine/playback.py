"""
playback.py — Step-by-Step Playback Controller
===============================================
The controller is the ONLY object the presentation layer drives during
playback.  It owns one Trace and a cursor into it, and fires `on_step`
every time the cursor changes.  It never computes anything algorithmic.

State machine:
    EMPTY     →  load()               →  READY
    READY     →  play_from()          →  ADVANCING
    ADVANCING →  cancel() / end / error →  READY
    any       →  load()               →  READY   (previous playback cancelled)
    any       →  unload()             →  EMPTY

Auto-play timing:
  play_from() emits a step, then waits one interval on a threading.Event.
  cancel(), load() and unload() all set that event, so a waiting player
  wakes immediately and re-checks whether it is still the active
  playback before touching the cursor.  A step that has started being
  emitted always finishes.

Thread safety:
  All state lives behind one lock.  on_step is called outside the lock
  so a callback may call back into the controller.
"""

import logging
import threading
from enum import Enum
from typing import Callable, Optional

from config import settings
from errors import IndexOutOfRange, InvalidPlaybackState
from algorithms.step import Step, Trace

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(str, Enum):
    EMPTY     = "empty"
    READY     = "ready"
    ADVANCING = "advancing"


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        state    : Current PlaybackState.
        trace    : Loaded Trace, or None.
        cursor   : Index of the displayed step (-1 when EMPTY).
        interval : Default seconds between auto-play steps.
        on_step  : Optional callback(Step) fired on every cursor change.
    """

    def __init__(
        self,
        on_step: Optional[Callable[[Step], None]] = None,
        interval: Optional[float] = None,
    ):
        self.on_step:   Optional[Callable[[Step], None]] = on_step
        self.interval:  float = settings.default_interval if interval is None else interval

        self._lock       = threading.Lock()
        self._wake       = threading.Event()
        self._trace:     Optional[Trace]  = None
        self._cursor:    int              = -1
        self._state:     PlaybackState    = PlaybackState.EMPTY
        # bumped whenever the active playback must stop (cancel/load/unload)
        self._token:     int              = 0

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> PlaybackState:
        with self._lock:
            return self._state

    @property
    def trace(self) -> Optional[Trace]:
        with self._lock:
            return self._trace

    @property
    def cursor(self) -> int:
        with self._lock:
            return self._cursor

    @property
    def current_step(self) -> Optional[Step]:
        with self._lock:
            if self._trace is None:
                return None
            return self._trace[self._cursor]

    @property
    def is_advancing(self) -> bool:
        return self.state == PlaybackState.ADVANCING

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, trace: Trace) -> Step:
        """Replace whatever is loaded with trace, cursor at 0."""
        if len(trace) == 0:
            raise ValueError("cannot load an empty trace")
        with self._lock:
            self._stop_locked()
            self._trace  = trace
            self._cursor = 0
            self._state  = PlaybackState.READY
            step = trace[0]
        logger.info("Loaded %s trace with %d steps", trace.algorithm, len(trace))
        self._notify(step)
        return step

    def unload(self) -> None:
        """Drop the trace (graph / selection changed).  Cancels auto-play."""
        with self._lock:
            if self._trace is None and self._state == PlaybackState.EMPTY:
                return
            self._stop_locked()
            self._trace  = None
            self._cursor = -1
            self._state  = PlaybackState.EMPTY
        logger.info("Trace discarded")

    # ------------------------------------------------------------------
    # Navigation (READY only)
    # ------------------------------------------------------------------
    def step_forward(self) -> Optional[Step]:
        """Advance one step.  Returns the new step, or None at the last step."""
        with self._lock:
            self._require_ready("step forward")
            if self._cursor >= len(self._trace) - 1:
                return None
            self._cursor += 1
            step = self._trace[self._cursor]
        self._notify(step)
        return step

    def step_backward(self) -> Optional[Step]:
        """Rewind one step.  Returns the new step, or None at step 0."""
        with self._lock:
            self._require_ready("step backward")
            if self._cursor <= 0:
                return None
            self._cursor -= 1
            step = self._trace[self._cursor]
        self._notify(step)
        return step

    def jump_to(self, index: int) -> Step:
        """Move the cursor to index and emit that step (even if unchanged)."""
        with self._lock:
            self._require_ready("jump")
            if not 0 <= index < len(self._trace):
                raise IndexOutOfRange(index, len(self._trace))
            self._cursor = index
            step = self._trace[index]
        self._notify(step)
        return step

    def rewind(self) -> Step:
        return self.jump_to(0)

    def jump_to_end(self) -> Step:
        with self._lock:
            last = len(self._trace) - 1 if self._trace is not None else 0
        return self.jump_to(last)

    # ------------------------------------------------------------------
    # Auto-play
    # ------------------------------------------------------------------
    def play_from(self, index: Optional[int] = None, interval: Optional[float] = None) -> bool:
        """
        Emit every step from index (default: the cursor) to the end,
        waiting `interval` seconds between consecutive steps.

        Blocks the calling thread.  Returns True if the last step was
        reached, False if the playback was cancelled or invalidated.
        """
        run = self._begin(index, interval)
        return self._advance(*run)

    def play_in_background(
        self,
        index: Optional[int] = None,
        interval: Optional[float] = None,
    ) -> threading.Thread:
        """
        Same as play_from() but on a daemon thread.  The controller is
        already ADVANCING when this returns, so an immediate cancel() works.
        """
        run = self._begin(index, interval)
        thread = threading.Thread(target=self._advance, args=run, name="playback", daemon=True)
        thread.start()
        return thread

    def cancel(self) -> bool:
        """Stop auto-play at the next step boundary.  Returns False if not playing."""
        with self._lock:
            if self._state != PlaybackState.ADVANCING:
                return False
            self._stop_locked()
            self._state = PlaybackState.READY
        logger.info("Auto-play cancelled at step %d", self.cursor)
        return True

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _begin(self, index: Optional[int], interval: Optional[float]):
        wait = self.interval if interval is None else interval
        with self._lock:
            self._require_ready("play")
            start = self._cursor if index is None else index
            if not 0 <= start < len(self._trace):
                raise IndexOutOfRange(start, len(self._trace))
            self._token += 1
            self._wake  = threading.Event()
            self._state = PlaybackState.ADVANCING
            run = (self._token, self._wake, start, len(self._trace) - 1, wait)
        logger.info("Auto-play from step %d (%.2fs per step)", start, wait)
        return run

    def _advance(self, token: int, wake: threading.Event, start: int, last: int, wait: float) -> bool:
        i = start
        try:
            while True:
                with self._lock:
                    if self._token != token:
                        logger.info("Auto-play stopped before step %d", i)
                        return False
                    self._cursor = i
                    step = self._trace[i]
                self._notify(step)

                if i >= last:
                    break
                wake.wait(wait)
                i += 1
        except Exception:
            logger.exception("Auto-play aborted at step %d", i)
            raise
        finally:
            # a failed or finished playback still hands control back
            with self._lock:
                finished = self._token == token
                if finished:
                    self._state = PlaybackState.READY

        if finished:
            logger.info("Auto-play finished")
        return finished

    def _stop_locked(self) -> None:
        self._token += 1
        self._wake.set()

    def _require_ready(self, action: str) -> None:
        if self._state == PlaybackState.EMPTY:
            raise InvalidPlaybackState(f"cannot {action}: no trace loaded")
        if self._state == PlaybackState.ADVANCING:
            raise InvalidPlaybackState(f"cannot {action} while auto-play is running")

    def _notify(self, step: Step) -> None:
        if self.on_step is not None:
            self.on_step(step)
