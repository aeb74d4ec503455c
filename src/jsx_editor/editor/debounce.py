"""
Debounce Gate.

Collapses bursts of calls into a single invocation after a quiet period.
Each call cancels the pending timer and starts a new one carrying the latest
arguments, so only the last call of a burst is delivered (last write wins).

Timers come from a `Scheduler`:

- `AsyncioScheduler` binds to the event loop running when it is created
  (`loop.call_later`).
- `ManualScheduler` is driven by the host through `advance(seconds)`, for
  synchronous hosts and tests.
"""

import abc
import asyncio
import heapq
import itertools
from typing import Any, Callable, List, Optional, Tuple


class TimerHandle(abc.ABC):
  """A scheduled callback that can be cancelled before it fires."""

  @abc.abstractmethod
  def cancel(self) -> None:
    pass


class Scheduler(abc.ABC):
  """Source of one-shot timers."""

  @abc.abstractmethod
  def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
    """Runs `callback` once after `delay` seconds."""


class _AsyncioTimer(TimerHandle):
  def __init__(self, handle: asyncio.TimerHandle) -> None:
    self._handle = handle

  def cancel(self) -> None:
    self._handle.cancel()


class AsyncioScheduler(Scheduler):
  """
  Schedules on an asyncio event loop.

  Args:
      loop: Loop to use. Defaults to the loop running at construction time.

  Raises:
      RuntimeError: If no loop is given and none is running.
  """

  def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
    if loop is None:
      try:
        loop = asyncio.get_running_loop()
      except RuntimeError:
        raise RuntimeError(
          "AsyncioScheduler needs a running event loop; pass `loop=` or use ManualScheduler from synchronous code"
        ) from None
    self._loop = loop

  def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
    return _AsyncioTimer(self._loop.call_later(delay, callback))


class _ManualTimer(TimerHandle):
  def __init__(self, deadline: float, callback: Callable[[], Any]) -> None:
    self.deadline = deadline
    self.callback = callback
    self.cancelled = False

  def cancel(self) -> None:
    self.cancelled = True


class ManualScheduler(Scheduler):
  """
  A clock advanced explicitly by the host.

  Timers due at or before the new time fire in deadline order during
  `advance()`. Timers scheduled by a firing callback are honoured if they
  fall within the same advance.
  """

  def __init__(self) -> None:
    self.now = 0.0
    self._queue: List[Tuple[float, int, _ManualTimer]] = []
    self._counter = itertools.count()

  def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
    timer = _ManualTimer(self.now + max(delay, 0.0), callback)
    heapq.heappush(self._queue, (timer.deadline, next(self._counter), timer))
    return timer

  @property
  def pending(self) -> int:
    """Number of timers that are scheduled and not cancelled."""
    return sum(1 for _, _, timer in self._queue if not timer.cancelled)

  def advance(self, seconds: float) -> int:
    """
    Moves the clock forward, firing every timer that becomes due.

    Args:
        seconds: Time to advance by.

    Returns:
        int: Number of callbacks fired.
    """
    target = self.now + seconds
    fired = 0
    while self._queue and self._queue[0][0] <= target:
      deadline, _, timer = heapq.heappop(self._queue)
      if timer.cancelled:
        continue
      self.now = deadline
      timer.callback()
      fired += 1
    self.now = target
    return fired


class Debouncer:
  """
  Delays `callback` until `delay` seconds pass without another call.

  Args:
      delay: Quiet period in seconds.
      callback: Receives the arguments of the last call in a burst.
      scheduler: Timer source. Defaults to `AsyncioScheduler`.

  Raises:
      RuntimeError: If no scheduler is given and no event loop is running.
  """

  def __init__(self, delay: float, callback: Callable[..., Any], scheduler: Optional[Scheduler] = None) -> None:
    self.delay = delay
    self.callback = callback
    self.scheduler = scheduler or AsyncioScheduler()
    self._timer: Optional[TimerHandle] = None
    self._args: Tuple[Any, ...] = ()
    self._kwargs: dict = {}

  def __call__(self, *args: Any, **kwargs: Any) -> None:
    self.cancel()
    self._args = args
    self._kwargs = kwargs
    self._timer = self.scheduler.call_later(self.delay, self._fire)

  @property
  def pending(self) -> bool:
    return self._timer is not None

  def cancel(self) -> None:
    """Drops the pending invocation, if any."""
    if self._timer is not None:
      self._timer.cancel()
      self._timer = None

  def flush(self) -> bool:
    """
    Runs the pending invocation immediately.

    Returns:
        bool: True if an invocation was pending.
    """
    if self._timer is None:
      return False
    self._timer.cancel()
    self._fire()
    return True

  def _fire(self) -> None:
    self._timer = None
    args, kwargs = self._args, self._kwargs
    self._args, self._kwargs = (), {}
    self.callback(*args, **kwargs)
