"""
Tests for the Debounce Gate and its schedulers.
"""

import asyncio

import pytest

from jsx_editor.editor.debounce import AsyncioScheduler, Debouncer, ManualScheduler


def test_burst_collapses_to_last_call(scheduler):
  received = []
  debounced = Debouncer(2.0, lambda *args: received.append(args), scheduler)

  debounced("a")
  scheduler.advance(1.0)
  debounced("b")
  scheduler.advance(1.0)
  debounced("c")

  assert received == []
  assert scheduler.pending == 1
  scheduler.advance(1.99)
  assert received == []
  scheduler.advance(0.01)
  assert received == [("c",)]
  assert not debounced.pending


def test_keyword_arguments_are_delivered(scheduler):
  received = []
  debounced = Debouncer(0.5, lambda **kwargs: received.append(kwargs), scheduler)
  debounced(code="x")
  scheduler.advance(0.5)
  assert received == [{"code": "x"}]


def test_separate_bursts_fire_separately(scheduler):
  received = []
  debounced = Debouncer(1.0, received.append, scheduler)
  debounced(1)
  scheduler.advance(5)
  debounced(2)
  scheduler.advance(5)
  assert received == [1, 2]


def test_cancel_drops_pending_call(scheduler):
  received = []
  debounced = Debouncer(1.0, received.append, scheduler)
  debounced("x")
  debounced.cancel()
  assert scheduler.advance(10) == 0
  assert received == []


def test_flush_runs_immediately(scheduler):
  received = []
  debounced = Debouncer(1.0, received.append, scheduler)
  assert not debounced.flush()
  debounced("now")
  assert debounced.flush()
  assert received == ["now"]
  scheduler.advance(10)
  assert received == ["now"]


def test_manual_scheduler_orders_by_deadline():
  clock = ManualScheduler()
  fired = []
  clock.call_later(3, lambda: fired.append("late"))
  clock.call_later(1, lambda: fired.append("early"))
  clock.call_later(1, lambda: fired.append("early-second"))
  assert clock.advance(5) == 3
  assert fired == ["early", "early-second", "late"]
  assert clock.now == 5


def test_manual_scheduler_runs_timers_scheduled_while_firing():
  clock = ManualScheduler()
  fired = []

  def chain():
    fired.append(clock.now)
    clock.call_later(1, lambda: fired.append(clock.now))

  clock.call_later(1, chain)
  clock.advance(3)
  assert fired == [1, 2]


def test_asyncio_scheduler():
  received = []

  async def scenario():
    debounced = Debouncer(0.01, received.append, AsyncioScheduler())
    debounced(1)
    debounced(2)
    await asyncio.sleep(0.05)

  asyncio.run(scenario())
  assert received == [2]


def test_asyncio_scheduler_without_loop_fails_on_construction():
  with pytest.raises(RuntimeError, match="running event loop"):
    AsyncioScheduler()
  with pytest.raises(RuntimeError):
    Debouncer(1.0, print)


def test_asyncio_scheduler_with_explicit_loop():
  loop = asyncio.new_event_loop()
  try:
    received = []
    debounced = Debouncer(0.01, received.append, AsyncioScheduler(loop))
    debounced("a")
    debounced("b")
    loop.run_until_complete(asyncio.sleep(0.05))
    assert received == ["b"]
  finally:
    loop.close()
