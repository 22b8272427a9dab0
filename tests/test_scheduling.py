import asyncio
import logging

import pytest
from umbra.env import ENV_UMBRA_FLUSH_LIMIT
from umbra.errors import RenderLoopError
from umbra.hooks import use_effect, use_state
from umbra.nodes import h
from umbra.root import Root
from umbra.scheduling import (
	AsyncioScheduler,
	ManualScheduler,
	default_scheduler,
)


def test_manual_scheduler_runs_frame_before_tasks():
	scheduler = ManualScheduler()
	log: list[str] = []
	scheduler.after_paint(lambda: log.append("task"))
	scheduler.before_paint(lambda: log.append("frame"))
	assert scheduler.flush() == 2
	assert log == ["frame", "task"]


def test_callbacks_queued_during_flush_run_in_same_flush():
	scheduler = ManualScheduler()
	log: list[str] = []

	def first():
		log.append("first")
		scheduler.after_paint(lambda: log.append("second"))

	scheduler.after_paint(first)
	scheduler.flush()
	assert log == ["first", "second"]


def test_failing_callback_is_reported(caplog: pytest.LogCaptureFixture):
	scheduler = ManualScheduler()
	log: list[str] = []

	def fail():
		raise KeyError("missing")

	scheduler.after_paint(fail)
	scheduler.after_paint(lambda: log.append("after"))
	with caplog.at_level(logging.ERROR, logger="umbra"):
		scheduler.flush()
	assert log == ["after"]
	assert "code=scheduler" in caplog.text


def test_flush_limit_stops_runaway_effects(root: Root):
	def Runaway(props):
		count, set_count = use_state(0)
		use_effect(lambda: set_count(count + 1))
		return str(count)

	root.render(h(Runaway, None))
	with pytest.raises(RenderLoopError):
		root.flush(limit=5)


def test_flush_limit_from_environment(
	root: Root, monkeypatch: pytest.MonkeyPatch
):
	monkeypatch.setenv(ENV_UMBRA_FLUSH_LIMIT, "3")

	def Runaway(props):
		count, set_count = use_state(0)
		use_effect(lambda: set_count(count + 1))
		return str(count)

	root.render(h(Runaway, None))
	with pytest.raises(RenderLoopError, match="3 flush passes"):
		root.flush()


def test_default_scheduler_outside_loop():
	assert isinstance(default_scheduler(), ManualScheduler)


@pytest.mark.asyncio
async def test_default_scheduler_inside_loop():
	assert isinstance(default_scheduler(), AsyncioScheduler)


@pytest.mark.asyncio
async def test_asyncio_scheduler_orders_phases():
	scheduler = AsyncioScheduler()
	log: list[str] = []
	scheduler.after_paint(lambda: log.append("task"))
	scheduler.before_paint(lambda: log.append("frame"))
	assert log == []

	await asyncio.sleep(0)
	assert log[0] == "frame"
	for _ in range(2):
		await asyncio.sleep(0)
	assert log == ["frame", "task"]
	assert not scheduler.pending


@pytest.mark.asyncio
async def test_asyncio_scheduler_accepts_work_from_threads():
	loop = asyncio.get_running_loop()
	scheduler = AsyncioScheduler(loop)
	done = asyncio.Event()

	await asyncio.to_thread(scheduler.after_paint, done.set)
	await asyncio.wait_for(done.wait(), timeout=1)


def test_asyncio_scheduler_without_loop_keeps_work(caplog: pytest.LogCaptureFixture):
	scheduler = AsyncioScheduler()
	log: list[str] = []
	with caplog.at_level(logging.WARNING, logger="umbra"):
		scheduler.after_paint(lambda: log.append("task"))
	assert "No event loop available" in caplog.text
	assert scheduler.pending
	scheduler.flush()
	assert log == ["task"]
