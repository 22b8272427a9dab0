"""Deferred execution of effects.

Work is split into two phases. Frame callbacks (layout effects) run first,
then task callbacks (regular effects). A scheduler never runs a task while
frame callbacks are pending, so every layout effect queued by a render runs
before the regular effects queued by the same render.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import override

from anyio import from_thread

from umbra.env import env
from umbra.errors import RenderLoopError, report

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class Scheduler:
	"""Queues frame and task callbacks; subclasses decide when they run."""

	_frame: list[Callback]
	_tasks: list[Callback]

	def __init__(self) -> None:
		self._frame = []
		self._tasks = []

	def before_paint(self, callback: Callback) -> None:
		"""Queue ``callback`` for the frame phase."""
		self._frame.append(callback)
		self._request_flush()

	def after_paint(self, callback: Callback) -> None:
		"""Queue ``callback`` for the task phase."""
		self._tasks.append(callback)
		self._request_flush()

	@property
	def pending(self) -> bool:
		return bool(self._frame or self._tasks)

	def run_frame(self) -> int:
		callbacks, self._frame = self._frame, []
		for callback in callbacks:
			self._invoke(callback)
		return len(callbacks)

	def run_tasks(self) -> int:
		ran = self.run_frame()
		callbacks, self._tasks = self._tasks, []
		for callback in callbacks:
			self._invoke(callback)
		return ran + len(callbacks)

	def flush(self, limit: int | None = None) -> int:
		"""Run queued work until both phases are empty; returns callbacks run.

		Raises:
			RenderLoopError: If effects keep queueing work for more than
				``limit`` passes (``UMBRA_FLUSH_LIMIT`` by default).
		"""
		limit = limit if limit is not None else env.flush_limit
		passes = 0
		ran = 0
		while self.pending:
			passes += 1
			if passes > limit:
				raise RenderLoopError(
					f"Effects were still scheduling work after {limit} flush passes"
				)
			ran += self.run_tasks()
		return ran

	def _invoke(self, callback: Callback) -> None:
		try:
			callback()
		except Exception as exc:
			report(exc, code="scheduler", message="Error in scheduled callback")

	def _request_flush(self) -> None:
		pass


class ManualScheduler(Scheduler):
	"""Runs queued work only when `flush` is called. Used outside an event loop."""

	@override
	def __repr__(self) -> str:
		return f"ManualScheduler(frame={len(self._frame)}, tasks={len(self._tasks)})"


class AsyncioScheduler(Scheduler):
	"""Runs the frame phase on the next loop iteration and tasks on the one after.

	Callbacks may be queued from worker threads started through anyio; they
	are handed to the loop that owns the thread.
	"""

	_loop: asyncio.AbstractEventLoop | None
	_scheduled: bool

	def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
		super().__init__()
		self._loop = loop
		self._scheduled = False

	@override
	def _request_flush(self) -> None:
		if self._scheduled:
			return
		self._scheduled = True
		try:
			self._call_soon(self._on_frame)
		except RuntimeError:
			self._scheduled = False
			logger.warning(
				"No event loop available; %d callbacks stay queued until flush()",
				len(self._frame) + len(self._tasks),
			)

	def _call_soon(self, callback: Callback) -> None:
		if self._loop is not None and not self._loop.is_closed():
			self._loop.call_soon_threadsafe(callback)
			return
		try:
			loop = asyncio.get_running_loop()
		except RuntimeError:

			async def _runner() -> None:
				asyncio.get_running_loop().call_soon(callback)

			from_thread.run(_runner)
			return
		self._loop = loop
		loop.call_soon(callback)

	def _on_frame(self) -> None:
		self._scheduled = False
		self.run_frame()
		if self._tasks:
			self._call_soon(self._on_tasks)

	def _on_tasks(self) -> None:
		self.run_tasks()

	@override
	def __repr__(self) -> str:
		return f"AsyncioScheduler(frame={len(self._frame)}, tasks={len(self._tasks)})"


def default_scheduler() -> Scheduler:
	"""An `AsyncioScheduler` bound to the running loop, else a `ManualScheduler`."""
	try:
		loop = asyncio.get_running_loop()
	except RuntimeError:
		return ManualScheduler()
	return AsyncioScheduler(loop)


__all__ = [
	"AsyncioScheduler",
	"Callback",
	"ManualScheduler",
	"Scheduler",
	"default_scheduler",
]
