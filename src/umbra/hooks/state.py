from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar, cast, overload

from umbra.errors import RenderPhaseUpdateError
from umbra.hooks.core import HookContext, StateSlot
from umbra.hooks.memo import use_memo
from umbra.hooks.refs import use_ref

logger = logging.getLogger(__name__)

T = TypeVar("T")
A = TypeVar("A")
S = TypeVar("S")

SetState = Callable[[T | Callable[[T], T]], None]


def _make_setter(ctx: HookContext, slot: StateSlot) -> Callable[[Any], None]:
	def set_state(value: Any) -> None:
		active = HookContext.current()
		if active is not None:
			where = "its own component" if active is ctx else active.node.name
			raise RenderPhaseUpdateError(
				f"State setter of {ctx.node.name} called while {where} is rendering; "
				+ "move the update into an event handler or an effect"
			)
		if ctx.unmounted:
			logger.debug(
				"Ignoring state update on removed component %s", ctx.node.name
			)
			return
		slot.value = value(slot.value) if callable(value) else value
		if ctx.rerender is not None:
			ctx.rerender()

	return set_state


@overload
def use_state(initial: Callable[[], T]) -> tuple[T, SetState[T]]: ...
@overload
def use_state(initial: T) -> tuple[T, SetState[T]]: ...
@overload
def use_state() -> tuple[Any, SetState[Any]]: ...
def use_state(initial: Any = None) -> tuple[Any, SetState[Any]]:
	"""Persistent state for the current component.

	Args:
		initial: Initial value, or a zero-argument function computing it on the
			first render only.

	Returns:
		``(value, set_value)``. ``set_value`` accepts a new value or an updater
		``fn(current) -> new``; each call re-renders the component before
		returning. The setter keeps its identity across renders.

	Raises:
		InvalidHookCallError: If called outside a component render.

	Example:

	```python
	def Counter(props):
	    count, set_count = use_state(0)
	    return h("button", {"onClick": lambda _: set_count(lambda c: c + 1)}, count)
	```
	"""
	ctx = HookContext.require("use_state")
	index = ctx.cursors.state
	ctx.cursors.state += 1
	states = ctx.slots.states
	if index >= len(states):
		slot = StateSlot(value=initial() if callable(initial) else initial)
		slot.setter = _make_setter(ctx, slot)
		states.append(slot)
	slot = states[index]
	return slot.value, cast("SetState[Any]", slot.setter)


@overload
def use_reducer(
	reducer: Callable[[T, A], T], initial_arg: T
) -> tuple[T, Callable[[A], None]]: ...
@overload
def use_reducer(
	reducer: Callable[[T, A], T], initial_arg: S, init: Callable[[S], T]
) -> tuple[T, Callable[[A], None]]: ...
def use_reducer(
	reducer: Callable[[Any, Any], Any],
	initial_arg: Any,
	init: Callable[[Any], Any] | None = None,
) -> tuple[Any, Callable[[Any], None]]:
	"""State driven by a reducer: ``dispatch(action)`` stores ``reducer(state, action)``."""
	if init is not None:
		state, set_state = use_state(lambda: init(initial_arg))
	else:
		state, set_state = use_state(lambda: initial_arg)
	# Dispatch keeps its identity; it always applies the latest reducer.
	latest = use_ref(reducer)
	latest.current = reducer

	def make_dispatch() -> Callable[[Any], None]:
		def dispatch(action: Any) -> None:
			set_state(lambda current: latest.current(current, action))

		return dispatch

	return state, use_memo(make_dispatch, [set_state])


__all__ = ["SetState", "use_reducer", "use_state"]
