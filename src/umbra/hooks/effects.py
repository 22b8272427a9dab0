from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Literal

from umbra.errors import report
from umbra.helpers import deps_changed
from umbra.hooks.core import EffectFn, EffectSlot, HookContext, run_teardown

logger = logging.getLogger(__name__)


def _register(
	kind: Literal["effect", "layout_effect"],
	fn: EffectFn,
	deps: Sequence[Any] | None,
) -> None:
	if not callable(fn):
		raise ValueError(f"use_{kind} expects a function, got {type(fn).__name__}")
	ctx = HookContext.require(f"use_{kind}")
	frozen = tuple(deps) if deps is not None else None
	if kind == "effect":
		index = ctx.cursors.effect
		ctx.cursors.effect += 1
		slots, queue = ctx.slots.effects, ctx.effect_queue
	else:
		index = ctx.cursors.layout_effect
		ctx.cursors.layout_effect += 1
		slots, queue = ctx.slots.layout_effects, ctx.layout_effect_queue

	if index >= len(slots):
		slot = EffectSlot(effect=fn, deps=frozen)
		slots.append(slot)
		queue.append(slot)
		return

	slot = slots[index]
	if deps_changed(slot.deps, frozen):
		slot.effect = fn
		slot.deps = frozen
		queue.append(slot)


def use_effect(fn: EffectFn, deps: Sequence[Any] | None = None) -> None:
	"""Run ``fn`` after the render has been applied to the output.

	Effects run once the current synchronous work has finished, after any
	layout effects. ``fn`` may return a teardown, called before the effect runs
	again and when the component is removed.

	Args:
		fn: The effect. Its return value, if callable, is kept as the teardown.
		deps: Values the effect depends on. ``None`` re-runs after every render,
			an empty sequence runs once, otherwise the effect re-runs when any
			element changes.

	Example:

	```python
	def Clock(props):
	    now, set_now = use_state(time.time)

	    def subscribe():
	        handle = ticker.subscribe(lambda: set_now(time.time()))
	        return handle.cancel

	    use_effect(subscribe, [])
	    return h("span", None, now)
	```
	"""
	_register("effect", fn, deps)


def use_layout_effect(fn: EffectFn, deps: Sequence[Any] | None = None) -> None:
	"""Like `use_effect`, but runs in the frame phase before regular effects."""
	_register("layout_effect", fn, deps)


def run_effect(ctx: HookContext, slot: EffectSlot) -> None:
	"""Run one queued effect: previous teardown first, then the effect body."""
	run_teardown(slot)
	try:
		result = slot.effect()
	except Exception as exc:
		report(
			exc,
			code="effect",
			message="Error running effect",
			details={"component": ctx.node.name},
		)
		return
	if result is None:
		return
	if not callable(result):
		logger.warning(
			"Effect in %s returned %r; only callables are kept as teardowns",
			ctx.node.name,
			result,
		)
		return
	slot.teardown = result
	if ctx.unmounted:
		# Removed before the effect ran: tear down right away.
		run_teardown(slot)


def run_effects(ctx: HookContext, slots: Sequence[EffectSlot]) -> None:
	for slot in slots:
		run_effect(ctx, slot)


__all__ = [
	"run_effect",
	"run_effects",
	"use_effect",
	"use_layout_effect",
]
