from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

from umbra.errors import InvalidHookCallError, report
from umbra.refs import Ref

if TYPE_CHECKING:
	from umbra.shadow import ComponentNode

logger = logging.getLogger(__name__)

Teardown = Callable[[], Any]
EffectFn = Callable[[], Teardown | None]


@dataclass(slots=True, eq=False)
class StateSlot:
	value: Any
	setter: Callable[[Any], None] | None = None


@dataclass(slots=True, eq=False)
class EffectSlot:
	effect: EffectFn
	deps: Sequence[Any] | None
	teardown: Teardown | None = None


@dataclass(slots=True, eq=False)
class MemoSlot:
	value: Any
	deps: Sequence[Any] | None


@dataclass(slots=True)
class HookCursors:
	state: int = 0
	effect: int = 0
	layout_effect: int = 0
	ref: int = 0
	memo: int = 0


@dataclass(slots=True, eq=False)
class HookSlots:
	"""Parallel slot lists; entry *i* belongs to the *i*-th call of that hook."""

	states: list[StateSlot] = field(default_factory=list)
	effects: list[EffectSlot] = field(default_factory=list)
	layout_effects: list[EffectSlot] = field(default_factory=list)
	refs: list[Ref[Any]] = field(default_factory=list)
	memos: list[MemoSlot] = field(default_factory=list)


class HookContext:
	"""Hook storage for one component node.

	Entering the context marks the node as the one currently rendering: free
	standing hook functions resolve it through `HookContext.require`. The
	previous context is restored on exit, so a render triggered from inside
	another render nests correctly.
	"""

	node: "ComponentNode"
	slots: HookSlots
	cursors: HookCursors
	effect_queue: list[EffectSlot]
	layout_effect_queue: list[EffectSlot]
	render_cycle: int
	rendering: bool
	unmounted: bool
	rerender: Callable[[], None] | None
	_token: "Token[HookContext | None] | None"

	def __init__(self, node: "ComponentNode") -> None:
		self.node = node
		self.slots = HookSlots()
		self.cursors = HookCursors()
		self.effect_queue = []
		self.layout_effect_queue = []
		self.render_cycle = 0
		self.rendering = False
		self.unmounted = False
		self.rerender = None
		self._token = None

	@staticmethod
	def require(caller: str | None = None) -> "HookContext":
		ctx = HOOK_CONTEXT.get()
		if ctx is None:
			caller = caller or "this function"
			raise InvalidHookCallError(
				f"Invalid hook call: {caller} can only be called while a component is rendering"
			)
		return ctx

	@staticmethod
	def current() -> "HookContext | None":
		return HOOK_CONTEXT.get()

	def __enter__(self) -> "HookContext":
		self.render_cycle += 1
		self.cursors = HookCursors()
		self.effect_queue = []
		self.layout_effect_queue = []
		self.rendering = True
		self._token = HOOK_CONTEXT.set(self)
		return self

	def __exit__(
		self,
		exc_type: type[BaseException] | None,
		exc_val: BaseException | None,
		exc_tb: Any,
	) -> Literal[False]:
		self.rendering = False
		if self._token is not None:
			HOOK_CONTEXT.reset(self._token)
			self._token = None
		return False

	def take_queues(self) -> tuple[list[EffectSlot], list[EffectSlot]]:
		layout, regular = self.layout_effect_queue, self.effect_queue
		self.layout_effect_queue = []
		self.effect_queue = []
		return layout, regular

	def unmount(self) -> None:
		"""Run every pending teardown exactly once."""
		self.unmounted = True
		logger.debug("Unmounting hooks of %s", self.node.name)
		for slot in (*self.slots.layout_effects, *self.slots.effects):
			run_teardown(slot)


def run_teardown(slot: EffectSlot) -> None:
	teardown, slot.teardown = slot.teardown, None
	if teardown is None:
		return
	try:
		teardown()
	except Exception as exc:
		report(exc, code="effect.teardown", message="Error running effect teardown")


HOOK_CONTEXT: ContextVar[HookContext | None] = ContextVar(
	"umbra_hook_context", default=None
)


__all__ = [
	"HOOK_CONTEXT",
	"EffectFn",
	"EffectSlot",
	"HookContext",
	"HookCursors",
	"HookSlots",
	"MemoSlot",
	"StateSlot",
	"Teardown",
	"run_teardown",
]
