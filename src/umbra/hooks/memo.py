from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from umbra.helpers import deps_changed
from umbra.hooks.core import HookContext, MemoSlot

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])


def use_memo(fn: Callable[[], T], deps: Sequence[Any] | None) -> T:
	"""Cache ``fn()`` until one of ``deps`` changes.

	``deps=None`` recomputes on every render.
	"""
	ctx = HookContext.require("use_memo")
	index = ctx.cursors.memo
	ctx.cursors.memo += 1
	memos = ctx.slots.memos
	if index >= len(memos):
		memos.append(MemoSlot(value=fn(), deps=_freeze(deps)))
	elif deps_changed(memos[index].deps, deps):
		memos[index] = MemoSlot(value=fn(), deps=_freeze(deps))
	return memos[index].value


def use_callback(fn: F, deps: Sequence[Any] | None) -> F:
	"""Return the same ``fn`` object until one of ``deps`` changes."""
	return use_memo(lambda: fn, deps)


def _freeze(deps: Sequence[Any] | None) -> tuple[Any, ...] | None:
	return tuple(deps) if deps is not None else None


__all__ = ["use_callback", "use_memo"]
