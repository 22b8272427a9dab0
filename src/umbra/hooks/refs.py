from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar, overload

from umbra.hooks.core import HookContext
from umbra.hooks.memo import use_memo
from umbra.refs import Ref

T = TypeVar("T")


@overload
def use_ref(initial: T) -> Ref[T]: ...
@overload
def use_ref() -> Ref[Any]: ...
def use_ref(initial: Any = None) -> Ref[Any]:
	"""A `Ref` allocated on first render and returned unchanged afterwards."""
	ctx = HookContext.require("use_ref")
	index = ctx.cursors.ref
	ctx.cursors.ref += 1
	refs = ctx.slots.refs
	if index >= len(refs):
		refs.append(Ref(initial))
	return refs[index]


def use_imperative_handle(
	ref: Ref[Any] | None,
	create: Callable[[], T],
	deps: Sequence[Any] | None = None,
) -> None:
	"""Expose ``create()`` through a ref received from `forward_ref`.

	The handle is memoized on ``deps`` and assigned during render. Passing
	``ref=None`` still consumes the hook slot so call order stays stable.
	"""
	handle = use_memo(create, deps)
	if ref is not None:
		ref.current = handle


__all__ = ["use_imperative_handle", "use_ref"]
