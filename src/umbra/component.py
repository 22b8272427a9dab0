"""Component wrappers: fragments, memoization and ref forwarding."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, override

from umbra.helpers import values_equal
from umbra.nodes import CHILDREN_PROP, REF_PROP, ComponentFn, Props
from umbra.refs import Ref

PropsEqual = Callable[[Props, Props], bool]


def Fragment(props: Mapping[str, Any]) -> Any:
	"""Render children without a wrapping output node."""
	return props.get(CHILDREN_PROP)


class MemoComponent:
	"""A component that skips re-rendering when its props and children are unchanged.

	Instances are created by `memo`. The wrapper is itself the component
	identity, so create it once (at module level) rather than during render.

	Attributes:
		component: The wrapped component function.
		are_equal: Optional ``(old_props, new_props) -> bool`` replacing the
			default deep comparison of props. Children are always compared deeply.
	"""

	component: ComponentFn
	are_equal: PropsEqual | None
	__name__: str

	def __init__(self, component: ComponentFn, are_equal: PropsEqual | None = None) -> None:
		self.component = component
		self.are_equal = are_equal
		self.__name__ = getattr(component, "__name__", type(component).__name__)

	def __call__(self, props: dict[str, Any]) -> Any:
		return self.component(props)

	def should_skip(
		self,
		old_props: Props,
		old_children: tuple[Any, ...],
		new_props: Props,
		new_children: tuple[Any, ...],
	) -> bool:
		if not values_equal(old_children, new_children):
			return False
		if self.are_equal is not None:
			return bool(self.are_equal(old_props, new_props))
		return values_equal(old_props, new_props)

	@override
	def __repr__(self) -> str:
		return f"memo({self.__name__})"


def memo(component: ComponentFn, are_equal: PropsEqual | None = None) -> MemoComponent:
	"""Wrap ``component`` so updates with equal props and children are skipped.

	State changes inside the component still re-render it.
	"""
	return MemoComponent(component, are_equal)


class ForwardRefComponent:
	"""A component whose render function receives the ``ref`` prop separately."""

	render: Callable[[dict[str, Any], Ref[Any]], Any]
	__name__: str

	def __init__(self, render: Callable[[dict[str, Any], Ref[Any]], Any]) -> None:
		self.render = render
		self.__name__ = getattr(render, "__name__", type(render).__name__)

	def __call__(self, props: dict[str, Any]) -> Any:
		ref = props.get(REF_PROP)
		rest = {name: value for name, value in props.items() if name != REF_PROP}
		return self.render(rest, ref if ref is not None else Ref())

	@override
	def __repr__(self) -> str:
		return f"forward_ref({self.__name__})"


def forward_ref(
	render: Callable[[dict[str, Any], Ref[Any]], Any],
) -> ForwardRefComponent:
	"""Define a component that hands its ``ref`` prop to ``render(props, ref)``.

	Pair it with `use_imperative_handle` to expose a custom object through the
	ref. A fresh, unshared `Ref` is passed when the caller gives none.
	"""
	return ForwardRefComponent(render)


__all__ = [
	"ForwardRefComponent",
	"Fragment",
	"MemoComponent",
	"PropsEqual",
	"forward_ref",
	"memo",
]
