"""Context: values provided by an ancestor component and read by descendants."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast, override

from umbra.hooks.core import HookContext
from umbra.nodes import CHILDREN_PROP, ComponentFn
from umbra.shadow import ComponentNode, ancestors

T = TypeVar("T")

CONTEXT_PROP = "context"
VALUE_PROP = "value"


@dataclass(slots=True, frozen=True, eq=False)
class Context(Generic[T]):
	"""A context created by `create_context`.

	Render ``h(ctx.Provider, {"context": v}, *children)`` to provide ``v`` to
	every descendant calling ``use_context(ctx)``. ``value`` is accepted in
	place of ``context``.
	"""

	provider: ComponentFn
	default_value: T

	@property
	def Provider(self) -> ComponentFn:
		return self.provider

	@override
	def __repr__(self) -> str:
		return f"Context(default={self.default_value!r})"


def create_context(default_value: T = None) -> Context[T]:  # pyright: ignore[reportArgumentType]
	def Provider(props: Mapping[str, Any]) -> Any:
		return props.get(CHILDREN_PROP)

	return Context(provider=Provider, default_value=default_value)


def use_context(context: Context[T]) -> T:
	"""Read the value of the nearest enclosing provider of ``context``.

	Returns ``context.default_value`` when no ancestor provides it. The lookup
	happens on every render; a provider changing its value re-renders its
	subtree like any other prop change.
	"""
	ctx = HookContext.require("use_context")
	for ancestor in ancestors(ctx.node):
		if isinstance(ancestor, ComponentNode) and ancestor.component is context.provider:
			return cast(T, provided_value(ancestor.props))
	return context.default_value


def provided_value(props: Mapping[str, Any]) -> Any:
	if CONTEXT_PROP in props:
		return props[CONTEXT_PROP]
	return props.get(VALUE_PROP)


__all__ = ["Context", "create_context", "use_context"]
