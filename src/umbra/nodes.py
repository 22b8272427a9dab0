"""Spec model: the transient description values produced by components.

A spec is one of:

- `ComponentSpec`: a callable plus props and children
- `HostSpec`: a tag name for one output node plus props and children
- text: a string, a number, or any object with its own ``__str__``
- an array: a list or tuple of specs (fragments and lists)
- ``None``: renders nothing
"""

from __future__ import annotations

import numbers
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, TypeAlias, cast

from umbra.errors import InvalidSpecError

Props: TypeAlias = Mapping[str, Any]
ComponentFn: TypeAlias = Callable[[dict[str, Any]], Any]
Spec: TypeAlias = "ComponentSpec | HostSpec | str | numbers.Number | list[Any] | tuple[Any, ...] | None"

KEY_PROP = "key"
REF_PROP = "ref"
CHILDREN_PROP = "children"

_EMPTY_PROPS: Props = MappingProxyType({})


class SpecKind(str, Enum):
	COMPONENT = "component"
	HOST = "host"
	TEXT = "text"
	ARRAY = "array"
	NULL = "null"


@dataclass(slots=True, frozen=True)
class ComponentSpec:
	component: ComponentFn
	props: Props = field(default=_EMPTY_PROPS)
	children: tuple[Any, ...] = ()

	@property
	def key(self) -> Any:
		return self.props.get(KEY_PROP)


@dataclass(slots=True, frozen=True)
class HostSpec:
	tag: str
	props: Props = field(default=_EMPTY_PROPS)
	children: tuple[Any, ...] = ()

	@property
	def key(self) -> Any:
		return self.props.get(KEY_PROP)


def make_spec(
	component_or_tag: ComponentFn | str,
	props: Props | None = None,
	*children: Any,
) -> ComponentSpec | HostSpec:
	"""Describe a component invocation or a host node.

	Args:
		component_or_tag: A component callable, or the tag name of a host node.
		props: Props for the node. ``key`` and ``ref`` are read by umbra itself.
		*children: Child specs, in order. ``None`` entries render nothing.

	Returns:
		A `ComponentSpec` when given a callable, a `HostSpec` for a string tag.

	Raises:
		TypeError: If ``component_or_tag`` is neither callable nor a string.

	Example:

	```python
	def Greeting(props):
	    return h("p", None, "Hello ", props["name"])

	h("div", {"className": "app"}, h(Greeting, {"name": "Ada"}))
	```
	"""
	normalized_props: Props = dict(props) if props else _EMPTY_PROPS
	if isinstance(component_or_tag, str):
		return HostSpec(tag=component_or_tag, props=normalized_props, children=children)
	if callable(component_or_tag):
		return ComponentSpec(
			component=component_or_tag, props=normalized_props, children=children
		)
	raise TypeError(
		"make_spec() expects a component function or a tag name, "
		+ f"got {type(component_or_tag).__name__}"
	)


h = make_spec


def is_text(value: Any) -> bool:
	if isinstance(value, (str, numbers.Number)):
		return True
	if value is None or callable(value):
		return False
	if isinstance(value, (bytes, bytearray, Mapping, set, frozenset, Iterable)):
		return False
	return type(value).__str__ is not object.__str__


def classify(spec: Any) -> SpecKind:
	"""Return the kind of ``spec``, raising `InvalidSpecError` if it has none."""
	if spec is None:
		return SpecKind.NULL
	if isinstance(spec, ComponentSpec):
		return SpecKind.COMPONENT
	if isinstance(spec, HostSpec):
		return SpecKind.HOST
	if isinstance(spec, (list, tuple)):
		return SpecKind.ARRAY
	if is_text(spec):
		return SpecKind.TEXT
	raise InvalidSpecError(spec)


def normalize(spec: Any) -> Any:
	"""Materialize iterables (generators, ranges, ...) into array specs."""
	if (
		spec is None
		or isinstance(spec, (str, bytes, bytearray, Mapping, list, tuple, set, frozenset))
		or not isinstance(spec, Iterable)
	):
		return spec
	return list(cast(Iterable[Any], spec))


def spec_key(spec: Any) -> Any:
	if isinstance(spec, (ComponentSpec, HostSpec)):
		return spec.key
	return None


def spec_label(spec: Any) -> str:
	if isinstance(spec, ComponentSpec):
		return f"<{getattr(spec.component, '__name__', 'component')}>"
	if isinstance(spec, HostSpec):
		return f"<{spec.tag}>"
	if isinstance(spec, (list, tuple)):
		return f"[{len(cast(list[Any], spec))} items]"
	return repr(spec)


__all__ = [
	"CHILDREN_PROP",
	"KEY_PROP",
	"REF_PROP",
	"ComponentFn",
	"ComponentSpec",
	"HostSpec",
	"Props",
	"Spec",
	"SpecKind",
	"classify",
	"h",
	"is_text",
	"make_spec",
	"normalize",
	"spec_key",
	"spec_label",
]
