"""Shadow tree: the persistent nodes mirroring the last rendered specs.

Every node tracks ``real_node_count``, the number of output nodes its subtree
contributes. Host and text nodes always count 1; array and component nodes
count the sum of their children.
"""

from __future__ import annotations

from typing import Any, NamedTuple, TypeAlias, override

from umbra.hooks.core import HookContext
from umbra.nodes import ComponentFn, ComponentSpec, HostSpec, Props


class OutputLocation(NamedTuple):
	"""Where to insert: the output parent handle and a 0-based child offset."""

	parent: Any
	offset: int

	def shifted(self, delta: int) -> "OutputLocation":
		return OutputLocation(self.parent, self.offset + delta)


class ShadowNode:
	__slots__: tuple[str, ...] = ("parent", "real_node_count")
	parent: "ParentNode | None"
	real_node_count: int

	def __init__(self, parent: "ParentNode | None") -> None:
		# Non-owning: the parent owns this node, not the reverse.
		self.parent = parent
		self.real_node_count = 0


class TextNode(ShadowNode):
	__slots__: tuple[str, ...] = ("value", "handle")
	value: Any
	handle: Any

	def __init__(self, value: Any, parent: "ParentNode | None") -> None:
		super().__init__(parent)
		self.value = value
		self.handle = None
		self.real_node_count = 1

	@override
	def __repr__(self) -> str:
		return f"TextNode({self.value!r})"


class ArrayNode(ShadowNode):
	__slots__: tuple[str, ...] = ("children",)
	children: list[ShadowNode]

	def __init__(self, parent: "ParentNode | None") -> None:
		super().__init__(parent)
		self.children = []

	@override
	def __repr__(self) -> str:
		return f"ArrayNode(children={len(self.children)}, count={self.real_node_count})"


class HostNode(ShadowNode):
	__slots__: tuple[str, ...] = ("tag", "props", "handle", "children")
	tag: str
	props: Props
	handle: Any
	children: list[ShadowNode]

	def __init__(self, spec: HostSpec, parent: "ParentNode | None") -> None:
		super().__init__(parent)
		self.tag = spec.tag
		self.props = spec.props
		self.handle = None
		self.children = []
		self.real_node_count = 1

	@property
	def key(self) -> Any:
		return self.props.get("key")

	@override
	def __repr__(self) -> str:
		key = f", key={self.key!r}" if self.key is not None else ""
		return f"HostNode({self.tag!r}{key})"


class ComponentNode(ShadowNode):
	__slots__: tuple[str, ...] = ("component", "props", "children", "rendered", "hooks")
	component: ComponentFn
	props: Props
	children: tuple[Any, ...]
	rendered: ShadowNode | None
	hooks: HookContext

	def __init__(self, spec: ComponentSpec, parent: "ParentNode | None") -> None:
		super().__init__(parent)
		self.component = spec.component
		self.props = spec.props
		self.children = spec.children
		self.rendered = None
		self.hooks = HookContext(self)

	@property
	def key(self) -> Any:
		return self.props.get("key")

	@property
	def name(self) -> str:
		return getattr(self.component, "__name__", type(self.component).__name__)

	@property
	def unmounted(self) -> bool:
		return self.hooks.unmounted

	@override
	def __repr__(self) -> str:
		key = f", key={self.key!r}" if self.key is not None else ""
		return f"ComponentNode({self.name}{key})"


class RootNode:
	"""Top of a shadow tree, bound to the container it renders into."""

	__slots__: tuple[str, ...] = ("container", "child")
	container: Any
	child: ShadowNode | None

	def __init__(self, container: Any) -> None:
		self.container = container
		self.child = None

	@override
	def __repr__(self) -> str:
		return f"RootNode({self.container!r})"


ParentNode: TypeAlias = HostNode | ArrayNode | ComponentNode | RootNode


def ancestors(node: ShadowNode) -> "list[ParentNode]":
	out: list[ParentNode] = []
	parent = node.parent
	while parent is not None:
		out.append(parent)
		parent = parent.parent if not isinstance(parent, RootNode) else None
	return out


def get_output_location(node: ShadowNode) -> OutputLocation:
	"""Find the output parent of ``node`` and the offset its output starts at.

	Walks up through array and component wrappers, adding the real node counts
	of preceding siblings, until a host node or the root is reached.
	"""
	offset = 0
	current: ShadowNode | ParentNode = node
	parent = node.parent
	while parent is not None:
		if isinstance(parent, (HostNode, ArrayNode)):
			for sibling in parent.children:
				if sibling is current:
					break
				offset += sibling.real_node_count
		if isinstance(parent, HostNode):
			return OutputLocation(parent.handle, offset)
		if isinstance(parent, RootNode):
			return OutputLocation(parent.container, offset)
		current = parent
		parent = parent.parent
	raise RuntimeError(f"{node!r} is not attached to a root")


def adjust_counts(parent: ParentNode | None, delta: int) -> None:
	"""Propagate a change in output node count up to the nearest host or root."""
	while isinstance(parent, (ArrayNode, ComponentNode)):
		parent.real_node_count += delta
		parent = parent.parent


__all__ = [
	"ArrayNode",
	"ComponentNode",
	"HostNode",
	"OutputLocation",
	"ParentNode",
	"RootNode",
	"ShadowNode",
	"TextNode",
	"adjust_counts",
	"ancestors",
	"get_output_location",
]
