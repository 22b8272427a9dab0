"""Output medium boundary and an in-memory implementation.

The reconciler only talks to the output through the `Medium` protocol. `Document`
implements it on plain Python objects and records every mutation, which makes
it usable both as a headless target and for asserting on mutation volume.
"""

from __future__ import annotations

import html
from collections.abc import Callable, Iterator
from typing import Any, Literal, NamedTuple, Protocol, TypeAlias, override

Listener: TypeAlias = Callable[..., Any]

MutationOp = Literal[
	"create_element",
	"create_text",
	"set_text",
	"insert",
	"remove",
	"set_attribute",
	"remove_attribute",
	"add_event_listener",
	"remove_event_listener",
	"set_style",
	"remove_style",
]


class Medium(Protocol):
	"""Operations umbra needs from an output tree. Handles are opaque."""

	def create_element(self, tag: str) -> Any: ...
	def create_text(self, text: str) -> Any: ...
	def set_text(self, node: Any, text: str) -> None: ...
	def insert(self, parent: Any, child: Any, offset: int) -> None: ...
	def remove(self, node: Any) -> None: ...
	def clear(self, parent: Any) -> None: ...
	def set_attribute(self, node: Any, name: str, value: Any) -> None: ...
	def remove_attribute(self, node: Any, name: str) -> None: ...
	def add_event_listener(self, node: Any, event: str, listener: Listener) -> None: ...
	def remove_event_listener(
		self, node: Any, event: str, listener: Listener
	) -> None: ...
	def set_style(self, node: Any, name: str, value: Any) -> None: ...
	def remove_style(self, node: Any, name: str) -> None: ...


class Mutation(NamedTuple):
	op: MutationOp
	target: "Node"
	detail: Any = None


class Node:
	__slots__: tuple[str, ...] = ("document", "parent")
	document: "Document"
	parent: "Element | None"

	def __init__(self, document: "Document") -> None:
		self.document = document
		self.parent = None

	@property
	def text_content(self) -> str:
		raise NotImplementedError

	@property
	def outer_html(self) -> str:
		raise NotImplementedError

	def detach(self) -> None:
		if self.parent is not None:
			self.parent.children.remove(self)
			self.parent = None


class Text(Node):
	__slots__: tuple[str, ...] = ("data",)
	data: str

	def __init__(self, document: "Document", data: str) -> None:
		super().__init__(document)
		self.data = data

	@property
	@override
	def text_content(self) -> str:
		return self.data

	@property
	@override
	def outer_html(self) -> str:
		return html.escape(self.data, quote=False)

	@override
	def __repr__(self) -> str:
		return f"Text({self.data!r})"


class Element(Node):
	__slots__: tuple[str, ...] = ("tag", "attributes", "style", "listeners", "children")
	tag: str
	attributes: dict[str, Any]
	style: dict[str, Any]
	listeners: dict[str, list[Listener]]
	children: list[Node]

	def __init__(self, document: "Document", tag: str) -> None:
		super().__init__(document)
		self.tag = tag
		self.attributes = {}
		self.style = {}
		self.listeners = {}
		self.children = []

	@property
	@override
	def text_content(self) -> str:
		return "".join(child.text_content for child in self.children)

	@property
	def inner_html(self) -> str:
		return "".join(child.outer_html for child in self.children)

	@property
	@override
	def outer_html(self) -> str:
		parts = [self.tag]
		for name in sorted(self.attributes):
			value = self.attributes[name]
			if value is None or value is False:
				continue
			if value is True:
				parts.append(name)
			else:
				parts.append(f'{name}="{html.escape(str(value))}"')
		if self.style:
			css = ";".join(f"{k}:{v}" for k, v in sorted(self.style.items()))
			parts.append(f'style="{html.escape(css)}"')
		return f"<{' '.join(parts)}>{self.inner_html}</{self.tag}>"

	def dispatch(self, event: str, payload: Any = None) -> int:
		"""Call the listeners registered for ``event``; returns how many ran."""
		listeners = list(self.listeners.get(event, ()))
		for listener in listeners:
			listener(payload)
		return len(listeners)

	def walk(self) -> Iterator[Node]:
		yield self
		for child in self.children:
			if isinstance(child, Element):
				yield from child.walk()
			else:
				yield child

	def find(self, tag: str) -> "Element | None":
		for node in self.walk():
			if isinstance(node, Element) and node is not self and node.tag == tag:
				return node
		return None

	def find_all(self, tag: str) -> list["Element"]:
		return [
			node
			for node in self.walk()
			if isinstance(node, Element) and node is not self and node.tag == tag
		]

	@override
	def __repr__(self) -> str:
		return f"Element({self.tag!r}, children={len(self.children)})"


class Document:
	"""In-memory `Medium` that records each mutation it performs."""

	mutations: list[Mutation]

	def __init__(self) -> None:
		self.mutations = []

	def element(self, tag: str) -> Element:
		"""Create an element without recording a mutation (for root containers)."""
		return Element(self, tag)

	def reset_mutations(self) -> None:
		self.mutations.clear()

	def count(self, *ops: MutationOp) -> int:
		if not ops:
			return len(self.mutations)
		return sum(1 for mutation in self.mutations if mutation.op in ops)

	def _record(self, op: MutationOp, target: Node, detail: Any = None) -> None:
		self.mutations.append(Mutation(op, target, detail))

	# ------------------------------------------------------------------
	# Medium implementation
	# ------------------------------------------------------------------

	def create_element(self, tag: str) -> Element:
		node = Element(self, tag)
		self._record("create_element", node, tag)
		return node

	def create_text(self, text: str) -> Text:
		node = Text(self, text)
		self._record("create_text", node, text)
		return node

	def set_text(self, node: Text, text: str) -> None:
		node.data = text
		self._record("set_text", node, text)

	def insert(self, parent: Element, child: Node, offset: int) -> None:
		if offset < 0 or offset > len(parent.children):
			raise IndexError(
				f"Cannot insert at offset {offset} into {parent!r} "
				+ f"with {len(parent.children)} children"
			)
		reference = parent.children[offset - 1] if offset else None
		if reference is child:
			return
		child.detach()
		index = parent.children.index(reference) + 1 if reference is not None else 0
		parent.children.insert(index, child)
		child.parent = parent
		self._record("insert", child, offset)

	def remove(self, node: Node) -> None:
		node.detach()
		self._record("remove", node)

	def clear(self, parent: Element) -> None:
		for child in list(parent.children):
			self.remove(child)

	def set_attribute(self, node: Element, name: str, value: Any) -> None:
		node.attributes[name] = value
		self._record("set_attribute", node, (name, value))

	def remove_attribute(self, node: Element, name: str) -> None:
		node.attributes.pop(name, None)
		self._record("remove_attribute", node, name)

	def add_event_listener(self, node: Element, event: str, listener: Listener) -> None:
		node.listeners.setdefault(event, []).append(listener)
		self._record("add_event_listener", node, event)

	def remove_event_listener(
		self, node: Element, event: str, listener: Listener
	) -> None:
		listeners = node.listeners.get(event)
		if listeners and listener in listeners:
			listeners.remove(listener)
			if not listeners:
				del node.listeners[event]
		self._record("remove_event_listener", node, event)

	def set_style(self, node: Element, name: str, value: Any) -> None:
		node.style[name] = value
		self._record("set_style", node, (name, value))

	def remove_style(self, node: Element, name: str) -> None:
		node.style.pop(name, None)
		self._record("remove_style", node, name)


def create_container(tag: str = "div") -> Element:
	"""Create a detached element to mount a root into."""
	return Document().element(tag)


__all__ = [
	"Document",
	"Element",
	"Listener",
	"Medium",
	"Mutation",
	"MutationOp",
	"Node",
	"Text",
	"create_container",
]
