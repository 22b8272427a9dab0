"""Reconciliation of specs against the shadow tree.

The reconciler keeps the shadow tree and the output medium in lockstep. At any
point during reconciliation the output children of a host node appear in the
same order as the flattened shadow children, which is what lets offsets be
computed from ``real_node_count`` sums instead of re-scanning the output.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from umbra.component import MemoComponent
from umbra.env import env
from umbra.helpers import same_value
from umbra.nodes import (
	CHILDREN_PROP,
	KEY_PROP,
	REF_PROP,
	ComponentSpec,
	HostSpec,
	Props,
	SpecKind,
	classify,
	is_text,
	normalize,
	spec_key,
	spec_label,
)
from umbra.refs import Ref
from umbra.renderer import render_component
from umbra.shadow import (
	ArrayNode,
	ComponentNode,
	HostNode,
	OutputLocation,
	ParentNode,
	ShadowNode,
	TextNode,
	adjust_counts,
	get_output_location,
)

if TYPE_CHECKING:
	from umbra.dom import Medium
	from umbra.scheduling import Scheduler

logger = logging.getLogger(__name__)

RESERVED_PROPS = frozenset({KEY_PROP, REF_PROP, CHILDREN_PROP})
STYLE_PROP = "style"

_MISSING: Any = object()


class Reconciler:
	"""Applies specs to shadow nodes and mirrors every change into the medium."""

	medium: "Medium"
	scheduler: "Scheduler"

	def __init__(self, medium: "Medium", scheduler: "Scheduler") -> None:
		self.medium = medium
		self.scheduler = scheduler

	# ------------------------------------------------------------------
	# Identity
	# ------------------------------------------------------------------

	def can_adopt(self, node: ShadowNode, spec: Any) -> bool:
		"""Whether ``node`` may be updated in place to render ``spec``."""
		if spec is None:
			return False
		if isinstance(node, HostNode):
			return (
				isinstance(spec, HostSpec)
				and spec.tag == node.tag
				and same_value(node.key, spec.key)
			)
		if isinstance(node, ComponentNode):
			return (
				isinstance(spec, ComponentSpec)
				and spec.component == node.component
				and same_value(node.key, spec.key)
			)
		if isinstance(node, ArrayNode):
			return isinstance(spec, (list, tuple))
		if isinstance(node, TextNode):
			return is_text(spec)
		return False

	# ------------------------------------------------------------------
	# Create
	# ------------------------------------------------------------------

	def create(
		self, spec: Any, parent: ParentNode, location: OutputLocation
	) -> ShadowNode:
		"""Build a new subtree for ``spec`` and insert its output at ``location``."""
		spec = normalize(spec)
		kind = classify(spec)
		if kind is SpecKind.HOST:
			return self._create_host(spec, parent, location)
		if kind is SpecKind.TEXT:
			return self._create_text(spec, parent, location)
		if kind is SpecKind.ARRAY:
			node = ArrayNode(parent)
			self._create_children(node, spec, location)
			return node
		if kind is SpecKind.COMPONENT:
			return self._create_component(spec, parent, location)
		raise ValueError("Cannot create a node for a None spec")

	def _create_host(
		self, spec: HostSpec, parent: ParentNode, location: OutputLocation
	) -> HostNode:
		node = HostNode(spec, parent)
		node.handle = self.medium.create_element(spec.tag)
		self.medium.insert(location.parent, node.handle, location.offset)
		adjust_counts(parent, 1)
		self._create_children(node, spec.children, OutputLocation(node.handle, 0))
		self.sync_props(node, {}, spec.props)
		return node

	def _create_text(
		self, value: Any, parent: ParentNode, location: OutputLocation
	) -> TextNode:
		node = TextNode(value, parent)
		node.handle = self.medium.create_text(str(value))
		self.medium.insert(location.parent, node.handle, location.offset)
		adjust_counts(parent, 1)
		return node

	def _create_component(
		self, spec: ComponentSpec, parent: ParentNode, location: OutputLocation
	) -> ComponentNode:
		node = ComponentNode(spec, parent)
		node.hooks.rerender = lambda: self.render_component(node)
		logger.debug("Mounting %r", node)
		self.render_component(node, location)
		return node

	def _create_children(
		self,
		parent: HostNode | ArrayNode,
		specs: Iterable[Any],
		location: OutputLocation,
	) -> None:
		specs = [normalize(spec) for spec in specs]
		self._check_keys(parent, specs)
		offset = 0
		for spec in specs:
			if spec is None:
				continue
			child = self.create(spec, parent, location.shifted(offset))
			parent.children.append(child)
			offset += child.real_node_count

	# ------------------------------------------------------------------
	# Update
	# ------------------------------------------------------------------

	def update(self, node: ShadowNode, spec: Any) -> None:
		"""Mutate ``node`` in place to match ``spec``. Requires `can_adopt`."""
		spec = normalize(spec)
		if isinstance(node, TextNode):
			previous = node.value
			node.value = spec
			text = str(spec)
			if str(previous) != text:
				self.medium.set_text(node.handle, text)
		elif isinstance(node, HostNode):
			previous_props = node.props
			node.props = spec.props
			self.sync_props(node, previous_props, spec.props)
			self.reconcile_children(
				node, spec.children, OutputLocation(node.handle, 0)
			)
		elif isinstance(node, ComponentNode):
			previous_props, previous_children = node.props, node.children
			node.props = spec.props
			node.children = spec.children
			component = node.component
			if isinstance(component, MemoComponent) and component.should_skip(
				previous_props, previous_children, spec.props, spec.children
			):
				logger.debug("Skipping render of memoized %r", node)
				return
			self.render_component(node)
		elif isinstance(node, ArrayNode):
			self.reconcile_children(node, spec, get_output_location(node))
		else:
			raise TypeError(f"Cannot update {node!r}")

	def render_component(
		self, node: ComponentNode, location: OutputLocation | None = None
	) -> None:
		render_component(self, node, location)

	def reconcile_children(
		self,
		parent: HostNode | ArrayNode,
		specs: Iterable[Any],
		location: OutputLocation,
	) -> None:
		"""Match ``specs`` against ``parent.children`` in order.

		Each non-null spec adopts the first unused child that `can_adopt` it
		(text children are tried last), is moved into position if needed, or is
		created fresh. Children left unused are removed.
		"""
		specs = [normalize(spec) for spec in specs]
		self._check_keys(parent, specs)
		children = parent.children
		used: set[int] = set()
		offset = location.offset
		target = 0
		for spec in specs:
			if spec is None:
				continue
			match = self._find_match(children, spec, used)
			if match is None:
				node = self.create(spec, parent, OutputLocation(location.parent, offset))
				children.insert(target, node)
			else:
				node = match
				self.update(node, spec)
				current = _index_of(children, node)
				if current != target:
					children.insert(target, children.pop(current))
					self.move(node, OutputLocation(location.parent, offset))
			used.add(id(node))
			offset += node.real_node_count
			target += 1

		for child in [child for child in children if id(child) not in used]:
			self.remove(child)
			children.pop(_index_of(children, child))

	def _find_match(
		self, children: list[ShadowNode], spec: Any, used: set[int]
	) -> ShadowNode | None:
		for child in children:
			if (
				id(child) not in used
				and not isinstance(child, TextNode)
				and self.can_adopt(child, spec)
			):
				return child
		for child in children:
			if (
				id(child) not in used
				and isinstance(child, TextNode)
				and self.can_adopt(child, spec)
			):
				return child
		return None

	def _check_keys(self, parent: ShadowNode, specs: list[Any]) -> None:
		if env.mode != "dev":
			return
		seen: set[Any] = set()
		for spec in specs:
			key = spec_key(spec)
			if key is None:
				continue
			try:
				duplicate = key in seen
				seen.add(key)
			except TypeError:
				continue
			if duplicate:
				logger.warning(
					"Duplicate key %r among children of %r (%s); siblings match in order",
					key,
					parent,
					spec_label(spec),
				)

	# ------------------------------------------------------------------
	# Remove / move
	# ------------------------------------------------------------------

	def remove(self, node: ShadowNode, *, detach: bool = True) -> None:
		"""Destroy ``node`` and its subtree.

		Children go first. Output handles nested under a removed host node are
		not detached individually: removing the host takes them along.
		"""
		if isinstance(node, HostNode):
			for child in node.children:
				self.remove(child, detach=False)
			node.children = []
			_release_ref(node.props.get(REF_PROP), node.handle)
			if detach:
				self.medium.remove(node.handle)
				adjust_counts(node.parent, -1)
		elif isinstance(node, TextNode):
			if detach:
				self.medium.remove(node.handle)
				adjust_counts(node.parent, -1)
		elif isinstance(node, ArrayNode):
			for child in node.children:
				self.remove(child, detach=detach)
			node.children = []
		elif isinstance(node, ComponentNode):
			if node.rendered is not None:
				self.remove(node.rendered, detach=detach)
				node.rendered = None
			ref = node.props.get(REF_PROP)
			if isinstance(ref, Ref):
				ref.current = None
			node.hooks.unmount()
			logger.debug("Removed %r", node)
		else:
			raise TypeError(f"Cannot remove {node!r}")

	def move(self, node: ShadowNode, location: OutputLocation) -> int:
		"""Re-insert the output nodes of ``node`` at ``location``; returns how many."""
		if isinstance(node, (HostNode, TextNode)):
			self.medium.insert(location.parent, node.handle, location.offset)
			return 1
		if isinstance(node, ComponentNode):
			if node.rendered is None:
				return 0
			return self.move(node.rendered, location)
		if isinstance(node, ArrayNode):
			moved = 0
			for child in node.children:
				moved += self.move(child, location.shifted(moved))
			return moved
		raise TypeError(f"Cannot move {node!r}")

	# ------------------------------------------------------------------
	# Props
	# ------------------------------------------------------------------

	def sync_props(self, node: HostNode, previous: Props, current: Props) -> None:
		"""Apply the difference between two prop mappings to the host handle."""
		medium = self.medium
		handle = node.handle
		for key, value in current.items():
			old = previous.get(key, _MISSING)
			if key == REF_PROP:
				if value is not old:
					_release_ref(old, handle)
					if isinstance(value, Ref):
						value.current = handle
				continue
			if key in RESERVED_PROPS:
				continue
			event = event_name(key)
			if event is not None:
				if value is old:
					continue
				if old is not _MISSING and old is not None:
					medium.remove_event_listener(handle, event, old)
				if value is not None:
					medium.add_event_listener(handle, event, value)
				continue
			if key == STYLE_PROP:
				if isinstance(value, Mapping):
					if old is not _MISSING and old is not None and not isinstance(old, Mapping):
						medium.remove_attribute(handle, key)
					self._sync_style(handle, old if isinstance(old, Mapping) else {}, value)
					continue
				if isinstance(old, Mapping):
					for name in old:
						medium.remove_style(handle, name)
					old = _MISSING
			if old is _MISSING or not same_value(old, value):
				medium.set_attribute(handle, key, value)

		for key, old in previous.items():
			if key in current:
				continue
			if key == REF_PROP:
				_release_ref(old, handle)
				continue
			if key in RESERVED_PROPS or old is None:
				continue
			event = event_name(key)
			if event is not None:
				medium.remove_event_listener(handle, event, old)
			elif key == STYLE_PROP and isinstance(old, Mapping):
				for name in old:
					medium.remove_style(handle, name)
			else:
				medium.remove_attribute(handle, key)

	def _sync_style(
		self, handle: Any, previous: Mapping[str, Any], current: Mapping[str, Any]
	) -> None:
		if previous is current:
			return
		for name, value in current.items():
			if name not in previous or not same_value(previous[name], value):
				self.medium.set_style(handle, name, value)
		for name in previous:
			if name not in current:
				self.medium.remove_style(handle, name)


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------


def event_name(prop: str) -> str | None:
	"""``onClick`` and ``on_click`` map to ``click``; other props map to None."""
	if len(prop) > 2 and prop.startswith("on") and (prop[2].isupper() or prop[2] == "_"):
		name = prop[2:].lstrip("_")
		return name.lower() or None
	return None


def _release_ref(ref: Any, handle: Any) -> None:
	if isinstance(ref, Ref) and ref.current is handle:
		ref.current = None


def _index_of(children: list[ShadowNode], node: ShadowNode) -> int:
	for index, child in enumerate(children):
		if child is node:
			return index
	raise ValueError(f"{node!r} is not a child")


__all__ = [
	"RESERVED_PROPS",
	"Reconciler",
	"event_name",
]
