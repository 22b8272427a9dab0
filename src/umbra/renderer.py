"""Render driver: runs a component function and reconciles what it returned."""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING, Any

from umbra.hooks.effects import run_effects
from umbra.nodes import CHILDREN_PROP, normalize
from umbra.shadow import ComponentNode, OutputLocation, get_output_location

if TYPE_CHECKING:
	from umbra.reconciler import Reconciler

logger = logging.getLogger(__name__)


def component_props(node: ComponentNode) -> dict[str, Any]:
	"""The single argument a component function receives."""
	props = dict(node.props)
	props[CHILDREN_PROP] = list(node.children)
	return props


def render_component(
	reconciler: "Reconciler",
	node: ComponentNode,
	location: OutputLocation | None = None,
) -> None:
	"""Render ``node`` once and apply the result to its rendered subtree.

	``location`` is given on first mount, when the node is not yet linked into
	its parent's children. Re-renders derive it from the tree.

	Layout effects queued by the render are handed to the scheduler's frame
	phase, regular effects to its task phase.
	"""
	if node.unmounted:
		logger.debug("Skipping render of removed %r", node)
		return
	ctx = node.hooks
	with ctx:
		result = node.component(component_props(node))
	result = normalize(result)
	layout, regular = ctx.take_queues()
	logger.debug("Rendered %r (cycle %d)", node, ctx.render_cycle)

	existing = node.rendered
	if existing is not None and reconciler.can_adopt(existing, result):
		reconciler.update(existing, result)
	else:
		if existing is not None:
			reconciler.remove(existing)
			node.rendered = None
		if result is not None:
			if location is None:
				location = get_output_location(node)
			node.rendered = reconciler.create(result, node, location)

	if layout:
		reconciler.scheduler.before_paint(partial(run_effects, ctx, layout))
	if regular:
		reconciler.scheduler.after_paint(partial(run_effects, ctx, regular))


__all__ = ["component_props", "render_component"]
