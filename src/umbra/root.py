from __future__ import annotations

import logging
from typing import Any, override

from umbra.dom import Medium
from umbra.nodes import classify, normalize
from umbra.reconciler import Reconciler
from umbra.scheduling import Scheduler, default_scheduler
from umbra.shadow import OutputLocation, RootNode, ShadowNode

logger = logging.getLogger(__name__)


class Root:
	"""A container owned by umbra. Obtain one through `create_root`.

	The container is emptied once, when the root is created. Each `render`
	reconciles against the previous one, so rendering the same spec twice
	leaves the output untouched.
	"""

	container: Any
	medium: Medium
	scheduler: Scheduler
	reconciler: Reconciler
	node: RootNode

	def __init__(self, container: Any, medium: Medium, scheduler: Scheduler) -> None:
		self.container = container
		self.medium = medium
		self.scheduler = scheduler
		self.reconciler = Reconciler(medium, scheduler)
		self.node = RootNode(container)
		medium.clear(container)

	@property
	def rendered(self) -> ShadowNode | None:
		return self.node.child

	def render(self, spec: Any) -> None:
		"""Make the container show ``spec``.

		Raises:
			InvalidSpecError: If ``spec`` is not a valid spec. Nothing is changed.
		"""
		spec = normalize(spec)
		classify(spec)
		current = self.node.child
		if current is not None and self.reconciler.can_adopt(current, spec):
			self.reconciler.update(current, spec)
			return
		if current is not None:
			self.reconciler.remove(current)
			self.node.child = None
		if spec is not None:
			self.node.child = self.reconciler.create(
				spec, self.node, OutputLocation(self.container, 0)
			)

	def unmount(self) -> None:
		"""Remove everything rendered, running all effect teardowns."""
		if self.node.child is not None:
			self.reconciler.remove(self.node.child)
			self.node.child = None
		logger.debug("Unmounted %r", self.node)

	def flush(self, limit: int | None = None) -> int:
		"""Run pending effects now. See `Scheduler.flush`."""
		return self.scheduler.flush(limit)

	@override
	def __repr__(self) -> str:
		return f"Root({self.container!r})"


def create_root(
	container: Any,
	*,
	medium: Medium | None = None,
	scheduler: Scheduler | None = None,
) -> Root:
	"""Take ownership of ``container`` and return a `Root` rendering into it.

	Args:
		container: The output node to render into. Its current children are
			removed.
		medium: The output medium. Defaults to ``container.document`` so an
			element from `umbra.dom` works as is.
		scheduler: Runs effects. Defaults to an `AsyncioScheduler` when called
			inside a running event loop, a `ManualScheduler` otherwise.

	Example:

	```python
	container = create_container()
	root = create_root(container)
	root.render(h(App, None))
	root.flush()
	```
	"""
	if medium is None:
		medium = getattr(container, "document", None)
		if medium is None:
			raise TypeError(
				f"Cannot infer an output medium for {container!r}; pass medium="
			)
	return Root(container, medium, scheduler or default_scheduler())


# Roots held by container, for callers that never keep the `Root` around.
_roots: dict[int, Root] = {}


def render(
	container: Any,
	spec: Any,
	*,
	medium: Medium | None = None,
	scheduler: Scheduler | None = None,
) -> Root:
	"""Render ``spec`` into ``container``, creating its root on first use.

	Later calls with the same container reconcile against the previous render.
	``medium`` and ``scheduler`` only apply when the root is created.
	"""
	root = _roots.get(id(container))
	if root is None:
		root = create_root(container, medium=medium, scheduler=scheduler)
		_roots[id(container)] = root
	if spec is not None:
		root.render(spec)
	return root


def unmount(container: Any) -> bool:
	"""Unmount the root `render` created for ``container``.

	Returns False when ``container`` has no such root.
	"""
	root = _roots.pop(id(container), None)
	if root is None:
		return False
	root.unmount()
	return True


__all__ = ["Root", "create_root", "render", "unmount"]
