from typing import Any

import pytest
from umbra.dom import Element
from umbra.errors import InvalidHookCallError, RenderPhaseUpdateError
from umbra.hooks import (
	HookContext,
	use_callback,
	use_memo,
	use_reducer,
	use_ref,
	use_state,
)
from umbra.nodes import h
from umbra.root import Root


class Tracker:
	"""Collects what a test component saw on each render."""

	def __init__(self) -> None:
		self.renders = 0
		self.values: list[Any] = []
		self.handles: dict[str, Any] = {}


def test_use_state_persists_across_renders(root: Root, container: Element):
	tracker = Tracker()

	def Counter(props):
		count, set_count = use_state(0)
		tracker.renders += 1
		tracker.handles["set"] = set_count
		return h("span", None, count)

	root.render(h(Counter, None))
	assert container.text_content == "0"

	tracker.handles["set"](5)
	assert container.text_content == "5"
	assert tracker.renders == 2


def test_setter_identity_is_stable(root: Root):
	setters: list[Any] = []

	def Counter(props):
		_, set_count = use_state(0)
		setters.append(set_count)
		return None

	root.render(h(Counter, None))
	setters[0](1)
	setters[-1](2)
	assert len(setters) == 3
	assert setters[0] is setters[1] is setters[2]


def test_updater_chain_applies_each_step(root: Root, container: Element):
	tracker = Tracker()

	def Counter(props):
		count, set_count = use_state(0)
		tracker.handles["set"] = set_count
		return str(count)

	root.render(h(Counter, None))
	for _ in range(3):
		tracker.handles["set"](lambda c: c + 1)
	assert container.text_content == "3"


def test_lazy_initial_state_runs_once(root: Root):
	calls = 0
	tracker = Tracker()

	def init():
		nonlocal calls
		calls += 1
		return "ready"

	def Lazy(props):
		value, set_value = use_state(init)
		tracker.handles["set"] = set_value
		tracker.values.append(value)
		return value

	root.render(h(Lazy, None))
	tracker.handles["set"]("done")
	assert calls == 1
	assert tracker.values == ["ready", "done"]


def test_multiple_states_keep_their_order(root: Root, container: Element):
	tracker = Tracker()

	def Form(props):
		name, set_name = use_state("ada")
		age, set_age = use_state(36)
		tracker.handles.update(name=set_name, age=set_age)
		return f"{name}:{age}"

	root.render(h(Form, None))
	tracker.handles["age"](37)
	tracker.handles["name"]("grace")
	assert container.text_content == "grace:37"


def test_setter_during_own_render_raises(root: Root):
	def Bad(props):
		_, set_value = use_state(0)
		set_value(1)
		return None

	with pytest.raises(RenderPhaseUpdateError):
		root.render(h(Bad, None))


def test_setter_of_ancestor_during_child_mount_raises(root: Root, container: Element):
	def Child(props):
		props["set_label"]("child")
		return "child"

	def Parent(props):
		label, set_label = use_state("parent")
		return h("div", None, label, h(Child, {"set_label": set_label}))

	with pytest.raises(RenderPhaseUpdateError, match="while Child is rendering"):
		root.render(h(Parent, None))
	assert len(container.children) <= 1


def test_setter_of_ancestor_during_child_update_raises(root: Root, container: Element):
	setters: dict[str, Any] = {}

	def Item(props):
		if props["poke"]:
			props["set_count"](lambda c: c + 1)
		return props["label"]

	def List(props):
		count, set_count = use_state(0)
		setters["count"] = set_count
		return h(
			"ul",
			None,
			h(Item, {"label": f"a{count}", "poke": False, "set_count": set_count}),
			h(Item, {"label": f"b{count}", "poke": count == 1, "set_count": set_count}),
			"tail",
		)

	root.render(h(List, None))
	assert container.text_content == "a0b0tail"

	with pytest.raises(RenderPhaseUpdateError):
		setters["count"](1)


def test_setter_after_unmount_is_ignored(root: Root):
	tracker = Tracker()

	def Counter(props):
		count, set_count = use_state(0)
		tracker.renders += 1
		tracker.handles["set"] = set_count
		return str(count)

	root.render(h(Counter, None))
	root.unmount()
	tracker.handles["set"](1)
	assert tracker.renders == 1


def test_hooks_outside_render_raise():
	with pytest.raises(InvalidHookCallError):
		use_state(0)
	with pytest.raises(InvalidHookCallError):
		use_ref()
	assert HookContext.current() is None


def test_use_reducer(root: Root, container: Element):
	tracker = Tracker()

	def reducer(state: int, action: str) -> int:
		if action == "inc":
			return state + 1
		if action == "reset":
			return 0
		return state

	def Counter(props):
		count, dispatch = use_reducer(reducer, 10, lambda start: start * 2)
		tracker.values.append(dispatch)
		return str(count)

	root.render(h(Counter, None))
	assert container.text_content == "20"
	tracker.values[0]("inc")
	tracker.values[0]("inc")
	assert container.text_content == "22"
	tracker.values[-1]("reset")
	assert container.text_content == "0"
	assert all(dispatch is tracker.values[0] for dispatch in tracker.values)


def test_use_ref_is_stable_and_mutable(root: Root):
	refs: list[Any] = []
	tracker = Tracker()

	def Holder(props):
		ref = use_ref(0)
		_, set_tick = use_state(0)
		tracker.handles["tick"] = set_tick
		refs.append(ref)
		ref.current += 1
		return None

	root.render(h(Holder, None))
	tracker.handles["tick"](1)
	assert refs[0] is refs[1]
	assert refs[0].current == 2


def test_use_memo_recomputes_on_dep_change(root: Root):
	computed: list[int] = []
	tracker = Tracker()

	def Square(props):
		n, set_n = use_state(2)
		_, set_other = use_state(0)
		tracker.handles.update(n=set_n, other=set_other)

		def compute():
			computed.append(n * n)
			return n * n

		return str(use_memo(compute, [n]))

	root.render(h(Square, None))
	tracker.handles["other"](1)
	tracker.handles["n"](3)
	assert computed == [4, 9]


def test_use_memo_without_deps_recomputes_every_render(root: Root):
	computed = 0
	tracker = Tracker()

	def Always(props):
		nonlocal computed
		_, set_tick = use_state(0)
		tracker.handles["tick"] = set_tick

		def compute():
			nonlocal computed
			computed += 1
			return computed

		use_memo(compute, None)
		return None

	root.render(h(Always, None))
	tracker.handles["tick"](1)
	assert computed == 2


def test_use_callback_keeps_identity(root: Root):
	callbacks: list[Any] = []
	tracker = Tracker()

	def Button(props):
		_, set_tick = use_state(0)
		tracker.handles["tick"] = set_tick
		callbacks.append(use_callback(lambda: None, []))
		return None

	root.render(h(Button, None))
	tracker.handles["tick"](1)
	assert callbacks[0] is callbacks[1]


def test_component_receives_props_and_children(root: Root):
	seen: list[dict[str, Any]] = []

	def Echo(props):
		seen.append(props)
		return None

	root.render(h(Echo, {"key": "k", "label": "x"}, "a", "b"))
	assert seen == [{"key": "k", "label": "x", "children": ["a", "b"]}]
