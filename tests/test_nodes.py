from decimal import Decimal

import pytest
from umbra.errors import InvalidSpecError
from umbra.nodes import (
	ComponentSpec,
	HostSpec,
	SpecKind,
	classify,
	h,
	is_text,
	normalize,
	spec_key,
	spec_label,
)


def Greeting(props):
	return props["name"]


def test_make_spec_builds_host_spec_for_tag():
	spec = h("div", {"id": "x"}, "a", None, "b")
	assert isinstance(spec, HostSpec)
	assert spec.tag == "div"
	assert spec.props == {"id": "x"}
	assert spec.children == ("a", None, "b")


def test_make_spec_builds_component_spec_for_callable():
	spec = h(Greeting, {"name": "Ada", "key": "g"})
	assert isinstance(spec, ComponentSpec)
	assert spec.component is Greeting
	assert spec.key == "g"
	assert spec_key(spec) == "g"


def test_make_spec_copies_props():
	props = {"id": "x"}
	spec = h("div", props)
	props["id"] = "y"
	assert spec.props["id"] == "x"


def test_make_spec_rejects_other_types():
	with pytest.raises(TypeError):
		h(42)  # pyright: ignore[reportArgumentType]


@pytest.mark.parametrize(
	("value", "kind"),
	[
		(None, SpecKind.NULL),
		("hi", SpecKind.TEXT),
		("", SpecKind.TEXT),
		(3, SpecKind.TEXT),
		(2.5, SpecKind.TEXT),
		(True, SpecKind.TEXT),
		(Decimal("1.5"), SpecKind.TEXT),
		([], SpecKind.ARRAY),
		(("a", "b"), SpecKind.ARRAY),
		(h("p"), SpecKind.HOST),
		(h(Greeting), SpecKind.COMPONENT),
	],
)
def test_classify(value, kind):
	assert classify(value) is kind


@pytest.mark.parametrize(
	"value", [{"a": 1}, {1, 2}, b"raw", Greeting, object()]
)
def test_classify_rejects_invalid_specs(value):
	with pytest.raises(InvalidSpecError) as info:
		classify(value)
	assert info.value.value is value


def test_objects_with_str_are_text():
	class Label:
		def __str__(self) -> str:
			return "label"

	assert is_text(Label())
	assert not is_text(h("p"))
	assert not is_text(None)


def test_normalize_materializes_iterables():
	assert normalize(x for x in "ab") == ["a", "b"]
	assert normalize(range(3)) == [0, 1, 2]
	spec = ["a"]
	assert normalize(spec) is spec
	assert normalize("text") == "text"
	assert normalize(None) is None


def test_spec_label():
	assert spec_label(h("li")) == "<li>"
	assert spec_label(h(Greeting)) == "<Greeting>"
	assert spec_label([1, 2]) == "[2 items]"
	assert spec_key("text") is None
