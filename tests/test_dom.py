import pytest
from umbra.dom import Document, Element, Text, create_container


def test_insert_at_offsets(document: Document, container: Element):
	a = document.create_text("a")
	b = document.create_text("b")
	c = document.create_text("c")
	document.insert(container, a, 0)
	document.insert(container, c, 1)
	document.insert(container, b, 1)
	assert container.text_content == "abc"


def test_insert_moves_existing_child(document: Document, container: Element):
	nodes = [document.create_text(x) for x in "abc"]
	for i, node in enumerate(nodes):
		document.insert(container, node, i)
	document.insert(container, nodes[2], 0)
	assert container.text_content == "cab"
	assert nodes[2].parent is container


def test_insert_rejects_out_of_range_offset(document: Document, container: Element):
	with pytest.raises(IndexError):
		document.insert(container, document.create_text("x"), 1)


def test_mutations_are_recorded(document: Document, container: Element):
	span = document.create_element("span")
	document.insert(container, span, 0)
	document.set_attribute(span, "id", "s")
	document.set_style(span, "color", "red")
	assert document.count() == 4
	assert document.count("insert") == 1
	assert [m.op for m in document.mutations] == [
		"create_element",
		"insert",
		"set_attribute",
		"set_style",
	]
	document.reset_mutations()
	assert document.count() == 0


def test_outer_html_escapes_and_sorts(document: Document, container: Element):
	span = document.create_element("span")
	document.insert(container, span, 0)
	document.set_attribute(span, "title", 'a "b"')
	document.set_attribute(span, "class", "x")
	document.set_attribute(span, "hidden", True)
	document.set_attribute(span, "draggable", False)
	document.insert(span, document.create_text("1 < 2"), 0)
	assert span.outer_html == '<span class="x" hidden title="a &quot;b&quot;">1 &lt; 2</span>'


def test_listeners_dispatch(document: Document, container: Element):
	seen: list[object] = []
	document.add_event_listener(container, "click", seen.append)
	assert container.dispatch("click", 1) == 1
	document.remove_event_listener(container, "click", seen.append)
	assert container.dispatch("click", 2) == 0
	assert seen == [1]


def test_clear_and_find():
	root = create_container()
	document = root.document
	ul = document.create_element("ul")
	document.insert(root, ul, 0)
	for i in range(2):
		document.insert(ul, document.create_element("li"), i)
	assert root.find("ul") is ul
	assert len(root.find_all("li")) == 2
	assert root.find("table") is None
	document.clear(root)
	assert root.children == []
	assert isinstance(document.create_text("x"), Text)
