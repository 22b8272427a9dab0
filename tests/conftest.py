import pytest
from umbra.dom import Document, Element
from umbra.env import ENV_UMBRA_ENV, ENV_UMBRA_FLUSH_LIMIT
from umbra.root import Root, create_root
from umbra.scheduling import ManualScheduler


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):  # pyright: ignore[reportUnusedFunction]
	monkeypatch.delenv(ENV_UMBRA_ENV, raising=False)
	monkeypatch.delenv(ENV_UMBRA_FLUSH_LIMIT, raising=False)


@pytest.fixture
def document() -> Document:
	return Document()


@pytest.fixture
def container(document: Document) -> Element:
	return document.element("div")


@pytest.fixture
def scheduler() -> ManualScheduler:
	return ManualScheduler()


@pytest.fixture
def root(container: Element, scheduler: ManualScheduler) -> Root:
	return create_root(container, scheduler=scheduler)
