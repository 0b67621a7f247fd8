import pytest

from i2f.codemod.decorator_locator import find_component_decorator
from i2f.codemod.syntax_tree import parse_source
from i2f.config.config import load_config


@pytest.fixture(autouse=True)
def fresh_config_cache():
    load_config.cache_clear()
    yield
    load_config.cache_clear()


@pytest.fixture
def write_component(tmp_path):
    """Write a component source file under tmp_path and return its path."""
    def _write(relative: str, source: str):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(source.encode("utf-8"))
        return path
    return _write


@pytest.fixture
def block_of():
    """Parse a snippet and return (source bytes, @Component block)."""
    def _block(source: str):
        data = source.encode("utf-8")
        return data, find_component_decorator(parse_source(data))
    return _block


class ListSink:
    def __init__(self):
        self.received = []

    def emit(self, diagnostic):
        self.received.append(diagnostic)


@pytest.fixture
def sink():
    return ListSink()
