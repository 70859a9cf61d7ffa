# type: ignore
import pytest

from bfvm.runtime.streams import BufferSource, BufferSink


@pytest.fixture
def with_sink():
    yield BufferSink()


@pytest.fixture
def with_empty_input():
    yield BufferSource(b'')
