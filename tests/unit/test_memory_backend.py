import pytest

from memstore_lib.errors import SnapshotNotFound
from memstore_lib.storage.memory_backend import MemoryBackend


def test_memory_backend_basic_operations():
    m = MemoryBackend()

    # empty backend reports not found
    assert m.exists() is False
    with pytest.raises(SnapshotNotFound):
        m.read()
    # not-found is also a KeyError
    with pytest.raises(KeyError):
        m.read()

    # write/read
    m.write(b'{"a": 1}')
    assert m.exists() is True
    assert m.read() == b'{"a": 1}'
    assert m.writes == 1

    # overwrite replaces content
    m.write(bytearray(b'{}'))
    assert m.read() == b'{}'
    assert m.writes == 2

    m.clear()
    assert m.exists() is False
    assert m.describe() == 'memory'


def test_memory_backend_initial_content():
    m = MemoryBackend(initial=b'{"k": "v"}')
    assert m.read() == b'{"k": "v"}'
