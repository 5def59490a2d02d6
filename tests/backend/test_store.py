import math
import threading
from datetime import timedelta

import pytest

from memstore_lib.storage import MemoryBackend, Store, StoreProtocol


@pytest.fixture
def store():
    s = Store(MemoryBackend(), flush_period=0)
    yield s
    s.close()


def test_basic_scenario(store):
    store.set('name', 'Alice')
    store.set('age', 30)
    assert store.get('name') == ('Alice', True)
    store.set('age', 31)
    assert store.get('age') == (31, True)
    # deleting a key that was never set is a no-op
    store.delete('city')
    assert store.get('city') == (None, False)


def test_set_overwrites_until_delete(store):
    store.set('k', 1)
    store.set('k', 2)
    assert store.get('k') == (2, True)
    store.delete('k')
    assert store.get('k') == (None, False)
    store.delete('k')
    assert store.get('k') == (None, False)


def test_none_value_is_found(store):
    store.set('empty', None)
    assert store.get('empty') == (None, True)
    assert 'empty' in store


def test_all_matches_last_write_per_key(store):
    store.set('a', 1)
    store.set('b', 2)
    store.set('a', 3)
    store.set('c', 4)
    store.delete('b')
    assert store.all() == {'a': 3, 'c': 4}
    assert len(store) == 2


def test_all_returns_independent_copy(store):
    store.set('a', 1)
    snapshot = store.all()
    snapshot['a'] = 99
    snapshot['b'] = 2
    del snapshot['a']
    assert store.get('a') == (1, True)
    assert store.get('b') == (None, False)

    snapshot = store.all()
    store.set('a', 5)
    store.set('z', 0)
    assert snapshot == {'a': 1}


def test_set_rejects_empty_or_non_string_keys(store):
    with pytest.raises(ValueError):
        store.set('', 1)
    with pytest.raises(ValueError):
        store.set(1, 'x')
    assert store.all() == {}


def test_store_satisfies_protocol(store):
    assert isinstance(store, StoreProtocol)


def test_flush_period_validation():
    with pytest.raises(ValueError):
        Store(MemoryBackend(), flush_period=-1)
    with pytest.raises(TypeError):
        Store(MemoryBackend(), flush_period='5s')


def test_context_manager_closes_and_flushes():
    backend = MemoryBackend()
    with Store(backend) as s:
        s.set('k', 'v')
        assert not s.closed
    assert s.closed
    assert backend.exists()
    assert Store(backend).all() == {'k': 'v'}


def test_repr_mentions_target():
    s = Store(MemoryBackend())
    assert 'memory' in repr(s)


@pytest.mark.parametrize('period', [float('nan'), math.inf, timedelta.max, threading.TIMEOUT_MAX * 2])
def test_flush_period_rejects_nan_and_overlong_values(period):
    with pytest.raises(ValueError):
        Store(MemoryBackend(), flush_period=period)
