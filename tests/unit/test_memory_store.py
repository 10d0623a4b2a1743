import random
import threading

import pytest

from netpaste_lib.storage import (
    KeyGenerationExhausted,
    KeyGenerator,
    MemoryPasteStore,
    PasteStore,
    create_store,
)


def test_memory_basic_operations():
    s = MemoryPasteStore()

    key = s.set(b'hello world')
    assert s.get(key) == b'hello world'
    assert key in s
    assert s.count() == 1
    assert len(s) == 1


def test_round_trip_is_byte_exact():
    s = MemoryPasteStore()
    content = bytes(range(256)) + b'  \n\t trailing  \r\n'
    key = s.set(content)
    assert s.get(key) == content


def test_get_unknown_or_malformed_key_returns_none():
    s = MemoryPasteStore()
    s.set(b'x')
    assert s.get('zzzzzz') is None
    assert s.get('') is None
    assert s.get('../../etc/passwd') is None
    assert s.get(None) is None  # type: ignore[arg-type]
    assert 'zzzzzz' not in s


def test_store_is_a_paste_store():
    assert isinstance(MemoryPasteStore(), PasteStore)


def test_fresh_injected_generator_is_kept():
    # An unused generator has len() == 0; it must still be the one in use.
    kg = KeyGenerator(rng=random.Random(3))
    assert len(kg) == 0
    s = MemoryPasteStore(key_generator=kg)
    key = s.set(b"first")
    assert kg.is_taken(key)
    assert len(kg) == 1


def test_store_keys_come_from_its_generator():
    kg = KeyGenerator(rng=random.Random(3))
    s = MemoryPasteStore(key_generator=kg)
    keys = [s.set(b'p%d' % i) for i in range(20)]
    assert all(kg.is_taken(k) for k in keys)
    assert len(kg) == s.count() == 20


def test_exhausted_generator_stores_nothing():
    kg = KeyGenerator(rng=random.Random(0), length=1, alphabet='a', max_attempts=3)
    s = MemoryPasteStore(key_generator=kg)
    s.set(b'first')
    with pytest.raises(KeyGenerationExhausted):
        s.set(b'second')
    assert s.count() == 1
    assert s.get('a') == b'first'


def test_concurrent_sets_return_distinct_keys():
    s = MemoryPasteStore()
    n_threads, per_thread = 32, 200
    keys = []
    keys_lock = threading.Lock()
    start = threading.Barrier(n_threads)

    def writer(tid):
        start.wait()
        mine = [s.set(b'%d-%d' % (tid, i)) for i in range(per_thread)]
        with keys_lock:
            keys.extend(mine)

    threads = [threading.Thread(target=writer, args=(t,)) for t in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(keys) == n_threads * per_thread
    assert len(set(keys)) == len(keys)
    assert s.count() == len(keys)


def test_interleaved_set_and_get_stress():
    s = MemoryPasteStore()
    written = {}
    written_lock = threading.Lock()
    errors = []

    def worker(tid):
        local = {}
        for i in range(300):
            content = (b'%d:%d:' % (tid, i)) * (i % 7 + 1)
            key = s.set(content)
            local[key] = content
            # read back something written earlier by this worker
            probe = next(iter(local))
            if s.get(probe) != local[probe]:
                errors.append(probe)
            s.get('nokey1')
        with written_lock:
            written.update(local)

    threads = [threading.Thread(target=worker, args=(t,)) for t in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert s.count() == len(written) == 16 * 300
    for key, content in written.items():
        assert s.get(key) == content


def test_create_store_memory():
    s = create_store()
    assert isinstance(s, MemoryPasteStore)
    assert s.get(s.set(b'abc')) == b'abc'


def test_create_store_passes_generator_options():
    s = create_store(key_max_attempts=2, length=1, alphabet='q')
    assert s.set(b'one') == 'q'
    with pytest.raises(KeyGenerationExhausted):
        s.set(b'two')


def test_create_store_unknown_backend():
    with pytest.raises(ValueError):
        create_store(backend='redis')
