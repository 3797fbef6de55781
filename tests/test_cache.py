import threading
import time

import pytest

from data_pipeline.cache import SelectionTracker, SeriesCache


class CountingLoader:
    def __init__(self, release=None, fail_first=False):
        self.calls = 0
        self.release = release
        self.fail_first = fail_first
        self._lock = threading.Lock()

    def __call__(self, key):
        with self._lock:
            self.calls += 1
            call = self.calls
        if self.release is not None:
            self.release.wait(timeout=5)
        if self.fail_first and call == 1:
            raise RuntimeError("provider down")
        return [{'date': '2024-01-01', 'value': float(call)}]


def test_read_through_loads_once():
    loader = CountingLoader()
    cache = SeriesCache(loader)
    first = cache.get('Gold')
    second = cache.get('Gold')
    assert first is second
    assert loader.calls == 1
    assert 'Gold' in cache
    assert cache.keys() == ['Gold']


def test_concurrent_gets_share_one_load():
    release = threading.Event()
    loader = CountingLoader(release=release)
    cache = SeriesCache(loader)
    results = []

    def worker():
        results.append(cache.get('Bitcoin'))

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for t in threads:
        t.start()
    time.sleep(0.1)
    release.set()
    for t in threads:
        t.join(timeout=5)

    assert loader.calls == 1
    assert len(results) == 5
    assert all(r == results[0] for r in results)


def test_failed_load_is_not_cached():
    loader = CountingLoader(fail_first=True)
    cache = SeriesCache(loader)
    with pytest.raises(RuntimeError):
        cache.get('Gold')
    assert cache.peek('Gold') is None
    assert cache.get('Gold')[0]['value'] == 2.0


def test_invalidate_and_refresh_reload():
    loader = CountingLoader()
    cache = SeriesCache(loader)
    cache.get('Gold')
    cache.invalidate('Gold')
    assert cache.peek('Gold') is None
    assert cache.get('Gold')[0]['value'] == 2.0
    assert cache.refresh('Gold')[0]['value'] == 3.0
    assert cache.snapshot()['Gold'][0]['value'] == 3.0
    cache.invalidate()
    assert cache.keys() == []


def test_selection_tracker_last_write_wins():
    tracker = SelectionTracker()
    first = tracker.begin('chart')
    second = tracker.begin('chart')
    other = tracker.begin('correlation')
    assert not tracker.is_current('chart', first)
    assert tracker.is_current('chart', second)
    assert tracker.is_current('correlation', other)


def test_selection_tracker_forgets_finished_channels():
    tracker = SelectionTracker()
    for i in range(1000):
        token = tracker.begin(('chart', str(i)))
        assert tracker.finish(('chart', str(i)), token)
    assert len(tracker) == 0


def test_finish_reports_superseded_selection():
    tracker = SelectionTracker()
    old = tracker.begin('chart')
    new = tracker.begin('chart')
    assert not tracker.finish('chart', old)
    assert tracker.finish('chart', new)
    assert not tracker.is_current('chart', new)
    assert len(tracker) == 0
