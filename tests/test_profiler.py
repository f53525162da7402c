import math

import pytest

from planegame import log as logmod
from planegame.profiler import ProfileData, Profiler, get_profiler, profile_scope


@pytest.fixture(autouse=True)
def isolated_log(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    logmod.shutdown()
    yield
    logmod.shutdown()


def test_empty_profile_data():
    data = ProfileData()
    assert data.call_count == 0
    assert data.min_time == math.inf
    assert data.average == 0.0


def test_record_time_tracks_min_max_count():
    profiler = Profiler()
    profiler.record_time("frame", 2.0)
    profiler.record_time("frame", 4.0)
    data = profiler.stats["frame"]
    assert data.min_time == 2.0
    assert data.max_time == 4.0
    assert data.call_count == 2
    assert data.average == data.total_time / data.call_count


def test_disabled_profiler_ignores_records():
    profiler = Profiler(enabled=False)
    profiler.record_time("frame", 1.0)
    assert profiler.stats == {}


def test_disabling_clears_data():
    profiler = Profiler()
    profiler.record_time("frame", 1.0)
    profiler.enabled = False
    profiler.enabled = True
    assert profiler.stats == {}


def test_print_frame_stats_returns_and_clears():
    profiler = Profiler()
    profiler.record_time("update", 1.5)
    reported = profiler.print_frame_stats()
    assert reported["update"].call_count == 1
    assert profiler.stats == {}


def test_print_frame_stats_when_disabled_reports_nothing():
    profiler = Profiler(enabled=False)
    assert profiler.print_frame_stats() == {}


def test_scope_records_one_call():
    profiler = Profiler()
    with profiler.scope("block"):
        sum(range(1000))
    data = profiler.stats["block"]
    assert data.call_count == 1
    assert data.min_time >= 0.0


def test_scope_records_even_when_block_raises():
    profiler = Profiler()
    with pytest.raises(RuntimeError):
        with profiler.scope("failing"):
            raise RuntimeError("boom")
    assert profiler.stats["failing"].call_count == 1


def test_shared_profiler_scope():
    profiler = get_profiler()
    assert profiler is get_profiler()
    profiler.enabled = True
    with profile_scope("shared-scope"):
        pass
    assert profiler.stats["shared-scope"].call_count >= 1
    profiler.enabled = False
    assert profiler.stats == {}