import pytest

from monsters.frames import MAX_TIMESTEP, ResourceFreeQueue, clamp_timestep


def test_clamp_long_frame():
    assert clamp_timestep(0.5) == 0.0333


def test_clamp_short_frame_unchanged():
    assert clamp_timestep(0.01) == 0.01
    assert clamp_timestep(MAX_TIMESTEP) == MAX_TIMESTEP


def test_callback_runs_when_frame_returns():
    calls = []
    queue = ResourceFreeQueue(3)
    queue.submit(lambda: calls.append("a"))
    queue.advance()
    queue.advance()
    assert calls == []
    queue.advance()
    assert calls == ["a"]
    assert queue.pending == 0


def test_advance_wraps_index():
    queue = ResourceFreeQueue(2)
    queue.advance()
    queue.advance()
    assert queue.current_index == 0


def test_flush_all_runs_in_frame_order():
    calls = []
    queue = ResourceFreeQueue(2)
    queue.submit(lambda: calls.append(0))
    queue.advance()
    queue.submit(lambda: calls.append(1))
    queue.flush_all()
    assert calls == [0, 1]
    assert queue.pending == 0


def test_resize_drops_removed_frames():
    calls = []
    queue = ResourceFreeQueue(3)
    queue.advance()
    queue.advance()
    queue.submit(lambda: calls.append("x"))
    queue.resize(2)
    assert queue.image_count == 2
    assert queue.pending == 0
    assert queue.current_index < 2
    queue.flush_all()
    assert calls == []


def test_resize_rejects_zero():
    with pytest.raises(ValueError):
        ResourceFreeQueue(0)