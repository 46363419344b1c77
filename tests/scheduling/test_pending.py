"""Tests for PendingOperation slots and the shared EventQueue."""

import threading
import time

import pytest

from pathcomp.scheduling import EventQueue, PendingOperation, StartRecording, StopRecording


def wait_for(slot: PendingOperation, timeout: float = 5.0):
    for _ in range(int(timeout / 0.005)):
        outcome = slot.poll()
        if outcome is not None:
            return outcome
        time.sleep(0.005)
    raise AssertionError(f"{slot.name} never resolved")


def test_idle_slot_polls_none():
    slot = PendingOperation("idle")

    assert not slot.busy
    assert slot.poll() is None


def test_outcome_value_then_idle():
    slot = PendingOperation("value")
    slot.spawn(lambda: "picked.ccmp")

    outcome = wait_for(slot)

    assert outcome.value == "picked.ccmp"
    assert not outcome.failed
    assert not slot.busy


def test_poll_does_not_block_while_running():
    gate = threading.Event()
    slot = PendingOperation("blocked")
    slot.spawn(lambda: gate.wait(5))

    assert slot.poll() is None
    assert slot.busy

    gate.set()
    assert wait_for(slot).value is True


def test_worker_exception_forwarded():
    def boom():
        raise OSError("dialog crashed")

    slot = PendingOperation("error")
    slot.spawn(boom)

    outcome = wait_for(slot)
    assert outcome.failed
    assert isinstance(outcome.error, OSError)


def test_spawn_while_busy_raises():
    gate = threading.Event()
    slot = PendingOperation("busy")
    slot.spawn(lambda: gate.wait(5))

    with pytest.raises(RuntimeError, match="already has an operation"):
        slot.spawn(lambda: None)
    assert slot.spawn_count == 1
    gate.set()


def test_event_queue_swap_empties():
    events = EventQueue()
    events.push(StartRecording())
    events.extend([StopRecording()])

    assert len(events) == 2
    assert events.swap() == [StartRecording(), StopRecording()]
    assert len(events) == 0
    assert events.swap() == []
