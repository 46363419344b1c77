"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

import threading
from dataclasses import dataclass, field

from pathcomp import App, PathLog


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class FakeHost:
    """Player pose the test moves around; records teleports."""

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    camera: tuple[float, float] = (0.0, 0.0)
    teleports: list[tuple] = field(default_factory=list)

    def get_position(self):
        return self.position

    def get_rotation(self):
        return self.rotation

    def get_camera_rotation(self):
        return self.camera

    def teleport(self, position, rotation):
        self.teleports.append((position, rotation))
        self.position = position
        self.rotation = rotation

    def set_camera_rotation(self, rotation):
        self.camera = rotation


class FakeDialog:
    """File picker answering with a fixed path once ``gate`` is set."""

    def __init__(self, answer: str | None = None) -> None:
        self.answer = answer
        self.gate = threading.Event()
        self.gate.set()
        self.calls: list[str] = []
        self.error: Exception | None = None

    def _respond(self, kind: str) -> str | None:
        self.calls.append(kind)
        self.gate.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return self.answer

    def pick_save_file(self, extension, default_name):
        return self._respond("save")

    def pick_open_file(self, extension):
        return self._respond("open")


# Trigger placement: feet positions; the trigger centres end up one unit higher.
START_FEET = (0.0, 0.0, 0.0)
END_FEET = (10.0, 0.0, 0.0)
OUTSIDE_FEET = (5.0, 0.0, 0.0)
ZERO = (0.0, 0.0, 0.0)
UNIT = (1.0, 1.0, 1.0)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def pathlog(clock):
    """PathLog with one active collection and both triggers placed."""
    log = PathLog(clock=clock)
    log.create_collection("Route")
    log.create_trigger(0, START_FEET, ZERO, UNIT)
    log.create_trigger(1, END_FEET, ZERO, UNIT)
    return log


@pytest.fixture
def record_run(clock):
    """Drive one full start -> end pass taking ``seconds``."""

    def run(log: PathLog, seconds: float = 2.5, nodes: int = 1):
        log.update(START_FEET, ZERO)
        step = seconds / nodes
        for i in range(nodes):
            log.update((1.0 + i * 0.5, 0.0, 0.0) if i else OUTSIDE_FEET, ZERO)
            clock.advance(step)
        return log.update(END_FEET, ZERO)

    return run


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def dialog():
    return FakeDialog()


@pytest.fixture
def app(host, dialog, clock):
    return App(host, dialog, clock=clock)
