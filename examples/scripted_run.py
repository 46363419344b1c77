"""Drive the recorder with a scripted host: place triggers, run a course, save.

Run with:
    python examples/scripted_run.py route.ccmp
"""

import logging
import math
import sys
from dataclasses import dataclass, field

from pathcomp import (
    App,
    Comparison,
    CreateCollection,
    SaveComparison,
    SetComparisonMode,
    SpawnTrigger,
    ToggleGoldFilter,
)


@dataclass
class ScriptedHost:
    """Moves along the x axis; rotation stays level."""

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
        self.teleports.append(position)
        self.position = position
        self.rotation = rotation

    def set_camera_rotation(self, rotation):
        self.camera = rotation


class NoDialog:
    """Headless picker: every dialog is cancelled."""

    def pick_save_file(self, extension, default_name):
        return None

    def pick_open_file(self, extension):
        return None


class StepClock:
    """One simulated frame per tick at 60 Hz."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def step(self) -> None:
        self.now += 1 / 60


def run_course(app: App, host: ScriptedHost, clock: StepClock, speed: float) -> None:
    """Walk from the start trigger to the end trigger at ``speed`` units/second."""
    x = 0.0
    while x <= 20.0:
        # A little sideways wobble so paths differ visibly
        host.position = (x, 0.0, 0.5 * math.sin(x))
        app.tick()
        clock.step()
        x += speed / 60


def main(target: str) -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    host = ScriptedHost()
    clock = StepClock()
    app = App(host, NoDialog(), clock=clock)

    app.push(CreateCollection("Scripted"))
    app.push(SpawnTrigger(0, (0.0, 0.0, 0.0), host.rotation))
    app.push(SpawnTrigger(1, (20.0, 0.0, 0.0), host.rotation))
    app.tick()

    collection_id = app.state.pathlog.collections[0].id
    app.push(ToggleGoldFilter(collection_id))
    app.tick()

    for speed in (8.0, 10.0, 6.0, 12.0):
        host.position = (0.0, 0.0, 0.0)
        run_course(app, host, clock, speed)
        print(f"speed {speed:>4}: latest {app.state.pathlog.latest_time} ms")

    app.push(SetComparisonMode(Comparison.GOLD))
    app.push(SaveComparison(target))
    app.tick()

    times = [p.time() for p in app.state.pathlog.collections[0]]
    print(f"kept (gold filter): {times}")
    print(f"status: {app.state.ui.status}")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "scripted.ccmp")
