"""App: per-tick driver tying the host, the path log and the event queue together.

Usage:
    app = App(host, dialog, settings=load_settings())
    app.push(CreateCollection())

    # once per game frame
    app.tick()
    if app.state.render.take_paths():
        redraw(app.state.pathlog.compared_paths)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from pathcomp.config.settings import Settings
from pathcomp.host.protocol import FileDialog, Host
from pathcomp.scheduling.event_queue import EventQueue
from pathcomp.scheduling.events import Event, RenderUpdate
from pathcomp.scheduling.processor import EventProcessor
from pathcomp.world.pathlog import PathLog
from pathcomp.world.render import RenderUpdates
from pathcomp.world.ui import UIState

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Everything the event handlers may read or mutate."""

    pathlog: PathLog
    settings: Settings
    ui: UIState = field(default_factory=UIState)
    render: RenderUpdates = field(default_factory=RenderUpdates)
    events: EventQueue = field(default_factory=EventQueue)

    def apply_settings(self) -> None:
        """Push recording-related settings into the path log."""
        self.pathlog.set_direct_mode(self.settings.direct_mode)
        self.pathlog.set_autosave(self.settings.autosave)
        self.pathlog.set_autoreset(self.settings.autoreset)
        self.pathlog.retry = self.settings.retry_policy()


class App:
    """Owns the application state and runs one tick per game frame.

    Args:
        host: Game collaborator providing the player pose.
        dialog: Blocking file picker used for save/load without a path.
        settings: Initial configuration. Defaults are used when omitted.
        clock: Monotonic time source in seconds, shared with the path log.
    """

    def __init__(
        self,
        host: Host,
        dialog: FileDialog,
        settings: Settings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._host = host
        self.state = AppState(pathlog=PathLog(clock=clock), settings=settings or Settings())
        self.state.apply_settings()
        self.processor = EventProcessor(host, dialog)
        self.tick_count = 0

    def push(self, event: Event) -> None:
        """Queue an event for the next tick. Safe from any thread."""
        self.state.events.push(event)

    def tick(self) -> None:
        """Advance recording with the host pose, then drain the event queue."""
        state = self.state
        updates = state.pathlog.update(self._host.get_position(), self._host.get_rotation())

        autosave = state.pathlog.take_autosave_result()
        if autosave is not None:
            state.ui.report("Autosave", autosave)

        if updates.any():
            state.events.push(RenderUpdate(updates))

        handled = self.processor.process(state)
        self.tick_count += 1
        if handled:
            logger.debug("Tick %d handled %d events", self.tick_count, handled)
