"""Event processor: drains the intent queue once per tick.

Each pass swaps the shared queue into a local batch, runs every handler in
arrival order, and appends the follow-up events the handlers produced back
onto the shared queue for the next tick. Follow-ups are never processed in
the pass that created them.

Dialog-backed events (``SaveComparison`` / ``LoadComparison`` without a path)
use a :class:`~pathcomp.scheduling.pending.PendingOperation` slot: the first
pass spawns the worker, later passes poll it and re-enqueue the event until
the worker has answered.

Usage:
    processor = EventProcessor(host, dialog)
    state.events.push(StartRecording())
    processor.process(state)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pathcomp.config.settings import SettingsError, load_settings, save_settings
from pathcomp.host.protocol import FileDialog, Host
from pathcomp.scheduling.events import (
    ChangeAutoReset,
    ChangeAutosave,
    ChangeDirectMode,
    ClearTriggers,
    CreateCollection,
    DeleteCollection,
    DeletePath,
    DeleteTrigger,
    Event,
    ExtraTeleport,
    LoadComparison,
    LoadConfig,
    MainTeleport,
    RenameCollection,
    RenderUpdate,
    ResetRecording,
    SaveComparison,
    SaveConfig,
    SelectPath,
    SetComparisonMode,
    SetPathFilter,
    SpawnTeleport,
    SpawnTrigger,
    StartRecording,
    StopRecording,
    Teleport,
    TeleportIndex,
    ToggleActive,
    ToggleGoldFilter,
    ToggleMute,
    TogglePause,
    ToggleSolo,
)
from pathcomp.scheduling.pending import Outcome, PendingOperation
from pathcomp.storage.compfile import FILE_EXTENSION
from pathcomp.world.pathlog import DEFAULT_COLLECTION_NAME, check_trigger_index
from pathcomp.world.render import RenderUpdates
from pathcomp.world.ui import StatusLevel, TeleportPoint

if TYPE_CHECKING:
    from pathcomp.world.app import AppState

logger = logging.getLogger(__name__)

DEFAULT_SAVE_NAME = "Untitled"

type Handler = Callable[[AppState, Any, list[Event]], None]


class EventProcessor:
    """Applies queued events to the application state.

    Args:
        host: Game collaborator used for teleports and bookmarks.
        dialog: Blocking file picker, only ever called from worker threads.
    """

    def __init__(self, host: Host, dialog: FileDialog) -> None:
        self._host = host
        self._dialog = dialog
        self._handlers: dict[type, Handler] = {
            DeletePath: self._on_delete_path,
            ChangeDirectMode: self._on_change_direct_mode,
            ChangeAutosave: self._on_change_autosave,
            ChangeAutoReset: self._on_change_autoreset,
            SpawnTrigger: self._on_spawn_trigger,
            DeleteTrigger: self._on_delete_trigger,
            StartRecording: self._on_start_recording,
            StopRecording: self._on_stop_recording,
            ResetRecording: self._on_reset_recording,
            TogglePause: self._on_toggle_pause,
            ClearTriggers: self._on_clear_triggers,
            CreateCollection: self._on_create_collection,
            RenameCollection: self._on_rename_collection,
            DeleteCollection: self._on_delete_collection,
            ToggleMute: self._on_toggle_mute,
            ToggleSolo: self._on_toggle_solo,
            ToggleActive: self._on_toggle_active,
            ToggleGoldFilter: self._on_toggle_gold_filter,
            SetPathFilter: self._on_set_path_filter,
            SetComparisonMode: self._on_set_comparison_mode,
            SaveComparison: self._on_save_comparison,
            LoadComparison: self._on_load_comparison,
            SaveConfig: self._on_save_config,
            LoadConfig: self._on_load_config,
            SelectPath: self._on_select_path,
            Teleport: self._on_teleport,
            SpawnTeleport: self._on_spawn_teleport,
            RenderUpdate: self._on_render_update,
        }

    def process(self, state: AppState) -> int:
        """Run one pass over the queued events.

        Returns:
            Number of events handled in this pass.
        """
        batch = state.events.swap()
        next_events: list[Event] = []

        for event in batch:
            handler = self._handlers.get(type(event))
            if handler is None:
                raise TypeError(f"No handler for event {event!r}")
            handler(state, event, next_events)

        state.events.extend(next_events)
        return len(batch)

    @staticmethod
    def _requeue(event: Event, next_events: list[Event]) -> None:
        # Duplicate dialog events collapse so one dialog serves them all
        if event not in next_events:
            next_events.append(event)

    # Recording

    def _on_start_recording(self, state: AppState, event: StartRecording, _: list[Event]) -> None:
        state.pathlog.start()

    def _on_stop_recording(
        self, state: AppState, event: StopRecording, next_events: list[Event]
    ) -> None:
        state.pathlog.stop()
        autosave = state.pathlog.take_autosave_result()
        if autosave is not None:
            state.ui.report("Autosave", autosave)
        next_events.append(RenderUpdate())

    def _on_reset_recording(self, state: AppState, event: ResetRecording, _: list[Event]) -> None:
        state.pathlog.reset()

    def _on_toggle_pause(self, state: AppState, event: TogglePause, _: list[Event]) -> None:
        state.pathlog.toggle_pause()

    def _on_change_direct_mode(
        self, state: AppState, event: ChangeDirectMode, _: list[Event]
    ) -> None:
        state.pathlog.set_direct_mode(event.new)

    def _on_change_autosave(self, state: AppState, event: ChangeAutosave, _: list[Event]) -> None:
        state.pathlog.set_autosave(event.new)

    def _on_change_autoreset(
        self, state: AppState, event: ChangeAutoReset, _: list[Event]
    ) -> None:
        state.pathlog.set_autoreset(event.new)

    # Triggers

    def _on_spawn_trigger(
        self, state: AppState, event: SpawnTrigger, next_events: list[Event]
    ) -> None:
        check_trigger_index(event.index)
        size = state.settings.trigger_sizes[event.index]
        if not state.pathlog.create_trigger(event.index, event.position, event.rotation, size):
            state.ui.notify(
                StatusLevel.WARNING, "Triggers are locked while collections hold paths"
            )
            return
        next_events.append(SpawnTeleport(MainTeleport(event.index)))
        next_events.append(RenderUpdate(RenderUpdates(triggers=True)))

    def _on_delete_trigger(
        self, state: AppState, event: DeleteTrigger, next_events: list[Event]
    ) -> None:
        triggers = state.pathlog.main_triggers
        index = next(
            (i for i, t in enumerate(triggers) if t is not None and t.id == event.id),
            None,
        )
        if not state.pathlog.delete_trigger(event.id):
            return
        if index is not None:
            state.ui.main_teleports[index] = None
        next_events.append(RenderUpdate(RenderUpdates(triggers=True, teleports=True)))

    def _on_clear_triggers(
        self, state: AppState, event: ClearTriggers, next_events: list[Event]
    ) -> None:
        if not state.pathlog.clear_triggers():
            state.ui.notify(
                StatusLevel.WARNING, "Triggers are locked while collections hold paths"
            )
            return
        state.ui.main_teleports = [None, None]
        next_events.append(RenderUpdate(RenderUpdates(triggers=True, teleports=True)))

    # Collections and paths

    def _on_create_collection(
        self, state: AppState, event: CreateCollection, _: list[Event]
    ) -> None:
        state.pathlog.create_collection(event.name or DEFAULT_COLLECTION_NAME)

    def _on_rename_collection(
        self, state: AppState, event: RenameCollection, _: list[Event]
    ) -> None:
        state.pathlog.rename_collection(event.id, event.new_name)

    def _on_delete_collection(
        self, state: AppState, event: DeleteCollection, next_events: list[Event]
    ) -> None:
        if state.pathlog.delete_collection(event.id):
            next_events.append(RenderUpdate())

    def _on_delete_path(self, state: AppState, event: DeletePath, next_events: list[Event]) -> None:
        if state.pathlog.delete_path(event.path_id):
            next_events.append(RenderUpdate())

    def _on_toggle_mute(self, state: AppState, event: ToggleMute, next_events: list[Event]) -> None:
        if state.pathlog.toggle_mute(event.id):
            next_events.append(RenderUpdate())

    def _on_toggle_solo(self, state: AppState, event: ToggleSolo, next_events: list[Event]) -> None:
        if state.pathlog.toggle_solo(event.id):
            next_events.append(RenderUpdate())

    def _on_toggle_active(self, state: AppState, event: ToggleActive, _: list[Event]) -> None:
        state.pathlog.toggle_active(event.id)

    def _on_toggle_gold_filter(
        self, state: AppState, event: ToggleGoldFilter, _: list[Event]
    ) -> None:
        state.pathlog.toggle_gold_filter(event.collection_id)

    def _on_set_path_filter(self, state: AppState, event: SetPathFilter, _: list[Event]) -> None:
        state.pathlog.set_path_filter(event.collection_id, event.path_id)

    def _on_set_comparison_mode(
        self, state: AppState, event: SetComparisonMode, next_events: list[Event]
    ) -> None:
        state.pathlog.set_comparison_mode(event.mode)
        next_events.append(RenderUpdate())

    def _on_select_path(self, state: AppState, event: SelectPath, next_events: list[Event]) -> None:
        if state.pathlog.select_path(event.collection_id, event.path_id, event.modifier):
            next_events.append(RenderUpdate())

    # Comparison files

    def _await_dialog(
        self,
        slot: PendingOperation[str | None],
        open_dialog: Callable[[], str | None],
        event: Event,
        next_events: list[Event],
    ) -> Outcome[str | None] | None:
        """Drive a dialog slot one step.

        Returns:
            The dialog outcome once resolved, else None after re-enqueueing.
        """
        # A copy is already re-queued; only that copy may read the outcome
        if event in next_events:
            return None

        if not slot.busy:
            slot.spawn(open_dialog)
            self._requeue(event, next_events)
            return None

        outcome = slot.poll()
        if outcome is None:
            self._requeue(event, next_events)
            return None
        return outcome

    @staticmethod
    def _chosen_path(slot: PendingOperation[str | None], outcome: Outcome[str | None]) -> str | None:
        if outcome.failed:
            logger.error("%s failed: %s", slot.name, outcome.error)
            return None
        if outcome.value is None:
            logger.info("%s cancelled", slot.name)
        return outcome.value

    def _on_save_comparison(
        self, state: AppState, event: SaveComparison, next_events: list[Event]
    ) -> None:
        file_path = event.path
        if file_path is None:
            slot = state.ui.save_dialog
            outcome = self._await_dialog(
                slot,
                lambda: self._dialog.pick_save_file(FILE_EXTENSION, DEFAULT_SAVE_NAME),
                event,
                next_events,
            )
            if outcome is None:
                return
            file_path = self._chosen_path(slot, outcome)
            if file_path is None:
                return

        result = state.pathlog.save_comparison(file_path)
        state.ui.report("Saved comparison", result)

    def _on_load_comparison(
        self, state: AppState, event: LoadComparison, next_events: list[Event]
    ) -> None:
        file_path = event.path
        if file_path is None:
            slot = state.ui.load_dialog
            outcome = self._await_dialog(
                slot,
                lambda: self._dialog.pick_open_file(FILE_EXTENSION),
                event,
                next_events,
            )
            if outcome is None:
                return
            file_path = self._chosen_path(slot, outcome)
            if file_path is None:
                return

        result = state.pathlog.load_comparison(file_path)
        state.ui.report("Loaded comparison", result)
        if not result.ok:
            return

        for i, trigger in enumerate(state.pathlog.main_triggers):
            if trigger is not None:
                state.ui.main_teleports[i] = TeleportPoint(trigger.position, trigger.rotation)
        next_events.append(RenderUpdate(RenderUpdates(paths=True, triggers=True, teleports=True)))

    # Config

    def _on_save_config(self, state: AppState, event: SaveConfig, _: list[Event]) -> None:
        try:
            save_settings(state.settings)
        except SettingsError as e:
            logger.error("%s", e)
            state.ui.notify(StatusLevel.ERROR, str(e))

    def _on_load_config(self, state: AppState, event: LoadConfig, _: list[Event]) -> None:
        try:
            state.settings = load_settings(state.settings.config_file)
        except SettingsError as e:
            logger.error("%s", e)
            state.ui.notify(StatusLevel.ERROR, str(e))
            return
        state.apply_settings()

    # Teleports

    def _lookup_teleport(self, state: AppState, index: TeleportIndex) -> TeleportPoint | None:
        match index:
            case MainTeleport(index=i):
                return state.ui.main_teleports[i]
            case ExtraTeleport(index=i):
                return state.ui.extra_teleports.get(i)
        return None

    def _on_teleport(self, state: AppState, event: Teleport, next_events: list[Event]) -> None:
        point = self._lookup_teleport(state, event.index)
        if point is None:
            return
        self._host.teleport(point.location, point.rotation)
        if point.camera_rotation is not None:
            self._host.set_camera_rotation(point.camera_rotation)
        next_events.append(ResetRecording())

    def _on_spawn_teleport(
        self, state: AppState, event: SpawnTeleport, next_events: list[Event]
    ) -> None:
        point = TeleportPoint(
            location=self._host.get_position(),
            rotation=self._host.get_rotation(),
            camera_rotation=self._host.get_camera_rotation(),
        )
        match event.index:
            case MainTeleport(index=i):
                state.ui.main_teleports[i] = point
            case ExtraTeleport(index=i):
                state.ui.extra_teleports[i] = point
        next_events.append(RenderUpdate(RenderUpdates(teleports=True)))

    # Rendering

    def _on_render_update(self, state: AppState, event: RenderUpdate, _: list[Event]) -> None:
        state.render.merge(event.update)
        if event.update.paths:
            state.pathlog.update_visible()
