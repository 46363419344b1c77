"""Application world: recording state, UI bookkeeping and the tick driver."""

from pathcomp.world.render import RenderUpdates
from pathcomp.world.pathlog import (
    DEFAULT_COLLECTION_NAME,
    DIRECT_COLLECTION_NAME,
    Comparison,
    PathLog,
    SelectModifier,
)
from pathcomp.world.ui import StatusLevel, StatusMessage, TeleportPoint, UIState
from pathcomp.world.app import App, AppState

__all__ = [
    "App",
    "AppState",
    "PathLog",
    "Comparison",
    "SelectModifier",
    "DEFAULT_COLLECTION_NAME",
    "DIRECT_COLLECTION_NAME",
    "RenderUpdates",
    "UIState",
    "TeleportPoint",
    "StatusLevel",
    "StatusMessage",
]
