"""Shared application state (injected into routes)."""
import logging

from jukey.config import SIMULATE_PLAYER
from jukey.core.applescript_player import AppleScriptPlayer
from jukey.core.catalog import PlayableCatalog
from jukey.core.chat_handler import ChatHandler
from jukey.core.ports import PlayableProvider, PlayerControlPort
from jukey.core.queue_coordinator import QueueCoordinator
from jukey.core.simulated_player import SimulatedPlayer
from jukey.core.spotify_client import SpotifyCatalogProvider

logger = logging.getLogger(__name__)


def build_player(simulate: bool = SIMULATE_PLAYER) -> PlayerControlPort:
    if simulate:
        logger.info("Using simulated player")
        return SimulatedPlayer()
    return AppleScriptPlayer()


class AppState:
    def __init__(
        self,
        provider: PlayableProvider | None = None,
        player: PlayerControlPort | None = None,
        coordinator: QueueCoordinator | None = None,
    ) -> None:
        if coordinator is None:
            catalog = PlayableCatalog(provider or SpotifyCatalogProvider())
            coordinator = QueueCoordinator(catalog, player or build_player())
        self.coordinator = coordinator
        self.chat_handler = ChatHandler(coordinator)

    def shutdown(self) -> None:
        self.coordinator.shutdown()


_state: AppState | None = None


def get_state() -> AppState:
    global _state
    if _state is None:
        _state = AppState()
    return _state
