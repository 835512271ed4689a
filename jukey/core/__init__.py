"""Core services: catalog, queue coordination, end-of-track watching, player backends, chat."""
from jukey.core.catalog import PlayableCatalog
from jukey.core.position_watcher import PositionWatcher
from jukey.core.queue_coordinator import QueueCoordinator

__all__ = ["PlayableCatalog", "PositionWatcher", "QueueCoordinator"]
