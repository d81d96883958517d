"""Process-wide signal tower.

Call :func:`init_tower` once at startup to build the tower from explicit
settings; anything else reaches it through :func:`get_tower`, which builds a
default tower on first use.
"""

from __future__ import annotations

import logging
import threading

from .channels import DEFAULT_CHANNELS
from .config import Settings
from .core.registry import SignalTower

logger = logging.getLogger(__name__)

_tower: SignalTower | None = None
_tower_lock = threading.Lock()


def init_tower(settings: Settings | None = None) -> SignalTower:
    """Initialize the process-wide tower.

    Returns the existing tower if one was already initialized.
    """
    global _tower
    with _tower_lock:
        if _tower is None:
            settings = settings or Settings()
            catalog = DEFAULT_CHANNELS if settings.register_default_channels else ()
            _tower = SignalTower.from_settings(settings, catalog)
            logger.info("Signal tower initialized with %d signals", len(_tower))
        return _tower


def get_tower() -> SignalTower:
    """Get the process-wide tower, creating a default one if needed."""
    if _tower is None:
        return init_tower()
    return _tower
