"""Dark-mode preference, kept apart from the directory controller."""

from userdirectory.core.logging import get_logger
from userdirectory.repositories.config_store import (KEY_DARK_MODE, ConfigStore,
                                                     format_bool, parse_bool)

logger = get_logger(__name__)


class ThemeService:
    """Reads and writes the dark-mode flag in the config store."""

    def __init__(self, store: ConfigStore):
        self._store = store

    def is_dark(self) -> bool:
        return parse_bool(self._store.get(KEY_DARK_MODE))

    def set_dark(self, enabled: bool) -> bool:
        self._store.set(KEY_DARK_MODE, format_bool(enabled))
        logger.debug(f"Dark mode set to {enabled}")
        return enabled

    def toggle(self) -> bool:
        return self.set_dark(not self.is_dark())
