import json
import logging
import os
from typing import Any, Optional

from booknest.core.config import STORAGE_PATH

logger = logging.getLogger("booknest.client.storage")

USER_KEY = "booknest_user"
CART_KEY = "booknest_cart"
WISHLIST_KEY = "booknest_wishlist"
DARK_MODE_KEY = "booknest_darkmode"
TOKEN_KEY = "token"


class LocalStorage:
    """
    String key/value store persisted as one JSON file.

    Mirrors the browser ``localStorage`` calls the web client makes; values
    are JSON-encoded on write and decoded on read.
    """

    def __init__(self, path: str = STORAGE_PATH):
        self.path = path
        self._data = self._read()

    def _read(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Error loading persisted data from %s: %s", self.path, e)
            return {}

    def _write(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(self._data, f)
        os.replace(tmp, self.path)

    def get_item(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    def set_item(self, key: str, value: Any):
        self._data[key] = value
        self._write()

    def remove_item(self, key: str):
        if key in self._data:
            del self._data[key]
            self._write()
