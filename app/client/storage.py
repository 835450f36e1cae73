"""
Local Watch-State Storage
=========================
Favorite and watched movie ids live only on the client, one serialized
JSON list per user:

    movie_favorites_<user_id> -> "[3, 7, 12]"
    movie_watched_<user_id>   -> "[7]"

Call sites talk to the ``WatchStateRepository`` interface, so the local
implementation can be swapped for a server-backed one. Unreadable or
corrupt values are treated as an empty set; nothing is synchronized with
the server.

Usage:
    storage = FileStorage("~/.movie_catalog/storage.json")
    favorites = favorites_repository(storage)
    favorites.add(user_id, movie_id)
    favorites.contains(user_id, movie_id)
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union
import json
import logging

logger = logging.getLogger(__name__)

FAVORITES_PREFIX = "movie_favorites_"
WATCHED_PREFIX = "movie_watched_"


# ============================================
# Key/value storage (browser local storage equivalent)
# ============================================

class KeyValueStorage(ABC):
    """String keys to string values"""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        ...


class MemoryStorage(KeyValueStorage):
    """Process-local storage, lost on exit"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage(KeyValueStorage):
    """
    Storage persisted as a single JSON object on disk.
    A missing or corrupt file reads as empty storage.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {str(e)}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _save(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(items, indent=2, sort_keys=True), encoding="utf-8")
        tmp_path.replace(self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key in items:
            del items[key]
            self._save(items)


# ============================================
# Watch-state repositories
# ============================================

class WatchStateRepository(ABC):
    """A per-user set of movie ids"""

    @abstractmethod
    def get(self, user_id: int) -> List[int]:
        """All ids for the user, in insertion order"""

    @abstractmethod
    def add(self, user_id: int, movie_id: int) -> None:
        """Add an id; adding one already present changes nothing"""

    @abstractmethod
    def remove(self, user_id: int, movie_id: int) -> None:
        """Remove an id; removing an absent id is a no-op"""

    def contains(self, user_id: int, movie_id: int) -> bool:
        return movie_id in self.get(user_id)

    def toggle(self, user_id: int, movie_id: int) -> bool:
        """Flip membership and return the new state"""
        if self.contains(user_id, movie_id):
            self.remove(user_id, movie_id)
            return False
        self.add(user_id, movie_id)
        return True


class LocalWatchStateRepository(WatchStateRepository):
    """Repository backed by one JSON list per user in a KeyValueStorage"""

    def __init__(self, storage: KeyValueStorage, prefix: str):
        self.storage = storage
        self.prefix = prefix

    def key_for(self, user_id: int) -> str:
        return f"{self.prefix}{user_id}"

    def get(self, user_id: int) -> List[int]:
        raw = self.storage.get_item(self.key_for(user_id))
        if not raw:
            return []
        try:
            values = json.loads(raw)
        except ValueError:
            logger.debug(f"Corrupt value under {self.key_for(user_id)}, treating as empty")
            return []
        if not isinstance(values, list):
            return []

        ids: List[int] = []
        for value in values:
            try:
                movie_id = int(value)
            except (TypeError, ValueError):
                continue
            if movie_id not in ids:
                ids.append(movie_id)
        return ids

    def _write(self, user_id: int, ids: List[int]) -> None:
        self.storage.set_item(self.key_for(user_id), json.dumps(ids))

    def add(self, user_id: int, movie_id: int) -> None:
        ids = self.get(user_id)
        if movie_id not in ids:
            ids.append(movie_id)
            self._write(user_id, ids)

    def remove(self, user_id: int, movie_id: int) -> None:
        ids = self.get(user_id)
        if movie_id in ids:
            self._write(user_id, [i for i in ids if i != movie_id])


def favorites_repository(storage: KeyValueStorage) -> LocalWatchStateRepository:
    return LocalWatchStateRepository(storage, FAVORITES_PREFIX)


def watched_repository(storage: KeyValueStorage) -> LocalWatchStateRepository:
    return LocalWatchStateRepository(storage, WATCHED_PREFIX)
