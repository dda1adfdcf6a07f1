"""Key-value blob stores and the progression load/save contract."""

import json
import logging
import os
from typing import Optional, Protocol

from .constants import PROGRESSION_KEY
from .models import Progression
from .progression import default_progression, progression_from_dict, progression_to_dict

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    def load(self, key: str) -> Optional[str]: ...

    def save(self, key: str, blob: str) -> None: ...


class MemoryStore:
    def __init__(self, blobs: Optional[dict] = None):
        self.blobs: dict[str, str] = dict(blobs or {})
        self.saves = 0

    def load(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    def save(self, key: str, blob: str) -> None:
        self.blobs[key] = blob
        self.saves += 1


class JsonFileStore:
    """All keys live in one JSON object on disk."""

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, encoding="utf-8") as fh:
            data = json.load(fh)
        return data if isinstance(data, dict) else {}

    def load(self, key: str) -> Optional[str]:
        blob = self._read_all().get(key)
        return blob if isinstance(blob, str) else None

    def save(self, key: str, blob: str) -> None:
        try:
            data = self._read_all()
        except (OSError, ValueError):
            data = {}
        data[key] = blob
        tmp_path = self.path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as fh:
            json.dump(data, fh)
        os.replace(tmp_path, self.path)


def load_progression(store: BlobStore) -> Progression:
    try:
        blob = store.load(PROGRESSION_KEY)
        if blob is None:
            return default_progression()
        return progression_from_dict(json.loads(blob))
    except (OSError, ValueError, TypeError) as e:
        logger.warning("Could not load progression, starting fresh: %s", e)
        return default_progression()


def save_progression(store: BlobStore, progression: Progression) -> bool:
    try:
        store.save(PROGRESSION_KEY, json.dumps(progression_to_dict(progression)))
    except (OSError, TypeError, ValueError) as e:
        logger.warning("Could not save progression: %s", e)
        return False
    return True
