"""
Persistence sink backed by a JSON file.

Records are kept under "understandings" and "learning_paths", keyed by
"<user_id>:<query_id>". Each save rewrites the file; the last write wins.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Union

from pydantic import BaseModel

from learning_path.errors import PersistenceError
from learning_path.models.records import LearningPathRecord, UnderstandingRecord

logger = logging.getLogger(__name__)


def record_key(record: Union[UnderstandingRecord, LearningPathRecord]) -> str:
    return f"{record.user_id}:{record.query_id}"


class JsonPersistenceSink:
    """Persistence sink writing to a JSON file (e.g. data/records.json)."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        self._data: Dict[str, Dict[str, Dict]] = {"understandings": {}, "learning_paths": {}}
        if self._path.exists():
            try:
                with open(self._path) as f:
                    loaded = json.load(f)
                for section in self._data:
                    self._data[section].update(loaded.get(section, {}))
            except (json.JSONDecodeError, IOError) as e:
                logger.warning("[store] Could not read records JSON %s: %s", self._path, e)

    def _upsert(self, section: str, record: BaseModel, key: str) -> None:
        self._data[section][key] = record.model_dump(mode="json")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w") as f:
                json.dump(self._data, f, indent=2)
        except OSError as e:
            raise PersistenceError(f"Could not write {self._path}: {e}") from e

    def save_understanding(self, record: UnderstandingRecord) -> None:
        self._upsert("understandings", record, record_key(record))

    def save_learning_path(self, record: LearningPathRecord) -> None:
        self._upsert("learning_paths", record, record_key(record))

    def get_understanding(self, user_id: str, query_id: str) -> Dict:
        return self._data["understandings"].get(f"{user_id}:{query_id}", {})

    def get_learning_path(self, user_id: str, query_id: str) -> Dict:
        return self._data["learning_paths"].get(f"{user_id}:{query_id}", {})
