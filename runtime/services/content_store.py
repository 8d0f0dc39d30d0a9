"""
Content store backed by a JSON file of instructional items.

The file is a list of item dicts, or {"items": [...]}. It is read on first search;
read or parse failures raise RetrievalError (the pipeline treats that as an empty,
degraded pool). Records that fail validation are logged and skipped.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from learning_path.errors import RetrievalError
from learning_path.models.candidate import CandidateItem
from learning_path.stores import search_items

logger = logging.getLogger(__name__)


class JsonContentStore:
    """Content store over a JSON file (e.g. data/content.json)."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        self._items: Optional[List[CandidateItem]] = None

    def _load(self) -> List[CandidateItem]:
        if self._items is None:
            try:
                with open(self._path) as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError, ValueError) as e:
                raise RetrievalError(f"Content JSON unavailable: {self._path}: {e}") from e
            items = data.get("items", []) if isinstance(data, dict) else data
            if not isinstance(items, list):
                raise RetrievalError(f"Content JSON has no item list: {self._path}")
            self._items = []
            for index, record in enumerate(items):
                try:
                    self._items.append(CandidateItem.model_validate(record))
                except (TypeError, ValueError) as e:
                    logger.warning(
                        "[store] Skipping invalid item #%d in %s: %s", index, self._path, e
                    )
            logger.info("[store] Loaded %d items from %s", len(self._items), self._path)
        return self._items

    def __len__(self) -> int:
        return len(self._load())

    def search(
        self,
        terms: Sequence[str],
        fields: Sequence[str],
        limit: int,
    ) -> List[CandidateItem]:
        return search_items(self._load(), terms, fields, limit)
