"""
User store backed by a JSON file: learner profiles and their interaction history.

File shape: {"users": [{"user_id", "belt_level", "style", ..., "interactions": [...]}]}
or a dict keyed by user id. A missing or unreadable file is an empty store.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from learning_path.models.user import Interaction, UserHistory, UserProfile, ensure_interactions

logger = logging.getLogger(__name__)


class JsonUserStore:
    """User store backed by a JSON file (e.g. data/users.json)."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        self._profiles: Dict[str, UserProfile] = {}
        self._interactions: Dict[str, List[Interaction]] = {}
        self._load()

    def _add(self, user_id: str, raw: Dict) -> None:
        raw = dict(raw)
        interactions = raw.pop("interactions", []) or []
        raw["user_id"] = user_id
        self._profiles[user_id] = UserProfile.model_validate(raw)
        self._interactions[user_id] = ensure_interactions(interactions)

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("[store] Could not read users JSON %s: %s", self._path, e)
            return
        users = data.get("users", data) if isinstance(data, dict) else data
        if isinstance(users, list):
            for u in users:
                uid = u.get("user_id") or u.get("id")
                if uid:
                    self._add(str(uid), u)
        elif isinstance(users, dict):
            for uid, u in users.items():
                self._add(str(uid), u)

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        return self._profiles.get(user_id)

    def get_history(self, user_id: str, limit: int = 50) -> UserHistory:
        return UserHistory.from_interactions(self._interactions.get(user_id, []), limit=limit)
