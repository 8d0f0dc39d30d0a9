"""
Firestore stores: learner profiles, interaction history, and pipeline records.

Used when DATA_SOURCE=firebase.
- users/{user_id}: profile fields (belt_level, style, content_preference, recent_queries)
- users/{user_id}/interactions: one document per interaction, ordered by created_at
- query_understandings/{user_id}_{query_id}: UnderstandingRecord (upsert)
- learning_paths/{user_id}_{query_id}: LearningPathRecord (upsert)

Both stores share one Firebase app (same credentials_path and project_id). A
Firestore client can be injected instead (tests, custom apps).
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from learning_path.errors import PersistenceError
from learning_path.models.records import LearningPathRecord, UnderstandingRecord
from learning_path.models.user import Interaction, UserHistory, UserProfile

logger = logging.getLogger(__name__)

UNDERSTANDINGS_COLLECTION = "query_understandings"
LEARNING_PATHS_COLLECTION = "learning_paths"


def firestore_client(
    project_id: Optional[str] = None,
    credentials_path: Optional[Union[Path, str]] = None,
) -> Any:
    """Initialize the default Firebase app once and return a Firestore client."""
    try:
        import firebase_admin
        from firebase_admin import credentials, firestore
    except ImportError:
        raise ImportError(
            "firebase-admin is required for the Firestore stores. pip install firebase-admin"
        )
    if not firebase_admin._apps:
        if credentials_path:
            cred = credentials.Certificate(str(Path(credentials_path).resolve()))
            opts = {"projectId": project_id} if project_id else None
            firebase_admin.initialize_app(cred, opts)
        else:
            firebase_admin.initialize_app(options={"projectId": project_id} if project_id else None)
    return firestore.client()


def _document_id(user_id: str, query_id: str) -> str:
    return f"{user_id}_{query_id}"


class FirestoreUserStore:
    """User store backed by the Firestore 'users' collection."""

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
        client: Any = None,
    ):
        self._db = client if client is not None else firestore_client(project_id, credentials_path)
        self._coll = self._db.collection("users")

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        doc = self._coll.document(user_id).get()
        if not doc.exists:
            return None
        data = doc.to_dict() or {}
        data["user_id"] = doc.id
        return UserProfile.model_validate(data)

    def get_history(self, user_id: str, limit: int = 50) -> UserHistory:
        ref = self._coll.document(user_id).collection("interactions")
        query = ref.order_by("created_at", direction="DESCENDING").limit(limit)
        interactions = [Interaction.model_validate(doc.to_dict() or {}) for doc in query.stream()]
        return UserHistory.from_interactions(interactions, limit=limit)


class FirestorePersistenceSink:
    """Persistence sink upserting records into Firestore, one document per (user, query)."""

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
        client: Any = None,
    ):
        self._db = client if client is not None else firestore_client(project_id, credentials_path)

    def _set(self, collection: str, doc_id: str, payload: dict) -> None:
        try:
            self._db.collection(collection).document(doc_id).set(payload)
        except Exception as e:
            raise PersistenceError(f"Firestore write {collection}/{doc_id} failed: {e}") from e

    def save_understanding(self, record: UnderstandingRecord) -> None:
        self._set(
            UNDERSTANDINGS_COLLECTION,
            _document_id(record.user_id, record.query_id),
            record.model_dump(mode="json"),
        )

    def save_learning_path(self, record: LearningPathRecord) -> None:
        self._set(
            LEARNING_PATHS_COLLECTION,
            _document_id(record.user_id, record.query_id),
            record.model_dump(mode="json"),
        )
