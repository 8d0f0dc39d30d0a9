"""Backing services: completion client, JSON stores, Firestore stores."""

from .completion_client import (
    LiteLLMCompletionClient,
    create_completion_client,
    get_available_providers,
)
from .content_store import JsonContentStore
from .firestore_store import FirestorePersistenceSink, FirestoreUserStore, firestore_client
from .persistence import JsonPersistenceSink
from .user_store import JsonUserStore

__all__ = [
    "FirestorePersistenceSink",
    "FirestoreUserStore",
    "JsonContentStore",
    "JsonPersistenceSink",
    "JsonUserStore",
    "LiteLLMCompletionClient",
    "create_completion_client",
    "firestore_client",
    "get_available_providers",
]
