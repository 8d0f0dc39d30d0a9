"""Application state: configured stores, completion client, and pipeline config."""

import logging
from pathlib import Path
from typing import Any, Optional

from learning_path.models.config import PipelineConfig
from learning_path.stages.orchestrator import PipelineServices
from learning_path.stores import (
    InMemoryContentStore,
    InMemoryPersistenceSink,
    InMemoryUserStore,
    NullPersistenceSink,
)

from .config import RuntimeConfig, get_config
from .services import (
    FirestorePersistenceSink,
    FirestoreUserStore,
    JsonContentStore,
    JsonPersistenceSink,
    JsonUserStore,
    create_completion_client,
    firestore_client,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


class AppState:
    """Services and pipeline configuration built from a RuntimeConfig."""

    def __init__(self, config: RuntimeConfig):
        self.config = config
        self.pipeline_config: PipelineConfig = config.load_pipeline_config()

        self.content_store: Any = self._create_content_store(config)
        logger.info("[startup] Content store: %s", type(self.content_store).__name__)

        firestore_db = self._create_firestore_client(config)
        self.user_store: Any = self._create_user_store(config, firestore_db)
        self.sink: Any = self._create_sink(config, firestore_db)
        logger.info(
            "[startup] User store: %s, persistence: %s",
            type(self.user_store).__name__, type(self.sink).__name__,
        )

        self.completion = create_completion_client(
            config.completion_provider, config.task_models()
        )
        logger.info(
            "[startup] Completion: %s",
            self.completion.provider if self.completion else "disabled (fallbacks only)",
        )

    @property
    def services(self) -> PipelineServices:
        return PipelineServices(
            completion=self.completion,
            user_store=self.user_store,
            sink=self.sink,
        )

    def _create_content_store(self, config: RuntimeConfig) -> Any:
        if config.data_source == "memory":
            return InMemoryContentStore()
        return JsonContentStore(config.content_json_path)

    def _create_firestore_client(self, config: RuntimeConfig) -> Optional[Any]:
        """Firestore client when DATA_SOURCE=firebase and credentials are usable."""
        if config.data_source != "firebase":
            return None
        cred_path = config.firebase_credentials_path
        if cred_path and not Path(cred_path).is_file():
            logger.warning(
                "[startup] Firestore skipped: credentials path not found or not a file: %s",
                cred_path,
            )
            return None
        try:
            return firestore_client(config.firebase_project_id, cred_path)
        except Exception as e:
            logger.warning("[startup] Firestore init failed: %s, using JSON stores", e)
            return None

    def _create_user_store(self, config: RuntimeConfig, db: Optional[Any]) -> Any:
        if db is not None:
            return FirestoreUserStore(client=db)
        if config.data_source == "memory" or not config.users_json_path:
            return InMemoryUserStore()
        return JsonUserStore(config.users_json_path)

    def _create_sink(self, config: RuntimeConfig, db: Optional[Any]) -> Any:
        if db is not None:
            return FirestorePersistenceSink(client=db)
        if config.data_source == "memory":
            return InMemoryPersistenceSink()
        if not config.records_json_path:
            return NullPersistenceSink()
        return JsonPersistenceSink(config.records_json_path)


# Global state instance
_state: Optional[AppState] = None


def get_state() -> AppState:
    """Get the global application state, building it on first use."""
    global _state
    if _state is None:
        config = get_config()
        configure_logging(config.log_level)
        _state = AppState(config)
    return _state


def reset_state() -> None:
    global _state
    _state = None
