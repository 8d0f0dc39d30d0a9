"""
Runtime Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv

from learning_path.models.config import DEFAULT_CONFIG, PipelineConfig

BASE_DIR = Path(__file__).resolve().parent.parent

# Single .env at the project root
_root_env = BASE_DIR / ".env"
if _root_env.exists():
    load_dotenv(_root_env)

DATA_SOURCES = ("memory", "json", "firebase")


@dataclass(frozen=True)
class RuntimeConfig:
    """Runtime configuration."""

    # Completion capability: provider name from the client's model table, and
    # optional model overrides ("*" applies to every task type).
    completion_provider: Optional[str] = None
    completion_model: Optional[str] = None
    analysis_model: Optional[str] = None
    synthesis_model: Optional[str] = None
    # Overrides both completion timeouts in the pipeline config when set.
    completion_timeout_seconds: Optional[float] = None

    # Data source: "memory" | "json" | "firebase"
    data_source: str = "memory"
    # When data_source=json: content items, users (profiles + interactions), and
    # the file that receives understandings and learning paths.
    content_json_path: Optional[Path] = None
    users_json_path: Optional[Path] = None
    records_json_path: Optional[Path] = None
    # When data_source=firebase: path to service account JSON and optional project id.
    # Content still comes from content_json_path.
    firebase_credentials_path: Optional[Path] = None
    firebase_project_id: Optional[str] = None

    # Optional JSON file merged into PipelineConfig via PipelineConfig.from_dict
    pipeline_config_path: Optional[Path] = None

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration from environment variables."""
        data_source = os.getenv("DATA_SOURCE", "").strip().lower() or "memory"
        if data_source not in DATA_SOURCES:
            data_source = "memory"

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (BASE_DIR / p).resolve()

        return cls(
            completion_provider=os.getenv("COMPLETION_PROVIDER", "").strip().lower() or None,
            completion_model=os.getenv("COMPLETION_MODEL") or None,
            analysis_model=os.getenv("ANALYSIS_MODEL") or None,
            synthesis_model=os.getenv("SYNTHESIS_MODEL") or None,
            completion_timeout_seconds=(
                float(os.getenv("COMPLETION_TIMEOUT_SECONDS"))
                if os.getenv("COMPLETION_TIMEOUT_SECONDS")
                else None
            ),
            data_source=data_source,
            content_json_path=_path_env("CONTENT_JSON_PATH", BASE_DIR / "data" / "content.json"),
            users_json_path=_path_env("USERS_JSON_PATH", BASE_DIR / "data" / "users.json"),
            records_json_path=_path_env("RECORDS_JSON_PATH", BASE_DIR / "data" / "records.json"),
            firebase_credentials_path=(
                _path_env("FIREBASE_CREDENTIALS_PATH")
                or _path_env("GOOGLE_APPLICATION_CREDENTIALS")
            ),
            firebase_project_id=os.getenv("FIREBASE_PROJECT_ID") or None,
            pipeline_config_path=_path_env("PIPELINE_CONFIG_PATH"),
            log_level=(os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"),
        )

    def task_models(self) -> Dict[str, str]:
        """Per-task model overrides for the completion client."""
        models: Dict[str, str] = {}
        if self.completion_model:
            models["*"] = self.completion_model
        if self.analysis_model:
            models["query_understanding"] = self.analysis_model
        if self.synthesis_model:
            models["recommendation_synthesis"] = self.synthesis_model
        return models

    def load_pipeline_config(self) -> PipelineConfig:
        """PipelineConfig from pipeline_config_path, or the defaults."""
        config = DEFAULT_CONFIG
        if self.pipeline_config_path:
            with open(self.pipeline_config_path) as f:
                config = PipelineConfig.from_dict(json.load(f))
        if self.completion_timeout_seconds is not None:
            config = config.model_copy(
                update={
                    "interpretation_timeout_seconds": self.completion_timeout_seconds,
                    "framing_timeout_seconds": self.completion_timeout_seconds,
                }
            )
        return config

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if self.data_source in ("json", "firebase"):
            if not self.content_json_path or not self.content_json_path.exists():
                errors.append(f"Content JSON not found: {self.content_json_path}")

        if self.data_source == "firebase":
            cred = self.firebase_credentials_path
            if cred is not None and not cred.is_file():
                errors.append(f"Firebase credentials file not found: {cred}")

        if self.pipeline_config_path and not self.pipeline_config_path.exists():
            errors.append(f"Pipeline config not found: {self.pipeline_config_path}")

        return len(errors) == 0, errors


# Global config instance
_config: Optional[RuntimeConfig] = None


def get_config() -> RuntimeConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_env()
    return _config


def reload_config() -> RuntimeConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
