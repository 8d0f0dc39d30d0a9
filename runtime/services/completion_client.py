"""
litellm-backed CompletionClient for the query interpreter and the path synthesizer.

One provider (openai, gemini or anthropic) is chosen from the keys present in the
environment; every task type can be routed to its own model.

    client = create_completion_client(task_models={"query_understanding": "gpt-5"})
    result = client.complete(CompletionRequest(task_type="query_understanding", prompt="..."))
"""

import logging
import os
from typing import Dict, List, Optional

import litellm

from learning_path.errors import CapabilityError
from learning_path.models.completion import CompletionRequest, CompletionResult

logger = logging.getLogger(__name__)

# Quiet litellm banners; errors still surface as exceptions.
litellm.suppress_debug_info = True

# Models with a fixed temperature reject the parameter instead of ignoring it.
litellm.drop_params = True


# ============================================================================
# Providers
# ============================================================================

# Default model per provider; per-task overrides come from RuntimeConfig.
SUPPORTED_MODELS: Dict[str, str] = {
    "openai": "gpt-5-mini",
    "gemini": "gemini/gemini-2.5-flash",
    "anthropic": "claude-sonnet-4-5",
}

API_KEY_ENV_VARS: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


def is_provider_available(provider: str) -> bool:
    env_var = API_KEY_ENV_VARS.get(provider)
    return bool(env_var and os.getenv(env_var))


def get_available_providers() -> List[str]:
    """Providers with an API key in the environment, in preference order."""
    return [p for p in API_KEY_ENV_VARS if is_provider_available(p)]


def get_model_for_provider(provider: str) -> str:
    if provider not in SUPPORTED_MODELS:
        raise ValueError(f"Unknown completion provider {provider!r}; expected one of {sorted(SUPPORTED_MODELS)}")
    return SUPPORTED_MODELS[provider]


# ============================================================================
# Client
# ============================================================================

class LiteLLMCompletionClient:
    """
    One bounded litellm call per request; no retries.

    task_models maps a task type ("query_understanding", "recommendation_synthesis")
    to a model id; "*" overrides every task. Unmapped tasks use the provider's model.
    """

    def __init__(
        self,
        provider: str = "openai",
        task_models: Optional[Dict[str, str]] = None,
    ):
        self.provider = provider
        self.default_model = get_model_for_provider(provider)
        self.task_models = dict(task_models or {})

    def model_for(self, task_type: str) -> str:
        return self.task_models.get(task_type) or self.task_models.get("*") or self.default_model

    def complete(self, request: CompletionRequest) -> CompletionResult:
        model = self.model_for(request.task_type)
        options = request.options
        kwargs = {
            "model": model,
            "messages": [{"role": "user", "content": request.prompt}],
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
            "timeout": options.timeout,
        }
        if options.json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = litellm.completion(**kwargs)
            content = response.choices[0].message.content
        except Exception as e:
            raise CapabilityError(
                f"{model} call failed: {type(e).__name__}: {e}", request.task_type
            ) from e

        if not content or not content.strip():
            raise CapabilityError(f"{model} returned empty content", request.task_type)
        logger.debug("[completion] task=%s model=%s chars=%d", request.task_type, model, len(content))
        return CompletionResult(content=content, model_id=model)


def create_completion_client(
    provider: Optional[str] = None,
    task_models: Optional[Dict[str, str]] = None,
) -> Optional[LiteLLMCompletionClient]:
    """
    Client for the requested provider, or the first provider with an API key.
    Returns None when no provider is usable (the pipeline then uses its fallbacks).
    """
    if provider:
        if not is_provider_available(provider):
            logger.warning(
                "[completion] No API key for %s (set %s); completions disabled",
                provider, API_KEY_ENV_VARS.get(provider, "?"),
            )
            return None
        return LiteLLMCompletionClient(provider, task_models)
    available = get_available_providers()
    if not available:
        logger.warning("[completion] No provider API key configured; completions disabled")
        return None
    return LiteLLMCompletionClient(available[0], task_models)


__all__ = [
    "API_KEY_ENV_VARS",
    "LiteLLMCompletionClient",
    "SUPPORTED_MODELS",
    "create_completion_client",
    "get_available_providers",
    "get_model_for_provider",
    "is_provider_available",
]
