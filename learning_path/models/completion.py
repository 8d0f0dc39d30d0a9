"""
Completion models: request/result for the external text-completion capability.
"""

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field


class CompletionOptions(BaseModel):
    json_mode: bool = False
    max_tokens: int = Field(default=1000, gt=0)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    timeout: float = Field(default=20.0, gt=0.0)


class CompletionRequest(BaseModel):
    """One bounded call: task type selects the model, options bound the output and latency."""

    task_type: str
    prompt: str
    options: CompletionOptions = Field(default_factory=CompletionOptions)


class CompletionResult(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    content: str
    model_id: str


class CompletionClient(Protocol):
    """Text-completion capability. Implementations raise CapabilityError on any failure."""

    def complete(self, request: CompletionRequest) -> CompletionResult:
        ...
