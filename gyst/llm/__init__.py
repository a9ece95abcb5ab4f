"""Backend module for gyst.

This module provides one generation capability over two backends (relay
and direct). The backend is picked once per invocation from the
configuration; there is never a fallback from one to the other.
"""

from gyst.config import BackendConfig, BackendMode
from gyst.llm.base import BaseProvider, RetryPolicy
from gyst.llm.exceptions import (
    AuthError,
    BadRequestError,
    ConfigError,
    LLMError,
    MalformedResponseError,
    NetworkError,
    RateLimitedError,
    ServerError,
    ValidationError,
)
from gyst.llm.parsing import (
    CommandSuggestion,
    dedupe_candidates,
    normalize_message,
    parse_command_suggestion,
)
from gyst.llm.prompts import Prompt, build_prompt
from gyst.models import ChangeSet, DiffText, GenerationRequest, GenerationResult, Task


def get_provider(config: BackendConfig) -> BaseProvider:
    """Get the provider for the configured backend mode.

    Args:
        config: The resolved backend configuration.

    Returns:
        A RelayProvider or an AnthropicProvider.

    Raises:
        ConfigError: If direct mode is selected without an API key.
    """
    if config.mode == BackendMode.DIRECT:
        from gyst.llm.anthropic_provider import AnthropicProvider

        return AnthropicProvider(api_key=config.api_key, model=config.model, timeout=config.timeout)

    from gyst.llm.relay_provider import RelayProvider

    return RelayProvider(base_url=config.relay_url, timeout=config.timeout)


def generate_candidates(
    request: GenerationRequest,
    provider: BaseProvider,
    max_subject_length: int = 72,
) -> GenerationResult:
    """Run prompt building, the backend call and normalization.

    Args:
        request: Change set, diff and task.
        provider: The backend to call.
        max_subject_length: Subject ceiling for prompt and validation.

    Returns:
        Normalized, deduplicated candidates in backend order.

    Raises:
        LLMError: Backend failures after retries, or MalformedResponseError
            when no usable message came back.
    """
    prompt = build_prompt(request.changes, request.diff, request.task, max_subject_length)
    raw_texts = provider.send(prompt, request.task.count)

    candidates = []
    for raw in raw_texts:
        try:
            candidates.append(normalize_message(raw, max_subject_length, backend=provider.name))
        except MalformedResponseError:
            # One bad alternative does not sink the others
            if request.task.count == 1:
                raise
    if not candidates:
        raise MalformedResponseError("Backend returned no usable commit message")

    return GenerationResult(candidates=tuple(dedupe_candidates(candidates)))


def explain_command(description: str, provider: BaseProvider) -> CommandSuggestion:
    """Ask the backend which git command(s) accomplish a described task."""
    task = Task.command_explain(description)
    prompt = build_prompt(ChangeSet(), DiffText(), task)
    raw_texts = provider.send(prompt, 1)
    if not raw_texts:
        raise MalformedResponseError("Backend returned no command suggestion")
    return parse_command_suggestion(raw_texts[0])


__all__ = [
    "BaseProvider",
    "RetryPolicy",
    "Prompt",
    "build_prompt",
    "get_provider",
    "generate_candidates",
    "explain_command",
    "LLMError",
    "ConfigError",
    "NetworkError",
    "AuthError",
    "RateLimitedError",
    "ServerError",
    "BadRequestError",
    "MalformedResponseError",
    "ValidationError",
]
