"""Direct backend: Anthropic Messages API with the user's own API key."""

import logging
import time
from typing import Callable, Optional

import anthropic
from anthropic import Anthropic

from gyst.llm.base import BaseProvider, RetryPolicy, parse_retry_after
from gyst.llm.exceptions import (
    AuthError,
    BadRequestError,
    ConfigError,
    MalformedResponseError,
    NetworkError,
    RateLimitedError,
    ServerError,
)
from gyst.llm.parsing import split_alternatives
from gyst.llm.prompts import Prompt

LOG = logging.getLogger(__name__)


class AnthropicProvider(BaseProvider):
    """Anthropic Claude provider."""

    name = "direct"

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        timeout: float = 30.0,
        client: Optional[Anthropic] = None,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the Anthropic provider.

        Args:
            api_key: The Anthropic API key.
            model: The model to use.
            timeout: Per-request timeout in seconds.
            client: Optional preconfigured SDK client.
            retry_policy: Backoff settings; defaults to 3 attempts.
            sleep: Sleep function used between attempts.

        Raises:
            ConfigError: If no API key is configured.
        """
        super().__init__(retry_policy=retry_policy, sleep=sleep)
        if not api_key:
            raise ConfigError(
                "Direct mode needs an Anthropic API key. Set it using:\n"
                "  1. Environment variable: export ANTHROPIC_API_KEY=your_key_here\n"
                "  2. Run: gyst config set-key\n"
                "  3. Or switch back to the relay: gyst config set-mode relay"
            )
        self.model = model
        self.timeout = timeout
        # SDK retries are disabled so attempts are counted only by send()
        self._client = client or Anthropic(api_key=api_key, max_retries=0, timeout=timeout)

    def _create(self, prompt: Prompt):
        try:
            return self._client.messages.create(
                model=self.model,
                max_tokens=prompt.max_tokens,
                temperature=prompt.temperature,
                system=prompt.system,
                messages=[{"role": "user", "content": prompt.user}],
            )
        except anthropic.APIConnectionError as e:
            # APITimeoutError is a subclass
            raise NetworkError(f"Anthropic API unreachable: {e}")
        except anthropic.RateLimitError as e:
            raise RateLimitedError(
                f"Anthropic rate limit reached: {e.message}",
                retry_after=parse_retry_after(e.response.headers.get("retry-after")),
            )
        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as e:
            raise AuthError(f"Anthropic rejected the API key ({e.status_code}). Check ANTHROPIC_API_KEY.")
        except anthropic.APIStatusError as e:
            if e.status_code >= 500:
                raise ServerError(f"Anthropic API error ({e.status_code}): {e.message}", status_code=e.status_code)
            raise BadRequestError(f"Anthropic API rejected the request ({e.status_code}): {e.message}",
                                  status_code=e.status_code)

    def _request(self, prompt: Prompt, count: int) -> list[str]:
        message = self._create(prompt)

        text = next(
            (block.text for block in message.content if getattr(block, "type", None) == "text"),
            None,
        )
        if text is None:
            raise MalformedResponseError("No text content in Anthropic response")

        LOG.debug(
            "anthropic usage: %s input / %s output tokens",
            message.usage.input_tokens, message.usage.output_tokens,
        )

        if prompt.delimiter:
            return split_alternatives(text, prompt.delimiter)[:count]
        return [text]
