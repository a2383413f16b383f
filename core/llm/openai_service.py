"""
OpenAI Service - LLM implementation using the OpenAI-compatible chat API.

Works against OpenAI itself or any compatible server (Ollama by default).
"""
from typing import Any, Dict, Optional
import logging

import openai
from openai import OpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity import RetryCallState

from core.exceptions import UpstreamServiceError
from core.llm.interfaces import LLMProvider

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

RETRYABLE_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        "Transient LLM error (attempt %s). Waiting %.1fs before retry. Details: %s",
        retry_state.attempt_number, wait, exc,
    )


def _llm_retry(max_retries: int, backoff_seconds: float, backoff_max_seconds: float):
    """Return a tenacity @retry decorator for LLM API calls.

    ``max_retries`` counts retries, so the call is attempted at most
    ``max_retries + 1`` times.
    """
    return retry(
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        wait=wait_exponential(multiplier=backoff_seconds, min=0, max=backoff_max_seconds),
        stop=stop_after_attempt(max_retries + 1),
        before_sleep=_log_retry,
        reraise=True,
    )


class OpenAIService(LLMProvider):
    """
    OpenAI LLM Service.

    Sends a system + user message pair and returns the raw completion text.
    Sampling is pinned by ``extraction_temperature`` (0.0 by default) so
    identical input is as reproducible as the backend allows.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model_config: Optional[Dict[str, Any]] = None,
        client: Optional[OpenAI] = None,
    ):
        self.model_config = model_config or {}
        self.extraction_model = self.model_config.get('extraction_model', 'gemma3:4b')
        self.extraction_temperature = self.model_config.get('extraction_temperature', 0.0)
        self.max_retries = self.model_config.get('max_retries', 2)
        self.request_timeout = self.model_config.get('request_timeout_seconds', 120.0)

        if client is None:
            client_kwargs = {'timeout': self.request_timeout, 'max_retries': 0}
            if api_key:
                client_kwargs['api_key'] = api_key
            if base_url:
                client_kwargs['base_url'] = base_url
            # Retries are owned by tenacity below, not by the SDK
            client = OpenAI(**client_kwargs)
        self.client = client

        self._create_with_retry = _llm_retry(
            self.max_retries,
            self.model_config.get('retry_backoff_seconds', 1.0),
            self.model_config.get('retry_backoff_max_seconds', 30.0),
        )(self._create_completion)

    def _create_completion(self, messages, response_format=None):
        kwargs = {}
        if response_format is not None:
            kwargs["response_format"] = response_format
        return self.client.chat.completions.create(
            model=self.extraction_model,
            messages=messages,
            temperature=self.extraction_temperature,
            **kwargs,
        )

    def generate(
        self,
        system_prompt: str,
        user_message: str,
        schema_spec: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Run a single chat completion and return its text content.

        When ``schema_spec`` is given the request carries a ``json_schema``
        response_format built from it.

        Raises:
            UpstreamServiceError: When the backend stays unavailable after
                retries, rejects the request, or returns no content
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ]

        response_format = None
        if schema_spec is not None:
            response_format = {
                "type": "json_schema",
                "json_schema": {
                    "name": schema_spec["name"],
                    "schema": schema_spec["schema"],
                    "strict": schema_spec.get("strict", False),
                },
            }

        try:
            response = self._create_with_retry(messages, response_format)
        except RETRYABLE_ERRORS as e:
            logger.error(f"LLM backend unavailable after {self.max_retries} retries: {e}")
            raise UpstreamServiceError(f"LLM backend unavailable: {e.__class__.__name__}") from e
        except openai.APIError as e:
            logger.error(f"LLM backend rejected the request: {e}")
            raise UpstreamServiceError(f"LLM backend error: {e.__class__.__name__}") from e

        try:
            content = response.choices[0].message.content
        except (IndexError, AttributeError) as e:
            logger.error(f"Malformed completion response: {e}")
            raise UpstreamServiceError("LLM backend returned a malformed response") from e

        if not content:
            raise UpstreamServiceError("LLM backend returned an empty completion")

        logger.debug(f"Completion from {self.extraction_model}: {len(content)} chars")
        return content
