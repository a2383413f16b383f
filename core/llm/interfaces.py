"""
LLM Provider Interface - Abstract base for generative-text backends.

This module defines the interface for LLM services (OpenAI, Ollama, etc.).
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class LLMProvider(ABC):
    """
    Abstract Interface for AI Service Providers (OpenAI, Ollama, etc.).
    """

    @abstractmethod
    def generate(
        self,
        system_prompt: str,
        user_message: str,
        schema_spec: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Return the backend's raw text completion for a single prompt.

        ``schema_spec`` is a ``{"name", "schema", "strict"}`` wrapper; when
        given, the backend is asked to constrain its output to that JSON
        schema. Implementations retry transient failures on their own and
        raise UpstreamServiceError once those are exhausted. The returned
        text is untrusted: callers must validate its shape.
        """
        pass
