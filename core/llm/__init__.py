"""LLM Module - text generation backends used for profile extraction."""
from core.llm.interfaces import LLMProvider
from core.llm.openai_service import OpenAIService, RETRYABLE_ERRORS

__all__ = ['LLMProvider', 'OpenAIService', 'RETRYABLE_ERRORS']
