"""
Pytest configuration and fixtures.

This file provides pytest-specific fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest

from core.config_loader import IngestionConfig
from etl.resume.ingestion import IngestionPipeline
from etl.resume.parser import PdfTextExtractor
from etl.resume.profile_extractor import ProfileExtractor
from storage.memory import InMemoryObjectStore
from tests import FakeLLM, build_pdf


@pytest.fixture
def memory_store():
    return InMemoryObjectStore(bucket_name="test-bucket")


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def sample_pdf():
    return build_pdf()


@pytest.fixture
def pipeline(memory_store, fake_llm):
    """Pipeline over the in-memory store and scripted LLM, with claim waits disabled."""
    config = IngestionConfig(claim_wait_seconds=0, claim_poll_interval_seconds=0)
    return IngestionPipeline(
        memory_store,
        PdfTextExtractor(),
        ProfileExtractor(fake_llm),
        config,
        sleep=lambda seconds: None,
    )
