"""
Property-style checks of repeated submissions through the pipeline fixture.
"""
import pytest

from etl.resume.catalog import CandidateCatalog
from tests import build_pdf


@pytest.mark.parametrize("repeats", [2, 5])
def test_repeated_submission_processes_once(pipeline, fake_llm, memory_store, sample_pdf, repeats):
    results = [pipeline.submit(sample_pdf, "application/pdf") for _ in range(repeats)]

    assert [r.uploaded for r in results] == [True] + [False] * (repeats - 1)
    assert len({r.raw_key for r in results}) == 1
    assert len({r.parsed_key for r in results}) == 1
    assert len(fake_llm.calls) == 1
    assert len(memory_store.list("parsed/")) == 1


def test_every_upload_is_listed_once(pipeline, memory_store):
    documents = [build_pdf(["Jane Q. Doe", f"revision {i}"]) for i in range(3)]
    for content in documents:
        pipeline.submit(content, "application/pdf")
        pipeline.submit(content, "application/pdf")

    records = CandidateCatalog(memory_store).list_all()

    assert len(records) == len(documents)
    assert all(record.name == "jane_q_doe" for record in records)
    assert all(record.error is None for record in records)


def test_raw_artifact_is_byte_identical(pipeline, memory_store, sample_pdf):
    result = pipeline.submit(sample_pdf, "application/pdf")

    assert memory_store.get(result.raw_key) == sample_pdf
