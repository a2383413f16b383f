#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests run offline: the object store is in memory and the LLM backend is
replaced by FakeLLM, so no GCS bucket or Ollama server is needed.

    # Run all tests
    python -m pytest tests/ -v

    # Using unittest
    python -m unittest discover tests -v
"""

import copy
import json
from typing import Any, Dict, List, Optional, Union

from core.llm.interfaces import LLMProvider

SAMPLE_PROFILE: Dict[str, Any] = {
    "name": "Jane Q. Doe",
    "email": "jane.doe@example.com",
    "phone": "+1 555 0100",
    "current_job_title": "Senior Data Engineer",
    "current_company": "Acme Analytics",
    "summary": "Data engineer focused on streaming pipelines.",
    "portfolio_url": None,
    "experience": [
        {
            "title": "Senior Data Engineer",
            "company": "Acme Analytics",
            "location": "Remote",
            "startDate": "Jan 2021",
            "endDate": "Present",
            "description": "Built Kafka ingestion for 2B events/day.",
        }
    ],
    "education": [
        {
            "institute_name": "State University",
            "degree": "BSc",
            "field_of_study": "Computer Science",
            "start_date": "2012",
            "end_date": "2016",
            "location": None,
            "is_ongoing": False,
        }
    ],
    "skills": ["Python", "Kafka", "SQL"],
    "projects": [
        {
            "name": "streamlint",
            "description": "Linter for streaming job configs",
            "techStack": ["Python"],
            "link": "https://github.com/janedoe/streamlint",
        }
    ],
}

SAMPLE_RESUME_LINES = [
    "Jane Q. Doe",
    "jane.doe@example.com",
    "Senior Data Engineer at Acme Analytics",
    "Skills: Python, Kafka, SQL",
]


def sample_profile(**overrides) -> Dict[str, Any]:
    """Return a deep copy of SAMPLE_PROFILE with top-level overrides applied."""
    profile = copy.deepcopy(SAMPLE_PROFILE)
    profile.update(overrides)
    return profile


def sample_profile_json(**overrides) -> str:
    return json.dumps(sample_profile(**overrides))


class FakeLLM(LLMProvider):
    """Scripted LLM backend.

    Returns the queued responses in order and then keeps repeating the last
    one. A queued exception instance is raised instead of returned.
    """

    def __init__(self, responses: Optional[List[Union[str, Exception]]] = None):
        self.responses = list(responses) if responses else [sample_profile_json()]
        self.calls: List[Dict[str, Any]] = []

    def generate(
        self,
        system_prompt: str,
        user_message: str,
        schema_spec: Optional[Dict[str, Any]] = None,
    ) -> str:
        self.calls.append({
            "system_prompt": system_prompt,
            "user_message": user_message,
            "schema_spec": schema_spec,
        })
        index = min(len(self.calls), len(self.responses)) - 1
        response = self.responses[index]
        if isinstance(response, Exception):
            raise response
        return response


def _escape_pdf_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(lines: Optional[List[str]] = None) -> bytes:
    """Build a minimal single-page PDF with one text line per entry.

    Object offsets in the xref table are computed, so pypdf reads the file
    without falling back to repair mode. An empty list yields a page with no
    text.
    """
    lines = SAMPLE_RESUME_LINES if lines is None else lines

    ops = ["BT", "/F1 12 Tf", "72 720 Td"]
    for line in lines:
        ops.append(f"({_escape_pdf_text(line)}) Tj")
        ops.append("0 -16 Td")
    ops.append("ET")
    stream = "\n".join(ops).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += str(number).encode() + b" 0 obj\n" + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 " + str(len(objects) + 1).encode() + b"\n"
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += str(offset).zfill(10).encode() + b" 00000 n \n"
    out += b"trailer\n<< /Size " + str(len(objects) + 1).encode() + b" /Root 1 0 R >>\n"
    out += b"startxref\n" + str(xref_offset).encode() + b"\n%%EOF\n"
    return bytes(out)
