#!/usr/bin/env python3
"""
Resume Ingestion Module - ETL for uploaded resumes.

Handles:
- Content fingerprinting and storage key derivation
- PDF text extraction
- Schema-validated profile extraction using an LLM
- Dual-artifact persistence and catalog reads

Note: The profile contract lives in etl.schema_models.ProfileSchema.
"""
from etl.schema_models import ProfileSchema
from etl.resume.catalog import CandidateCatalog, CandidateRecord
from etl.resume.fingerprint import generate_file_fingerprint
from etl.resume.ingestion import IngestionPipeline, IngestionResult, IngestionStage
from etl.resume.parser import PdfTextExtractor, TextExtractor
from etl.resume.profile_extractor import ProfileExtractor

__all__ = [
    'ProfileSchema',
    'CandidateCatalog',
    'CandidateRecord',
    'generate_file_fingerprint',
    'IngestionPipeline',
    'IngestionResult',
    'IngestionStage',
    'PdfTextExtractor',
    'TextExtractor',
    'ProfileExtractor',
]
