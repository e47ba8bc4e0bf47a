"""Fixture support: synthetic and sample documents."""

from test_support.document_generator import DocumentGenerator, generate_documents
from test_support.sample_data import SAMPLE_MAPPING, sample_documents

__all__ = ["SAMPLE_MAPPING", "DocumentGenerator", "generate_documents", "sample_documents"]
