"""
Data ingestion layer for loading the bank code dataset.

All dataset loading happens through this module so the same row rules
apply at startup and in dry runs.
"""

from swiftregistry.ingestion.bank_codes import BankCodeLoader, load_bank_codes
from swiftregistry.ingestion.pipeline import (
    IngestionPipeline,
    IngestionResult,
    RowIssue,
    build_entry,
    ingest_if_empty,
)

__all__ = [
    "BankCodeLoader",
    "IngestionPipeline",
    "IngestionResult",
    "RowIssue",
    "build_entry",
    "ingest_if_empty",
    "load_bank_codes",
]
