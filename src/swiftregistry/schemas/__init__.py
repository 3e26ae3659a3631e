"""
Schema definitions using Pandera for data validation.

The ingestion dataset contract is defined here and enforced when the
file is read.
"""

from swiftregistry.schemas.bank_codes import SOURCE_COLUMNS, BankCodeSourceSchema

__all__ = ["SOURCE_COLUMNS", "BankCodeSourceSchema"]
