"""
Bank code dataset ingestion.

Reads the delimited SWIFT code export (one row per code) into a frame
of trimmed strings.
"""

from pathlib import Path

import pandas as pd

from swiftregistry.ingestion.base import DataLoader
from swiftregistry.schemas.bank_codes import BankCodeSourceSchema
from swiftregistry.utils.logging import get_logger

log = get_logger(__name__)


class BankCodeLoader(DataLoader[BankCodeSourceSchema]):
    """Loader for the bank code dataset."""

    def __init__(
        self,
        path: Path,
        *,
        encoding: str = "utf-8-sig",
        delimiter: str = ",",
    ) -> None:
        """
        Initialize bank code loader.

        Args:
            path: Dataset file.
            encoding: Text encoding tried first; Latin-1 is the fallback.
            delimiter: Field separator.
        """
        super().__init__(path, BankCodeSourceSchema)
        self.encoding = encoding
        self.delimiter = delimiter
        self.malformed_lines: list[list[str]] = []

    def _on_bad_line(self, fields: list[str]) -> None:
        """Collect rows with more fields than the header instead of failing."""
        self.malformed_lines.append(fields)
        log.warning("Malformed line skipped", fields=fields)

    def _read(self, encoding: str) -> pd.DataFrame:
        self.malformed_lines = []
        return pd.read_csv(
            self.path,
            sep=self.delimiter,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding=encoding,
            engine="python",
            on_bad_lines=self._on_bad_line,
        )

    def _load_raw(self) -> pd.DataFrame:
        """Load the dataset with normalized headers and trimmed cells."""
        try:
            df = self._read(self.encoding)
        except UnicodeDecodeError:
            log.warning(
                "Decode failed, retrying with Latin-1",
                path=str(self.path),
                encoding=self.encoding,
            )
            df = self._read("latin-1")

        df.columns = [str(col).strip().upper() for col in df.columns]
        # Short rows are padded with NaN by the parser
        df = df.fillna("")
        for col in df.columns:
            df[col] = df[col].astype(str).str.strip()
        return df


def load_bank_codes(
    path: Path,
    *,
    encoding: str = "utf-8-sig",
    delimiter: str = ",",
    validate: bool = True,
) -> pd.DataFrame:
    """
    Convenience function to load the bank code dataset.

    Args:
        path: Dataset file.
        encoding: Text encoding.
        delimiter: Field separator.
        validate: Whether to validate against schema.

    Returns:
        DataFrame with one string column per dataset column.
    """
    loader = BankCodeLoader(path, encoding=encoding, delimiter=delimiter)
    return loader.load(validate=validate)
