"""
Base classes for dataset loaders.

Every dataset is checked against its Pandera schema when loaded, so
structural problems surface as a single SourceError at the boundary.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar

import pandas as pd
import pandera.pandas as pa
from pandera.errors import SchemaError, SchemaErrors

from swiftregistry.errors import SourceError
from swiftregistry.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T", bound=pa.DataFrameModel)


class DataLoader(ABC, Generic[T]):
    """
    Abstract base class for dataset loaders.

    Subclasses read the raw file; the base class validates the frame
    and converts every failure into SourceError.
    """

    def __init__(self, path: Path, schema: type[T]) -> None:
        """
        Initialize data loader.

        Args:
            path: Dataset file.
            schema: Pandera schema for validation.
        """
        self.path = path
        self.schema = schema

    @abstractmethod
    def _load_raw(self) -> pd.DataFrame:
        """Load raw data from source. Implemented by subclasses."""
        ...

    def load(self, *, validate: bool = True) -> pd.DataFrame:
        """
        Load and optionally validate data.

        Args:
            validate: Whether to validate against schema.

        Returns:
            Loaded (and optionally validated) DataFrame.

        Raises:
            SourceError: If the file is missing, unreadable or malformed.
        """
        log.info("Loading data", loader=self.__class__.__name__, path=str(self.path))

        if not self.path.exists():
            msg = f"Dataset not found: {self.path}"
            raise SourceError(msg)

        try:
            df = self._load_raw()
        except SourceError:
            raise
        except (OSError, UnicodeDecodeError, ValueError) as e:
            # pandas parser errors are ValueError subclasses
            msg = f"Cannot read dataset {self.path}: {e}"
            raise SourceError(msg) from e
        log.info("Loaded raw data", rows=len(df), columns=list(df.columns))

        if validate:
            df = self._validate(df)
            log.info("Schema validation passed", schema=self.schema.__name__)

        return df

    def _validate(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Validate DataFrame against schema.

        Args:
            df: DataFrame to validate.

        Returns:
            Validated DataFrame.

        Raises:
            SourceError: If the frame does not satisfy the schema.
        """
        try:
            return self.schema.validate(df)
        except (SchemaError, SchemaErrors) as e:
            first_line = str(e).split("\n")[0][:200]
            msg = f"Dataset {self.path} does not match {self.schema.__name__}: {first_line}"
            raise SourceError(msg) from e
