"""
Bootstrap ingestion pipeline.

Populates an empty registry from the bank code dataset. Each row is
checked on its own; bad rows are counted and skipped, valid rows are
saved in fixed-size batches. Only a source-level fault (unreadable file,
missing columns, a rejected batch) stops the run.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from swiftregistry.config.settings import IngestionConfig
from swiftregistry.errors import SourceError, StoreError
from swiftregistry.ingestion.bank_codes import BankCodeLoader
from swiftregistry.models import (
    CODE_LENGTHS,
    SwiftCodeEntry,
    embedded_country,
    is_blank,
    is_headquarter_code,
)
from swiftregistry.schemas.bank_codes import (
    ADDRESS_COLUMN,
    COUNTRY_ISO2_COLUMN,
    COUNTRY_NAME_COLUMN,
    NAME_COLUMN,
    SWIFT_CODE_COLUMN,
    TOWN_NAME_COLUMN,
)
from swiftregistry.store.base import RegistryStore
from swiftregistry.utils.logging import get_logger, log_context

log = get_logger(__name__)

DEFAULT_BATCH_SIZE = 1000


class RowRejected(ValueError):
    """A single dataset row that cannot become an entry."""


@dataclass(frozen=True)
class RowIssue:
    """Why one row was skipped."""

    row_number: int | None
    reason: str
    swift_code: str = ""


@dataclass
class IngestionResult:
    """
    Outcome of one ingestion run.

    Attributes:
        source: Dataset path.
        ran: False when the store already held data and nothing was read.
        rows_seen: Data rows read from the source (malformed lines included).
        rows_loaded: Rows saved to the store.
        rows_skipped: Rows rejected by the row rules.
        batches: Number of batch flushes.
        issues: One entry per skipped row.
        error: Source-level failure that stopped the run, if any.
    """

    source: Path
    ran: bool = True
    rows_seen: int = 0
    rows_loaded: int = 0
    rows_skipped: int = 0
    batches: int = 0
    issues: list[RowIssue] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when the run was not aborted by a source-level failure."""
        return self.error is None

    def skip(self, issue: RowIssue) -> None:
        self.rows_skipped += 1
        self.issues.append(issue)


def build_entry(row: Mapping[str, str]) -> SwiftCodeEntry:
    """
    Apply the row rules to one dataset row.

    Args:
        row: Trimmed cell values keyed by dataset column.

    Returns:
        Normalized entry.

    Raises:
        RowRejected: If a required cell is blank, the code has the wrong
            length, or the code embeds another country.
    """
    swift_code = row.get(SWIFT_CODE_COLUMN, "").strip().upper()
    country_iso2 = row.get(COUNTRY_ISO2_COLUMN, "").strip()
    bank_name = row.get(NAME_COLUMN, "")
    country_name = row.get(COUNTRY_NAME_COLUMN, "")
    address = row.get(ADDRESS_COLUMN, "")
    town_name = row.get(TOWN_NAME_COLUMN, "")

    if any(is_blank(v) for v in (swift_code, country_iso2, bank_name, country_name)):
        msg = "missing critical data (SWIFT code, ISO2, bank name or country name)"
        raise RowRejected(msg)

    if len(swift_code) not in CODE_LENGTHS:
        msg = f"invalid SWIFT code length {len(swift_code)}, expected 8 or 11"
        raise RowRejected(msg)

    if embedded_country(swift_code) != country_iso2.upper():
        msg = (
            f"SWIFT code country part '{embedded_country(swift_code)}' does not "
            f"match country ISO2 '{country_iso2}'"
        )
        raise RowRejected(msg)

    return SwiftCodeEntry(
        swift_code=swift_code,
        bank_name=bank_name,
        address=None if is_blank(address) else address,
        town_name=None if is_blank(town_name) else town_name,
        country_iso2=country_iso2.upper(),
        country_name=country_name.upper(),
        is_headquarter=is_headquarter_code(swift_code),
    )


def _batched(
    entries: Iterable[SwiftCodeEntry], size: int
) -> Iterator[list[SwiftCodeEntry]]:
    batch: list[SwiftCodeEntry] = []
    for entry in entries:
        batch.append(entry)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


class IngestionPipeline:
    """
    Loads the bank code dataset into a registry store.

    Rows are processed lazily and flushed every `batch_size` valid
    entries; each flush is its own store transaction, so a failure
    partway leaves the earlier batches in place.
    """

    def __init__(
        self,
        source: Path,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        encoding: str = "utf-8-sig",
        delimiter: str = ",",
    ) -> None:
        """
        Initialize ingestion pipeline.

        Args:
            source: Dataset file.
            batch_size: Valid rows per bulk save.
            encoding: Dataset encoding.
            delimiter: Field separator.
        """
        if batch_size < 1:
            msg = f"batch_size must be positive, got {batch_size}"
            raise ValueError(msg)
        self.source = source
        self.batch_size = batch_size
        self.loader = BankCodeLoader(source, encoding=encoding, delimiter=delimiter)

    @classmethod
    def from_config(cls, config: IngestionConfig) -> "IngestionPipeline":
        return cls(
            config.source,
            batch_size=config.batch_size,
            encoding=config.encoding,
            delimiter=config.delimiter,
        )

    def _entries(self, result: IngestionResult) -> Iterator[SwiftCodeEntry]:
        """Yield valid entries, recording every rejected row on the result."""
        df = self.loader.load()

        for fields in self.loader.malformed_lines:
            result.rows_seen += 1
            result.skip(RowIssue(None, f"malformed line with {len(fields)} fields"))

        seen_codes: set[str] = set()
        for row_number, row in enumerate(df.to_dict(orient="records"), start=1):
            result.rows_seen += 1
            raw_code = str(row.get(SWIFT_CODE_COLUMN, ""))
            reason: str | None = None
            try:
                entry = build_entry(row)
            except RowRejected as e:
                reason = str(e)
            except ValidationError as e:
                reason = e.errors()[0]["msg"].removeprefix("Value error, ")
            else:
                if entry.swift_code in seen_codes:
                    reason = "duplicate SWIFT code in source"

            if reason is not None:
                log.warning(
                    "Skipping record", record=row_number, reason=reason, swift_code=raw_code
                )
                result.skip(RowIssue(row_number, reason, raw_code))
                continue

            seen_codes.add(entry.swift_code)
            yield entry

    def validate(self) -> IngestionResult:
        """
        Apply the row rules without writing anything.

        Returns:
            Result whose rows_loaded counts rows that would be stored.
        """
        result = IngestionResult(source=self.source)
        try:
            result.rows_loaded = sum(1 for _ in self._entries(result))
        except SourceError as e:
            result.error = str(e)
            log.error("Failed to read dataset", path=str(self.source), error=str(e))
        return result

    def run(self, store: RegistryStore) -> IngestionResult:
        """
        Ingest the dataset into the store regardless of its contents.

        Args:
            store: Target registry store.

        Returns:
            Counters and issues of the run. Source-level failures are
            reported on the result, not raised.
        """
        result = IngestionResult(source=self.source)
        with log_context(source=str(self.source)):
            log.info("Starting SWIFT code ingestion", batch_size=self.batch_size)
            try:
                for batch in _batched(self._entries(result), self.batch_size):
                    result.rows_loaded += store.save_batch(batch)
                    result.batches += 1
                    log.debug("Saved batch", size=len(batch), total=result.rows_loaded)
            except SourceError as e:
                result.error = str(e)
                log.error("Failed to read dataset", error=str(e))
            except StoreError as e:
                result.error = f"Batch save failed: {e}"
                log.error("Failed to save batch", error=str(e), loaded=result.rows_loaded)

            log.info(
                "Finished SWIFT code ingestion",
                rows_seen=result.rows_seen,
                loaded=result.rows_loaded,
                skipped=result.rows_skipped,
                batches=result.batches,
                ok=result.ok,
            )
        return result


def ingest_if_empty(
    source: Path,
    store: RegistryStore,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    encoding: str = "utf-8-sig",
    delimiter: str = ",",
) -> IngestionResult:
    """
    Run the bootstrap ingestion only when the store holds no entries.

    Args:
        source: Dataset file.
        store: Target registry store.
        batch_size: Valid rows per bulk save.
        encoding: Dataset encoding.
        delimiter: Field separator.

    Returns:
        Result of the run; `ran` is False when the store already had data.
    """
    existing = store.count()
    if existing > 0:
        log.info("Registry already contains data, skipping ingestion", entries=existing)
        return IngestionResult(source=source, ran=False)

    log.info("Registry is empty, initializing from dataset", path=str(source))
    pipeline = IngestionPipeline(
        source, batch_size=batch_size, encoding=encoding, delimiter=delimiter
    )
    return pipeline.run(store)
