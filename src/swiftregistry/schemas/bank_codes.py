"""
Pandera schema for the bank code dataset.

The dataset carries one row per SWIFT code with a fixed header. Only the
presence and string type of the columns is enforced here; the per-row
rules live in the ingestion pipeline so that a bad row never rejects the
whole file.
"""

import pandera.pandas as pa
from pandera.typing import Series

COUNTRY_ISO2_COLUMN = "COUNTRY ISO2 CODE"
SWIFT_CODE_COLUMN = "SWIFT CODE"
CODE_TYPE_COLUMN = "CODE TYPE"
NAME_COLUMN = "NAME"
ADDRESS_COLUMN = "ADDRESS"
TOWN_NAME_COLUMN = "TOWN NAME"
COUNTRY_NAME_COLUMN = "COUNTRY NAME"
TIME_ZONE_COLUMN = "TIME ZONE"

SOURCE_COLUMNS: tuple[str, ...] = (
    COUNTRY_ISO2_COLUMN,
    SWIFT_CODE_COLUMN,
    CODE_TYPE_COLUMN,
    NAME_COLUMN,
    ADDRESS_COLUMN,
    TOWN_NAME_COLUMN,
    COUNTRY_NAME_COLUMN,
    TIME_ZONE_COLUMN,
)


class BankCodeSourceSchema(pa.DataFrameModel):
    """
    Schema for the raw bank code dataset.

    CODE TYPE and TIME ZONE are part of the format but not stored.
    """

    country_iso2: Series[str] = pa.Field(alias=COUNTRY_ISO2_COLUMN, nullable=True)
    swift_code: Series[str] = pa.Field(alias=SWIFT_CODE_COLUMN, nullable=True)
    code_type: Series[str] = pa.Field(alias=CODE_TYPE_COLUMN, nullable=True)
    name: Series[str] = pa.Field(alias=NAME_COLUMN, nullable=True)
    address: Series[str] = pa.Field(alias=ADDRESS_COLUMN, nullable=True)
    town_name: Series[str] = pa.Field(alias=TOWN_NAME_COLUMN, nullable=True)
    country_name: Series[str] = pa.Field(alias=COUNTRY_NAME_COLUMN, nullable=True)
    time_zone: Series[str] = pa.Field(alias=TIME_ZONE_COLUMN, nullable=True)

    class Config:
        """Schema configuration."""

        name = "BankCodeSourceSchema"
        strict = False  # Allow extra columns
        coerce = True
