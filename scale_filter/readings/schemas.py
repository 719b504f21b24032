"""
Readings Layer Schemas

Raw JSON schemas for incoming readings and the flat tabular schema used
when a batch is written out.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

import polars as pl
from pydantic import BaseModel, Field, field_validator


class ReadingPayload(BaseModel):
    """Schema for a single reading as it arrives from the ingestion stage"""

    asset_code: str = Field(..., description="Asset name (e.g., 'temp')")
    user_ts: Optional[str] = Field(
        None, description="ISO 8601 timestamp of the reading"
    )
    readings: Dict[str, Any] = Field(
        default_factory=dict, description="Datapoint name to value mapping"
    )

    @field_validator("asset_code")
    @classmethod
    def validate_asset_code(cls, v):
        """Ensure asset code is not blank"""
        if not v.strip():
            raise ValueError("asset_code must not be empty")
        return v

    @field_validator("user_ts")
    @classmethod
    def validate_timestamp(cls, v):
        """Validate ISO 8601 timestamp format"""
        if v is None:
            return v
        try:
            datetime.fromisoformat(v.replace("Z", "+00:00"))
            return v
        except ValueError:
            raise ValueError("Timestamp must be in ISO 8601 format")


class ReadingSetPayload(BaseModel):
    """Schema for a complete batch of readings"""

    readings: List[ReadingPayload] = Field(..., description="List of readings")


# One row per datapoint; exactly one of the value columns is set per row
READINGS_FRAME_SCHEMA = pl.Schema(
    [
        ("asset_code", pl.String()),
        ("user_ts", pl.Datetime(time_unit="us", time_zone="UTC")),
        ("datapoint", pl.String()),
        ("value_type", pl.String()),
        ("int_value", pl.Int64()),
        ("float_value", pl.Float64()),
        ("str_value", pl.String()),
    ]
)
