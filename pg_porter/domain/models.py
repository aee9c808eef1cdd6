"""
Domain models for pg-porter.

The exported data itself is opaque bytes and is never modeled; the only domain
record is the outcome of one export.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ExportResult(BaseModel):
    """
    Outcome of a completed export.
    """

    sql: str = Field(..., description="Query text as supplied by the user.")
    out: str = Field(..., description="Path of the written CSV file.")
    rows: int = Field(..., description="Row count reported by the server for the COPY.")
    elapsed_seconds: float = Field(..., description="Wall-clock duration of the export.")
    peak_rss_bytes: Optional[int] = Field(None, description="Peak resident memory while exporting.")

    model_config = {
        "frozen": True,
    }


__all__ = ["ExportResult"]
