"""Pydantic schemas for conversion summaries.

These are printed by the CLI with ``--json``.
"""

from pydantic import BaseModel, Field


class FileResult(BaseModel):
    """Outcome of converting one input document."""

    input: str = Field(..., description="Path of the source document")
    output: str = Field(..., description="Path of the written CSV file")
    format: str = Field(..., description="Source format: usx, usfm or sfm")
    rows: int = Field(..., ge=0, description="Number of verse rows written")


class ConversionSummary(BaseModel):
    """All documents converted in one run, in processing order."""

    files: list[FileResult] = Field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return sum(f.rows for f in self.files)


class ErrorReport(BaseModel):
    """A run-aborting failure."""

    error: str
