"""Pydantic models for per-record conversion results."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class RecordStatus(str, Enum):
    """Outcome of converting a single JSON Lines record."""

    SUCCESS = "success"
    ERROR = "error"


class RecordResult(BaseModel):
    """Result of converting a single record."""

    line_number: int = Field(..., gt=0, description="1-based line number in the input")
    source: str = Field(..., description="Record text with surrounding whitespace removed")
    status: RecordStatus = Field(..., description="Conversion status")
    yaml: str = Field("", description="Rendered YAML (empty on error)")
    message: str = Field("", description="Error message (empty on success)")

    model_config = {"frozen": True}

    def to_yaml_block(self) -> str:
        """Rendered record, or comment lines describing the failure."""
        if self.status == RecordStatus.SUCCESS:
            return self.yaml
        return "\n".join(
            [
                f"# Error converting line {self.line_number}: {self.message}",
                f"# Original content: {self.source}",
            ]
        )


class ConversionSummary(BaseModel):
    """All records of one JSON Lines input, in input order."""

    records: List[RecordResult] = Field(default_factory=list, description="Per-record results")

    @property
    def succeeded(self) -> int:
        return sum(1 for record in self.records if record.status == RecordStatus.SUCCESS)

    @property
    def failed(self) -> int:
        return sum(1 for record in self.records if record.status == RecordStatus.ERROR)

    def to_yaml(self) -> str:
        """Join record blocks with blank line between them."""
        return "\n\n".join(record.to_yaml_block() for record in self.records)
