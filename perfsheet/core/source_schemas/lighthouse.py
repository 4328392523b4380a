"""
Pydantic models for Lighthouse audit reports.

These models represent the parts of a Lighthouse JSON report read by the
engine. Audits and categories are kept as raw dicts on the report and
validated one at a time, so a malformed audit never fails the document.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AuditDetails(BaseModel):
    """Tabular details attached to an audit."""

    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None
    items: List[Dict[str, Any]] = Field(default_factory=list)


class LighthouseAudit(BaseModel):
    """Result of a single audit."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    title: Optional[str] = None
    score: Optional[float] = Field(
        None, allow_inf_nan=False, description="Normalized score in [0, 1], null if not scored"
    )
    numericValue: Optional[float] = None
    numericUnit: Optional[str] = None
    displayValue: Optional[str] = None
    details: Optional[AuditDetails] = None
    metricSavings: Optional[Dict[str, Any]] = None

    @property
    def items(self) -> List[Dict[str, Any]]:
        """Detail items, or an empty list when the audit has none."""
        return self.details.items if self.details else []


class LighthouseCategory(BaseModel):
    """Aggregate score of an audit category."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    title: Optional[str] = None
    score: Optional[float] = Field(None, allow_inf_nan=False)


class LighthouseEnvironment(BaseModel):
    """Host environment the audit ran in."""

    model_config = ConfigDict(extra="allow")

    benchmarkIndex: Optional[float] = None
    hostUserAgent: Optional[str] = None


class LighthouseReport(BaseModel):
    """Root of a Lighthouse JSON report."""

    model_config = ConfigDict(extra="allow")

    audits: Dict[str, Any] = Field(..., description="Raw audits keyed by audit id")
    categories: Dict[str, Any] = Field(default_factory=dict)
    finalDisplayedUrl: Optional[str] = None
    requestedUrl: Optional[str] = None
    fetchTime: Optional[str] = None
    lighthouseVersion: Optional[str] = None
    userAgent: Optional[str] = None
    gatherMode: Optional[str] = None
    environment: Optional[LighthouseEnvironment] = None

    @field_validator("categories", mode="before")
    @classmethod
    def null_categories_as_empty(cls, v: Any) -> Any:
        """Treat an explicit null as no scored categories."""
        return {} if v is None else v
