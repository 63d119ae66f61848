"""
Data models for ReDoS diagnostics.

Pydantic models for analyzer payload validation and report output.
"""
from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


FailureKind = Literal["timeout", "memory_exceeded", "parse_error", "analysis_error"]
RiskLevel = Literal["low", "medium", "high"]


def risk_for_score(score: int) -> RiskLevel:
    """Map a complexity score to its risk tier."""
    if score >= 3:
        return "high"
    if score == 2:
        return "medium"
    return "low"


class PatternInput(BaseModel):
    """A pattern to analyze, as handed over by the discovery collaborator."""
    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Identifying label, usually the file name")
    source: str = Field(..., description="Regular expression source text")
    flags: str = Field(default="", description="Mode characters, e.g. 'i' or 'ms'")


class InvokerOptions(BaseModel):
    """Options recognized by the deadline-bounded invoker. Nothing else is read."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    timeout: float = Field(default=10.0, gt=0, description="Deadline in seconds")
    enable_diagnostics: bool = Field(
        default=True,
        alias="enableDiagnostics",
        description="Attach complexity diagnostics and return failures as values",
    )


class ComplexityDiagnostics(BaseModel):
    """Static complexity estimate derived from the pattern text alone."""

    score: int = Field(..., ge=0, description="Sum of triggered rule weights")
    indicators: list[str] = Field(..., min_length=1, description="Triggered rule labels")
    pattern_length: int = Field(..., ge=0)

    @computed_field
    @property
    def risk(self) -> RiskLevel:
        return risk_for_score(self.score)


class HotspotSpan(BaseModel):
    """A span of the pattern implicated in backtracking blowup."""

    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)
    temperature: str = Field(default="normal", description="'heat' marks the most severe spans")

    @model_validator(mode="after")
    def check_order(self) -> "HotspotSpan":
        if self.start > self.end:
            raise ValueError(f"hotspot start {self.start} is after end {self.end}")
        return self


class FailureInfo(BaseModel):
    """Classified failure with guidance for the pattern author."""

    kind: FailureKind
    message: str
    details: str
    suggestions: list[str] = Field(..., min_length=1)


class SafeOutcome(BaseModel):
    status: Literal["safe"] = "safe"
    complexity_type: str = "safe"
    diagnostics: Optional[ComplexityDiagnostics] = None


class VulnerableOutcome(BaseModel):
    status: Literal["vulnerable"] = "vulnerable"
    complexity_type: Literal["exponential", "polynomial"]
    attack_pattern: str
    hotspots: list[HotspotSpan] = Field(default_factory=list)
    source: str = Field(..., description="Analyzed pattern; hotspot offsets are relative to it")
    diagnostics: Optional[ComplexityDiagnostics] = None


class FailureOutcome(BaseModel):
    status: Literal["error"] = "error"
    error: FailureInfo
    diagnostics: Optional[ComplexityDiagnostics] = None


class UnknownOutcome(BaseModel):
    """Analyzer status that is neither safe, vulnerable nor a failure."""
    status: str
    error_kind: Optional[str] = None
    diagnostics: Optional[ComplexityDiagnostics] = None


AnalysisOutcome = Union[SafeOutcome, VulnerableOutcome, FailureOutcome, UnknownOutcome]


ReportStatus = Literal["safe", "vulnerable", "error", "unknown"]


class ReportDetails(BaseModel):
    """Collapsible supplementary section of a report."""
    summary: str
    body: str


class DiagnosticReport(BaseModel):
    """Final per-pattern report handed to the reporting collaborator."""

    label: str
    status: ReportStatus
    status_line: str
    details: Optional[ReportDetails] = None
    outcome: Optional[AnalysisOutcome] = None

    @property
    def comment(self) -> str:
        if self.details is None:
            return ""
        return f"{self.details.summary}\n{self.details.body}"
