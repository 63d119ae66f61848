"""ReDoS diagnostics for regular expressions."""

from .models import (
    ComplexityDiagnostics,
    DiagnosticReport,
    FailureInfo,
    HotspotSpan,
    InvokerOptions,
    PatternInput,
)
from .heuristics import analyze_complexity
from .classifier import classify_failure
from .invoker import check_redos
from .hotspots import render_hotspots
from .report import diagnose, diagnose_all

__version__ = "1.0.0"

__all__ = [
    "ComplexityDiagnostics",
    "DiagnosticReport",
    "FailureInfo",
    "HotspotSpan",
    "InvokerOptions",
    "PatternInput",
    "analyze_complexity",
    "classify_failure",
    "check_redos",
    "render_hotspots",
    "diagnose",
    "diagnose_all",
]
