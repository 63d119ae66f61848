"""
Diagnostic report assembly.

The single entry point used by the CLI and HTTP service: one pattern in, one
DiagnosticReport out.
"""
from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Union

from .config import logger
from .hotspots import render_hotspots
from .invoker import Analyzer, check_redos
from .models import (
    AnalysisOutcome,
    DiagnosticReport,
    FailureInfo,
    FailureOutcome,
    InvokerOptions,
    PatternInput,
    ReportDetails,
    SafeOutcome,
    VulnerableOutcome,
)


SAFE_LINE = ":white_check_mark: Safe regular expression."
VULNERABLE_LINE = (
    ":bomb: Vulnerable regular expression. Complexity: {complexity}. "
    "See below for more information."
)
ERROR_LINE = ":question: Error while checking regular expression"
UNKNOWN_LINE = ":question: Unknown regular expression status: {status}"

DEFAULT_SUGGESTION_LIMIT = 3


def _failure_details(error: FailureInfo, suggestion_limit: int) -> ReportDetails:
    shown = error.suggestions[:suggestion_limit]
    lines = [error.details]
    if shown:
        lines.append("")
        lines.extend(f"- {suggestion}" for suggestion in shown)
    hidden = len(error.suggestions) - len(shown)
    if hidden > 0:
        lines.append(f"- ...and {hidden} more")
    return ReportDetails(summary=error.message, body="\n".join(lines))


def build_report(
    label: str,
    outcome: Optional[AnalysisOutcome],
    suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> DiagnosticReport:
    """Turn an invoker outcome into the report handed to collaborators."""
    if outcome is None:
        return DiagnosticReport(label=label, status="error", status_line=ERROR_LINE)

    if isinstance(outcome, SafeOutcome):
        return DiagnosticReport(label=label, status="safe", status_line=SAFE_LINE, outcome=outcome)

    if isinstance(outcome, VulnerableOutcome):
        annotated = render_hotspots(outcome.source, outcome.hotspots)
        return DiagnosticReport(
            label=label,
            status="vulnerable",
            status_line=VULNERABLE_LINE.format(complexity=outcome.complexity_type),
            details=ReportDetails(
                summary=f"Attack pattern: {outcome.attack_pattern}",
                body=f'Hotspots detected: "{annotated}"',
            ),
            outcome=outcome,
        )

    if isinstance(outcome, FailureOutcome):
        return DiagnosticReport(
            label=label,
            status="error",
            status_line=f"{ERROR_LINE}: {outcome.error.kind}",
            details=_failure_details(outcome.error, suggestion_limit),
            outcome=outcome,
        )

    line = UNKNOWN_LINE.format(status=outcome.status)
    if outcome.error_kind:
        line = f"{line}: error {outcome.error_kind}"
    return DiagnosticReport(label=label, status="unknown", status_line=line, outcome=outcome)


async def diagnose(
    label: str,
    source: str,
    flags: str = "",
    options: Union[InvokerOptions, Mapping[str, Any], None] = None,
    analyzer: Optional[Analyzer] = None,
    suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> DiagnosticReport:
    """
    Check one pattern and build its report.

    Args:
        label: Identifying label for the pattern (e.g. its file name)
        source: Regular expression source text
        flags: Mode characters for the pattern
        options: Invoker options (`timeout`, `enableDiagnostics`)
        analyzer: External analyzer override
        suggestion_limit: Maximum suggestions listed for a failure

    Returns:
        DiagnosticReport
    """
    outcome = await check_redos(source, flags, options=options, analyzer=analyzer)
    report = build_report(label, outcome, suggestion_limit=suggestion_limit)
    logger.info("%s: %s", label, report.status)
    return report


async def diagnose_all(
    patterns: Iterable[PatternInput],
    options: Union[InvokerOptions, Mapping[str, Any], None] = None,
    analyzer: Optional[Analyzer] = None,
    concurrency: int = 4,
    suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[DiagnosticReport]:
    """Diagnose independent patterns concurrently; reports keep input order."""
    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def run(pattern: PatternInput) -> DiagnosticReport:
        async with semaphore:
            return await diagnose(
                pattern.label,
                pattern.source,
                pattern.flags,
                options=options,
                analyzer=analyzer,
                suggestion_limit=suggestion_limit,
            )

    return list(await asyncio.gather(*(run(pattern) for pattern in patterns)))
