"""
Deadline-bounded invocation of the external ReDoS analyzer.

The analyzer call and a deadline timer run as two asyncio tasks; whichever
finishes first decides the outcome and the other one is cancelled.
"""
from __future__ import annotations

import asyncio
import inspect
import time
from collections.abc import Mapping
from typing import Any, Awaitable, Optional, Protocol, Union

from pydantic import BaseModel, ValidationError

from .classifier import classify_exception
from .config import logger
from .exceptions import (
    AnalysisTimeoutError,
    AnalyzerCancelledError,
    AnalyzerUnavailableError,
    MalformedResultError,
    RedoscopeError,
)
from .heuristics import analyze_complexity
from .models import (
    AnalysisOutcome,
    FailureOutcome,
    InvokerOptions,
    SafeOutcome,
    UnknownOutcome,
    VulnerableOutcome,
)


DEADLINE_TASK_NAME = "redoscope-deadline"
ANALYSIS_TASK_NAME = "redoscope-analysis"


class Analyzer(Protocol):
    """External analyzer contract: resolves to a payload mapping or raises."""

    def __call__(self, source: str, flags: str) -> Awaitable[Any]: ...


class AnalyzerReportedError(RedoscopeError):
    """The analyzer settled normally but reported an error status."""


def _section(payload: Mapping, key: str) -> Mapping:
    value = payload.get(key)
    return value if isinstance(value, Mapping) else {}


def outcome_from_payload(payload: Any, source: str) -> AnalysisOutcome:
    """
    Validate an analyzer payload into an outcome.

    Args:
        payload: Mapping (or pydantic model) returned by the analyzer
        source: Pattern that was analyzed, used when the payload has no echo

    Returns:
        SafeOutcome, VulnerableOutcome or UnknownOutcome

    Raises:
        MalformedResultError: If the payload cannot be interpreted
        AnalyzerReportedError: If the payload carries an error status
    """
    if isinstance(payload, BaseModel):
        payload = payload.model_dump()
    if not isinstance(payload, Mapping):
        raise MalformedResultError(
            f"Analyzer returned a malformed result ({type(payload).__name__})",
        )

    status = payload.get("status")
    if not isinstance(status, str) or not status:
        raise MalformedResultError("Analyzer result has no status")

    if status == "error":
        error = _section(payload, "error")
        raise AnalyzerReportedError(
            str(error.get("message") or error.get("kind") or "Analyzer reported an error"),
        )

    try:
        if status == "safe":
            return SafeOutcome()
        if status == "vulnerable":
            return VulnerableOutcome(
                complexity_type=_section(payload, "complexity").get("type"),
                attack_pattern=_section(payload, "attack").get("pattern"),
                hotspots=payload.get("hotspot") or [],
                source=payload.get("source") or source,
            )
    except ValidationError as exc:
        raise MalformedResultError(
            f"Analyzer returned a malformed {status} result ({exc.error_count()} invalid fields)",
        ) from exc

    return UnknownOutcome(status=status, error_kind=_section(payload, "error").get("kind"))


def _discard_result(task: asyncio.Future) -> None:
    # Abandoned analysis: retrieve the exception so it is never reported.
    if not task.cancelled():
        task.exception()


async def _race(call: Awaitable[Any], timeout: float, pattern_length: int) -> Any:
    if inspect.iscoroutine(call):
        analysis = asyncio.create_task(call, name=ANALYSIS_TASK_NAME)
    else:
        analysis = asyncio.ensure_future(call)
    deadline = asyncio.create_task(asyncio.sleep(timeout), name=DEADLINE_TASK_NAME)

    try:
        done, _ = await asyncio.wait({analysis, deadline}, return_when=asyncio.FIRST_COMPLETED)
        if analysis in done:
            if analysis.cancelled():
                raise AnalyzerCancelledError("Analyzer call was cancelled")
            return analysis.result()
        raise AnalysisTimeoutError(timeout, pattern_length)
    finally:
        if not deadline.done():
            deadline.cancel()
            await asyncio.wait({deadline})
        if not analysis.done():
            analysis.cancel()
            analysis.add_done_callback(_discard_result)


def _default_analyzer(options: InvokerOptions) -> Analyzer:
    try:
        from .providers.redoctor_provider import RedoctorProvider
    except ImportError as exc:
        raise AnalyzerUnavailableError(f"redoctor analyzer could not be loaded: {exc}") from exc

    return RedoctorProvider(timeout=options.timeout)


async def check_redos(
    source: str,
    flags: str = "",
    options: Union[InvokerOptions, Mapping[str, Any], None] = None,
    analyzer: Optional[Analyzer] = None,
) -> Optional[AnalysisOutcome]:
    """
    Run one analyzer call for a pattern under a deadline.

    Args:
        source: Regular expression source text
        flags: Mode characters for the pattern
        options: InvokerOptions or a mapping with `timeout` / `enableDiagnostics`
        analyzer: External analyzer; defaults to the redoctor provider

    Returns:
        The outcome, with complexity diagnostics attached when enabled.
        None when diagnostics are disabled and the analysis failed.
    """
    if options is None:
        options = InvokerOptions()
    elif not isinstance(options, InvokerOptions):
        options = InvokerOptions.model_validate(options)

    diagnostics = analyze_complexity(source) if options.enable_diagnostics else None
    started = time.monotonic()
    logger.debug("Checking pattern (%d chars, flags=%r, timeout=%gs)", len(source), flags, options.timeout)

    try:
        if analyzer is None:
            analyzer = _default_analyzer(options)
        payload = await _race(analyzer(source, flags), options.timeout, len(source))
        outcome = outcome_from_payload(payload, source)
    except Exception as exc:
        elapsed = time.monotonic() - started
        if isinstance(exc, AnalysisTimeoutError):
            logger.warning("Analysis timed out after %gs (%d chars)", options.timeout, len(source))
        else:
            logger.warning("Analysis failed after %.3fs: %s: %s", elapsed, type(exc).__name__, exc)

        if not options.enable_diagnostics:
            return None

        failure = classify_exception(exc, source)
        if isinstance(exc, AnalysisTimeoutError):
            failure = failure.model_copy(update={"message": str(exc)})
        return FailureOutcome(error=failure, diagnostics=diagnostics)

    logger.debug("Analysis finished in %.3fs: %s", time.monotonic() - started, outcome.status)
    if diagnostics is not None:
        outcome = outcome.model_copy(update={"diagnostics": diagnostics})
    return outcome
