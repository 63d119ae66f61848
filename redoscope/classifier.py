"""
Failure classification.

Turns the free-text message of an analyzer failure into a FailureInfo with
guidance tailored to the failure kind and the pattern's complexity.
"""
from . import messages
from .heuristics import analyze_complexity
from .models import FailureInfo


_TIMEOUT_KEYWORDS = ("timed out", "timeout")
_MEMORY_KEYWORDS = ("memory", "heap", "exceeded")
_PARSE_KEYWORDS = ("parse", "syntax")


def _mentions(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def classify_failure(message: str, source: str) -> FailureInfo:
    """
    Classify a failure message.

    Rules are checked in order and the first match wins. Timeouts come before
    memory errors since overlapping patterns usually hit the deadline before
    they exhaust memory.

    Args:
        message: Raw failure text reported by the analyzer
        source: The pattern that was being analyzed

    Returns:
        FailureInfo, never raises
    """
    text = (message or "").lower()
    length = len(source)

    if _mentions(text, _TIMEOUT_KEYWORDS):
        indicators = analyze_complexity(source).indicators
        return FailureInfo(
            kind="timeout",
            message=messages.TIMEOUT_MESSAGE.format(length=length),
            details=messages.TIMEOUT_DETAILS,
            suggestions=[
                *messages.TIMEOUT_SUGGESTIONS,
                messages.TIMEOUT_COMPLEXITY.format(indicators=", ".join(indicators)),
            ],
        )

    if _mentions(text, _MEMORY_KEYWORDS):
        score = analyze_complexity(source).score
        return FailureInfo(
            kind="memory_exceeded",
            message=messages.MEMORY_MESSAGE,
            details=messages.MEMORY_DETAILS,
            suggestions=[
                *messages.MEMORY_SUGGESTIONS,
                messages.MEMORY_SCORE.format(score=score),
            ],
        )

    if _mentions(text, _PARSE_KEYWORDS):
        return FailureInfo(
            kind="parse_error",
            message=messages.PARSE_MESSAGE,
            details=message,
            suggestions=list(messages.PARSE_SUGGESTIONS),
        )

    return FailureInfo(
        kind="analysis_error",
        message=message or messages.GENERIC_MESSAGE,
        details=messages.GENERIC_DETAILS,
        suggestions=[
            *messages.GENERIC_SUGGESTIONS,
            messages.GENERIC_LENGTH.format(length=length),
        ],
    )


def classify_exception(exc: BaseException, source: str) -> FailureInfo:
    """Classify an exception raised by the analyzer."""
    return classify_failure(str(exc) or type(exc).__name__, source)
