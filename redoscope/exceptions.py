"""
Exceptions raised inside redoscope.

They never leave the core: the invoker turns them into classified failures.
"""


class RedoscopeError(Exception):
    """Base exception for redoscope errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AnalysisTimeoutError(RedoscopeError):
    """The analyzer did not settle before the deadline."""

    def __init__(self, timeout: float, pattern_length: int):
        self.timeout = timeout
        super().__init__(f"Analysis timed out after {timeout:g}s ({pattern_length} chars)")


class AnalyzerCancelledError(RedoscopeError):
    """The analyzer call was cancelled by someone other than the invoker."""


class MalformedResultError(RedoscopeError):
    """The analyzer settled with something that is not a usable payload."""


class AnalyzerUnavailableError(RedoscopeError):
    """The analyzer backend could not be loaded or configured."""
