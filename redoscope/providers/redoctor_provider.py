"""
redoctor analyzer provider.

Runs the redoctor ReDoS checker off the event loop and normalizes its
diagnostics into the payload shape the invoker expects.
"""
from __future__ import annotations

import asyncio
from typing import Any, Optional

from redoctor import Config, Diagnostics, Flags, Status, check_pattern
from redoctor.exceptions import InvalidRegexError, ParseError
from redoctor.parser.parser import parse

from redoscope.config import logger
from redoscope.exceptions import RedoscopeError


# redoctor rates hotspots from 0.0 to 1.0; only the top of the scale is heat.
HEAT_THRESHOLD = 1.0


class PatternParseError(RedoscopeError):
    """redoctor could not parse the pattern."""


def temperature_label(temperature: float) -> str:
    return "heat" if float(temperature) >= HEAT_THRESHOLD else "normal"


def to_payload(diagnostics: Diagnostics, source: str) -> dict[str, Any]:
    """
    Convert a redoctor Diagnostics object into an analyzer payload.

    Args:
        diagnostics: Result of redoctor's checker
        source: Pattern as given by the caller

    Returns:
        Payload mapping with status, complexity, attack, hotspot and source
    """
    payload: dict[str, Any] = {"status": diagnostics.status.value, "source": source}

    if diagnostics.complexity is not None:
        payload["complexity"] = {"type": diagnostics.complexity.type.value}

    if diagnostics.attack_pattern is not None:
        payload["attack"] = {"pattern": str(diagnostics.attack_pattern)}

    hotspot = diagnostics.hotspot
    payload["hotspot"] = [] if hotspot is None else [{
        "start": hotspot.start,
        "end": hotspot.end,
        "temperature": temperature_label(hotspot.temperature),
    }]

    if diagnostics.status == Status.ERROR:
        payload["error"] = {"message": diagnostics.error or diagnostics.message}
    return payload


class RedoctorProvider:
    """
    Analyzer backed by redoctor.

    redoctor is synchronous, so each check runs in a worker thread. Its own
    timeout is set to the invoker deadline so abandoned checks stop on their own.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def _config(self) -> Config:
        if self.timeout is None:
            return Config.default()
        return Config(timeout=self.timeout)

    def _check(self, source: str, flags: str) -> dict[str, Any]:
        try:
            pattern = parse(source, Flags.from_string(flags))
        except (ParseError, InvalidRegexError) as exc:
            raise PatternParseError(f"parse error: {exc}") from exc
        return to_payload(check_pattern(pattern, config=self._config()), source)

    async def __call__(self, source: str, flags: str) -> dict[str, Any]:
        logger.debug("redoctor check started (%d chars, flags=%r)", len(source), flags)
        return await asyncio.to_thread(self._check, source, flags)
