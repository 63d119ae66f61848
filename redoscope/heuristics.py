"""
Static complexity heuristics for regular expressions.

Inspects the raw pattern text for shapes that commonly lead to catastrophic
backtracking. The text is never compiled, so malformed patterns are scored
like any other string.
"""
import re

from .models import ComplexityDiagnostics


LOW_COMPLEXITY = "low complexity"

# (a+)*, (a*)+, (a{1,5})+, a+ +
_NESTED_QUANTIFIERS = (
    re.compile(r"\([^)]*[+*]\)[*+]"),
    re.compile(r"\([^)]*\{[^}]+\}\)[*+]"),
    re.compile(r"[+*]\s*[+*]"),
)
_QUANTIFIED_ALTERNATION = re.compile(r"\([^)]*\|[^)]*\)[+*]")
_REPETITION = re.compile(r"\{([0-9]+),([0-9]+)?\}")
_BROAD_NEGATED_CLASS = re.compile(r"\[\^[^\]]{1,3}\]")
_GREEDY_WILDCARD = re.compile(r"\.\+|\.\*")

LARGE_REPETITION_MIN = 50
LARGE_REPETITION_MAX = 100
GREEDY_WILDCARD_LIMIT = 2
LONG_PATTERN_LENGTH = 200


def analyze_complexity(source: str) -> ComplexityDiagnostics:
    """
    Score a pattern for ReDoS risk.

    Args:
        source: Regular expression source text

    Returns:
        ComplexityDiagnostics with the additive score and triggered indicators
    """
    indicators: list[str] = []
    score = 0

    if any(rx.search(source) for rx in _NESTED_QUANTIFIERS):
        indicators.append("nested quantifiers")
        score += 3

    if _QUANTIFIED_ALTERNATION.search(source):
        indicators.append("quantified alternation")
        score += 2

    for match in _REPETITION.finditer(source):
        low, high = match.group(1), match.group(2)
        low_count = int(low)
        high_count = int(high) if high else low_count
        if low_count > LARGE_REPETITION_MIN or high_count > LARGE_REPETITION_MAX:
            indicators.append(f"large repetition {{{low},{high or ''}}}")
            score += 2

    if _BROAD_NEGATED_CLASS.search(source):
        indicators.append("broad negated character classes")
        score += 1

    greedy = len(_GREEDY_WILDCARD.findall(source))
    if greedy > GREEDY_WILDCARD_LIMIT:
        indicators.append(f"multiple greedy patterns ({greedy})")
        score += 1

    if len(source) > LONG_PATTERN_LENGTH:
        indicators.append("very long pattern")
        score += 1

    return ComplexityDiagnostics(
        score=score,
        indicators=indicators or [LOW_COMPLEXITY],
        pattern_length=len(source),
    )
