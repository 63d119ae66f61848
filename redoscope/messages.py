"""
Guidance text for classified analysis failures.

Kept apart from the classifier so wording can change without touching the
classification rules.
"""


TIMEOUT_MESSAGE = "Regex analysis timed out ({length} chars)"
TIMEOUT_DETAILS = (
    "The regular expression analysis exceeded the timeout limit. This typically "
    "occurs with complex patterns that create exponential search spaces."
)
TIMEOUT_SUGGESTIONS = [
    "Simplify nested quantifiers (avoid patterns like (a+)* or (a*)+ )",
    "Reduce overlapping alternations (check for patterns like (a|a)* )",
    "Consider using atomic groups (?>...) or possessive quantifiers to prevent backtracking",
    "Break complex regex into simpler components",
    "Use more specific character classes instead of broad ones",
]
TIMEOUT_COMPLEXITY = "Pattern complexity: {indicators}"

MEMORY_MESSAGE = "Memory limit exceeded during analysis"
MEMORY_DETAILS = (
    "The regex pattern requires too much memory to analyze, often due to "
    "exponential state space explosion."
)
MEMORY_SUGGESTIONS = [
    "Reduce quantifier ranges (e.g., {1,1000} -> {1,50})",
    "Eliminate redundant sub-patterns",
    "Use more restrictive anchors (^ and $)",
]
MEMORY_SCORE = "Pattern complexity score: {score}"

PARSE_MESSAGE = "Invalid regular expression syntax"
PARSE_SUGGESTIONS = [
    "Check for unmatched parentheses or brackets",
    "Verify escape sequences are valid",
    "Ensure quantifiers are properly formed",
    "Validate character class syntax",
]

GENERIC_MESSAGE = "Regex analysis failed"
GENERIC_DETAILS = "An unexpected error occurred during regex analysis"
GENERIC_SUGGESTIONS = [
    "Verify the regex pattern is valid",
    "Try simplifying the pattern",
    "Check for unusual unicode characters",
]
GENERIC_LENGTH = "Pattern length: {length} characters"
