"""
Threat detection for free-text agent input.

Pure, stateless pattern matchers. Patterns are case-insensitive and checked
in order; the first match wins within each category.
"""

from __future__ import annotations

import re
from typing import Pattern, Tuple

from .models import InjectionResult

INJECTION_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"ignore\s+(all\s+)?previous\s+instructions", re.IGNORECASE),
    re.compile(r"disregard\s+(all\s+)?prior", re.IGNORECASE),
    re.compile(r"you\s+are\s+now\s+a", re.IGNORECASE),
    re.compile(r"pretend\s+you\s+are", re.IGNORECASE),
    re.compile(r"^\s*system\s*:", re.IGNORECASE | re.MULTILINE),
    re.compile(r"\[INST\]", re.IGNORECASE),
    re.compile(r"<\|im_start\|>", re.IGNORECASE),
    re.compile(r"jailbreak", re.IGNORECASE),
    re.compile(r"do\s+anything\s+now", re.IGNORECASE),
    re.compile(r"reveal\s+(your\s+)?(system|initial)\s+prompt", re.IGNORECASE),
)

EXFILTRATION_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"https?://[^\s]+\?.*(?:key|token|secret|password)", re.IGNORECASE),
    re.compile(r"fetch\s*\(", re.IGNORECASE),
    re.compile(r"XMLHttpRequest", re.IGNORECASE),
    re.compile(r"webhook\.site", re.IGNORECASE),
    re.compile(r"ngrok\.io", re.IGNORECASE),
)


def detect_injection(text: str) -> InjectionResult:
    """Look for prompt injection phrasing.

    Args:
        text: Free text supplied by a user or carried in conversation history

    Returns:
        InjectionResult with the source of the first matching pattern
    """
    for pattern in INJECTION_PATTERNS:
        if pattern.search(text):
            return InjectionResult(detected=True, matched_pattern=pattern.pattern)
    return InjectionResult(detected=False)


def detect_exfiltration(text: str) -> bool:
    """Return True when the text looks like an attempt to ship data elsewhere."""
    return any(pattern.search(text) for pattern in EXFILTRATION_PATTERNS)
