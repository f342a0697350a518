"""
Bracket Citation Channel
========================
Scans [...] spans with explicit depth tracking (nested brackets supported).

A span is stripped and recorded only if its content looks like a citation:
- contains a digit: [14], [3-5], [Smith 2020]
- contains "et al": [Jones et al.]
- contains "ibid": [see ibid]

Anything else ([see above], [sic]) is left in place unchanged.
"""

import re
from typing import List, Tuple

_DIGIT = re.compile(r"\d")


def should_strip_bracket(content: str) -> bool:
    lowered = content.lower()
    return bool(_DIGIT.search(lowered)) or "et al" in lowered or "ibid" in lowered


def strip_bracket_citations(text: str, gap: str = " ") -> Tuple[str, List[str]]:
    """
    Strip citation-like bracket spans.

    Returns:
        (cleaned_text, citations). A removed span leaves `gap`, unless the
        output already ends with one. An unclosed "[" is kept verbatim.
    """
    out: List[str] = []
    citations: List[str] = []
    capture: List[str] = []
    depth = 0
    last_was_gap = False

    for ch in text or "":
        if ch == "[":
            if depth > 0:
                capture.append(ch)
            else:
                capture = []
            depth += 1
            continue

        if ch == "]" and depth > 0:
            depth -= 1
            if depth > 0:
                capture.append(ch)
                continue

            inner = "".join(capture)
            trimmed = inner.strip()
            if trimmed and should_strip_bracket(trimmed):
                citations.append(trimmed)
                if not last_was_gap:
                    out.append(gap)
                    last_was_gap = True
            else:
                out.append(f"[{inner}]")
                last_was_gap = False
            capture = []
            continue

        if depth > 0:
            capture.append(ch)
            continue

        out.append(ch)
        last_was_gap = ch == gap

    if depth > 0:
        out.append("[" + "".join(capture))

    return "".join(out), citations
