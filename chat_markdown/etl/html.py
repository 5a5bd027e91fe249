"""Best-effort HTML to Markdown-friendly text extraction.

Gemini activity exports carry assistant replies as a constrained HTML
subset. The substitutions below run in a fixed order; a malformed or
unclosed fragment just leaves fewer tags to strip.
"""

from __future__ import annotations

import re

_SUBSTITUTIONS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"<br\s*/?>", re.IGNORECASE), "\n"),
    (re.compile(r"<p[^>]*>", re.IGNORECASE), "\n"),
    (re.compile(r"</p>", re.IGNORECASE), "\n"),
    (re.compile(r"<li[^>]*>", re.IGNORECASE), "- "),
    (re.compile(r"</li>", re.IGNORECASE), "\n"),
    (re.compile(r"<h[1-6][^>]*>", re.IGNORECASE), "\n### "),
    (re.compile(r"</h[1-6]>", re.IGNORECASE), "\n"),
    (re.compile(r"<hr\s*/?>", re.IGNORECASE), "\n---\n"),
    (re.compile(r"<[^>]+>"), ""),
]

# Order matters: ``&amp;`` is decoded after ``&lt;``/``&gt;``.
_ENTITIES: list[tuple[str, str]] = [
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&#39;", "'"),
]

_BLANK_RUN = re.compile(r"\n{3,}")


def strip_html(fragment: str | None) -> str:
    if not fragment:
        return ""
    text = fragment
    for pattern, replacement in _SUBSTITUTIONS:
        text = pattern.sub(replacement, text)
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return _BLANK_RUN.sub("\n\n", text).strip()
