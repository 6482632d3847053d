"""Markup clean-up for CMS post bodies.

This is a denylist filter, not an XSS sanitiser: it strips ``<script>`` and
``<style>`` blocks, HTML comments and source-map directives so that post
content can be embedded in a page without breaking the surrounding markup.
Inline event handlers and ``javascript:`` URLs are left alone.
"""

from __future__ import annotations

import re

_PATTERNS = [
    re.compile(r"<script[\s\S]*?>[\s\S]*?</script>", re.IGNORECASE),
    re.compile(r"<style[\s\S]*?>[\s\S]*?</style>", re.IGNORECASE),
    re.compile(r"<!--[\s\S]*?-->"),
    re.compile(r"/\*[#@]\s*sourceMappingURL[\s\S]*?\*/", re.IGNORECASE),
    re.compile(r"//[#@]\s*sourceMappingURL[^\n\r]*", re.IGNORECASE),
    re.compile(r"sourceMappingURL[^\s\"'<>]*", re.IGNORECASE),
]


def sanitize_content(html: str) -> str:
    """Return *html* with scripts, styles, comments and source maps removed."""
    for pattern in _PATTERNS:
        html = pattern.sub("", html)
    return html
