"""HTML escaping for rendered fragments."""

from __future__ import annotations

_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "'": "&#39;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&#34;",
    }
)


def escape(value: object) -> str:
    """Escape the five HTML-special characters in ``value``'s text."""
    return str(value).translate(_ESCAPES)