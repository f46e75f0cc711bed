"""
MIME type lookup for static resources.

The resource pages the controllers name (`/login.html`, `/401.html`, ...)
are served with a Content-Type derived from their extension. Text types get
a charset parameter, binary types do not:

    /login.html   → text/html; charset=utf-8
    /css/app.css  → text/css; charset=utf-8
    /favicon.ico  → image/x-icon
"""

from pathlib import Path
from typing import Optional


MIME_TYPES = {
    # Text
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".json": "application/json",
    ".txt": "text/plain",
    ".xml": "application/xml",
    ".svg": "image/svg+xml",

    # Images
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".ico": "image/x-icon",
    ".webp": "image/webp",

    # Fonts
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".eot": "application/vnd.ms-fontobject",
}

DEFAULT_MIME_TYPE = "application/octet-stream"

# application/* and image/* types that are nevertheless text on the wire.
_TEXT_LIKE = {
    "application/json",
    "application/xml",
    "image/svg+xml",
}


def get_mime_type(path: str | Path, default: Optional[str] = None) -> str:
    """
    MIME type for a file name, by extension (case-insensitive).

        >>> get_mime_type("/index.html")
        'text/html'
        >>> get_mime_type("archive.xyz")
        'application/octet-stream'
    """
    extension = Path(path).suffix.lower()
    return MIME_TYPES.get(extension, default or DEFAULT_MIME_TYPE)


def is_text_type(mime_type: str) -> bool:
    return mime_type.startswith("text/") or mime_type in _TEXT_LIKE


def get_content_type(path: str | Path, charset: str = "utf-8") -> str:
    """Full Content-Type header value, with charset for text types."""
    mime_type = get_mime_type(path)
    if is_text_type(mime_type):
        return f"{mime_type}; charset={charset}"
    return mime_type
