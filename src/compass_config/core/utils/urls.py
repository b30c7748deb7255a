"""URL helpers shared by asset collections and the resolver."""
from __future__ import annotations

import posixpath
import re
from typing import Optional, Tuple

# Scheme-qualified or protocol-relative URLs ("https://", "//cdn") and data URIs.
_FULL_URL_RE = re.compile(r"^(?:[a-zA-Z][a-zA-Z0-9+.-]*:)?//|^data:")
_SCHEME_PREFIX_RE = re.compile(r"^(?:[a-zA-Z][a-zA-Z0-9+.-]*:)?//")
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_QUERY_OR_FRAGMENT_RE = re.compile(r"(?=[?#])")


def is_full_url(value: str) -> bool:
    return bool(_FULL_URL_RE.match(value))


def has_scheme(value: str) -> bool:
    return bool(_SCHEME_RE.match(value))


def url_join(*parts: Optional[str]) -> str:
    """Join URL fragments with a single "/" between them.

    Empty and "." segments are dropped, a leading "/" or scheme on the
    first fragment is preserved, as is a trailing "/".

        >>> url_join("/", "images", "./logo.png")
        '/images/logo.png'
        >>> url_join("https://cdn.example.com/", "/images//a.png")
        'https://cdn.example.com/images/a.png'
    """
    fragments = [str(p) for p in parts if p is not None and str(p) != ""]
    if not fragments:
        return ""

    prefix = ""
    match = _SCHEME_PREFIX_RE.match(fragments[0])
    if match:
        prefix = match.group(0)
        fragments[0] = fragments[0][match.end():]

    joined = "/".join(fragments)
    leading = joined.startswith("/") and not prefix
    trailing = joined.endswith("/")
    segments = [s for s in joined.split("/") if s not in ("", ".")]

    url = "/".join(segments)
    if prefix:
        url = prefix + url
    elif leading:
        url = "/" + url
    if trailing and segments:
        url += "/"
    return url or ("/" if leading else "")


def split_query(path: str) -> Tuple[str, str]:
    """Split ``path`` into (path, "?query#fragment")."""
    pieces = _QUERY_OR_FRAGMENT_RE.split(path, maxsplit=1)
    if len(pieces) == 1:
        return pieces[0], ""
    return pieces[0], pieces[1]


def relative_url(from_url: str, to_url: str) -> str:
    """Return ``to_url`` relative to the directory of ``from_url``.

        >>> relative_url("/stylesheets/screen.css", "/images/logo.png")
        '../images/logo.png'
    """
    from_dir = posixpath.dirname(from_url) or "/"
    return posixpath.relpath(to_url, from_dir)


__all__ = [
    "is_full_url",
    "has_scheme",
    "url_join",
    "split_query",
    "relative_url",
]
