"""Helpers for binding names, asset ids, and URL handling."""

from __future__ import annotations

import re
from urllib.parse import urlparse

INVALID_CHARS = re.compile(r"[^A-Za-z0-9_]")
JS_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

RESERVED_KEYWORDS = frozenset(
    {
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "export",
        "extends",
        "finally",
        "for",
        "function",
        "if",
        "import",
        "in",
        "instanceof",
        "new",
        "return",
        "super",
        "switch",
        "this",
        "throw",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        "yield",
        "let",
        "static",
        "enum",
        "await",
        "implements",
        "package",
        "protected",
        "interface",
        "private",
        "public",
        "null",
        "true",
        "false",
        "arguments",
        "eval",
    }
)


class InvalidPictureURL(ValueError):
    """Raised when a picture URL is not absolute."""


def to_binding_name(name: str) -> str:
    """Turn an arbitrary picture name into a legal JavaScript binding.

    Characters outside ``[A-Za-z0-9_]`` become underscores, a leading digit
    gets an underscore prefix, the underscore-separated parts are folded into
    camelCase, and reserved words get an underscore prefix. The folding is
    lossy, so ``foo_bar`` and ``foo__bar`` both map to ``fooBar``.
    """
    identifier = INVALID_CHARS.sub("_", name)
    if identifier[:1].isdigit():
        identifier = "_" + identifier

    parts = identifier.split("_")
    folded = parts[0].lower() + "".join(
        part[:1].upper() + part[1:].lower() for part in parts[1:]
    )

    # Folding drops the underscore added for a leading digit.
    if not folded or folded[0].isdigit():
        folded = "_" + folded
    if folded in RESERVED_KEYWORDS:
        folded = "_" + folded
    return folded


def is_js_identifier(name: str) -> bool:
    """Return True when ``name`` can be written unquoted as an export name."""
    return JS_IDENTIFIER.fullmatch(name) is not None


def create_remote_asset_id(collection_id: str, picture_id: str) -> str:
    """File stem used for a picture on disk."""
    return f"{collection_id}-{picture_id}"


def url_extension(url: str) -> str:
    """Return the file extension of the URL path, or "" when there is none."""
    try:
        parsed = urlparse(url)
    except ValueError as exc:
        raise InvalidPictureURL(f"Invalid picture URL: {url!r}") from exc
    if not parsed.scheme or not parsed.netloc:
        raise InvalidPictureURL(f"Invalid picture URL: {url!r}")
    last_segment = parsed.path.rsplit("/", 1)[-1]
    if "." not in last_segment:
        return ""
    return last_segment.rsplit(".", 1)[-1]
