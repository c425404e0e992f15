"""Shared utilities for turning node names into generated symbols."""

from __future__ import annotations

import keyword
import re

_DISALLOWED = re.compile(r"[^0-9A-Za-z_]")
_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")

# Names a TypeScript binding may not use.
TS_RESERVED = frozenset(
    {
        "break", "case", "catch", "class", "const", "continue", "debugger",
        "default", "delete", "do", "else", "enum", "export", "extends", "false",
        "finally", "for", "function", "if", "import", "in", "instanceof", "new",
        "null", "return", "super", "switch", "this", "throw", "true", "try",
        "typeof", "var", "void", "while", "with", "let", "static", "yield",
        "await", "implements", "interface", "package", "private", "protected",
        "public",
    }
)  # fmt: skip

# Predefined types a TypeScript class or interface may not be named after.
TS_TYPE_RESERVED = frozenset(
    {
        "any", "bigint", "boolean", "never", "number", "object", "string",
        "symbol", "undefined", "unknown",
    }
)  # fmt: skip


def sanitize_identifier(name: str, fallback: str = "Unnamed") -> str:
    """Convert a display name into a valid identifier.

    Disallowed characters are stripped and a leading digit gets a ``_``
    prefix. A name with nothing left falls back to ``fallback``.

    Examples:
        >>> sanitize_identifier("Payment Port!")
        'PaymentPort'
        >>> sanitize_identifier("3DSecureAdapter")
        '_3DSecureAdapter'
        >>> sanitize_identifier("  ")
        'Unnamed'
    """
    cleaned = _DISALLOWED.sub("", name)
    if not cleaned:
        return fallback
    if cleaned[0].isdigit():
        cleaned = f"_{cleaned}"
    return cleaned


def camel_field_name(name: str) -> str:
    """Lower-camel field name for a symbol, e.g. ``PaymentPort`` -> ``paymentPort``."""
    symbol = sanitize_identifier(name)
    head = symbol.lstrip("_")
    prefix = symbol[: len(symbol) - len(head)]
    field = prefix + head[:1].lower() + head[1:]
    if field in TS_RESERVED:
        field = f"{field}_"
    return field


def snake_field_name(name: str) -> str:
    """Snake-case field name for a symbol, e.g. ``PaymentPort`` -> ``payment_port``."""
    symbol = sanitize_identifier(name)
    field = _WORD_BOUNDARY.sub("_", symbol).lower()
    if keyword.iskeyword(field) or field == "self":
        field = f"{field}_"
    return field


def member_name(name: str, *, python: bool = False) -> str:
    """Sanitized method or parameter name, suffixed with ``_`` if reserved."""
    symbol = sanitize_identifier(name, fallback="member")
    if python:
        reserved = keyword.iskeyword(symbol) or symbol == "self"
    else:
        reserved = symbol in TS_RESERVED
    return f"{symbol}_" if reserved else symbol


def type_name(name: str, *, python: bool = False) -> str:
    """Sanitized class or interface name, suffixed with ``_`` if reserved.

    Examples:
        >>> type_name("delete")
        'delete_'
        >>> type_name("None", python=True)
        'None_'
    """
    symbol = sanitize_identifier(name)
    if python:
        reserved = keyword.iskeyword(symbol)
    else:
        reserved = symbol in TS_RESERVED or symbol in TS_TYPE_RESERVED
    return f"{symbol}_" if reserved else symbol
