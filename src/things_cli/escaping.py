"""Quoting for values interpolated into AppleScript string literals.

Only the double quote is neutralized. Backslashes and other script
metacharacters pass through unchanged, so applying the escape twice is not
equivalent to applying it once.
"""

from __future__ import annotations


def escape_applescript_string(text: str) -> str:
    return str(text).replace('"', '\\"')


def quote(text: str) -> str:
    return f'"{escape_applescript_string(text)}"'
