"""
Parser for KEY=value settings files such as tracker.env.

The file is read as data, never sourced by a shell. Values that look like
shell expansion are rejected so a file that only works under a shell is
reported instead of silently read with literal `$` text.
"""

import re
from pathlib import Path

KEY_PATTERN = re.compile(r'^[A-Z][A-Z0-9_]*$')
SHELL_SYNTAX = re.compile(r'`|\$\(|\$\{|\$[A-Za-z_]')
QUOTES = ('"', "'")


def _parse_value(raw: str, lineno: int) -> str:
    """Unquote a value, or cut a trailing ` # comment` from an unquoted one."""
    if raw[:1] in QUOTES:
        quote = raw[0]
        end = raw.find(quote, 1)
        if end == -1:
            raise ValueError(f"Line {lineno}: Unterminated {quote} quote")
        rest = raw[end + 1:].strip()
        if rest and not rest.startswith('#'):
            raise ValueError(f"Line {lineno}: Unexpected text after quoted value")
        return raw[1:end]

    value, _, _ = raw.partition(' #')
    return value.strip()


def load_env(filepath: Path) -> dict[str, str]:
    """
    Parse a settings file and return its keys and values.

    Blank lines and `#` comments are skipped, and an `export ` prefix is
    accepted. A key may appear only once.

    Raises:
        FileNotFoundError: if the file doesn't exist
        ValueError: if a line is malformed or uses shell syntax
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Env file not found: {filepath}")

    result: dict[str, str] = {}
    for lineno, line in enumerate(path.read_text().splitlines(), 1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith('export '):
            line = line[len('export '):].lstrip()

        key, sep, raw = line.partition('=')
        if not sep:
            raise ValueError(f"Line {lineno}: Expected KEY=value")

        key = key.strip()
        if not KEY_PATTERN.match(key):
            raise ValueError(f"Line {lineno}: Invalid key '{key}'")
        if key in result:
            raise ValueError(f"Line {lineno}: Duplicate key '{key}'")

        raw = raw.strip()
        value = _parse_value(raw, lineno)
        # Single quotes keep text literal, as they would in a shell
        if not raw.startswith("'") and SHELL_SYNTAX.search(value):
            raise ValueError(f"Line {lineno}: Shell expansion is not supported in {key}")

        result[key] = value

    return result
