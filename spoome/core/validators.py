"""
Input Validators

This module provides the local format checks applied to every request
before it is sent to spoo.me. A request that fails one of these checks
never reaches the network.

Design Decisions:
- Pure functions returning bool (no exceptions, no state)
- The same rules the service enforces, so obviously bad input fails fast
- Alias rules double as short code rules (a short code is an alias)
"""

import re

DEFAULT_HOST = "spoo.me"

URL_REGEX = re.compile(r'(ftp|http|https)://[^ "]+')
ALIAS_REGEX = re.compile(r'[a-zA-Z0-9_-]*')

MIN_PASSWORD_LENGTH = 8
MAX_ALIAS_LENGTH = 15
PASSWORD_SPECIAL_CHARS = ("@", ".")
PASSWORD_FORBIDDEN_PAIRS = ("..", "@@", "@.", ".@")


def is_valid_password(password: str) -> bool:
    """
    Validate password format.

    A password must:
    - be at least 8 bytes long when encoded as UTF-8
    - contain a letter and an ASCII digit
    - contain '@' or '.'
    - not contain consecutive special characters ('..', '@@', '@.', '.@')

    Args:
        password: The password to validate

    Returns:
        True if the password is acceptable, False otherwise
    """
    if len(password.encode("utf-8")) < MIN_PASSWORD_LENGTH:
        return False

    has_letter = any(char.isalpha() for char in password)
    has_digit = any(char in "0123456789" for char in password)
    has_special = any(char in PASSWORD_SPECIAL_CHARS for char in password)
    no_consecutive = not any(pair in password for pair in PASSWORD_FORBIDDEN_PAIRS)

    return has_letter and has_digit and has_special and no_consecutive


def is_valid_url(url: str, exclusion: str = DEFAULT_HOST) -> bool:
    """
    Validate URL format.

    Accepts ftp, http and https URLs without spaces or double quotes.
    Rejects URLs pointing back at the shortener itself (``exclusion``)
    and URLs containing '..'.

    Args:
        url: The URL to validate
        exclusion: Substring the URL must not contain, normally the
            shortener's own host or base URL

    Returns:
        True if the URL is acceptable, False otherwise
    """
    if not URL_REGEX.fullmatch(url):
        return False

    if exclusion and exclusion in url:
        return False

    return ".." not in url


def is_valid_alias(alias: str) -> bool:
    """
    Validate alias (or short code) format.

    Only letters, digits, '_' and '-' are allowed, 1 to 15 characters.
    """
    return bool(alias) and len(alias) <= MAX_ALIAS_LENGTH and ALIAS_REGEX.fullmatch(alias) is not None


def is_valid_max_clicks(max_clicks: int) -> bool:
    """Max clicks must be a positive integer."""
    return max_clicks > 0


def is_valid_emoji_sequence(sequence: str) -> bool:
    """
    Validate an emoji slug.

    Empty slugs and slugs containing whitespace are rejected, as are slugs made
    of ASCII characters only (those belong in a regular alias). Keycap emoji
    pair an ASCII digit, '#' or '*' with combining marks and are accepted.
    """
    if not sequence or any(char.isspace() for char in sequence):
        return False

    return not all(char.isascii() for char in sequence)
