"""Input sanitization utilities."""
import re
import unicodedata


# Maximum length constraints
MAX_TEAM_CODE_LENGTH = 36
MAX_NOTIFICATION_LENGTH = 255


def _is_latin_letter(char: str) -> bool:
    if not char.isalpha():
        return False
    return unicodedata.name(char, "").startswith("LATIN ")


def sanitize_file_name(name: str) -> str:
    """
    Clean a location name for use in an asset file name.

    Surrounding spaces are trimmed, then every character that is not an ASCII
    digit, a Latin letter, a space or a hyphen is dropped. Inner runs of spaces
    are kept as they are.

    Args:
        name: The raw location name

    Returns:
        The cleaned name
    """
    name = name.strip(" ")
    return "".join(
        char for char in name
        if char in "0123456789 -" or _is_latin_letter(char)
    )


def sanitize_team_code(code: str) -> str:
    """
    Normalise a team code as typed by a player.

    Args:
        code: The raw team code

    Returns:
        Upper-cased code without surrounding whitespace

    Raises:
        ValueError: If the code is not a string or too long
    """
    if not isinstance(code, str):
        raise ValueError("Team code must be a string")

    sanitized = code.strip().upper()

    if len(sanitized) > MAX_TEAM_CODE_LENGTH:
        raise ValueError(f"Team code exceeds maximum length of {MAX_TEAM_CODE_LENGTH} characters")

    return sanitized


def display_url(url: str) -> str:
    """
    Shorten a URL for printing: scheme and a leading ``www.`` are removed.

    >>> display_url("https://www.example.com/s/abc")
    'example.com/s/abc'
    """
    text = re.sub(r'^https?://', '', url.strip())
    if text.startswith("www."):
        text = text[len("www."):]
    return text

