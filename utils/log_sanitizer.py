"""Log sanitizer - keeps API credentials out of log messages.

Hetzner project tokens are 64-character alphanumeric strings and travel in
Authorization headers, so error text from the API client is scrubbed before
it is logged.
"""

import re
from typing import Union

# Patterns to detect and redact credentials
SENSITIVE_PATTERNS = [
    # Tokens and secrets in key=value format
    (r'(password|secret|token|api_key|apikey|auth|credential)["\s:=]+[^\s,}"\']{8,}',
     r'\1=[REDACTED]'),

    # Bearer tokens
    (r'(Bearer|Basic)\s+[A-Za-z0-9\-_\.]+', r'\1 [REDACTED]'),

    # Discord bot tokens (three dot-separated base64 segments)
    (r'[MN][A-Za-z\d_\-]{23,25}\.[A-Za-z\d_\-]{6}\.[A-Za-z\d_\-]{27,}', '[DISCORD_TOKEN]'),

    # Generic long alphanumeric strings that look like keys (40+ chars)
    (r'\b[A-Za-z0-9]{40,}\b', '[LONG_TOKEN]'),
]

# Compiled patterns for efficiency
_COMPILED_PATTERNS = [(re.compile(p, re.IGNORECASE), r) for p, r in SENSITIVE_PATTERNS]


def mask_token(token: str | None, visible: int = 6) -> str:
    """Show only the first few characters of a credential.

    Args:
        token: The credential to mask
        visible: Number of leading characters to keep

    Returns:
        Masked token such as ``abc123...``
    """
    if not token:
        return "<none>"
    return f"{token[:visible]}..."


def sanitize_log(text: str) -> str:
    """Remove credentials from text for safe logging.

    Args:
        text: The text to sanitize

    Returns:
        Sanitized text with credentials replaced by placeholders
    """
    if not text:
        return text

    result = text
    for pattern, replacement in _COMPILED_PATTERNS:
        result = pattern.sub(replacement, result)

    return result


def sanitize_for_log(value: Union[str, bytes, None], max_length: int = 200) -> str:
    """Sanitize and truncate a value for logging.

    Args:
        value: The value to sanitize (string or bytes)
        max_length: Maximum length of returned string

    Returns:
        Sanitized, truncated string safe for logging
    """
    if value is None:
        return "<None>"

    if isinstance(value, bytes):
        text = value.decode('utf-8', errors='replace')
    else:
        text = str(value)

    sanitized = sanitize_log(text)

    if len(sanitized) > max_length:
        return sanitized[:max_length] + f"... [{len(text)} chars total]"

    return sanitized
