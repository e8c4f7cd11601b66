# Path: plugin_downloader/engine/redaction.py
"""
URL Redaction

Signed download locations carry credentials in the query string.
Every URL shown in a log line, error message or CLI output goes
through redact_url first; the raw URL is kept only on attributes.
"""

from urllib.parse import urlsplit, urlunsplit

REDACTED = '<redacted>'


def redact_url(url: str) -> str:
    """
    Strip query string and fragment from a URL for display.

    Args:
        url: URL as requested

    Returns:
        scheme://host/path, or the text before any '?' or '#'
        when the URL cannot be parsed
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return url.split('?', 1)[0].split('#', 1)[0]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, '', ''))


def redact_text(text: str, url: str) -> str:
    """Remove the query string and fragment of url wherever they appear in text."""
    try:
        parts = urlsplit(url)
        secrets = (parts.query, parts.fragment)
    except ValueError:
        secrets = (url.partition('?')[2], url.partition('#')[2])

    for secret in secrets:
        if secret:
            text = text.replace(secret, REDACTED)
    return text


__all__ = ['redact_url', 'redact_text', 'REDACTED']
