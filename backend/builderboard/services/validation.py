"""Input normalisation helpers shared by the request schemas."""

import re
from urllib.parse import urlsplit

# Hostname must end in a dot followed by at least two letters (.com, .io, ...)
_TLD_PATTERN = re.compile(r"\.([a-zA-Z]{2,})$")
_PHONE_PATTERN = re.compile(r"^\+?[0-9]+$")


def normalize_url(value: str) -> str:
    """Return ``value`` as an absolute http(s) URL or raise ValueError.

    Bare hosts are prefixed with ``https://``, so ``github.com/foo`` becomes
    ``https://github.com/foo``. Anything whose hostname lacks a top-level
    domain (``not a url``, ``localhost``) is rejected.
    """
    url = (value or "").strip()
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"

    if re.search(r"\s", url):
        raise ValueError("Please enter a valid URL")

    try:
        hostname = urlsplit(url).hostname or ""
    except ValueError:
        raise ValueError("Please enter a valid URL")

    if not _TLD_PATTERN.search(hostname):
        raise ValueError("Please enter a valid URL")
    return url


def validate_phone_number(value: str | None) -> str | None:
    """Allow digits with an optional leading '+'. Empty input means no phone."""
    if value is None:
        return None
    phone = value.strip()
    if not phone:
        return None
    if not _PHONE_PATTERN.match(phone):
        raise ValueError("Phone number may only contain digits and a leading '+'")
    return phone
