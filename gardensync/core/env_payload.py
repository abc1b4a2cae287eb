"""Site `.env` payload helpers."""

from __future__ import annotations

import base64
import binascii

THEME_KEY = "THEME"
BASE_THEME_KEY = "BASE_THEME"


def build_env_payload(css_url: str, base_theme: str) -> str:
    """Return the `.env` text that selects a theme stylesheet and base mode."""
    return f"{THEME_KEY}={css_url}\n{BASE_THEME_KEY}={base_theme}"


def parse_env_payload(text: str) -> dict[str, str]:
    """Parse `KEY=value` lines. Blank lines and `#` comments are skipped."""
    values: dict[str, str] = {}
    for raw_line in (text or "").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip()
    return values


def encode_content(text: str) -> str:
    """UTF-8 then base64, as the GitHub contents API expects."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_content(data: str) -> str:
    """Inverse of :func:`encode_content`.

    GitHub wraps the base64 body at 60 columns, so whitespace is dropped
    before decoding.
    """
    compact = "".join((data or "").split())
    try:
        raw = base64.b64decode(compact.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise ValueError(f"Invalid base64 content: {exc}") from exc
    return raw.decode("utf-8")
