"""Best-effort repair of token maps stored in a non-HSL color encoding."""

from __future__ import annotations

import json
import re
from typing import Mapping

from atelier.themes.colors import to_hsl_triplet
from atelier.themes.models import ParsedTheme
from atelier.themes.parser import parse_theme_css, serialize_theme_css

_ALTERNATE_COLOR_RE = re.compile(
    r"(?:\b(?:rgba?|hsla?|oklch|oklab|lab|lch|color)\(|#[0-9a-fA-F]{3,8}\b)",
    re.IGNORECASE,
)


def needs_normalization(light: Mapping[str, str], dark: Mapping[str, str]) -> bool:
    """Return True when either map holds a value outside the ``H S% L%`` encoding."""
    blob = json.dumps({"light": dict(light), "dark": dict(dark)})
    return _ALTERNATE_COLOR_RE.search(blob) is not None


def normalize_theme(light: Mapping[str, str], dark: Mapping[str, str]) -> ParsedTheme | None:
    """Rebuild CSS from the maps and re-parse it, converting values on the way.

    This does not convert oklch/oklab/lab/lch values; those pass through
    unchanged. Returns None when the rebuilt text does not parse, in which
    case callers keep the original maps.
    """
    css = serialize_theme_css(light, dark)
    return parse_theme_css(css, value_filter=_convert_alternate)


def _convert_alternate(value: str) -> str:
    # Values already in ``H S% L%`` keep their precision.
    if _ALTERNATE_COLOR_RE.search(value) is None:
        return value
    return to_hsl_triplet(value)
