"""Color value conversion between CSS encodings and HSL triplets."""

from __future__ import annotations

import colorsys
import re

_TRIPLET_RE = re.compile(
    r"^(-?\d+(?:\.\d+)?)(?:deg)?\s+(\d+(?:\.\d+)?)%\s+(\d+(?:\.\d+)?)%$"
)
_HSL_FUNC_RE = re.compile(
    r"^hsla?\(\s*(-?\d+(?:\.\d+)?)(?:deg)?\s*,?\s*(\d+(?:\.\d+)?)%\s*,?\s*(\d+(?:\.\d+)?)%",
    re.IGNORECASE,
)
_RGB_FUNC_RE = re.compile(
    r"^rgba?\(\s*(\d+(?:\.\d+)?)\s*,?\s*(\d+(?:\.\d+)?)\s*,?\s*(\d+(?:\.\d+)?)",
    re.IGNORECASE,
)
_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_KEEP_VERBATIM_RE = re.compile(r"^(?:oklch|oklab|lab|lch|color)\(", re.IGNORECASE)


def parse_hsl_triplet(value: str) -> tuple[float, float, float] | None:
    """Parse an ``"H S% L%"`` string into (hue, saturation, lightness)."""
    match = _TRIPLET_RE.match(value.strip())
    if not match:
        return None
    return float(match.group(1)), float(match.group(2)), float(match.group(3))


def to_hsl_triplet(value: str) -> str:
    """Convert hex, rgb() or hsl() values to ``"H S% L%"``.

    Values that cannot be converted (oklch and friends, keywords, var()
    references) are returned unchanged.
    """
    color = value.strip()
    if not color or _KEEP_VERBATIM_RE.match(color):
        return color

    triplet = parse_hsl_triplet(color)
    if triplet is not None:
        return _format_triplet(*triplet)

    match = _HSL_FUNC_RE.match(color)
    if match:
        return _format_triplet(float(match.group(1)), float(match.group(2)), float(match.group(3)))

    rgb = _parse_rgb(color)
    if rgb is not None:
        return _format_triplet(*_rgb_to_hsl(*rgb))

    return color


def hsl_triplet_to_hex(value: str) -> str | None:
    """Render an ``"H S% L%"`` string as ``#rrggbb``, or None if unreadable."""
    triplet = parse_hsl_triplet(value)
    if triplet is None:
        return None
    hue, saturation, lightness = triplet
    red, green, blue = colorsys.hls_to_rgb(
        (hue % 360) / 360.0,
        _clamp(lightness, 0, 100) / 100.0,
        _clamp(saturation, 0, 100) / 100.0,
    )
    return "#{:02x}{:02x}{:02x}".format(
        round(red * 255), round(green * 255), round(blue * 255)
    )


def _parse_rgb(color: str) -> tuple[int, int, int] | None:
    match = _HEX_RE.match(color)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
    match = _RGB_FUNC_RE.match(color)
    if match:
        return tuple(int(_clamp(float(group), 0, 255)) for group in match.groups())  # type: ignore[return-value]
    return None


def _rgb_to_hsl(red: int, green: int, blue: int) -> tuple[float, float, float]:
    hue, lightness, saturation = colorsys.rgb_to_hls(red / 255.0, green / 255.0, blue / 255.0)
    return hue * 360.0, saturation * 100.0, lightness * 100.0


def _format_triplet(hue: float, saturation: float, lightness: float) -> str:
    return f"{round(hue) % 360} {round(saturation)}% {round(lightness)}%"


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
