"""Extract light/dark token maps from theme CSS or registry JSON."""

from __future__ import annotations

import json
import re
from typing import Callable, Mapping

from atelier.themes.constants import DARK_SELECTOR, ROOT_SELECTOR
from atelier.themes.models import ParsedTheme, ThemeColorSet

_ROOT_BLOCK_RE = re.compile(r":root\s*\{([^}]*)\}")
_DARK_BLOCK_RE = re.compile(r"\.dark\s*\{([^}]*)\}")
_DECLARATION_RE = re.compile(r"^--([^:\s]+)\s*:\s*(.+)$", re.DOTALL)
_IMPORTANT_RE = re.compile(r"\s*!important\s*$", re.IGNORECASE)
_CAMEL_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")

ValueFilter = Callable[[str], str]


def parse_theme_css(css: str, *, value_filter: ValueFilter | None = None) -> ParsedTheme | None:
    """Parse theme text into light/dark maps.

    Accepts either CSS text with a ``:root`` block and a ``.dark`` block, or
    a registry JSON document carrying ``cssVars.light`` and ``cssVars.dark``.
    Returns None when either block is missing; never raises.
    """
    if not isinstance(css, str):
        return None

    parsed = _parse_registry_json(css, value_filter)
    if parsed is not None:
        return parsed

    light_match = _ROOT_BLOCK_RE.search(css)
    dark_match = _DARK_BLOCK_RE.search(css)
    if light_match is None or dark_match is None:
        return None
    return ParsedTheme(
        light=_parse_declarations(light_match.group(1), value_filter),
        dark=_parse_declarations(dark_match.group(1), value_filter),
    )


def serialize_theme_css(
    light: Mapping[str, str],
    dark: Mapping[str, str],
    *,
    important: bool = False,
) -> str:
    """Render two token maps as ``:root`` and ``.dark`` CSS blocks."""
    return (
        f"{ROOT_SELECTOR} {{\n{_declarations(light, important)}\n}}\n\n"
        f"{DARK_SELECTOR} {{\n{_declarations(dark, important)}\n}}"
    )


def to_kebab_case(key: str) -> str:
    return _CAMEL_BOUNDARY_RE.sub(r"\1-\2", key).replace("_", "-").lower()


def _parse_declarations(block: str, value_filter: ValueFilter | None) -> ThemeColorSet:
    colors: ThemeColorSet = {}
    for statement in block.split(";"):
        line = statement.strip()
        if not line:
            continue
        match = _DECLARATION_RE.match(line)
        if match is None:
            continue
        token = match.group(1).strip()
        value = _IMPORTANT_RE.sub("", match.group(2)).strip()
        if not token or not value:
            continue
        colors[token] = value_filter(value) if value_filter else value
    return colors


def _parse_registry_json(text: str, value_filter: ValueFilter | None) -> ParsedTheme | None:
    stripped = text.lstrip()
    if not stripped.startswith("{"):
        return None
    try:
        data = json.loads(stripped)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    css_vars = data.get("cssVars")
    if not isinstance(css_vars, dict):
        return None
    light = css_vars.get("light")
    dark = css_vars.get("dark")
    if not isinstance(light, dict) or not isinstance(dark, dict):
        return None
    return ParsedTheme(
        light=_normalize_json_vars(light, value_filter),
        dark=_normalize_json_vars(dark, value_filter),
    )


def _normalize_json_vars(raw: Mapping[str, object], value_filter: ValueFilter | None) -> ThemeColorSet:
    colors: ThemeColorSet = {}
    for key, value in raw.items():
        if not isinstance(key, str) or not isinstance(value, str):
            continue
        token = to_kebab_case(key.strip().removeprefix("--"))
        cleaned = value.strip()
        if not token or not cleaned:
            continue
        colors[token] = value_filter(cleaned) if value_filter else cleaned
    return colors


def _declarations(colors: Mapping[str, str], important: bool) -> str:
    suffix = " !important" if important else ""
    return "\n".join(f"  --{key}: {value}{suffix};" for key, value in colors.items())
