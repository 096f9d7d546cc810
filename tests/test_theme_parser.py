"""Tests for atelier.themes.parser."""

from __future__ import annotations

import json

from atelier.themes.applier import build_theme_css
from atelier.themes.parser import parse_theme_css, serialize_theme_css, to_kebab_case

SAMPLE_CSS = """
@layer base {
  :root {
    --background: 0 0% 100%;
    --foreground: 222 47% 11%;
    --primary: 221 83% 53%;
    --radius: 0.5rem;
  }

  .dark {
    --background: 222 47% 11%;
    --foreground: 210 40% 98%;
    --primary: 217 91% 60%;
  }
}
"""


def test_parse_extracts_both_blocks() -> None:
    parsed = parse_theme_css(SAMPLE_CSS)
    assert parsed is not None
    assert set(parsed.light) == {"background", "foreground", "primary", "radius"}
    assert set(parsed.dark) == {"background", "foreground", "primary"}
    assert parsed.light["primary"] == "221 83% 53%"
    assert parsed.dark["foreground"] == "210 40% 98%"


def test_parse_keeps_unknown_tokens() -> None:
    parsed = parse_theme_css(":root { --future-token: 1 2% 3%; } .dark { }")
    assert parsed is not None
    assert parsed.light == {"future-token": "1 2% 3%"}


def test_parse_requires_root_block() -> None:
    assert parse_theme_css(".dark { --background: 0 0% 0%; }") is None


def test_parse_requires_dark_block() -> None:
    assert parse_theme_css(":root { --background: 0 0% 100%; }") is None


def test_parse_empty_blocks_yield_empty_maps() -> None:
    parsed = parse_theme_css(":root {}\n.dark {   }")
    assert parsed is not None
    assert parsed.light == {}
    assert parsed.dark == {}


def test_parse_duplicate_token_last_wins() -> None:
    parsed = parse_theme_css(
        ":root { --primary: 0 0% 0%; --primary: 220 80% 50%; } .dark { --primary: 1 1% 1%; }"
    )
    assert parsed is not None
    assert parsed.light["primary"] == "220 80% 50%"


def test_parse_tolerates_whitespace_and_newlines() -> None:
    css = ":root\n{\n\n   --ring :   0 0% 0%  ;\n\n--input:0 0% 90%\n}\n\n.dark\t{\n --ring: 0 0% 100% ;}"
    parsed = parse_theme_css(css)
    assert parsed is not None
    assert parsed.light == {"ring": "0 0% 0%", "input": "0 0% 90%"}
    assert parsed.dark == {"ring": "0 0% 100%"}


def test_parse_skips_non_declarations() -> None:
    css = ":root { color: red; --: 1 1% 1%; --empty: ; --ok: 1 2% 3%; } .dark { garbage }"
    parsed = parse_theme_css(css)
    assert parsed is not None
    assert parsed.light == {"ok": "1 2% 3%"}
    assert parsed.dark == {}


def test_parse_strips_important_flag() -> None:
    parsed = parse_theme_css(":root { --primary: 0 0% 0% !important; } .dark { }")
    assert parsed is not None
    assert parsed.light == {"primary": "0 0% 0%"}


def test_parse_uses_first_blocks_only() -> None:
    css = ":root { --a: 1 1% 1%; } .dark { --a: 2 2% 2%; } :root { --a: 9 9% 9%; }"
    parsed = parse_theme_css(css)
    assert parsed is not None
    assert parsed.light == {"a": "1 1% 1%"}


def test_parse_never_raises_on_garbage() -> None:
    assert parse_theme_css("") is None
    assert parse_theme_css("{{{{") is None
    assert parse_theme_css("<html><body>Not found</body></html>") is None
    assert parse_theme_css(None) is None  # type: ignore[arg-type]


def test_parse_registry_json() -> None:
    payload = {
        "name": "sunset",
        "type": "registry:style",
        "cssVars": {
            "theme": {"radius": "0.5rem"},
            "light": {"background": "0 0% 100%", "cardForeground": "0 0% 5%", "chart_1": "12 76% 61%"},
            "dark": {"background": "0 0% 5%", "--ring": "0 0% 83%", "spacing": 4},
        },
    }
    parsed = parse_theme_css(json.dumps(payload))
    assert parsed is not None
    assert parsed.light == {
        "background": "0 0% 100%",
        "card-foreground": "0 0% 5%",
        "chart-1": "12 76% 61%",
    }
    assert parsed.dark == {"background": "0 0% 5%", "ring": "0 0% 83%"}


def test_parse_json_without_css_vars_is_rejected() -> None:
    assert parse_theme_css(json.dumps({"cssVars": {"light": {}}})) is None
    assert parse_theme_css(json.dumps(["not", "a", "theme"])) is None


def test_serialize_then_parse_returns_same_tokens() -> None:
    light = {"background": "0 0% 100%", "primary": "220 80% 50%"}
    dark = {"background": "0 0% 0%"}
    parsed = parse_theme_css(serialize_theme_css(light, dark))
    assert parsed is not None
    assert parsed.light == light
    assert parsed.dark == dark


def test_applier_fragment_parses_back() -> None:
    light = {"background": "0 0% 100%", "ring": "0 0% 0%"}
    dark = {"background": "0 0% 0%", "ring": "0 0% 100%"}
    parsed = parse_theme_css(build_theme_css(light, dark))
    assert parsed is not None
    assert (parsed.light, parsed.dark) == (light, dark)


def test_to_kebab_case() -> None:
    assert to_kebab_case("cardForeground") == "card-foreground"
    assert to_kebab_case("sidebar_primary_foreground") == "sidebar-primary-foreground"
    assert to_kebab_case("chart1") == "chart1"
    assert to_kebab_case("ring") == "ring"
