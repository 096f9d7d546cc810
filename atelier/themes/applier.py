"""Write merged token maps into the live style sink."""

from __future__ import annotations

from typing import Mapping

from atelier.themes.parser import serialize_theme_css
from atelier.themes.sinks import StyleSink


def build_theme_css(light: Mapping[str, str], dark: Mapping[str, str]) -> str:
    """Render the injected stylesheet fragment for both color schemes."""
    return serialize_theme_css(light, dark, important=True)


class ThemeApplier:
    """Replaces the single injected theme fragment on every apply."""

    def __init__(self, sink: StyleSink) -> None:
        self._sink = sink

    @property
    def sink(self) -> StyleSink:
        return self._sink

    def apply(self, light: Mapping[str, str], dark: Mapping[str, str]) -> None:
        self._sink.replace(build_theme_css(light, dark))

    def set_color_scheme(self, mode: str) -> None:
        self._sink.set_color_scheme(mode)
