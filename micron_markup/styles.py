"""Theme tables and color token resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .config import ConfigError
from .constants import COLOR_TOKEN_LENGTH, DEFAULT_COLOR
from .models import Style

HEX3_PATTERN = re.compile(r"[0-9a-fA-F]{3}")
HEX6_PATTERN = re.compile(r"[0-9a-fA-F]{6}")
GRAYSCALE_PATTERN = re.compile(r"\s*([+-]?[0-9]+)")
GRAYSCALE_PREFIX = "g"
GRAYSCALE_FALLBACK = 50


@dataclass(frozen=True)
class Color:
    """Concrete RGB color, independent of any rendering surface."""

    red: int
    green: int
    blue: int

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"


@dataclass(frozen=True)
class Theme:
    """Named palette supplying the plain style and heading styles.

    Attributes:
        name: Theme name.
        plain: Style used for ordinary text and as the reset target.
        headings: Heading styles keyed by ``"heading<level>"``.
    """

    name: str
    plain: Style
    headings: Mapping[str, Style]

    def heading_style(self, level: int) -> Style:
        """Return the style for a heading level, falling back to plain."""
        return self.headings.get(f"heading{level}", self.plain)


DARK_THEME = Theme(
    name="dark",
    plain=Style(foreground="ddd", background=DEFAULT_COLOR),
    headings=MappingProxyType(
        {
            "heading1": Style(foreground="222", background="bbb"),
            "heading2": Style(foreground="111", background="999"),
            "heading3": Style(foreground="000", background="777"),
        }
    ),
)

LIGHT_THEME = Theme(
    name="light",
    plain=Style(foreground="222", background=DEFAULT_COLOR),
    headings=MappingProxyType(
        {
            "heading1": Style(foreground="000", background="777"),
            "heading2": Style(foreground="111", background="aaa"),
            "heading3": Style(foreground="222", background="ccc"),
        }
    ),
)

THEMES: Mapping[str, Theme] = MappingProxyType(
    {DARK_THEME.name: DARK_THEME, LIGHT_THEME.name: LIGHT_THEME}
)


def get_theme(name: str) -> Theme:
    """Look up a theme by name.

    Raises:
        ConfigError: If no theme is registered under `name`.
    """
    try:
        return THEMES[name]
    except KeyError as error:
        raise ConfigError(f"Unknown theme: {name!r}") from error


def resolve_color(token: str | None) -> Color | None:
    """Convert a color token into a `Color`.

    Accepts 3-digit hex (expanded like CSS shorthand), 6-digit hex, and
    grayscale tokens ``gNN`` where ``NN`` is a 0-99 percentage. Only the leading
    digits of the percentage are read (``g5x`` is 5%), and a percentage with
    no digits maps to 50. Anything else, including
    the ``"default"`` sentinel, resolves to None so renderers fall back to the
    surface default.

    Args:
        token: Raw color token.

    Returns:
        Color | None: Resolved color, or None when the token is not a color.

    Examples:
        resolve_color("f80")  # Color(255, 136, 0)
        resolve_color("g50")  # Color(127, 127, 127)
        resolve_color("default")  # None
    """
    if not token or token == DEFAULT_COLOR:
        return None

    if HEX3_PATTERN.fullmatch(token):
        red, green, blue = (int(digit * 2, 16) for digit in token)
        return Color(red, green, blue)

    if HEX6_PATTERN.fullmatch(token):
        return Color(int(token[0:2], 16), int(token[2:4], 16), int(token[4:6], 16))

    if len(token) == COLOR_TOKEN_LENGTH and token[0] == GRAYSCALE_PREFIX:
        match = GRAYSCALE_PATTERN.match(token[1:])
        value = int(match.group(1)) if match else GRAYSCALE_FALLBACK
        level = max(int(value * 2.55), 0)
        return Color(level, level, level)

    return None
