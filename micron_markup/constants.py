"""Constants used across the micron-markup package."""

from __future__ import annotations

# Line-level markers
LITERAL_TOGGLE = "`="
ESCAPED_LITERAL_TOGGLE = "\\`="
COMMENT_PREFIX = "#"
DEPTH_RESET_PREFIX = "<"
HEADING_PREFIX = ">"
DIVIDER_PREFIX = "-"
LINE_SEPARATOR = "\n"
CARRIAGE_RETURN = "\r"

# Inline syntax
FORMAT_MARKER = "`"
ESCAPE_CHAR = "\\"
LINK_OPEN = "["
LINK_CLOSE = "]"
LINK_SEPARATOR = "`"
FIELD_OPEN = "<"
FIELD_CLOSE = ">"
FIELD_DATA_SEPARATOR = "`"
SPEC_SEPARATOR = "|"

# Field defaults
DEFAULT_FIELD_WIDTH = 24
MIN_FIELD_WIDTH = 1
MAX_FIELD_WIDTH = 256

# Colors
DEFAULT_COLOR = "default"
COLOR_TOKEN_LENGTH = 3

# Link directives
SUBMIT_ALL_FIELDS = "*"
PRECHECKED_MARKER = "*"

# Layout
INDENT_UNIT = 2
DEFAULT_LINK_SCHEME = "nomadnetwork://"
DEFAULT_DIVIDER_WIDTH = 250

# Limits
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_LINE_LENGTH = 10_000
MICRON_EXTENSIONS = (".mu", ".micron")

# Themes and alignments accepted by the configuration layer
THEME_NAMES = ("dark", "light")
ALIGNMENT_NAMES = ("left", "center", "right")
