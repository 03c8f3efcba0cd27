"""Parsing of inline field specs (text fields, checkboxes, radio buttons)."""

from __future__ import annotations

import logging
import re

from .constants import (
    DEFAULT_FIELD_WIDTH,
    FIELD_CLOSE,
    FIELD_DATA_SEPARATOR,
    MAX_FIELD_WIDTH,
    MIN_FIELD_WIDTH,
    PRECHECKED_MARKER,
    SPEC_SEPARATOR,
)
from .models import Checkbox, Field, ParserState, Radio

logger = logging.getLogger(__name__)

RADIO_FLAG = "^"
CHECKBOX_FLAG = "?"
MASKED_FLAG = "!"
WIDTH_PATTERN = re.compile(r"\s*([+-]?)0*([0-9]+)")
MAX_WIDTH_DIGITS = len(str(MAX_FIELD_WIDTH))


def parse_field_width(flags: str) -> int:
    """Read a field width from the flag segment of a field header.

    Leading digits are used, so ``"12x"`` yields 12. Values outside the
    allowed range are clamped, however many digits they have; anything
    without leading digits falls back to the default width.

    Examples:
        parse_field_width("")  # 24
        parse_field_width("8")  # 8
        parse_field_width("999")  # 256
    """
    match = WIDTH_PATTERN.match(flags)
    if not match:
        return DEFAULT_FIELD_WIDTH
    sign, digits = match.groups()
    if len(digits) > MAX_WIDTH_DIGITS:
        return MIN_FIELD_WIDTH if sign == "-" else MAX_FIELD_WIDTH
    return min(max(int(sign + digits), MIN_FIELD_WIDTH), MAX_FIELD_WIDTH)


def parse_field(
    line: str, position: int, state: ParserState
) -> tuple[Field | Checkbox | Radio, int] | None:
    """Parse a field spec starting at the ``<`` found at `position`.

    The grammar is ``<header`data>`` where `header` is either a bare field
    name or ``flags|name[|value[|*]]``. A ``^`` flag makes a radio button,
    ``?`` a checkbox and ``!`` a masked text field; remaining flag characters
    give the field width. For checkboxes and radios `data` is the label; for
    text fields it is the default content.

    Args:
        line: Line being tokenized.
        position: Index of the opening ``<``.
        state: Parser state whose current style is captured by the control.

    Returns:
        tuple | None: The control and the number of characters consumed,
            counted from `position` through the closing ``>``. None when the
            inner backtick or the closing ``>`` is missing.

    Examples:
        parse_field("<?|agree|yes|*`I agree>", 0, state)
    """
    header_start = position + 1
    separator = line.find(FIELD_DATA_SEPARATOR, header_start)
    if separator == -1:
        logger.debug("Field spec at column %d has no data separator", position)
        return None

    end = line.find(FIELD_CLOSE, separator)
    if end == -1:
        logger.debug("Field spec at column %d is not terminated", position)
        return None

    header = line[header_start:separator]
    data = line[separator + 1 : end]
    consumed = end - position + 1
    style = state.snapshot()

    if SPEC_SEPARATOR not in header:
        field = Field(
            name=header,
            width=DEFAULT_FIELD_WIDTH,
            masked=False,
            default_data=data,
            style=style,
        )
        return field, consumed

    components = header.split(SPEC_SEPARATOR)
    flags, name = components[0], components[1]
    value = components[2] if len(components) > 2 else ""
    prechecked = len(components) > 3 and components[3] == PRECHECKED_MARKER

    if RADIO_FLAG in flags:
        return Radio(name, value or data, data, prechecked, style), consumed
    if CHECKBOX_FLAG in flags:
        return Checkbox(name, value or data, data, prechecked, style), consumed

    masked = MASKED_FLAG in flags
    if masked:
        flags = flags.replace(MASKED_FLAG, "", 1)

    field = Field(
        name=name,
        width=parse_field_width(flags),
        masked=masked,
        default_data=data,
        style=style,
    )
    return field, consumed
