"""Line dispatcher turning micron markup into a `Document`."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import ConfigError, ParserConfig, validate_config
from .constants import (
    CARRIAGE_RETURN,
    COMMENT_PREFIX,
    DEPTH_RESET_PREFIX,
    DIVIDER_PREFIX,
    ESCAPED_LITERAL_TOGGLE,
    HEADING_PREFIX,
    LINE_SEPARATOR,
    LITERAL_TOGGLE,
)
from .exceptions import LineTooLongError, ParseFileError
from .filesystem import safe_read
from .models import (
    Alignment,
    Blank,
    Block,
    Divider,
    Document,
    Heading,
    Paragraph,
    ParserState,
    TextRun,
)
from .styles import Theme, get_theme
from .tokenizer import tokenize_line

logger = logging.getLogger(__name__)


def _literal_block(line: str, state: ParserState) -> Block:
    """Pass a line through verbatim while literal mode is active."""
    if not line:
        return Blank()
    if line == ESCAPED_LITERAL_TOGGLE:
        line = LITERAL_TOGGLE
    run = TextRun(style=state.snapshot(), text=line)
    return Paragraph(runs=(run,), alignment=state.alignment, indent_depth=state.indent_depth)


def _heading_block(line: str, state: ParserState, theme: Theme, link_scheme: str) -> Block | None:
    """Handle a line starting with ``>``; returns None when nothing is emitted."""
    level = len(line) - len(line.lstrip(HEADING_PREFIX))
    state.section_depth = level
    text = line[level:]
    if not text:
        return None

    style = theme.heading_style(level)
    latched = state.snapshot()
    state.apply(style)
    try:
        runs = tokenize_line(text, state, link_scheme)
    finally:
        state.apply(latched)

    if not runs:
        return None
    return Heading(level=level, runs=tuple(runs), indent_depth=state.indent_depth, style=style)


def _divider_block(line: str, state: ParserState) -> Divider:
    fill_char = line[1] if len(line) > 1 else None
    return Divider(fill_char=fill_char, indent_depth=state.indent_depth)


def dispatch_line(
    line: str, state: ParserState, theme: Theme, link_scheme: str
) -> Block | None:
    """Route one line to the rule that handles it.

    Returns the block the line contributes, or None for lines that only
    change state (literal toggles, comments, bare heading markers).

    Args:
        line: Line content without its terminator.
        state: Parser state shared by all lines of the document.
        theme: Theme providing heading styles.
        link_scheme: Prefix prepended to link urls.

    Returns:
        Block | None: Block for the line, if any.
    """
    while True:
        if line == LITERAL_TOGGLE:
            state.literal_mode = not state.literal_mode
            return None

        if state.literal_mode:
            return _literal_block(line, state)

        if not line:
            return Blank()

        first = line[0]
        if first == COMMENT_PREFIX:
            return None

        if first == DEPTH_RESET_PREFIX:
            state.section_depth = 0
            line = line[1:]
            continue

        if first == HEADING_PREFIX:
            return _heading_block(line, state, theme, link_scheme)

        if first == DIVIDER_PREFIX:
            return _divider_block(line, state)

        runs = tokenize_line(line, state, link_scheme)
        if not runs:
            return Blank()
        return Paragraph(
            runs=tuple(runs), alignment=state.alignment, indent_depth=state.indent_depth
        )


def parse_document(
    markup: str, theme: str | None = None, config: ParserConfig | None = None
) -> Document:
    """Parse micron markup into a renderer-agnostic document.

    Lines are processed in order against fresh parser state. Each line adds at
    most one block: literal-mode toggles, comments and bare heading markers
    add nothing, empty lines add a `Blank`. Color, emphasis, alignment,
    section depth and literal mode persist from one line to the next; heading
    styles never leak past their own line.

    The function is total over all strings: malformed constructs degrade to
    literal text or ignored directives.

    Args:
        markup: Markup text.
        theme: Theme name overriding `config.theme`.
        config: Parser configuration. Defaults to a new `ParserConfig`.

    Returns:
        Document: Blocks in source order.

    Raises:
        ConfigError: If the configuration or theme name is invalid.

    Examples:
        parse_document(">Title\\nSome `!bold`! text", theme="light")
    """
    config = config or ParserConfig()
    validate_config(config)
    selected = get_theme(theme if theme is not None else config.theme)
    state = ParserState.initial(selected.plain, Alignment(config.default_alignment))

    blocks: list[Block] = []
    for line in split_lines(markup):
        block = dispatch_line(line, state, selected, config.link_scheme)
        if block is not None:
            blocks.append(block)

    logger.debug("Parsed %d blocks with the %s theme", len(blocks), selected.name)
    return Document(blocks=tuple(blocks))


def split_lines(markup: str) -> list[str]:
    """Split markup into lines on ``\\n`` alone.

    A trailing ``\\r`` is removed from each line, and a final newline does not
    start an extra empty line.
    """
    lines = markup.split(LINE_SEPARATOR)
    if not lines[-1]:
        lines.pop()
    return [line.removesuffix(CARRIAGE_RETURN) for line in lines]


def check_line_lengths(markup: str, max_line_length: int) -> None:
    """Reject markup containing lines longer than `max_line_length`.

    Raises:
        LineTooLongError: For the first line over the limit.
    """
    for line_number, line in enumerate(split_lines(markup), start=1):
        if len(line) > max_line_length:
            raise LineTooLongError(line_number, max_line_length)


def parse_file(
    filepath: Path,
    max_line_length: int | None = None,
    config: ParserConfig | None = None,
) -> Document:
    """Read a markup file and parse it.

    Args:
        filepath: Path to the markup file.
        max_line_length: Optional override for the maximum allowed line length.
        config: Parser configuration; defaults to a new `ParserConfig`.

    Returns:
        Document: Parsed document.

    Raises:
        ParseFileError: If configuration is invalid, a line exceeds the length
            limit, or the file cannot be read or decoded.

    Examples:
        document = parse_file(Path("index.mu"), 200, config)
    """
    config = config or ParserConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ParseFileError(str(error)) from error

    effective_max_line_length = (
        config.max_line_length if max_line_length is None else max_line_length
    )
    if effective_max_line_length <= 0:
        raise ParseFileError("`max_line_length` override must be a positive integer")

    try:
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ParseFileError(error_message) from error
    except IOError as error:
        raise ParseFileError(str(error)) from error

    try:
        check_line_lengths(content, effective_max_line_length)
    except LineTooLongError as error:
        error_message = (
            f"{filepath} contains a line at line {error.line_number} "
            f"exceeding the maximum allowed length of {error.max_line_length} characters."
        )
        raise ParseFileError(error_message) from error

    return parse_document(content, config=config)
