"""Inline tokenizer turning one line of markup into styled runs and controls."""

from __future__ import annotations

import logging

from .constants import (
    COLOR_TOKEN_LENGTH,
    DEFAULT_COLOR,
    DEFAULT_LINK_SCHEME,
    ESCAPE_CHAR,
    FIELD_OPEN,
    FORMAT_MARKER,
    LINK_OPEN,
)
from .fields import parse_field
from .links import parse_link
from .models import Alignment, ParserState, Run, TextRun

logger = logging.getLogger(__name__)

ALIGNMENT_DIRECTIVES = {
    "c": Alignment.CENTER,
    "l": Alignment.LEFT,
    "r": Alignment.RIGHT,
}


class _LineScanner:
    """Single pass over one line, alternating between text and formatting mode."""

    def __init__(self, line: str, state: ParserState, link_scheme: str):
        self.line = line
        self.state = state
        self.link_scheme = link_scheme
        self.runs: list[Run] = []
        self.pending: list[str] = []
        self.position = 0

    def flush(self) -> None:
        if self.pending:
            self.runs.append(TextRun(style=self.state.snapshot(), text="".join(self.pending)))
            self.pending = []

    def scan(self) -> list[Run]:
        line = self.line
        formatting = False
        escaped = False

        while self.position < len(line):
            char = line[self.position]

            if formatting:
                self.position += self._apply_directive(char)
                formatting = False
                continue

            if escaped:
                self.pending.append(char)
                escaped = False
            elif char == ESCAPE_CHAR:
                escaped = True
            elif char == FORMAT_MARKER:
                if line.startswith(FORMAT_MARKER, self.position + 1):
                    self.flush()
                    self.state.reset()
                    self.position += 2
                    continue
                self.flush()
                formatting = True
            elif char == LINK_OPEN:
                if self._try_link():
                    continue
                self.pending.append(char)
            else:
                self.pending.append(char)
            self.position += 1

        self.flush()
        return self.runs

    def _try_link(self) -> bool:
        parsed = parse_link(self.line, self.position, self.state, self.link_scheme)
        if parsed is None:
            return False
        link, consumed = parsed
        self.flush()
        self.runs.append(link)
        self.position += consumed
        return True

    def _try_field(self) -> bool:
        parsed = parse_field(self.line, self.position, self.state)
        if parsed is None:
            return False
        control, consumed = parsed
        self.runs.append(control)
        self.position += consumed
        return True

    def _apply_directive(self, char: str) -> int:
        """Apply one formatting directive and return how many characters it used."""
        state = self.state

        if char == "_":
            state.underline = not state.underline
        elif char == "!":
            state.bold = not state.bold
        elif char == "*":
            state.italic = not state.italic
        elif char in ("F", "B"):
            token = self.line[self.position + 1 : self.position + 1 + COLOR_TOKEN_LENGTH]
            if len(token) == COLOR_TOKEN_LENGTH:
                if char == "F":
                    state.foreground = token
                else:
                    state.background = token
                return 1 + COLOR_TOKEN_LENGTH
        elif char == "f":
            state.foreground = state.plain.foreground
        elif char == "b":
            state.background = DEFAULT_COLOR
        elif char == FORMAT_MARKER:
            state.reset()
        elif char in ALIGNMENT_DIRECTIVES:
            state.alignment = ALIGNMENT_DIRECTIVES[char]
        elif char == "a":
            state.alignment = state.default_alignment
        elif char == FIELD_OPEN:
            self.flush()
            if self._try_field():
                return 0
        elif char == LINK_OPEN:
            self.flush()
            if self._try_link():
                return 0
        else:
            logger.debug("Ignoring unknown formatting directive %r", char)
        return 1


def tokenize_line(
    line: str, state: ParserState, link_scheme: str = DEFAULT_LINK_SCHEME
) -> list[Run]:
    """Tokenize one logical line into runs.

    Text accumulates until a backtick switches to formatting mode, where
    exactly one directive is consumed before returning to text mode. A double
    backtick resets every style and the alignment without entering formatting
    mode. Backslash escapes the next character. Links are recognised in both
    modes; fields only after a backtick. Malformed link and field specs never
    fail: in text mode the ``[`` stays literal, in formatting mode the
    directive is dropped.

    Style changes are applied to `state` and persist into later lines. Every
    run captures a snapshot of the style active when it was finalized.

    Args:
        line: Line content without its line terminator.
        state: Parser state shared by all lines of the document.
        link_scheme: Prefix prepended to link urls.

    Returns:
        list[Run]: Runs in source order; empty when the line produced nothing.

    Examples:
        tokenize_line("plain `!bold`! plain", state)
        tokenize_line("`<!16|password`>", state)
    """
    return _LineScanner(line, state, link_scheme).scan()
