"""Data models for micron-markup."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import ClassVar, Union

from .constants import DEFAULT_COLOR, INDENT_UNIT


class Alignment(str, Enum):
    """Horizontal alignment hints attached to paragraphs."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class Style:
    """Snapshot of the text style active when a run was emitted.

    Colors are kept as raw tokens (``"ddd"``, ``"f00"``, ``"g40"``) or the
    ``"default"`` sentinel; `micron_markup.styles.resolve_color` turns them
    into concrete values.

    Attributes:
        foreground: Foreground color token.
        background: Background color token.
        bold: Whether bold is active.
        underline: Whether underline is active.
        italic: Whether italic is active.
    """

    foreground: str = DEFAULT_COLOR
    background: str = DEFAULT_COLOR
    bold: bool = False
    underline: bool = False
    italic: bool = False


@dataclass(frozen=True)
class TextRun:
    """Styled span of text, always rendered in a fixed-width font."""

    kind: ClassVar[str] = "text"

    style: Style
    text: str
    monospace: bool = True


@dataclass(frozen=True)
class Field:
    """Text input control; `masked` fields hide their content."""

    kind: ClassVar[str] = "field"

    name: str
    width: int
    masked: bool
    default_data: str
    style: Style


@dataclass(frozen=True)
class Checkbox:
    kind: ClassVar[str] = "checkbox"

    name: str
    value: str
    label: str
    prechecked: bool
    style: Style


@dataclass(frozen=True)
class Radio:
    kind: ClassVar[str] = "radio"

    name: str
    value: str
    label: str
    prechecked: bool
    style: Style


@dataclass(frozen=True)
class Link:
    """Activatable link.

    Attributes:
        url: Scheme-qualified target address.
        label: Visible text.
        field_directives: Raw directive tokens from the link's field spec, in
            source order. Interpreted by renderers, never by the parser.
        style: Style active when the link was parsed.
    """

    kind: ClassVar[str] = "link"

    url: str
    label: str
    field_directives: tuple[str, ...]
    style: Style


Run = Union[TextRun, Field, Checkbox, Radio, Link]
Control = Union[Field, Checkbox, Radio, Link]


@dataclass(frozen=True)
class Heading:
    """Full-width section heading.

    Attributes:
        level: Number of leading ``>`` characters.
        runs: Content of the heading line.
        indent_depth: Indentation in abstract units.
        style: Heading style the renderer paints the full-width block with.
    """

    kind: ClassVar[str] = "heading"

    level: int
    runs: tuple[Run, ...]
    indent_depth: int
    style: Style


@dataclass(frozen=True)
class Divider:
    """Horizontal divider; without `fill_char` a standard rule is drawn."""

    kind: ClassVar[str] = "divider"

    fill_char: str | None
    indent_depth: int = 0


@dataclass(frozen=True)
class Paragraph:
    kind: ClassVar[str] = "paragraph"

    runs: tuple[Run, ...]
    alignment: Alignment
    indent_depth: int


@dataclass(frozen=True)
class Blank:
    kind: ClassVar[str] = "blank"


Block = Union[Heading, Divider, Paragraph, Blank]


@dataclass(frozen=True)
class Document:
    """Ordered blocks produced by one parse."""

    blocks: tuple[Block, ...] = ()

    def __iter__(self):
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)


@dataclass
class ParserState:
    """Mutable state threaded through every line of a single parse.

    Attributes:
        plain: Theme plain style; the target of full resets.
        default_alignment: Alignment restored by reset directives.
        literal_mode: Whether lines are currently passed through verbatim.
        section_depth: Depth set by the most recent heading marker.
        foreground: Current foreground color token.
        background: Current background color token.
        bold: Current bold flag.
        underline: Current underline flag.
        italic: Current italic flag.
        alignment: Current paragraph alignment.
        radio_groups: Reserved; radios are independent controls and nothing
            populates this mapping.
    """

    plain: Style = field(default_factory=Style)
    default_alignment: Alignment = Alignment.LEFT
    literal_mode: bool = False
    section_depth: int = 0
    foreground: str = DEFAULT_COLOR
    background: str = DEFAULT_COLOR
    bold: bool = False
    underline: bool = False
    italic: bool = False
    alignment: Alignment = Alignment.LEFT
    radio_groups: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def initial(cls, plain: Style, default_alignment: Alignment) -> ParserState:
        """Build the state a document parse starts from."""
        state = cls(plain=plain, default_alignment=default_alignment)
        state.reset()
        return state

    def snapshot(self) -> Style:
        return Style(
            foreground=self.foreground,
            background=self.background,
            bold=self.bold,
            underline=self.underline,
            italic=self.italic,
        )

    def apply(self, style: Style) -> None:
        self.foreground = style.foreground
        self.background = style.background
        self.bold = style.bold
        self.underline = style.underline
        self.italic = style.italic

    def reset(self) -> None:
        """Restore the plain style and the default alignment."""
        self.apply(self.plain)
        self.alignment = self.default_alignment

    @property
    def indent_depth(self) -> int:
        return max(0, self.section_depth - 1) * INDENT_UNIT


def _node_to_dict(node) -> dict:
    data = {"type": node.kind}
    for item in fields(node):
        value = getattr(node, item.name)
        if isinstance(value, Style):
            value = asdict(value)
        elif isinstance(value, Alignment):
            value = value.value
        elif item.name == "runs":
            value = [_node_to_dict(run) for run in value]
        elif isinstance(value, tuple):
            value = list(value)
        data[item.name] = value
    return data


def document_to_dict(document: Document) -> dict:
    """Convert a document into JSON-ready primitives.

    Every block and run becomes a mapping tagged with a ``"type"`` key.

    Examples:
        json.dumps(document_to_dict(parse_document("hello")))
    """
    return {"blocks": [_node_to_dict(block) for block in document.blocks]}
