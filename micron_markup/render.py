"""Reference HTML renderer for parsed micron documents."""

from __future__ import annotations

from html import escape

from .config import ParserConfig
from .links import resolve_link_request
from .models import (
    Blank,
    Block,
    Checkbox,
    Divider,
    Document,
    Field,
    Heading,
    Link,
    Paragraph,
    Radio,
    Run,
    Style,
    TextRun,
)
from .styles import resolve_color

INDENT_UNIT_PX = 10
DOCUMENT_CSS = "font-family: monospace; white-space: pre-wrap"


def style_to_css(style: Style) -> str:
    """Translate a run style into inline CSS declarations.

    Colors that do not resolve (including the ``"default"`` sentinel) are
    left to the surrounding surface.

    Examples:
        style_to_css(Style(foreground="f00", bold=True))  # "color: #ff0000; font-weight: bold"
    """
    declarations = []
    foreground = resolve_color(style.foreground)
    background = resolve_color(style.background)
    if foreground is not None:
        declarations.append(f"color: {foreground.hex}")
    if background is not None:
        declarations.append(f"background-color: {background.hex}")
    if style.bold:
        declarations.append("font-weight: bold")
    if style.underline:
        declarations.append("text-decoration: underline")
    if style.italic:
        declarations.append("font-style: italic")
    return "; ".join(declarations)


def _attributes(**attributes: object) -> str:
    rendered = []
    for name, value in attributes.items():
        if value is None or value is False or value == "":
            continue
        name = name.rstrip("_").replace("_", "-")
        if value is True:
            rendered.append(f" {name}")
        else:
            rendered.append(f' {name}="{escape(str(value))}"')
    return "".join(rendered)


def _indent_css(indent_depth: int) -> str:
    if indent_depth <= 0:
        return ""
    return f"margin-left: {indent_depth * INDENT_UNIT_PX}px"


def _join_css(*declarations: str) -> str:
    return "; ".join(declaration for declaration in declarations if declaration)


def _render_choice(control: Checkbox | Radio, input_type: str) -> str:
    attributes = _attributes(
        type=input_type,
        name=control.name,
        value=control.value,
        checked=control.prechecked,
    )
    return (
        f"<label{_attributes(style=style_to_css(control.style))}>"
        f"<input{attributes}> {escape(control.label)}</label>"
    )


def _render_field(field: Field) -> str:
    attributes = _attributes(
        type="password" if field.masked else "text",
        name=field.name,
        value=field.default_data,
        size=field.width,
        style=style_to_css(field.style),
    )
    return f"<input{attributes}>"


def _render_link(link: Link) -> str:
    request = resolve_link_request(link)
    submitted = "*" if request.submit_all else "|".join(request.fields)
    variables = "|".join(f"{key}={value}" for key, value in request.variables.items())
    attributes = _attributes(
        href=link.url,
        title=link.url,
        data_fields=submitted,
        data_vars=variables,
        style=style_to_css(link.style),
    )
    return f"<a{attributes}>{escape(link.label)}</a>"


def render_runs(runs: tuple[Run, ...]) -> str:
    """Render runs, merging adjacent text runs that share a style."""
    parts: list[str] = []
    span_style: Style | None = None
    span_text: list[str] = []

    def flush_span():
        nonlocal span_style
        if span_text:
            css = style_to_css(span_style)
            parts.append(f"<span{_attributes(style=css)}>{escape(''.join(span_text))}</span>")
            span_text.clear()
        span_style = None

    for run in runs:
        if isinstance(run, TextRun):
            if run.style != span_style:
                flush_span()
                span_style = run.style
            span_text.append(run.text)
            continue

        flush_span()
        if isinstance(run, Field):
            parts.append(_render_field(run))
        elif isinstance(run, Checkbox):
            parts.append(_render_choice(run, "checkbox"))
        elif isinstance(run, Radio):
            parts.append(_render_choice(run, "radio"))
        elif isinstance(run, Link):
            parts.append(_render_link(run))
        else:
            raise TypeError(f"Unsupported run: {run!r}")

    flush_span()
    return "".join(parts)


def _render_heading(heading: Heading, config: ParserConfig) -> str:
    outer = _join_css("display: block; width: 100%", style_to_css(heading.style))
    inner = _attributes(style=_indent_css(heading.indent_depth))
    return f'<div style="{outer}"><div{inner}>{render_runs(heading.runs)}</div></div>'


def _render_paragraph(paragraph: Paragraph, config: ParserConfig) -> str:
    css = _join_css(f"text-align: {paragraph.alignment.value}", _indent_css(paragraph.indent_depth))
    return f'<div style="{css}">{render_runs(paragraph.runs)}</div>'


def _render_divider(divider: Divider, config: ParserConfig) -> str:
    indent = _indent_css(divider.indent_depth)
    if divider.fill_char is None:
        return f"<hr{_attributes(style=indent)}>"
    css = _join_css("display: block; width: 100%; white-space: nowrap; overflow: hidden", indent)
    return f'<div style="{css}">{escape(divider.fill_char * config.divider_width)}</div>'


def _render_blank(blank: Blank, config: ParserConfig) -> str:
    return "<br>"


BLOCK_RENDERERS = {
    Heading.kind: _render_heading,
    Paragraph.kind: _render_paragraph,
    Divider.kind: _render_divider,
    Blank.kind: _render_blank,
}


def render_block(block: Block, config: ParserConfig | None = None) -> str:
    """Render a single block to HTML.

    Raises:
        TypeError: If `block` is not a known block type.
    """
    config = config or ParserConfig()
    try:
        renderer = BLOCK_RENDERERS[block.kind]
    except (AttributeError, KeyError) as error:
        raise TypeError(f"Unsupported block: {block!r}") from error
    return renderer(block, config)


def render_html(document: Document, config: ParserConfig | None = None) -> str:
    """Render a document as an HTML fragment.

    Headings become full-width blocks painted with their style, paragraphs
    carry their alignment and indentation, dividers become ``<hr>`` or a
    repeated fill character, blank lines become ``<br>``, and controls become
    form inputs and links. All text is escaped.

    Args:
        document: Parsed document.
        config: Configuration supplying the divider width.

    Returns:
        str: HTML fragment wrapped in a monospace container.

    Examples:
        render_html(parse_document("`!Hello`!"))
    """
    config = config or ParserConfig()
    body = "".join(render_block(block, config) for block in document.blocks)
    return f'<div class="micron" style="{DOCUMENT_CSS}">{body}</div>'
