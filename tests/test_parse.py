from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from micron_markup.config import ConfigError, ParserConfig
from micron_markup.exceptions import ParseFileError
from micron_markup.models import (
    Alignment,
    Blank,
    Checkbox,
    Divider,
    Field,
    Heading,
    Link,
    Paragraph,
    TextRun,
)
from micron_markup.parser import parse_document, parse_file
from micron_markup.styles import DARK_THEME, LIGHT_THEME

PLAIN = DARK_THEME.plain


def _write_markup(tmp_path: Path, content: str) -> Path:
    target = tmp_path / "page.mu"
    target.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return target


def test_full_reset_restores_initial_style():
    document = parse_document("`!`_`Ff00`cX\n``Y")

    first, second = document.blocks
    assert first.alignment is Alignment.CENTER
    assert first.runs[0].style.bold is True
    assert first.runs[0].style.underline is True
    assert first.runs[0].style.foreground == "f00"
    assert second.runs[0].style == PLAIN
    assert second.alignment is Alignment.LEFT


def test_full_reset_uses_configured_default_alignment():
    document = parse_document("`cA\n``B", config=ParserConfig(default_alignment="right"))

    assert [block.alignment for block in document.blocks] == [Alignment.CENTER, Alignment.RIGHT]


def test_style_persists_across_lines():
    document = parse_document("`Ff00red\nstill red")

    assert document.blocks[1].runs[0].style.foreground == "f00"


def test_heading_style_does_not_leak():
    document = parse_document(">Title\nBody")

    heading, body = document.blocks
    assert isinstance(heading, Heading)
    assert heading.level == 1
    assert heading.style == DARK_THEME.heading_style(1)
    assert heading.runs[0].style == DARK_THEME.heading_style(1)
    assert body.runs[0].style == PLAIN


def test_heading_inline_formatting_does_not_leak():
    document = parse_document(">`!Bold title\nafter")

    heading, after = document.blocks
    assert heading.runs[0].style.bold is True
    assert heading.runs[0].style.background == "bbb"
    assert after.runs[0].style.bold is False


def test_heading_levels_and_indent():
    document = parse_document(">One\n>>Two\n>>>Three\n>>>>Four")

    assert [block.level for block in document.blocks] == [1, 2, 3, 4]
    assert [block.indent_depth for block in document.blocks] == [0, 2, 4, 6]
    assert document.blocks[3].style == PLAIN


def test_bare_heading_marker_only_sets_depth():
    document = parse_document(">>\ntext")

    assert document.blocks == (
        Paragraph(runs=(TextRun(style=PLAIN, text="text"),), alignment=Alignment.LEFT, indent_depth=2),
    )


def test_depth_reset_prefix_is_redispatched():
    document = parse_document(">>Sub\n<>Top\n>>Again\n<plain")

    sub, top, again, plain = document.blocks
    assert top.level == 1
    assert top.indent_depth == 0
    assert again.indent_depth == 2
    assert isinstance(plain, Paragraph)
    assert plain.indent_depth == 0
    assert plain.runs[0].text == "plain"


def test_repeated_depth_reset_prefixes():
    document = parse_document(">>>x\n<<<<-")

    assert document.blocks[1] == Divider(fill_char=None, indent_depth=0)


def test_bare_depth_reset_is_blank():
    assert parse_document("<").blocks == (Blank(),)


def test_literal_mode_round_trip():
    document = parse_document("`=\n\\`=\n`!not bold\n# not a comment\n`=\n`!bold")

    texts = [block.runs[0].text for block in document.blocks]
    assert texts == ["`=", "`!not bold", "# not a comment", "bold"]
    assert document.blocks[1].runs[0].style.bold is False
    assert document.blocks[3].runs[0].style.bold is True


def test_literal_mode_keeps_current_style_and_blank_lines():
    document = parse_document("`Ff00\n`=\n\n>not a heading")

    blank, paragraph = document.blocks[1:]
    assert blank == Blank()
    assert isinstance(paragraph, Paragraph)
    assert paragraph.runs[0].style.foreground == "f00"


def test_checkbox_grammar():
    document = parse_document("`<?|agree|yes|*`I agree>")

    (control,) = document.blocks[0].runs
    assert isinstance(control, Checkbox)
    assert (control.name, control.value, control.prechecked, control.label) == (
        "agree",
        "yes",
        True,
        "I agree",
    )


def test_link_grammar():
    document = parse_document("[Click here`page/one`field1|k=v]")

    (link,) = document.blocks[0].runs
    assert isinstance(link, Link)
    assert link.label == "Click here"
    assert link.url.endswith("page/one")
    assert link.field_directives == ("field1", "k=v")


def test_link_scheme_from_config():
    document = parse_document("[x]", config=ParserConfig(link_scheme="lxmf://"))
    assert document.blocks[0].runs[0].url == "lxmf://x"


def test_dividers():
    document = parse_document("-*\n-\n-abc")

    assert document.blocks == (
        Divider(fill_char="*"),
        Divider(fill_char=None),
        Divider(fill_char="a"),
    )


def test_divider_is_indented_by_section_depth():
    document = parse_document(">>>\n-=")
    assert document.blocks == (Divider(fill_char="=", indent_depth=4),)


def test_graceful_degradation_of_unclosed_link():
    document = parse_document("[no-closing-bracket")

    assert document.blocks == (
        Paragraph(
            runs=(TextRun(style=PLAIN, text="[no-closing-bracket"),),
            alignment=Alignment.LEFT,
            indent_depth=0,
        ),
    )


def test_comments_and_empty_lines():
    document = parse_document("# comment\na\n\nb")

    assert [type(block) for block in document.blocks] == [Paragraph, Blank, Paragraph]


def test_line_without_runs_is_blank():
    assert parse_document("``").blocks == (Blank(),)


def test_heading_without_runs_contributes_nothing():
    assert parse_document(">``").blocks == ()


def test_trailing_newline_and_crlf():
    assert len(parse_document("a\n").blocks) == 1
    assert [block.runs[0].text for block in parse_document("a\r\nb").blocks] == ["a", "b"]


def test_only_newlines_separate_lines():
    document = parse_document("a\x0cb\x1cc\x85d")

    assert document.blocks == (
        Paragraph(
            runs=(TextRun(style=PLAIN, text="a\x0cb\x1cc\x85d"),),
            alignment=Alignment.LEFT,
            indent_depth=0,
        ),
    )


def test_link_containing_line_separator_stays_whole():
    (paragraph,) = parse_document("[Label\u2028text`page]").blocks

    (link,) = paragraph.runs
    assert link.label == "Label\u2028text"
    assert link.url == "nomadnetwork://page"


def test_blank_lines_and_trailing_newline():
    assert parse_document("a\n\n").blocks[1:] == (Blank(),)
    assert len(parse_document("\n").blocks) == 1


def test_oversized_field_width_is_clamped():
    (field,) = parse_document("`<" + "9" * 5000 + "|name`data>").blocks[0].runs

    assert isinstance(field, Field)
    assert field.width == 256


def test_empty_markup():
    assert parse_document("").blocks == ()


def test_light_theme():
    document = parse_document("x\n>T", theme="light")

    assert document.blocks[0].runs[0].style == LIGHT_THEME.plain
    assert document.blocks[1].style.background == "777"


def test_theme_argument_overrides_config():
    document = parse_document("x", theme="dark", config=ParserConfig(theme="light"))
    assert document.blocks[0].runs[0].style.foreground == "ddd"


def test_invalid_theme_raises_config_error():
    with pytest.raises(ConfigError):
        parse_document("x", theme="sepia")


def test_parses_do_not_share_state():
    parse_document("`Ff00`!`c")
    document = parse_document("x")

    assert document.blocks[0].runs[0].style == PLAIN
    assert document.blocks[0].alignment is Alignment.LEFT


def test_parse_file_reads_markup(tmp_path: Path):
    target = _write_markup(
        tmp_path,
        """
        >Welcome
        Hello
        """,
    )

    document = parse_file(target)

    assert isinstance(document.blocks[0], Heading)
    assert document.blocks[1].runs[0].text == "Hello"


def test_parse_file_uses_config_theme(tmp_path: Path):
    target = _write_markup(tmp_path, "Hello\n")

    document = parse_file(target, config=ParserConfig(theme="light"))

    assert document.blocks[0].runs[0].style.foreground == "222"


def test_parse_file_rejects_long_lines(tmp_path: Path):
    target = _write_markup(tmp_path, "short\n" + "x" * 50 + "\n")

    with pytest.raises(ParseFileError, match="line 2"):
        parse_file(target, 10)


def test_parse_file_rejects_non_positive_override(tmp_path: Path):
    target = _write_markup(tmp_path, "Hello\n")

    with pytest.raises(ParseFileError):
        parse_file(target, 0)


def test_parse_file_rejects_invalid_config(tmp_path: Path):
    target = _write_markup(tmp_path, "Hello\n")

    with pytest.raises(ParseFileError):
        parse_file(target, config=ParserConfig(theme="sepia"))


def test_parse_file_rejects_invalid_utf8(tmp_path: Path):
    target = tmp_path / "broken.mu"
    target.write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(ParseFileError, match="Invalid UTF-8"):
        parse_file(target)


def test_parse_file_missing_file(tmp_path: Path):
    with pytest.raises(ParseFileError):
        parse_file(tmp_path / "missing.mu")
