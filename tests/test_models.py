import json
from dataclasses import FrozenInstanceError, fields

import pytest

from micron_markup.models import (
    Alignment,
    Blank,
    Divider,
    Document,
    ParserState,
    Style,
    TextRun,
    document_to_dict,
)
from micron_markup.parser import parse_document
from micron_markup.styles import DARK_THEME


def test_parser_state_defaults():
    state = ParserState()

    assert state.literal_mode is False
    assert state.section_depth == 0
    assert state.alignment is Alignment.LEFT
    assert state.radio_groups == {}
    assert state.snapshot() == Style()


def test_parser_state_initial_applies_plain_style():
    state = ParserState.initial(DARK_THEME.plain, Alignment.CENTER)

    assert state.snapshot() == DARK_THEME.plain
    assert state.alignment is Alignment.CENTER
    assert state.default_alignment is Alignment.CENTER


def test_parser_state_reset_restores_plain_and_alignment(state):
    state.bold = True
    state.italic = True
    state.foreground = "f00"
    state.background = "00f"
    state.alignment = Alignment.RIGHT

    state.reset()

    assert state.snapshot() == DARK_THEME.plain
    assert state.alignment is Alignment.LEFT


@pytest.mark.parametrize("depth, expected", [(0, 0), (1, 0), (2, 2), (3, 4), (5, 8)])
def test_indent_depth_from_section_depth(state, depth, expected):
    state.section_depth = depth
    assert state.indent_depth == expected


def test_snapshot_is_detached_from_state(state):
    snapshot = state.snapshot()
    state.bold = True

    assert snapshot.bold is False
    with pytest.raises(FrozenInstanceError):
        snapshot.bold = True


def test_document_iterates_blocks():
    document = Document(blocks=(Blank(), Divider(fill_char="=")))

    assert len(document) == 2
    assert list(document) == [Blank(), Divider(fill_char="=")]


def test_document_to_dict_tags_blocks_and_runs():
    document = parse_document("`!Hi\n\n-")

    data = document_to_dict(document)

    assert data == {
        "blocks": [
            {
                "type": "paragraph",
                "runs": [
                    {
                        "type": "text",
                        "style": {
                            "foreground": "ddd",
                            "background": "default",
                            "bold": True,
                            "underline": False,
                            "italic": False,
                        },
                        "text": "Hi",
                        "monospace": True,
                    }
                ],
                "alignment": "left",
                "indent_depth": 0,
            },
            {"type": "blank"},
            {"type": "divider", "fill_char": None, "indent_depth": 0},
        ]
    }


def test_document_to_dict_is_json_serializable():
    document = parse_document(">Title\n[Go`page`user|k=v] `<?|agree`Yes>")

    encoded = json.dumps(document_to_dict(document))
    decoded = json.loads(encoded)

    heading, paragraph = decoded["blocks"]
    assert heading["type"] == "heading"
    assert heading["style"]["background"] == "bbb"
    assert paragraph["runs"][0]["type"] == "link"
    assert paragraph["runs"][0]["field_directives"] == ["user", "k=v"]
    assert paragraph["runs"][-1]["type"] == "checkbox"


def test_text_run_kind_is_class_level():
    run = TextRun(style=Style(), text="x")
    assert run.kind == "text"
    assert "kind" not in {item.name for item in fields(run)}
